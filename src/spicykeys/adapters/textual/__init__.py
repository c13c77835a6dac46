"""Textual host adapter; the demo app lives in ``spicykeys.adapters.textual.app``."""

from .controller import TextualKeyAdapter, translate_key

__all__ = ["TextualKeyAdapter", "translate_key"]
