"""Engine configuration assembled from keyword arguments and the environment."""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, replace
from typing import Optional

ENV_PREFIX = "SPICYKEYS_"
DEFAULT_SEQUENCE_TIMEOUT_MS = 1000

_APPLE_SYSTEMS = {"darwin", "ios", "ipados"}


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> Optional[bool]:
    raw = _env(name)
    if raw is None:
        return None
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, fallback: int) -> int:
    raw = _env(name)
    if raw is None:
        return fallback
    try:
        return int(raw)
    except ValueError:
        return fallback


def detect_apple_platform() -> bool:
    return platform.system().lower() in _APPLE_SYSTEMS


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Tunables for a single ``MatchEngine`` instance."""

    debug: bool = False
    sequence_timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS
    sequences: bool = True
    apple_platform: Optional[bool] = None
    logger_name: str = "spicykeys.engine"

    def __post_init__(self) -> None:
        if self.sequence_timeout_ms <= 0:
            raise ValueError("sequence_timeout_ms must be positive")
        if not self.logger_name:
            raise ValueError("logger_name cannot be empty")

    @property
    def is_apple(self) -> bool:
        if self.apple_platform is None:
            return detect_apple_platform()
        return self.apple_platform

    @property
    def sequence_timeout(self) -> float:
        return self.sequence_timeout_ms / 1000.0

    @classmethod
    def from_env(cls, **overrides: object) -> "EngineConfig":
        """Build a config from ``SPICYKEYS_*`` variables, then apply overrides."""

        config = cls()
        debug = _env_flag("DEBUG")
        if debug is not None:
            config = replace(config, debug=debug)
        timeout = _env_int("SEQUENCE_TIMEOUT_MS", config.sequence_timeout_ms)
        if timeout != config.sequence_timeout_ms:
            config = replace(config, sequence_timeout_ms=timeout)
        sequences = _env_flag("SEQUENCES")
        if sequences is not None:
            config = replace(config, sequences=sequences)
        apple = _env_flag("APPLE_PLATFORM")
        if apple is not None:
            config = replace(config, apple_platform=apple)
        if overrides:
            config = replace(config, **overrides)  # type: ignore[arg-type]
        return config


__all__ = ["EngineConfig", "DEFAULT_SEQUENCE_TIMEOUT_MS", "detect_apple_platform"]
