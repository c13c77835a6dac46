from __future__ import annotations

import pytest

from spicykeys import EngineConfig
from spicykeys.config import DEFAULT_SEQUENCE_TIMEOUT_MS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DEBUG", "SEQUENCE_TIMEOUT_MS", "SEQUENCES", "APPLE_PLATFORM"):
        monkeypatch.delenv(f"SPICYKEYS_{name}", raising=False)


def test_defaults() -> None:
    config = EngineConfig()

    assert config.debug is False
    assert config.sequences is True
    assert config.sequence_timeout_ms == DEFAULT_SEQUENCE_TIMEOUT_MS
    assert config.sequence_timeout == 1.0


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPICYKEYS_DEBUG", "yes")
    monkeypatch.setenv("SPICYKEYS_SEQUENCE_TIMEOUT_MS", "250")
    monkeypatch.setenv("SPICYKEYS_SEQUENCES", "0")
    monkeypatch.setenv("SPICYKEYS_APPLE_PLATFORM", "true")

    config = EngineConfig.from_env()

    assert config.debug is True
    assert config.sequence_timeout_ms == 250
    assert config.sequences is False
    assert config.is_apple is True


def test_overrides_beat_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPICYKEYS_SEQUENCE_TIMEOUT_MS", "250")

    config = EngineConfig.from_env(sequence_timeout_ms=400, debug=True)

    assert config.sequence_timeout_ms == 400
    assert config.debug is True


def test_apple_platform_detection(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("spicykeys.config.platform.system", lambda: "Darwin")
    assert EngineConfig().is_apple is True

    monkeypatch.setattr("spicykeys.config.platform.system", lambda: "Linux")
    assert EngineConfig().is_apple is False
    assert EngineConfig(apple_platform=True).is_apple is True


@pytest.mark.parametrize("timeout", [0, -5])
def test_rejects_non_positive_timeout(timeout: int) -> None:
    with pytest.raises(ValueError):
        EngineConfig(sequence_timeout_ms=timeout)


def test_non_numeric_timeout_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPICYKEYS_SEQUENCE_TIMEOUT_MS", "soon")

    assert EngineConfig.from_env().sequence_timeout_ms == DEFAULT_SEQUENCE_TIMEOUT_MS


def test_non_positive_timeout_in_environment_is_rejected(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("SPICYKEYS_SEQUENCE_TIMEOUT_MS", "-10")

    with pytest.raises(ValueError):
        EngineConfig.from_env()
