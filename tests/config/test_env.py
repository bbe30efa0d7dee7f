from __future__ import annotations

from pathlib import Path

import pytest

from inventory_refresh.config import (
    MissingConfigurationError,
    get_definitions_path,
    get_log_level,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")
    monkeypatch.delenv("MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR", "EXAMPLE_VAR"])

    assert "EXAMPLE_VAR, MISSING_VAR" in str(exc.value)


def test_definitions_path_prefers_argument(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INVENTORY_REFRESH_DEFINITIONS", "/etc/refresh.toml")

    assert get_definitions_path("local.toml") == Path("local.toml")
    assert get_definitions_path() == Path("/etc/refresh.toml")


def test_definitions_path_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("INVENTORY_REFRESH_DEFINITIONS", raising=False)

    with pytest.raises(MissingConfigurationError, match="INVENTORY_REFRESH_DEFINITIONS"):
        get_definitions_path()


def test_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("INVENTORY_REFRESH_LOG_LEVEL", raising=False)
    assert get_log_level() == "INFO"

    monkeypatch.setenv("INVENTORY_REFRESH_LOG_LEVEL", "debug")
    assert get_log_level() == "DEBUG"
