"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFINITIONS_ENV_VAR: Final[str] = "INVENTORY_REFRESH_DEFINITIONS"
LOG_LEVEL_ENV_VAR: Final[str] = "INVENTORY_REFRESH_LOG_LEVEL"


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank."""

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = os.getenv(name)
        if value is None or not value.strip():
            missing.append(name)
            continue
        values[name] = value

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def get_definitions_path(path: str | Path | None = None) -> Path:
    """Return ``path`` or the definitions file named by the environment."""

    if path is not None:
        return Path(path)
    return Path(require_env_vars([DEFINITIONS_ENV_VAR])[DEFINITIONS_ENV_VAR])


def get_log_level(default: str = "INFO") -> str:
    return os.getenv(LOG_LEVEL_ENV_VAR, default).strip().upper() or default
