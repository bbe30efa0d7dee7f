"""Application configuration helpers."""

from __future__ import annotations

from .definitions import (
    CollectionDefinition,
    DefinitionsFile,
    import_object,
    load_definitions,
    parse_definitions,
)
from .env import get_definitions_path, get_log_level, require_env_vars
from .errors import ConfigurationError, InvalidDefinitionsError, MissingConfigurationError

__all__ = [
    "CollectionDefinition",
    "ConfigurationError",
    "DefinitionsFile",
    "InvalidDefinitionsError",
    "MissingConfigurationError",
    "get_definitions_path",
    "get_log_level",
    "import_object",
    "load_definitions",
    "parse_definitions",
    "require_env_vars",
]
