"""Common helpers shared across inventory refresh."""

from __future__ import annotations

from .inflection import demodulize, pluralize, tableize, underscore
from .logging import configure_logging

__all__ = [
    "configure_logging",
    "demodulize",
    "pluralize",
    "tableize",
    "underscore",
]
