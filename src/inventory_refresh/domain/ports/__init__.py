"""Ports consumed by the inventory collection domain."""

from __future__ import annotations

from .capabilities import ARCHIVE_TIMESTAMP_ATTRIBUTE, AttributeModelProbe, ModelProbe

__all__ = [
    "ARCHIVE_TIMESTAMP_ATTRIBUTE",
    "AttributeModelProbe",
    "ModelProbe",
]
