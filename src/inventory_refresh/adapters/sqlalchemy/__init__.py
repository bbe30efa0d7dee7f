"""SQLAlchemy adapter package for inventory refresh."""

from __future__ import annotations

from .capabilities import SqlAlchemyModelProbe, model_probe_for

__all__ = [
    "SqlAlchemyModelProbe",
    "model_probe_for",
]
