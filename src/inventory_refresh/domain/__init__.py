"""Domain layer of inventory refresh: collections, their graph and the persister."""

from __future__ import annotations

from .collection import InventoryCollection, RetentionStrategy, Strategy
from .graph import DependeeIndex, DependencyEdge
from .persister import Persister

__all__ = [
    "DependeeIndex",
    "DependencyEdge",
    "InventoryCollection",
    "Persister",
    "RetentionStrategy",
    "Strategy",
]
