"""Errors raised while configuring inventory collections."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Hashable, Sequence


class InventoryCollectionError(RuntimeError):
    """Base class for inventory collection configuration failures."""


class UnsupportedStrategyError(InventoryCollectionError):
    """Raised when a strategy token is not one of the supported DB strategies."""

    def __init__(self, *, requested: object, allowed: Sequence[str]) -> None:
        self.requested = requested
        self.allowed = tuple(allowed)
        allowed_list = ", ".join(self.allowed)
        super().__init__(
            f"Unknown inventory collection strategy: {requested!r}, "
            f"allowed strategies are {allowed_list}"
        )


class UnsupportedRetentionStrategyError(InventoryCollectionError):
    """Raised when a retention token is neither ``destroy`` nor ``archive``."""

    def __init__(self, *, requested: object, allowed: Sequence[str]) -> None:
        self.requested = requested
        self.allowed = tuple(allowed)
        allowed_list = ", ".join(self.allowed)
        super().__init__(
            f"Unknown inventory collection retention strategy: {requested!r}, "
            f"allowed strategies are {allowed_list}"
        )


class StrategyReassignmentError(InventoryCollectionError):
    """Raised when the strategy is reassigned while a save pass is running."""

    def __init__(self, *, collection: str, requested: object) -> None:
        self.collection = collection
        self.requested = requested
        super().__init__(
            f"Cannot change strategy of inventory collection {collection!r} to "
            f"{requested!r} while its save pass is running"
        )


class MissingReferenceKeyError(InventoryCollectionError):
    """Raised when an object's data lacks a key of the reference it is indexed by."""

    def __init__(self, *, collection: str, ref: str, key: Hashable, nil: bool = False) -> None:
        self.collection = collection
        self.ref = ref
        self.key = key
        self.nil = nil
        problem = "is nil" if nil else "is missing"
        super().__init__(f"Reference key {key!r} of {ref} {problem} in collection {collection!r}")


class DuplicateCollectionError(InventoryCollectionError):
    """Raised when two collections of one persister share a name."""

    def __init__(self, *, name: str) -> None:
        self.name = name
        super().__init__(f"Inventory collection {name!r} is already registered")


class GraphIntegrityError(InventoryCollectionError):
    """Raised when a declared dependency points outside of the scanned collections."""

    def __init__(self, *, collection: str, attribute: str, dependency: str) -> None:
        self.collection = collection
        self.attribute = attribute
        self.dependency = dependency
        super().__init__(
            f"Inventory collection {collection!r} depends on {dependency!r} through "
            f"{attribute!r}, but {dependency!r} is not part of the graph"
        )
