"""Custom save and reconnect hooks.

A hook replaces the default build/diff logic of the saver for one collection.
Hooks are called as ``hook(context, view)`` where ``view`` is a
``CollectionHookView``: it lets the hook read the declared dependencies,
iterate the built objects, write store ids back onto them and record what it
changed. Nothing else of the collection is reachable through it.

Example, resolving stack parents after both stack collections were saved::

    def save_stack_parents(context, view):
        (stacks,) = view.dependency_attributes["orchestration_stacks"]
        for stack in stacks:
            ...
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .collection import InventoryCollection
    from .inventory_object import InventoryObject
    from .ledger import ChangeLedger


# Whatever the owning persister hands to hooks (a manager, a session, ...).
type RunContext = object

type SaveHook = Callable[[RunContext, CollectionHookView], None]


@dataclass(frozen=True, slots=True)
class CollectionHookView:
    """Restricted view of a collection handed to custom hooks."""

    _collection: InventoryCollection = field(repr=False)

    @property
    def name(self) -> str:
        return self._collection.name

    @property
    def model_class(self) -> type | None:
        return self._collection.model_class

    @property
    def check_changed(self) -> bool:
        return self._collection.check_changed

    @property
    def dependency_attributes(self) -> Mapping[str, tuple[CollectionHookView, ...]]:
        return MappingProxyType(
            {
                attribute: tuple(CollectionHookView(dependency) for dependency in dependencies)
                for attribute, dependencies in self._collection.dependency_attributes.items()
            }
        )

    @property
    def ledger(self) -> ChangeLedger:
        return self._collection.ledger

    def __iter__(self) -> Iterator[InventoryObject]:
        return iter(self._collection)

    def __len__(self) -> int:
        return len(self._collection)

    def find(self, key: object) -> InventoryObject | None:
        return self._collection.find(key)

    def assign_id(self, inventory_object: InventoryObject, record_id: object) -> None:
        """Write the stored record's primary key back onto ``inventory_object``."""

        if inventory_object.collection is not self._collection:
            raise ValueError(
                f"{inventory_object!r} does not belong to inventory collection {self.name!r}"
            )
        inventory_object.id = record_id
