"""Manually declared dependency edges between inventory collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .collection import InventoryCollection


def _dependees_factory() -> set[InventoryCollection]:
    return set()


def _transitive_factory() -> set[str]:
    return set()


@dataclass(slots=True)
class DependencyLinkage:
    """Forward edges declared by the collection and the inbound edge slot.

    ``dependency_attributes`` maps an attribute name to the collections that
    have to be saved before this one. Common dependencies are inferred from the
    data by the graph builder; these are the ones it cannot see, for example
    collections consumed by a custom save hook.

    ``dependees`` is the inverse index and is written only by the graph builder
    (see ``inventory_refresh.domain.graph``).
    """

    dependency_attributes: dict[str, tuple[InventoryCollection, ...]]
    transitive_dependency_attributes: set[str] = field(default_factory=_transitive_factory)
    _dependees: set[InventoryCollection] = field(default_factory=_dependees_factory, repr=False)

    @classmethod
    def from_options(
        cls,
        dependency_attributes: Mapping[str, Iterable[InventoryCollection]] | None,
    ) -> DependencyLinkage:
        return cls(
            dependency_attributes={
                attribute: tuple(collections)
                for attribute, collections in (dependency_attributes or {}).items()
            }
        )

    @property
    def dependees(self) -> frozenset[InventoryCollection]:
        return frozenset(self._dependees)

    def dependency_collections(self) -> tuple[InventoryCollection, ...]:
        """Every collection this one depends on, once, in declaration order."""

        seen: dict[int, InventoryCollection] = {}
        for collections in self.dependency_attributes.values():
            for collection in collections:
                seen.setdefault(id(collection), collection)
        return tuple(seen.values())
