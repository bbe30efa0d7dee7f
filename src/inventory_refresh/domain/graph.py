"""Inbound dependency edges between inventory collections.

Collections only declare forward edges (``dependency_attributes``). The graph
builder is the single writer of the inverse ``dependees`` slots, so the
scheduler can ask a collection who depends on it without scanning every other
collection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .collection import _internal
from .collection.errors import GraphIntegrityError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .collection import InventoryCollection

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DependencyEdge:
    """``dependant`` has to be saved after ``dependency`` because of ``attribute``."""

    dependant: InventoryCollection
    attribute: str
    dependency: InventoryCollection


@dataclass(slots=True)
class DependeeIndex:
    """Builds and owns the inbound edges of one set of collections."""

    _edges: list[DependencyEdge] = field(default_factory=list["DependencyEdge"], repr=False)

    @property
    def edges(self) -> tuple[DependencyEdge, ...]:
        return tuple(self._edges)

    def build(self, collections: Iterable[InventoryCollection]) -> tuple[DependencyEdge, ...]:
        """Link every declared dependency of ``collections`` to its dependant.

        Only the given collections are written. Integrity is checked before any
        slot is touched, so a failed build keeps the previous index. Rebuilding
        starts from empty ``dependees`` slots, so calling it twice yields the
        same index.
        """

        members = list(collections)
        member_ids = {id(collection) for collection in members}
        _check_integrity(members, member_ids)

        for collection in members:
            _internal.clear_dependees(collection)
        self._edges.clear()

        for dependant in members:
            for attribute, dependencies in dependant.dependency_attributes.items():
                for dependency in dependencies:
                    if id(dependency) not in member_ids:
                        log.warning(
                            "Skipping dependency %r of %r.%s outside the dependency graph",
                            dependency.name,
                            dependant.name,
                            attribute,
                        )
                        continue
                    _internal.add_dependee(dependency, dependant)
                    self._edges.append(
                        DependencyEdge(
                            dependant=dependant, attribute=attribute, dependency=dependency
                        )
                    )

        log.info(
            "Built dependency graph of %s inventory collections with %s edges",
            len(members),
            len(self._edges),
        )
        return self.edges


def _check_integrity(members: list[InventoryCollection], member_ids: set[int]) -> None:
    for dependant in members:
        if not dependant.assert_graph_integrity:
            continue
        for attribute, dependencies in dependant.dependency_attributes.items():
            for dependency in dependencies:
                if id(dependency) not in member_ids:
                    raise GraphIntegrityError(
                        collection=dependant.name,
                        attribute=attribute,
                        dependency=dependency.name,
                    )
