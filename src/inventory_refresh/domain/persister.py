"""Owning orchestrator of the inventory collections of one refresh run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .collection import InventoryCollection
from .collection.errors import DuplicateCollectionError, InventoryCollectionError
from .graph import DependeeIndex

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

    from .collection import LedgerCounts, RunContext
    from .graph import DependencyEdge
    from .ports.capabilities import ModelProbe

log = logging.getLogger(__name__)


def _collections_factory() -> dict[str, InventoryCollection]:
    return {}


@dataclass(slots=True)
class Persister:
    """Registry of uniquely named collections plus the run context for hooks.

    ``probe_factory`` builds the capability probe for collections that were not
    given one explicitly (the SQLAlchemy probe, for mapped models).
    """

    context: RunContext = None
    probe_factory: Callable[[type | None], ModelProbe] | None = None
    _collections: dict[str, InventoryCollection] = field(
        default_factory=_collections_factory, repr=False
    )
    _graph: DependeeIndex = field(default_factory=DependeeIndex, repr=False)

    @property
    def collections(self) -> Mapping[str, InventoryCollection]:
        return MappingProxyType(self._collections)

    def __getitem__(self, name: str) -> InventoryCollection:
        return self._collections[name]

    def __contains__(self, name: object) -> bool:
        return name in self._collections

    def __iter__(self) -> Iterator[InventoryCollection]:
        return iter(tuple(self._collections.values()))

    def add(self, collection: InventoryCollection) -> InventoryCollection:
        if collection.name in self._collections:
            raise DuplicateCollectionError(name=collection.name)
        self._collections[collection.name] = collection
        return collection

    def add_collection(self, **options: Any) -> InventoryCollection:
        """Build a collection from keyword options and register it."""

        if self.probe_factory is not None and options.get("model_probe") is None:
            options["model_probe"] = self.probe_factory(options.get("model_class"))
        return self.add(InventoryCollection.from_options(options))

    def build_graph(self) -> tuple[DependencyEdge, ...]:
        return self._graph.build(self._collections.values())

    def begin_save_pass(self) -> None:
        """Start the save pass of every collection, or of none of them."""

        running = [
            name for name, collection in self._collections.items() if collection.save_in_progress
        ]
        if running:
            raise InventoryCollectionError(
                f"Save pass already running for inventory collections: {', '.join(running)}"
            )
        for collection in self._collections.values():
            collection.begin_save_pass()

    def finish_save_pass(self) -> None:
        for collection in self._collections.values():
            collection.finish_save_pass()

    def run_custom_saves(self) -> None:
        for collection in self._collections.values():
            if collection.custom_save_block is not None:
                log.info("Running custom save of inventory collection %r", collection.name)
                collection.run_custom_save(self.context)

    def summary(self) -> dict[str, LedgerCounts]:
        return {name: collection.ledger.counts() for name, collection in self._collections.items()}
