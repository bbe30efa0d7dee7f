"""Index collaborators of an inventory collection.

``DataStorage`` owns the built objects and one index per identity scheme.
``IndexProxy`` is the lookup facade used by references, and
``ReferencesStorage`` remembers which keys other collections asked for so that
``FIND_REFERENCES`` collections can load exactly those from the store.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, cast

from .errors import MissingReferenceKeyError
from .references import PRIMARY_REF

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterator

    from .inventory_object import InventoryObject
    from .references import ReferenceKey, ReferenceRegistry

log = logging.getLogger(__name__)

type KeyLike = ReferenceKey | Mapping[str, object] | Hashable


def _index_factory() -> dict[str, dict[ReferenceKey, InventoryObject]]:
    return {}


@dataclass(slots=True)
class DataStorage:
    """Built objects of one collection, indexed by every registered reference."""

    references: ReferenceRegistry
    collection: str = ""
    _objects: list[InventoryObject] = field(default_factory=list["InventoryObject"], repr=False)
    _indexes: dict[str, dict[ReferenceKey, InventoryObject]] = field(
        default_factory=_index_factory, repr=False
    )

    def __post_init__(self) -> None:
        for ref in self.references.ref_names:
            self._indexes.setdefault(ref, {})

    def __iter__(self) -> Iterator[InventoryObject]:
        return iter(tuple(self._objects))

    def __len__(self) -> int:
        return len(self._objects)

    def add(self, inventory_object: InventoryObject) -> InventoryObject:
        """Insert ``inventory_object`` unless its manager ref is already stored.

        Returns the stored object, which is the earlier one for duplicates.
        """

        primary_index = self._indexes[PRIMARY_REF]
        existing = primary_index.get(inventory_object.manager_uuid)
        if existing is not None:
            log.debug(
                "Ignoring duplicate %r in inventory collection %r",
                inventory_object.manager_uuid,
                self.collection,
            )
            return existing

        self._objects.append(inventory_object)
        primary_index[inventory_object.manager_uuid] = inventory_object
        for ref in self.references.secondary_refs:
            try:
                key = self.references.build_key(
                    inventory_object.data, ref=ref, collection=self.collection
                )
            except MissingReferenceKeyError:
                continue
            self._indexes[ref].setdefault(key, inventory_object)
        return inventory_object

    def find(self, key: KeyLike, *, ref: str = PRIMARY_REF) -> InventoryObject | None:
        return self._indexes[ref].get(self.normalize_key(key, ref=ref))

    def normalize_key(self, key: KeyLike, *, ref: str = PRIMARY_REF) -> ReferenceKey:
        """Accept a key tuple, a data mapping or a bare value for single-key refs."""

        if isinstance(key, Mapping):
            data = cast("Mapping[str, object]", key)
            return self.references.build_key(data, ref=ref, collection=self.collection)
        if isinstance(key, tuple):
            return key  # pyright: ignore[reportUnknownVariableType]
        return (key,)


@dataclass(frozen=True, slots=True, eq=False)
class IndexProxy:
    """Read-only lookup facade over a collection's data storage."""

    data_storage: DataStorage

    def find(self, key: KeyLike, *, ref: str = PRIMARY_REF) -> InventoryObject | None:
        return self.data_storage.find(key, ref=ref)

    def normalize_key(self, key: KeyLike, *, ref: str = PRIMARY_REF) -> ReferenceKey:
        return self.data_storage.normalize_key(key, ref=ref)


@dataclass(frozen=True, slots=True)
class LazyReference:
    """Reference into another collection, resolved once the target is built.

    ``load`` returns ``None`` while the target does not exist yet; ``id`` stays
    ``None`` until the target has been saved and its id written back.
    """

    index_proxy: IndexProxy
    key: ReferenceKey
    ref: str = PRIMARY_REF

    @property
    def stable_key(self) -> ReferenceKey:
        return self.key

    def load(self) -> InventoryObject | None:
        return self.index_proxy.find(self.key, ref=self.ref)

    @property
    def id(self) -> object:
        target = self.load()
        return None if target is None else target.id


def _references_factory() -> dict[str, dict[ReferenceKey, None]]:
    return {}


@dataclass(slots=True)
class ReferencesStorage:
    """Keys other collections referenced, per identity scheme, in request order."""

    index_proxy: IndexProxy
    _references: dict[str, dict[ReferenceKey, None]] = field(
        default_factory=_references_factory, repr=False
    )

    def add_reference(self, key: KeyLike, *, ref: str = PRIMARY_REF) -> ReferenceKey:
        normalized = self.index_proxy.normalize_key(key, ref=ref)
        self._references.setdefault(ref, {})[normalized] = None
        return normalized

    def references(self, ref: str = PRIMARY_REF) -> tuple[ReferenceKey, ...]:
        return tuple(self._references.get(ref, {}))

    def lazy_find(self, key: KeyLike, *, ref: str = PRIMARY_REF) -> LazyReference:
        normalized = self.add_reference(key, ref=ref)
        return LazyReference(index_proxy=self.index_proxy, key=normalized, ref=ref)
