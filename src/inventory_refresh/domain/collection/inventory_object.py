"""Objects built into an inventory collection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .collection import InventoryCollection
    from .references import ReferenceKey


class InventoryObject:
    """One observed entity, identified inside its collection by ``manager_uuid``.

    ``id`` is the primary key of the stored record; savers and custom save hooks
    write it back once the record exists so that references can resolve.
    Attributes listed in the collection's ``inventory_object_attributes`` are
    readable and writable as plain attributes, the rest only through ``[]``.
    """

    __slots__ = ("collection", "data", "id", "manager_uuid")

    def __init__(
        self,
        collection: InventoryCollection,
        data: dict[str, object],
        manager_uuid: ReferenceKey,
    ) -> None:
        object.__setattr__(self, "collection", collection)
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "manager_uuid", manager_uuid)
        object.__setattr__(self, "id", None)

    @property
    def stable_key(self) -> ReferenceKey:
        return self.manager_uuid

    def __getitem__(self, key: str) -> object:
        return self.data[key]

    def __setitem__(self, key: str, value: object) -> None:
        self.data[key] = value

    def get(self, key: str, default: object = None) -> object:
        return self.data.get(key, default)

    def __getattr__(self, name: str) -> object:
        if name in InventoryObject.__slots__:
            raise AttributeError(name)
        if name in self._exposed_attributes():
            return self.data.get(name)
        raise AttributeError(
            f"{type(self).__name__} of {self.collection.name!r} has no attribute {name!r}"
        )

    def __setattr__(self, name: str, value: object) -> None:
        if name in InventoryObject.__slots__:
            object.__setattr__(self, name, value)
        elif name in self._exposed_attributes():
            self.data[name] = value
        else:
            raise AttributeError(
                f"{name!r} is not an exposed attribute of inventory collection "
                f"{self.collection.name!r}"
            )

    def _exposed_attributes(self) -> tuple[str, ...]:
        return self.collection.inventory_object_attributes or ()

    def __repr__(self) -> str:
        return (
            f"InventoryObject(collection={self.collection.name!r}, "
            f"manager_uuid={self.manager_uuid!r}, id={self.id!r})"
        )


# Names an exposed attribute would be shadowed by.
RESERVED_ATTRIBUTES: Final[frozenset[str]] = frozenset(
    name for name in vars(InventoryObject) if not name.startswith("_")
)
