"""Identity keys of an inventory collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, cast

from .errors import MissingReferenceKeyError

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable, Mapping

PRIMARY_REF: Final[str] = "manager_ref"
DEFAULT_MANAGER_REF: Final[tuple[str, ...]] = ("ems_ref",)

type ReferenceKey = tuple[Hashable, ...]


def _secondary_refs_factory() -> dict[str, tuple[str, ...]]:
    return {}


@dataclass(slots=True)
class ReferenceRegistry:
    """Primary and secondary identity schemes of one collection.

    ``manager_ref`` uniquely identifies an object inside the collection.
    ``allowed_nil`` lists manager-ref keys whose value may be ``None``; such keys
    still have to be present in every object's data. Keeping ``allowed_nil`` a
    subset of ``manager_ref`` is the caller's responsibility.
    ``secondary_refs`` address the same objects under alternative schemes (a
    provider UUID next to the native id, for example); each one gets its own
    index.
    """

    manager_ref: tuple[str, ...] = DEFAULT_MANAGER_REF
    allowed_nil: tuple[str, ...] = ()
    secondary_refs: dict[str, tuple[str, ...]] = field(default_factory=_secondary_refs_factory)

    @classmethod
    def from_options(
        cls,
        manager_ref: Iterable[str] | None = None,
        allowed_nil: Iterable[str] | None = None,
        secondary_refs: Mapping[str, Iterable[str]] | None = None,
    ) -> ReferenceRegistry:
        return cls(
            manager_ref=tuple(manager_ref) if manager_ref else DEFAULT_MANAGER_REF,
            allowed_nil=tuple(allowed_nil or ()),
            secondary_refs={name: tuple(keys) for name, keys in (secondary_refs or {}).items()},
        )

    @property
    def ref_names(self) -> tuple[str, ...]:
        return (PRIMARY_REF, *self.secondary_refs)

    def keys_for(self, ref: str = PRIMARY_REF) -> tuple[str, ...]:
        if ref == PRIMARY_REF:
            return self.manager_ref
        try:
            return self.secondary_refs[ref]
        except KeyError:
            known = ", ".join(self.ref_names)
            raise KeyError(f"Unknown reference {ref!r}, known references are {known}") from None

    def identity_attributes(self) -> frozenset[str]:
        """All attribute names taking part in any identity scheme."""

        names = set(self.manager_ref)
        for keys in self.secondary_refs.values():
            names.update(keys)
        return frozenset(names)

    def build_key(
        self,
        data: Mapping[str, object],
        *,
        ref: str = PRIMARY_REF,
        collection: str = "",
    ) -> ReferenceKey:
        """Extract the identity tuple of ``data`` for ``ref``."""

        values: list[Hashable] = []
        for key in self.keys_for(ref):
            if key not in data:
                raise MissingReferenceKeyError(collection=collection, ref=ref, key=key)
            value = data[key]
            if value is None and not (ref == PRIMARY_REF and key in self.allowed_nil):
                raise MissingReferenceKeyError(collection=collection, ref=ref, key=key, nil=True)
            values.append(_hashable(value))
        return tuple(values)


def _hashable(value: object) -> Hashable:
    # Lazy references and inventory objects identify themselves by their key.
    stable_key = getattr(value, "stable_key", None)
    if stable_key is not None:
        return stable_key
    return cast("Hashable", value)
