"""Attribute include/exclude sets constraining what a collection persists."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

log = logging.getLogger(__name__)


def _names_factory() -> set[str]:
    return set()


@dataclass(slots=True)
class AttributeFilter:
    """Blacklist and whitelist of persisted attributes.

    Both sets may be populated at the same time; which one wins is decided by
    the save algorithm. Blacklisting an identity key is not detected here and
    only surfaces as a referential integrity failure while saving.
    ``base_attributes`` yields the attributes every whitelist implicitly keeps
    (identity keys and attributes the model requires).
    """

    base_attributes: Callable[[], Iterable[str]]
    collection: str = ""
    blacklisted: set[str] = field(default_factory=_names_factory)
    whitelisted: set[str] = field(default_factory=_names_factory)

    def blacklist(self, keys: Iterable[str]) -> set[str]:
        """Exclude ``keys`` from saving."""

        self.blacklisted.update(keys)
        self._warn_on_overlap()
        return self.blacklisted

    def whitelist(self, keys: Iterable[str]) -> set[str]:
        """Restrict saving to ``keys`` plus the implicitly kept base attributes."""

        self.whitelisted.update(keys)
        self.whitelisted.update(self.base_attributes())
        self._warn_on_overlap()
        return self.whitelisted

    @property
    def both_populated(self) -> bool:
        return bool(self.blacklisted) and bool(self.whitelisted)

    def _warn_on_overlap(self) -> None:
        if self.both_populated:
            log.warning(
                "Inventory collection %r has both an attribute blacklist %s and whitelist %s",
                self.collection,
                sorted(self.blacklisted),
                sorted(self.whitelisted),
            )
