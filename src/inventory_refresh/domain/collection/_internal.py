"""Private helpers for mutating internal collection state.

Only the graph builder should import this module.
"""

# ruff: noqa: SLF001

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .collection import InventoryCollection


def add_dependee(collection: InventoryCollection, dependee: InventoryCollection) -> None:
    collection._dependencies._dependees.add(dependee)


def clear_dependees(collection: InventoryCollection) -> None:
    collection._dependencies._dependees.clear()
