"""Records created, updated and deleted during one save pass."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class LedgerCounts:
    created: int = 0
    updated: int = 0
    deleted: int = 0


@dataclass(slots=True)
class ChangeLedger:
    """Append-only record of changes made by the saver.

    Every ``store_*_records`` call takes a batch, an iterable of records. A
    record may itself be iterable (a tuple, a result row), so a single record
    has to be wrapped: ``store_created_records([row])``.

    Several save workers may append concurrently; appends are serialized by a
    lock. Nothing is de-duplicated and only ``reset`` truncates the sequences.
    """

    _created: list[object] = field(default_factory=list["object"], repr=False)
    _updated: list[object] = field(default_factory=list["object"], repr=False)
    _deleted: list[object] = field(default_factory=list["object"], repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def created_records(self) -> tuple[object, ...]:
        with self._lock:
            return tuple(self._created)

    @property
    def updated_records(self) -> tuple[object, ...]:
        with self._lock:
            return tuple(self._updated)

    @property
    def deleted_records(self) -> tuple[object, ...]:
        with self._lock:
            return tuple(self._deleted)

    def store_created_records(self, records: Iterable[object]) -> None:
        self._append(self._created, records)

    def store_updated_records(self, records: Iterable[object]) -> None:
        self._append(self._updated, records)

    def store_deleted_records(self, records: Iterable[object]) -> None:
        self._append(self._deleted, records)

    def counts(self) -> LedgerCounts:
        with self._lock:
            return LedgerCounts(
                created=len(self._created),
                updated=len(self._updated),
                deleted=len(self._deleted),
            )

    def reset(self) -> None:
        with self._lock:
            self._created.clear()
            self._updated.clear()
            self._deleted.clear()

    def _append(self, target: list[object], records: Iterable[object]) -> None:
        if isinstance(records, (str, bytes, Mapping)):
            raise TypeError(
                f"Expected an iterable of records, got a single {type(records).__name__}"
            )
        batch = list(records)
        with self._lock:
            target.extend(batch)
