from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from types import MappingProxyType

import pytest

from inventory_refresh.domain.collection import ChangeLedger, LedgerCounts


def test_ledger_starts_empty() -> None:
    ledger = ChangeLedger()

    assert ledger.created_records == ()
    assert ledger.updated_records == ()
    assert ledger.deleted_records == ()
    assert ledger.counts() == LedgerCounts()


def test_appends_keep_insertion_order_without_deduplication() -> None:
    ledger = ChangeLedger()

    ledger.store_created_records([{"id": 1}])
    ledger.store_created_records([{"id": 2}, {"id": 1}])
    ledger.store_updated_records(["vm-3"])
    ledger.store_deleted_records(iter([4]))

    assert ledger.created_records == ({"id": 1}, {"id": 2}, {"id": 1})
    assert ledger.updated_records == ("vm-3",)
    assert ledger.deleted_records == (4,)
    assert ledger.counts() == LedgerCounts(created=3, updated=1, deleted=1)


def test_iterable_records_are_stored_whole() -> None:
    ledger = ChangeLedger()
    row = MappingProxyType({"id": 7, "ems_ref": "vm-7"})

    ledger.store_created_records([(1, "vm-1")])
    ledger.store_updated_records([row, (2, "vm-2")])

    assert ledger.created_records == ((1, "vm-1"),)
    assert ledger.updated_records == (row, (2, "vm-2"))
    assert ledger.counts() == LedgerCounts(created=1, updated=2)


@pytest.mark.parametrize("record", ["vm-1", b"vm-1", {"id": 1}, MappingProxyType({"id": 1})])
def test_unwrapped_single_records_are_rejected(record: object) -> None:
    ledger = ChangeLedger()

    with pytest.raises(TypeError, match="iterable of records"):
        ledger.store_deleted_records(record)  # type: ignore[arg-type]

    assert ledger.deleted_records == ()


def test_only_reset_truncates() -> None:
    ledger = ChangeLedger()
    ledger.store_updated_records([1, 2])

    assert ledger.updated_records == (1, 2)
    assert ledger.updated_records == (1, 2)

    ledger.reset()

    assert ledger.counts() == LedgerCounts()


def test_concurrent_appends_are_not_lost() -> None:
    ledger = ChangeLedger()

    def save_shard(shard: int) -> None:
        for index in range(500):
            ledger.store_created_records([(shard, index)])

    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(save_shard, range(8)))

    created = ledger.created_records
    assert len(created) == 4000
    assert len(set(created)) == 4000
    shard_three = [record for record in created if record[0] == 3]
    assert shard_three == [(3, index) for index in range(500)]
