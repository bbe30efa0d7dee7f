from __future__ import annotations

import pytest

from inventory_refresh.domain import InventoryCollection, Persister, Strategy
from inventory_refresh.domain.collection import (
    DuplicateCollectionError,
    InventoryCollectionError,
    LedgerCounts,
    StrategyReassignmentError,
)
from inventory_refresh.domain.ports import AttributeModelProbe, ModelProbe
from tests.support.models import Flavor, Vm


def test_add_collection_registers_by_name(persister: Persister) -> None:
    flavors = persister.add_collection(model_class=Flavor, strategy="local_db_cache_all")

    assert persister["flavors"] is flavors
    assert "flavors" in persister
    assert list(persister.collections) == ["flavors"]
    assert flavors.strategy is Strategy.CACHE_ALL


def test_names_are_unique(persister: Persister) -> None:
    persister.add_collection(model_class=Vm)

    with pytest.raises(DuplicateCollectionError, match="vms"):
        persister.add(InventoryCollection(name="vms"))


def test_probe_factory_is_used_for_collections_without_a_probe() -> None:
    probed: list[type | None] = []

    def probe_factory(model_class: type | None) -> ModelProbe:
        probed.append(model_class)
        return AttributeModelProbe(Vm)

    persister = Persister(probe_factory=probe_factory)
    flavors = persister.add_collection(model_class=Flavor)

    assert probed == [Flavor]
    assert flavors.retention_strategy == "archive"


def test_build_graph_links_dependees(persister: Persister) -> None:
    flavors = persister.add_collection(model_class=Flavor)
    vms = persister.add_collection(model_class=Vm, dependency_attributes={"flavor": [flavors]})

    persister.build_graph()

    assert flavors.dependees == {vms}


def test_save_pass_fans_out_and_blocks_reassignment(persister: Persister) -> None:
    flavors = persister.add_collection(model_class=Flavor)
    vms = persister.add_collection(model_class=Vm)

    persister.begin_save_pass()
    with pytest.raises(StrategyReassignmentError):
        vms.strategy = "local_db_find_references"
    flavors.ledger.store_created_records(["m1.small", "m1.large"])
    vms.ledger.store_deleted_records(["vm-1"])
    persister.finish_save_pass()

    assert flavors.saved is True
    assert vms.saved is True
    assert persister.summary() == {
        "flavors": LedgerCounts(created=2),
        "vms": LedgerCounts(deleted=1),
    }


def test_refused_save_pass_starts_no_collection(persister: Persister) -> None:
    flavors = persister.add_collection(model_class=Flavor)
    vms = persister.add_collection(model_class=Vm)
    vms.begin_save_pass()

    with pytest.raises(InventoryCollectionError, match="vms"):
        persister.begin_save_pass()

    assert flavors.save_in_progress is False
    flavors.strategy = "local_db_find_references"
    assert flavors.strategy is Strategy.FIND_REFERENCES

    vms.finish_save_pass()
    persister.begin_save_pass()

    assert flavors.save_in_progress is True
    assert vms.save_in_progress is True


def test_run_custom_saves_passes_the_run_context(persister: Persister) -> None:
    contexts: list[object] = []
    persister.add_collection(name="vms")
    persister.add_collection(
        name="ancestry", custom_save_block=lambda context, _view: contexts.append(context)
    )

    persister.run_custom_saves()

    assert contexts == [{"ems_id": 10}]
