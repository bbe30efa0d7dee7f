from __future__ import annotations

import pytest

from inventory_refresh.domain import InventoryCollection, Persister
from tests.support.models import Flavor, OrchestrationStack, Vm


@pytest.fixture
def flavors() -> InventoryCollection:
    return InventoryCollection(model_class=Flavor)


@pytest.fixture
def vms(flavors: InventoryCollection) -> InventoryCollection:
    return InventoryCollection(
        model_class=Vm,
        secondary_refs={"by_uid": ["uid_ems"]},
        dependency_attributes={"flavor": [flavors]},
        inventory_object_attributes=["name", "flavor"],
    )


@pytest.fixture
def stacks() -> InventoryCollection:
    return InventoryCollection(model_class=OrchestrationStack)


@pytest.fixture
def persister() -> Persister:
    return Persister(context={"ems_id": 10})
