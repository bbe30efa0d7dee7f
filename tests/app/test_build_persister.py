from __future__ import annotations

import pytest

from inventory_refresh.app import build_persister, describe_collection
from inventory_refresh.config import ConfigurationError, parse_definitions
from inventory_refresh.domain import RetentionStrategy, Strategy
from tests.support.models import MappedVm, noop_save


def test_dependencies_are_built_before_their_dependants() -> None:
    definitions = parse_definitions(
        {
            "collections": [
                {
                    "name": "hardwares",
                    "manager_ref": ["vm_or_template"],
                    "dependency_attributes": {"vm_or_template": ["mapped_vms"]},
                },
                {"model": "tests.support.models:MappedVm", "strategy": "local_db_find_references"},
            ]
        }
    )

    persister = build_persister(definitions, context="ems")

    hardwares = persister["hardwares"]
    vms = persister["mapped_vms"]
    assert list(persister.collections) == ["mapped_vms", "hardwares"]
    assert vms.model_class is MappedVm
    assert vms.strategy is Strategy.FIND_REFERENCES
    assert vms.retention_strategy is RetentionStrategy.ARCHIVE
    assert hardwares.dependency_attributes["vm_or_template"] == (vms,)
    assert vms.dependees == {hardwares}
    assert persister.context == "ems"


def test_hooks_are_imported() -> None:
    definitions = parse_definitions(
        {
            "collections": [
                {
                    "association": "orchestration_stack_ancestry",
                    "custom_save_block": "tests.support.models:noop_save",
                }
            ]
        }
    )

    persister = build_persister(definitions)

    assert persister["orchestration_stack_ancestry"].custom_save_block is noop_save


def test_unknown_dependency_is_a_configuration_error() -> None:
    definitions = parse_definitions(
        {"collections": [{"name": "vms", "dependency_attributes": {"flavor": ["flavors"]}}]}
    )

    with pytest.raises(ConfigurationError, match="flavors"):
        build_persister(definitions)


def test_describe_collection() -> None:
    definitions = parse_definitions(
        {
            "collections": [
                {"model": "tests.support.models:Flavor", "strategy": "local_db_cache_all"},
                {"name": "vms", "dependency_attributes": {"flavor": ["flavors"]}},
            ]
        }
    )
    persister = build_persister(definitions)

    assert describe_collection(persister["flavors"]) == (
        "flavors: strategy=local_db_cache_all retention=destroy finalized=True saved=True "
        "manager_ref=ems_ref dependencies=- dependees=vms"
    )
    assert describe_collection(persister["vms"]) == (
        "vms: strategy=write retention=destroy finalized=False saved=False "
        "manager_ref=ems_ref dependencies=flavors dependees=-"
    )
