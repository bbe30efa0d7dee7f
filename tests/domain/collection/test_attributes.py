from __future__ import annotations

import logging

import pytest

from inventory_refresh.domain.collection import AttributeFilter, InventoryCollection


def test_blacklist_accumulates() -> None:
    attribute_filter = AttributeFilter(base_attributes=lambda: ())

    attribute_filter.blacklist(["parent"])
    attribute_filter.blacklist(["genealogy_parent"])

    assert attribute_filter.blacklisted == {"parent", "genealogy_parent"}
    assert attribute_filter.whitelisted == set()


def test_whitelist_keeps_base_attributes() -> None:
    attribute_filter = AttributeFilter(base_attributes=lambda: ("ems_ref", "name"))

    attribute_filter.whitelist(["power_state"])

    assert attribute_filter.whitelisted == {"ems_ref", "name", "power_state"}


def test_identity_keys_are_not_checked_by_blacklist() -> None:
    attribute_filter = AttributeFilter(base_attributes=lambda: ("ems_ref",))

    assert attribute_filter.blacklist(["ems_ref"]) == {"ems_ref"}


def test_both_lists_coexist_with_a_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        collection = InventoryCollection(
            name="vms",
            attributes_blacklist=["parent"],
            attributes_whitelist=["name"],
        )

    assert collection.attributes_blacklist == {"parent"}
    assert collection.attributes_whitelist == {"name", "ems_ref"}
    assert "both an attribute blacklist" in caplog.text


def test_whitelist_includes_manager_ref() -> None:
    collection = InventoryCollection(name="disks", manager_ref=["hardware", "device_name"])

    collection.whitelist_attributes(["size"])

    assert collection.attributes_whitelist == {"hardware", "device_name", "size"}
