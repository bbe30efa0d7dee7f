from __future__ import annotations

import pytest

from inventory_refresh.domain.collection import (
    STRATEGY_TOKENS,
    Strategy,
    UnsupportedStrategyError,
    parse_strategy,
    resolve_strategy,
)


def test_no_token_resolves_to_write() -> None:
    resolution = resolve_strategy(None)

    assert resolution.strategy is Strategy.WRITE
    assert resolution.finalized is False
    assert resolution.saved is False


def test_no_token_keeps_saved_flag() -> None:
    assert resolve_strategy(None, saved=True).saved is True


def test_cache_all_is_finalized_and_saved() -> None:
    resolution = resolve_strategy("local_db_cache_all")

    assert resolution.strategy is Strategy.CACHE_ALL
    assert resolution.finalized is True
    assert resolution.saved is True


def test_find_references_is_saved_but_not_finalized() -> None:
    resolution = resolve_strategy("local_db_find_references")

    assert resolution.strategy is Strategy.FIND_REFERENCES
    assert resolution.finalized is False
    assert resolution.saved is True


@pytest.mark.parametrize("saved", [False, True])
def test_find_missing_references_leaves_flags_unchanged(saved: bool) -> None:
    resolution = resolve_strategy("local_db_find_missing_references", saved=saved)

    assert resolution.strategy is Strategy.FIND_MISSING_REFERENCES
    assert resolution.finalized is False
    assert resolution.saved is saved


def test_unknown_token_lists_the_three_db_strategies() -> None:
    with pytest.raises(UnsupportedStrategyError) as excinfo:
        resolve_strategy("bogus")

    assert excinfo.value.requested == "bogus"
    assert excinfo.value.allowed == (
        "local_db_cache_all",
        "local_db_find_references",
        "local_db_find_missing_references",
    )
    assert "bogus" in str(excinfo.value)


def test_write_is_not_a_configuration_token() -> None:
    with pytest.raises(UnsupportedStrategyError):
        parse_strategy("write")


def test_enum_members_are_accepted() -> None:
    assert parse_strategy(Strategy.WRITE) is Strategy.WRITE
    assert parse_strategy(Strategy.CACHE_ALL) is Strategy.CACHE_ALL


def test_db_only_strategies() -> None:
    assert {strategy for strategy in Strategy if strategy.is_db_only} == {
        Strategy.CACHE_ALL,
        Strategy.FIND_REFERENCES,
    }
    assert len(STRATEGY_TOKENS) == 3
