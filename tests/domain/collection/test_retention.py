from __future__ import annotations

import pytest

from inventory_refresh.domain.collection import (
    RetentionStrategy,
    UnsupportedRetentionStrategyError,
    resolve_retention,
)


def _unexpected_probe() -> bool:
    raise AssertionError("probe must not be consulted when a token is given")


def test_archive_capable_model_defaults_to_archive() -> None:
    assert resolve_retention(None, lambda: True) is RetentionStrategy.ARCHIVE


def test_other_models_default_to_destroy() -> None:
    assert resolve_retention(None, lambda: False) is RetentionStrategy.DESTROY


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("destroy", RetentionStrategy.DESTROY),
        ("archive", RetentionStrategy.ARCHIVE),
        (RetentionStrategy.ARCHIVE, RetentionStrategy.ARCHIVE),
    ],
)
def test_explicit_token_wins(token: str, expected: RetentionStrategy) -> None:
    assert resolve_retention(token, _unexpected_probe) is expected


def test_unknown_token_fails() -> None:
    with pytest.raises(UnsupportedRetentionStrategyError) as excinfo:
        resolve_retention("bogus", lambda: True)

    assert excinfo.value.requested == "bogus"
    assert excinfo.value.allowed == ("destroy", "archive")
