"""Strategy resolution for inventory collections.

A strategy decides whether a collection writes its objects into the store or
only loads them from it:

- ``WRITE`` (no token) saves the collection's objects; only those objects are
  referable from other collections.
- ``CACHE_ALL`` loads the whole baseline set eagerly and treats it as the
  authoritative, read-only result. Nothing else has to be built.
- ``FIND_REFERENCES`` loads, read-only, only the objects other collections
  actually reference.
- ``FIND_MISSING_REFERENCES`` writes like ``WRITE`` and additionally falls back
  to store lookups for references the built objects cannot satisfy.

``parse_strategy`` is the only place an untrusted token can fail; everything
after it works on the closed enumeration.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final, assert_never

from .errors import UnsupportedStrategyError


class Strategy(StrEnum):
    WRITE = "write"
    CACHE_ALL = "local_db_cache_all"
    FIND_REFERENCES = "local_db_find_references"
    FIND_MISSING_REFERENCES = "local_db_find_missing_references"

    @property
    def is_db_only(self) -> bool:
        """Whether the strategy only reads from the store."""

        return self in (Strategy.CACHE_ALL, Strategy.FIND_REFERENCES)


STRATEGY_TOKENS: Final[tuple[str, ...]] = (
    Strategy.CACHE_ALL.value,
    Strategy.FIND_REFERENCES.value,
    Strategy.FIND_MISSING_REFERENCES.value,
)

type StrategyToken = Strategy | str | None


@dataclass(frozen=True, slots=True)
class StrategyResolution:
    """Strategy together with the two flags derived from it."""

    strategy: Strategy
    finalized: bool
    saved: bool


def parse_strategy(token: StrategyToken) -> Strategy:
    """Turn a configuration token into a ``Strategy``.

    ``None`` means the default ``WRITE`` strategy. Strings must be one of the
    ``local_db_*`` tokens; ``"write"`` is not a configuration token.
    """

    if token is None:
        return Strategy.WRITE
    if isinstance(token, Strategy):
        return token
    if isinstance(token, str) and token in STRATEGY_TOKENS:
        return Strategy(token)
    raise UnsupportedStrategyError(requested=token, allowed=STRATEGY_TOKENS)


def resolve_strategy(token: StrategyToken, *, saved: bool = False) -> StrategyResolution:
    """Resolve ``token`` into a strategy and its derived ``finalized``/``saved`` flags.

    ``saved`` is the collection's current flag. DB-only strategies force it to
    ``True``; the other strategies keep it as passed in, so switching from
    ``CACHE_ALL`` back to ``WRITE`` leaves a collection marked as saved.
    """

    strategy = parse_strategy(token)
    match strategy:
        case Strategy.WRITE:
            return StrategyResolution(strategy=strategy, finalized=False, saved=saved)
        case Strategy.CACHE_ALL:
            return StrategyResolution(strategy=strategy, finalized=True, saved=True)
        case Strategy.FIND_REFERENCES:
            return StrategyResolution(strategy=strategy, finalized=False, saved=True)
        case Strategy.FIND_MISSING_REFERENCES:
            return StrategyResolution(strategy=strategy, finalized=False, saved=saved)
        case _:
            assert_never(strategy)
