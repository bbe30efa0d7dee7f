"""Retention policy for objects missing from the latest observed inventory."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Final

from .errors import UnsupportedRetentionStrategyError

if TYPE_CHECKING:
    from collections.abc import Callable


class RetentionStrategy(StrEnum):
    DESTROY = "destroy"
    ARCHIVE = "archive"


RETENTION_TOKENS: Final[tuple[str, ...]] = tuple(member.value for member in RetentionStrategy)

type RetentionToken = RetentionStrategy | str | None


def resolve_retention(
    token: RetentionToken,
    supports_archive: Callable[[], bool],
) -> RetentionStrategy:
    """Return the retention strategy for ``token``.

    Without a token the model decides: models that carry an archive timestamp
    are archived, everything else is destroyed. ``supports_archive`` is only
    called in that case.
    """

    if token is None:
        return RetentionStrategy.ARCHIVE if supports_archive() else RetentionStrategy.DESTROY
    if isinstance(token, RetentionStrategy):
        return token
    if isinstance(token, str) and token in RETENTION_TOKENS:
        return RetentionStrategy(token)
    raise UnsupportedRetentionStrategyError(requested=token, allowed=RETENTION_TOKENS)
