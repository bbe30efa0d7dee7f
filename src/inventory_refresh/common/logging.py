"""Shared logging helpers for inventory refresh."""

from __future__ import annotations

import logging
from typing import Final

from inventory_refresh.config.env import get_log_level

PACKAGE_LOGGER: Final[str] = "inventory_refresh"


def configure_logging(
    *,
    level: int | str | None = None,
    library_level: int | str = logging.WARNING,
    force: bool = False,
) -> None:
    """Initialise the root logger once and set the level of this package's loggers.

    ``level`` applies to the ``inventory_refresh`` logger tree and defaults to
    ``$INVENTORY_REFRESH_LOG_LEVEL``. Everything else, SQLAlchemy included, logs
    at ``library_level``. Pass ``force=True`` to reconfigure during tests or
    specialised entry points.
    """

    logging.basicConfig(
        level=library_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    package_level = get_log_level() if level is None else level
    if isinstance(package_level, str):
        package_level = package_level.upper()
    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)
