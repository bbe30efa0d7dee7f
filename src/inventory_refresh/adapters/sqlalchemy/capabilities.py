"""Model capability probe backed by SQLAlchemy mapper inspection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import inspect

from inventory_refresh.domain.ports.capabilities import (
    ARCHIVE_TIMESTAMP_ATTRIBUTE,
    AttributeModelProbe,
    ModelProbe,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Mapper

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SqlAlchemyModelProbe:
    """Probe a mapped model through its SQLAlchemy mapper.

    A model supports archiving when it maps an ``archived_at`` column. Required
    attributes are the mapped non-nullable columns without any default that are
    not primary keys.
    """

    mapper: Mapper[object]

    def supports_archive(self) -> bool:
        return ARCHIVE_TIMESTAMP_ATTRIBUTE in self.mapper.columns

    def required_attributes(self) -> frozenset[str]:
        required: set[str] = set()
        for attribute, column in self.mapper.columns.items():
            if column.primary_key or column.nullable:
                continue
            if column.default is not None or column.server_default is not None:
                continue
            required.add(attribute)
        return frozenset(required)


def model_probe_for(model_class: type | None) -> ModelProbe:
    """Return a SQLAlchemy probe for mapped classes, an attribute probe otherwise."""

    if model_class is None:
        return AttributeModelProbe(None)
    mapper = inspect(model_class, raiseerr=False)
    if mapper is None:
        log.debug("%s is not mapped, probing its attributes instead", model_class.__name__)
        return AttributeModelProbe(model_class)
    return SqlAlchemyModelProbe(mapper)
