"""Ports describing what a target model can do."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Protocol, runtime_checkable

ARCHIVE_TIMESTAMP_ATTRIBUTE: Final[str] = "archived_at"


@runtime_checkable
class ModelProbe(Protocol):
    """Capability probe for the model class a collection persists into."""

    def supports_archive(self) -> bool: ...

    def required_attributes(self) -> frozenset[str]: ...


@dataclass(frozen=True, slots=True)
class AttributeModelProbe:
    """Probe plain classes by looking at their attributes and annotations.

    Used when no store-specific probe is injected; it knows nothing about
    validations, so no attribute is reported as required.
    """

    model_class: type | None

    def supports_archive(self) -> bool:
        if self.model_class is None:
            return False
        annotations = getattr(self.model_class, "__annotations__", {})
        return (
            ARCHIVE_TIMESTAMP_ATTRIBUTE in annotations
            or hasattr(self.model_class, ARCHIVE_TIMESTAMP_ATTRIBUTE)
        )

    def required_attributes(self) -> frozenset[str]:
        return frozenset()
