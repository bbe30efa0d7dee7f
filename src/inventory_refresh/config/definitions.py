"""Collection definition files.

Definitions are TOML documents with one ``[[collections]]`` table per
inventory collection::

    [[collections]]
    model = "myapp.models:Vm"
    secondary_refs = { by_uid = ["uid_ems"] }
    retention_strategy = "archive"

    [[collections]]
    name = "hardwares"
    model = "myapp.models:Hardware"
    manager_ref = ["vm_or_template"]
    dependency_attributes = { vms = ["vms"] }

Model classes and hooks are ``module:attribute`` import paths; dependencies
name other collections of the same file.
"""

from __future__ import annotations

import importlib
import tomllib
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidDefinitionsError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


class DefinitionsBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class CollectionDefinition(DefinitionsBaseModel):
    name: str | None = None
    model: str | None = None
    association: str | None = None
    strategy: str | None = None
    retention_strategy: str | None = None
    manager_ref: list[str] | None = None
    manager_ref_allowed_nil: list[str] | None = None
    secondary_refs: dict[str, list[str]] = Field(default_factory=dict)
    dependency_attributes: dict[str, list[str]] = Field(default_factory=dict)
    complete: bool | None = None
    create_only: bool | None = None
    check_changed: bool | None = None
    update_only: bool | None = None
    use_ar_object: bool | None = None
    assert_graph_integrity: bool | None = None
    attributes_blacklist: list[str] = Field(default_factory=list)
    attributes_whitelist: list[str] = Field(default_factory=list)
    inventory_object_attributes: list[str] | None = None
    batch_extra_attributes: list[str] = Field(default_factory=list)
    custom_save_block: str | None = None
    custom_reconnect_block: str | None = None
    default_values: dict[str, Any] = Field(default_factory=dict)

    @field_validator("model", "custom_save_block", "custom_reconnect_block")
    @classmethod
    def _check_import_path(cls, value: str | None) -> str | None:
        if value is not None:
            module, sep, attribute = value.partition(":")
            if not (module and sep and attribute):
                raise ValueError(f"expected 'module:attribute', got {value!r}")
        return value

    def dependency_names(self) -> set[str]:
        return {name for names in self.dependency_attributes.values() for name in names}


class DefinitionsFile(DefinitionsBaseModel):
    collections: list[CollectionDefinition] = Field(default_factory=list)


def parse_definitions(payload: Mapping[str, Any], *, source: str = "<mapping>") -> DefinitionsFile:
    try:
        return DefinitionsFile.model_validate(payload)
    except ValidationError as exc:
        raise InvalidDefinitionsError(source=source, detail=str(exc)) from exc


def load_definitions(path: Path) -> DefinitionsFile:
    """Read and validate the TOML definitions file at ``path``."""

    try:
        with path.open("rb") as handle:
            payload = tomllib.load(handle)
    except OSError as exc:
        raise InvalidDefinitionsError(source=str(path), detail=str(exc)) from exc
    except tomllib.TOMLDecodeError as exc:
        raise InvalidDefinitionsError(source=str(path), detail=str(exc)) from exc
    return parse_definitions(payload, source=str(path))


def import_object(path: str) -> Any:
    """Resolve a ``module:attribute`` import path."""

    module_name, _, attribute_path = path.partition(":")
    try:
        target: Any = importlib.import_module(module_name)
        for attribute in attribute_path.split("."):
            target = getattr(target, attribute)
    except (ImportError, AttributeError) as exc:
        raise InvalidDefinitionsError(source=path, detail=f"cannot import {path!r}: {exc}") from exc
    return target
