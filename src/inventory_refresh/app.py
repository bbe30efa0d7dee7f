"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from inventory_refresh.adapters.sqlalchemy import model_probe_for
from inventory_refresh.config import (
    ConfigurationError,
    get_definitions_path,
    import_object,
    load_definitions,
)
from inventory_refresh.domain import Persister

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from inventory_refresh.config import CollectionDefinition, DefinitionsFile
    from inventory_refresh.domain import InventoryCollection
    from inventory_refresh.domain.collection import RunContext
    from inventory_refresh.domain.ports import ModelProbe

log = getLogger(__name__)


def build_persister(
    definitions: DefinitionsFile,
    *,
    context: RunContext = None,
    probe_factory: Callable[[type | None], ModelProbe] = model_probe_for,
) -> Persister:
    """Build every defined collection, dependencies before their dependants."""

    persister = Persister(context=context, probe_factory=probe_factory)
    pending = list(definitions.collections)
    while pending:
        ready = [
            definition
            for definition in pending
            if all(name in persister for name in definition.dependency_names())
        ]
        if not ready:
            unresolved = sorted(
                name
                for definition in pending
                for name in definition.dependency_names()
                if name not in persister
            )
            raise ConfigurationError(
                f"Unresolvable collection dependencies: {', '.join(unresolved)}"
            )
        for definition in ready:
            persister.add_collection(**_collection_options(definition, persister))
            pending.remove(definition)

    persister.build_graph()
    return persister


def load_persister(
    path: str | Path | None = None,
    *,
    context: RunContext = None,
) -> Persister:
    """Load the definitions file at ``path`` (or from the environment) into a persister."""

    definitions_path = get_definitions_path(path)
    log.info("Loading collection definitions from %s", definitions_path)
    return build_persister(load_definitions(definitions_path), context=context)


def describe_collection(collection: InventoryCollection) -> str:
    dependencies = ",".join(dependency.name for dependency in collection.dependencies()) or "-"
    dependees = ",".join(sorted(dependee.name for dependee in collection.dependees)) or "-"
    return (
        f"{collection.name}: strategy={collection.strategy} "
        f"retention={collection.retention_strategy} "
        f"finalized={collection.finalized} saved={collection.saved} "
        f"manager_ref={','.join(collection.manager_ref)} "
        f"dependencies={dependencies} dependees={dependees}"
    )


def _collection_options(definition: CollectionDefinition, persister: Persister) -> dict[str, Any]:
    options = definition.model_dump(
        exclude={"model", "custom_save_block", "custom_reconnect_block", "dependency_attributes"}
    )
    if definition.model is not None:
        options["model_class"] = import_object(definition.model)
    if definition.custom_save_block is not None:
        options["custom_save_block"] = import_object(definition.custom_save_block)
    if definition.custom_reconnect_block is not None:
        options["custom_reconnect_block"] = import_object(definition.custom_reconnect_block)
    options["dependency_attributes"] = {
        attribute: [persister[name] for name in names]
        for attribute, names in definition.dependency_attributes.items()
    }
    return options
