"""Inventory collection: configuration of one reconciled entity set.

An ``InventoryCollection`` describes how the objects observed for one model
(VMs of a provider, flavors, orchestration stacks, ...) are compared against
the store and persisted. Construction normalizes the keyword options into
canonical fields, resolves the strategy and retention policy, and allocates the
index collaborators. The saver and the scheduler only read the result.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, cast

from inventory_refresh.common.inflection import tableize
from inventory_refresh.domain.ports.capabilities import AttributeModelProbe

from .attributes import AttributeFilter
from .dependencies import DependencyLinkage
from .errors import InventoryCollectionError, StrategyReassignmentError
from .hooks import CollectionHookView
from .inventory_object import RESERVED_ATTRIBUTES, InventoryObject
from .ledger import ChangeLedger
from .references import PRIMARY_REF, ReferenceRegistry
from .retention import RetentionStrategy, RetentionToken, resolve_retention
from .storage import DataStorage, IndexProxy, ReferencesStorage
from .strategy import Strategy, StrategyToken, resolve_strategy

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from inventory_refresh.domain.ports.capabilities import ModelProbe

    from .hooks import RunContext, SaveHook
    from .references import ReferenceKey
    from .storage import KeyLike, LazyReference

log = logging.getLogger(__name__)

SAVER_STRATEGY: Final[str] = "concurrent_safe_batch"
INTERNAL_ATTRIBUTES: Final[tuple[str, ...]] = ("__feedback_edge_set_parent",)

OPTION_NAMES: Final[frozenset[str]] = frozenset(
    {
        "association",
        "assert_graph_integrity",
        "attributes_blacklist",
        "attributes_whitelist",
        "baseline_query",
        "batch_extra_attributes",
        "check_changed",
        "complete",
        "create_only",
        "custom_reconnect_block",
        "custom_save_block",
        "default_values",
        "dependency_attributes",
        "inventory_object_attributes",
        "manager_ref",
        "manager_ref_allowed_nil",
        "model_class",
        "model_probe",
        "name",
        "parent",
        "retention_strategy",
        "secondary_refs",
        "strategy",
        "update_only",
        "use_ar_object",
    }
)


class BaselineSource(StrEnum):
    """Where the set of stored records compared against the inventory comes from."""

    ASSOCIATION = "association"
    OVERRIDE = "override"
    NONE = "none"


def _flag(value: bool | None, default: bool) -> bool:
    return default if value is None else value


class InventoryCollection:
    """Configuration and built objects of one reconciled entity set.

    Identity
        ``name`` is unique within a persister. Without an explicit name the
        ``association`` is used, and without that the tableized model class
        name (``OrchestrationStack`` becomes ``orchestration_stacks``).

    Baseline
        The stored records the inventory is compared against come from exactly
        one place: ``baseline_query`` when given, otherwise
        ``parent.<association>``, otherwise nowhere.

    Flags
        ``complete`` (default on) means the full dataset was sent, so records
        missing from it may be deleted. ``update_only`` limits saving to
        updates, ``create_only`` to creates. ``check_changed`` (default on)
        skips updates of unchanged records. ``use_ar_object`` asks the saver to
        instantiate model objects instead of writing raw rows.
    """

    def __init__(
        self,
        *,
        model_class: type | None = None,
        association: str | None = None,
        name: str | None = None,
        parent: object | None = None,
        strategy: StrategyToken = None,
        retention_strategy: RetentionToken = None,
        manager_ref: Iterable[str] | None = None,
        manager_ref_allowed_nil: Iterable[str] | None = None,
        secondary_refs: Mapping[str, Iterable[str]] | None = None,
        dependency_attributes: Mapping[str, Iterable[InventoryCollection]] | None = None,
        complete: bool | None = None,
        create_only: bool | None = None,
        check_changed: bool | None = None,
        update_only: bool | None = None,
        use_ar_object: bool | None = None,
        assert_graph_integrity: bool | None = None,
        attributes_blacklist: Iterable[str] | None = None,
        attributes_whitelist: Iterable[str] | None = None,
        inventory_object_attributes: Iterable[str] | None = None,
        batch_extra_attributes: Iterable[str] | None = None,
        baseline_query: object | None = None,
        custom_save_block: SaveHook | None = None,
        custom_reconnect_block: SaveHook | None = None,
        default_values: Mapping[str, object] | None = None,
        model_probe: ModelProbe | None = None,
    ) -> None:
        self.model_class = model_class
        self.association = association
        self.name = self._derive_name(name, association, model_class)
        self.parent = parent
        self.baseline_query = baseline_query
        self.model_probe: ModelProbe = model_probe or AttributeModelProbe(model_class)

        self.complete = _flag(complete, default=True)
        self.create_only = _flag(create_only, default=False)
        self.check_changed = _flag(check_changed, default=True)
        self.update_only = _flag(update_only, default=False)
        self.use_ar_object = bool(use_ar_object)
        self.assert_graph_integrity = _flag(assert_graph_integrity, default=True)

        self._saved = False
        self._finalized = False
        self._save_in_progress = False
        self.saver_strategy = SAVER_STRATEGY
        self._strategy = Strategy.WRITE
        self._apply_strategy(strategy)
        self.retention_strategy: RetentionStrategy = resolve_retention(
            retention_strategy, self.model_probe.supports_archive
        )

        self._references = ReferenceRegistry.from_options(
            manager_ref, manager_ref_allowed_nil, secondary_refs
        )
        self._dependencies = DependencyLinkage.from_options(dependency_attributes)

        self.batch_extra_attributes = tuple(batch_extra_attributes or ())
        self.inventory_object_attributes = self._exposed_attributes(inventory_object_attributes)
        self.internal_attributes = INTERNAL_ATTRIBUTES
        self._attributes = AttributeFilter(
            base_attributes=self._implicit_whitelist, collection=self.name
        )
        if attributes_blacklist:
            self.blacklist_attributes(attributes_blacklist)
        if attributes_whitelist:
            self.whitelist_attributes(attributes_whitelist)

        self.custom_save_block = custom_save_block
        self.custom_reconnect_block = custom_reconnect_block
        self.default_values: dict[str, object] = dict(default_values or {})

        self._data_storage = DataStorage(references=self._references, collection=self.name)
        self._index_proxy = IndexProxy(self._data_storage)
        self._references_storage = ReferencesStorage(self._index_proxy)
        self.ledger = ChangeLedger()

        log.debug(
            "Configured inventory collection %r: strategy=%s, retention=%s, manager_ref=%s",
            self.name,
            self._strategy,
            self.retention_strategy,
            self._references.manager_ref,
        )

    @classmethod
    def from_options(cls, options: Mapping[str, object]) -> InventoryCollection:
        """Build a collection from a raw option mapping, rejecting unknown keys."""

        unknown = set(options) - OPTION_NAMES
        if unknown:
            raise InventoryCollectionError(
                f"Unknown inventory collection options: {', '.join(sorted(unknown))}"
            )
        return cls(**cast(dict[str, Any], dict(options)))

    @staticmethod
    def _derive_name(name: str | None, association: str | None, model_class: type | None) -> str:
        if name:
            return name
        if association:
            return association
        if model_class is not None:
            return tableize(model_class.__name__)
        raise InventoryCollectionError(
            "Inventory collection needs a name, an association or a model class"
        )

    def _exposed_attributes(self, names: Iterable[str] | None) -> tuple[str, ...] | None:
        if names is None:
            return None
        exposed = tuple(names)
        shadowed = sorted(RESERVED_ATTRIBUTES.intersection(exposed))
        if shadowed:
            raise InventoryCollectionError(
                f"Inventory collection {self.name!r} cannot expose attributes shadowed by "
                f"inventory objects: {', '.join(shadowed)}"
            )
        return exposed

    # Strategy -----------------------------------------------------------------

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @strategy.setter
    def strategy(self, token: StrategyToken) -> None:
        if self._save_in_progress:
            raise StrategyReassignmentError(collection=self.name, requested=token)
        previous = self._strategy
        self._apply_strategy(token)
        log.debug(
            "Inventory collection %r strategy changed from %s to %s",
            self.name,
            previous,
            self._strategy,
        )

    def _apply_strategy(self, token: StrategyToken) -> None:
        resolution = resolve_strategy(token, saved=self._saved)
        self._strategy = resolution.strategy
        self._finalized = resolution.finalized
        self._saved = resolution.saved

    @property
    def finalized(self) -> bool:
        """Whether the result set is complete and needs no further building."""

        return self._finalized

    @property
    def saved(self) -> bool:
        """Whether the collection is materialized and the write phase is skipped."""

        return self._saved

    @property
    def save_in_progress(self) -> bool:
        return self._save_in_progress

    def begin_save_pass(self) -> None:
        if self._save_in_progress:
            raise InventoryCollectionError(
                f"Save pass of inventory collection {self.name!r} is already running"
            )
        self._save_in_progress = True

    def finish_save_pass(self) -> None:
        self._save_in_progress = False
        self._saved = True

    @property
    def is_db_only(self) -> bool:
        return self._saved and self._strategy.is_db_only

    @property
    def delete_allowed(self) -> bool:
        return self.complete and not self.update_only

    @property
    def create_allowed(self) -> bool:
        return not self.update_only

    # Baseline -----------------------------------------------------------------

    @property
    def baseline_source(self) -> BaselineSource:
        if self.baseline_query is not None:
            return BaselineSource.OVERRIDE
        if self.parent is not None and self.association:
            return BaselineSource.ASSOCIATION
        return BaselineSource.NONE

    def baseline_scope(self) -> object | None:
        """Return the stored records this collection is compared against."""

        match self.baseline_source:
            case BaselineSource.OVERRIDE:
                return self.baseline_query
            case BaselineSource.ASSOCIATION:
                return getattr(self.parent, cast(str, self.association))
            case BaselineSource.NONE:
                return None

    # References ---------------------------------------------------------------

    @property
    def manager_ref(self) -> tuple[str, ...]:
        return self._references.manager_ref

    @property
    def manager_ref_allowed_nil(self) -> tuple[str, ...]:
        return self._references.allowed_nil

    @property
    def secondary_refs(self) -> Mapping[str, tuple[str, ...]]:
        return MappingProxyType(self._references.secondary_refs)

    @property
    def reference_registry(self) -> ReferenceRegistry:
        return self._references

    # Attributes ---------------------------------------------------------------

    @property
    def attributes_blacklist(self) -> frozenset[str]:
        return frozenset(self._attributes.blacklisted)

    @property
    def attributes_whitelist(self) -> frozenset[str]:
        return frozenset(self._attributes.whitelisted)

    def blacklist_attributes(self, keys: Iterable[str]) -> frozenset[str]:
        return frozenset(self._attributes.blacklist(keys))

    def whitelist_attributes(self, keys: Iterable[str]) -> frozenset[str]:
        return frozenset(self._attributes.whitelist(keys))

    def _implicit_whitelist(self) -> frozenset[str]:
        return frozenset(self._references.manager_ref) | self.model_probe.required_attributes()

    # Dependencies -------------------------------------------------------------

    @property
    def dependency_attributes(self) -> Mapping[str, tuple[InventoryCollection, ...]]:
        return MappingProxyType(self._dependencies.dependency_attributes)

    @property
    def dependees(self) -> frozenset[InventoryCollection]:
        return self._dependencies.dependees

    @property
    def transitive_dependency_attributes(self) -> set[str]:
        return self._dependencies.transitive_dependency_attributes

    def dependencies(self) -> tuple[InventoryCollection, ...]:
        return self._dependencies.dependency_collections()

    # Built objects ------------------------------------------------------------

    @property
    def data_storage(self) -> DataStorage:
        return self._data_storage

    @property
    def index_proxy(self) -> IndexProxy:
        return self._index_proxy

    @property
    def references_storage(self) -> ReferencesStorage:
        return self._references_storage

    def build(self, data: Mapping[str, object]) -> InventoryObject:
        """Build an object from ``data`` merged over ``default_values`` and store it."""

        merged = {**self.default_values, **data}
        manager_uuid = self._references.build_key(merged, collection=self.name)
        return self._data_storage.add(InventoryObject(self, merged, manager_uuid))

    def find(self, key: KeyLike, *, ref: str = PRIMARY_REF) -> InventoryObject | None:
        return self._data_storage.find(key, ref=ref)

    def lazy_find(self, key: KeyLike, *, ref: str = PRIMARY_REF) -> LazyReference:
        return self._references_storage.lazy_find(key, ref=ref)

    def references(self, ref: str = PRIMARY_REF) -> tuple[ReferenceKey, ...]:
        return self._references_storage.references(ref)

    def __iter__(self) -> Iterator[InventoryObject]:
        return iter(self._data_storage)

    def __len__(self) -> int:
        return len(self._data_storage)

    # Hooks --------------------------------------------------------------------

    def run_custom_save(self, context: RunContext) -> None:
        self._run_hook("custom_save_block", self.custom_save_block, context)

    def run_custom_reconnect(self, context: RunContext) -> None:
        self._run_hook("custom_reconnect_block", self.custom_reconnect_block, context)

    def _run_hook(self, label: str, hook: SaveHook | None, context: RunContext) -> None:
        if hook is None:
            raise InventoryCollectionError(f"Inventory collection {self.name!r} has no {label}")
        hook(context, CollectionHookView(self))

    def __repr__(self) -> str:
        model = self.model_class.__name__ if self.model_class is not None else None
        return (
            f"InventoryCollection(name={self.name!r}, model_class={model}, "
            f"strategy={self._strategy})"
        )
