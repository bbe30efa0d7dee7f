"""Configuration of inventory collections and their strategy resolution."""

from __future__ import annotations

from .attributes import AttributeFilter
from .collection import OPTION_NAMES, SAVER_STRATEGY, BaselineSource, InventoryCollection
from .dependencies import DependencyLinkage
from .errors import (
    DuplicateCollectionError,
    GraphIntegrityError,
    InventoryCollectionError,
    MissingReferenceKeyError,
    StrategyReassignmentError,
    UnsupportedRetentionStrategyError,
    UnsupportedStrategyError,
)
from .hooks import CollectionHookView, RunContext, SaveHook
from .inventory_object import InventoryObject
from .ledger import ChangeLedger, LedgerCounts
from .references import DEFAULT_MANAGER_REF, PRIMARY_REF, ReferenceKey, ReferenceRegistry
from .retention import RETENTION_TOKENS, RetentionStrategy, resolve_retention
from .storage import DataStorage, IndexProxy, LazyReference, ReferencesStorage
from .strategy import (
    STRATEGY_TOKENS,
    Strategy,
    StrategyResolution,
    parse_strategy,
    resolve_strategy,
)

__all__ = [
    "DEFAULT_MANAGER_REF",
    "OPTION_NAMES",
    "PRIMARY_REF",
    "RETENTION_TOKENS",
    "SAVER_STRATEGY",
    "STRATEGY_TOKENS",
    "AttributeFilter",
    "BaselineSource",
    "ChangeLedger",
    "CollectionHookView",
    "DataStorage",
    "DependencyLinkage",
    "DuplicateCollectionError",
    "GraphIntegrityError",
    "IndexProxy",
    "InventoryCollection",
    "InventoryCollectionError",
    "InventoryObject",
    "LazyReference",
    "LedgerCounts",
    "MissingReferenceKeyError",
    "ReferenceKey",
    "ReferenceRegistry",
    "ReferencesStorage",
    "RetentionStrategy",
    "RunContext",
    "SaveHook",
    "StrategyReassignmentError",
    "StrategyResolution",
    "UnsupportedRetentionStrategyError",
    "UnsupportedStrategyError",
    "parse_strategy",
    "resolve_retention",
    "resolve_strategy",
]
