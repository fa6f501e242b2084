"""Reconciliation of the source catalog into the destination store."""

from __future__ import annotations

from .categories import CategoryReconciler
from .dictionaries import DictionaryResolver
from .engine import CatalogSynchronizer, SyncScope
from .index import ExternalIdIndex
from .products import ProductReconciler
from .relations import RelationRefs
from .summary import KindCounts, SyncSummary
from .variants import VariantAndStockReconciler

__all__ = [
    "CatalogSynchronizer",
    "CategoryReconciler",
    "DictionaryResolver",
    "ExternalIdIndex",
    "KindCounts",
    "ProductReconciler",
    "RelationRefs",
    "SyncScope",
    "SyncSummary",
    "VariantAndStockReconciler",
]
