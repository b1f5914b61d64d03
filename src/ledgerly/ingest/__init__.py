"""CSV ingestion: source adapters, category reconciliation and unification."""

from ledgerly.ingest.records import IntermediateRecord, UNIFIED_HEADERS
from ledgerly.ingest.reconciler import (
    CategoryGroup,
    category_group_map,
    find_overlapping_categories,
    reconcile_sources,
)
from ledgerly.ingest.unifier import unify, unify_sources, read_unified_csv, write_unified_csv

__all__ = [
    "IntermediateRecord",
    "UNIFIED_HEADERS",
    "CategoryGroup",
    "category_group_map",
    "find_overlapping_categories",
    "reconcile_sources",
    "unify",
    "unify_sources",
    "read_unified_csv",
    "write_unified_csv",
]
