"""Merge adapter output into one numbered, unified record set."""

import csv
import logging
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path
from typing import Optional

from ledgerly.domain.errors import IngestError
from ledgerly.ingest.adapters import everydollar, mint
from ledgerly.ingest.csv_files import PathLike, read_csv_rows
from ledgerly.ingest.records import IntermediateRecord, UNIFIED_HEADERS
from ledgerly.ingest.reconciler import CategoryGroup, category_group_map
from ledgerly.utils.transaction_id import format_sequence_id

logger = logging.getLogger(__name__)

# Ids are five digits wide
MAX_RECORDS = 99999


def drop_reason(record: IntermediateRecord) -> Optional[str]:
    """Why a record cannot be unified, or None if it is valid."""
    if record.is_blank():
        return "blank row"
    if not record.category:
        return "missing category"
    if not record.group_name:
        return "missing groupName"
    if record.date is None:
        return "missing or unparseable date"
    return None


def unify(records: Iterable[IntermediateRecord]) -> list[IntermediateRecord]:
    """Filter, order and number a set of intermediate records.

    Valid records are sorted most recent first and numbered so the newest
    gets the highest id and the oldest gets ``00001``. Records sharing a date
    keep their input order. Input records are not modified.
    """
    kept = []
    dropped = 0
    for record in records:
        reason = drop_reason(record)
        if reason is not None:
            dropped += 1
            logger.debug("Dropping %s row (%s): %s", record.source or "unknown", reason, record)
            continue
        kept.append(record)

    if len(kept) > MAX_RECORDS:
        raise IngestError(f"Cannot number {len(kept)} records with 5-digit ids")

    kept.sort(key=lambda r: r.date, reverse=True)
    total = len(kept)
    unified = [replace(r, id=format_sequence_id(total - index)) for index, r in enumerate(kept)]

    logger.info("Unified %d records (%d dropped)", total, dropped)
    return unified


def unify_sources(
    mint_path: PathLike, everydollar_dir: PathLike, overlaps: Iterable[CategoryGroup]
) -> list[IntermediateRecord]:
    """Adapt both exports and unify them.

    Both sources are read completely before anything is unified; an
    unreadable file raises IngestError and produces no records.
    """
    category_groups = category_group_map(overlaps)
    mint_records = mint.read_file(mint_path, category_groups)
    everydollar_records = everydollar.read_directory(everydollar_dir)
    return unify([*mint_records, *everydollar_records])


def write_unified_csv(path: PathLike, records: Iterable[IntermediateRecord]) -> int:
    """Write records to the unified interchange CSV. Returns rows written."""
    rows = [record.to_row() for record in records]
    csv_path = Path(path)
    # Replaces the target only after a complete write
    tmp_path = csv_path.with_name(csv_path.name + ".tmp")
    try:
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=UNIFIED_HEADERS)
            writer.writeheader()
            writer.writerows(rows)
        tmp_path.replace(csv_path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise IngestError(f"Could not write unified CSV {csv_path}: {e}") from e
    logger.info("Unified CSV written to %s (%d rows)", csv_path, len(rows))
    return len(rows)


def read_unified_csv(path: PathLike) -> list[IntermediateRecord]:
    """Read a unified interchange CSV back into records."""
    rows = read_csv_rows(path)
    if rows:
        missing = [h for h in UNIFIED_HEADERS if h not in rows[0]]
        if missing:
            raise IngestError(f"Unified CSV {path} is missing columns: {', '.join(missing)}")
    return [IntermediateRecord.from_row(row) for row in rows]
