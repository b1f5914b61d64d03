"""Adapter for EveryDollar transaction exports.

EveryDollar exports one file per period, so a whole directory is read.
Headers are normalized (lowercase, spaces to underscores); keys used:
date, merchant, amount, item, group
"""

from collections.abc import Iterable, Iterator, Mapping

from ledgerly.ingest.csv_files import PathLike, read_csv_directory
from ledgerly.ingest.records import IntermediateRecord, SOURCE_EVERYDOLLAR
from ledgerly.utils.date_parser import parse_source_date
from ledgerly.utils.normalize import normalize_amount, normalize_name


def to_records(rows: Iterable[Mapping[str, str]]) -> Iterator[IntermediateRecord]:
    """Convert header-normalized EveryDollar rows to intermediate records.

    The merchant becomes the description, ``item`` the category and ``group``
    the group. EveryDollar has no tags, notes, account or original description.
    """
    for row in rows:
        yield IntermediateRecord(
            date=parse_source_date(row.get("date")),
            description=normalize_name(row.get("merchant")),
            amount=normalize_amount(row.get("amount")),
            category=normalize_name(row.get("item")),
            group_name=normalize_name(row.get("group")),
            source=SOURCE_EVERYDOLLAR,
        )


def read_rows(directory: PathLike) -> list[dict[str, str]]:
    """Read every EveryDollar export in a directory with normalized headers."""
    return read_csv_directory(directory, normalize_headers=True)


def read_directory(directory: PathLike) -> list[IntermediateRecord]:
    """Read every EveryDollar export in a directory into intermediate records."""
    return list(to_records(read_rows(directory)))
