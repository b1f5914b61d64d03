"""Adapter for Mint transaction exports.

CSV header (keys used):
Date, Description, Original Description, Amount, Transaction Type, Category,
Account Name, Labels, Notes
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Optional

from ledgerly.ingest.csv_files import PathLike, read_csv_rows
from ledgerly.ingest.records import IntermediateRecord, SOURCE_MINT
from ledgerly.domain.entities import UNGROUPED
from ledgerly.utils.date_parser import parse_source_date
from ledgerly.utils.normalize import normalize_amount, normalize_name


def _text(value: Optional[str]) -> Optional[str]:
    if value is None or value.strip() == "":
        return None
    return value


def to_records(
    rows: Iterable[Mapping[str, str]], category_groups: Mapping[str, str]
) -> Iterator[IntermediateRecord]:
    """Convert Mint CSV rows to intermediate records.

    Mapping rules:
    - ``amount``: ``Amount``, negated unless ``Transaction Type`` is ``credit``
    - ``description`` / ``category``: normalized ``Description`` / ``Category``
    - ``groupName``: looked up in ``category_groups``, else ``ungrouped``
    - ``tags``: the normalized ``Labels`` cell as a single tag, or none
    """
    for row in rows:
        amount = normalize_amount(row.get("Amount"))
        if (row.get("Transaction Type") or "").strip().lower() != "credit":
            amount = -amount

        category = normalize_name(row.get("Category"))
        label = normalize_name(row.get("Labels"))

        yield IntermediateRecord(
            date=parse_source_date(row.get("Date")),
            description=normalize_name(row.get("Description")),
            original_description=_text(row.get("Original Description")),
            amount=amount,
            category=category,
            group_name=category_groups.get(category, UNGROUPED),
            account_name=_text(row.get("Account Name")),
            notes=_text(row.get("Notes")),
            tags=[label] if label else [],
            source=SOURCE_MINT,
        )


def read_file(path: PathLike, category_groups: Mapping[str, str]) -> list[IntermediateRecord]:
    """Read a Mint export file into intermediate records."""
    return list(to_records(read_csv_rows(path), category_groups))
