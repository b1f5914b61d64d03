"""Category/group reconciliation between Mint and EveryDollar.

Mint has categories but no groups; EveryDollar files every budget item under
a group. Categories present in both taxonomies borrow their EveryDollar group.
Anything else falls back to ``ungrouped`` when the Mint rows are adapted.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from pathlib import Path

from ledgerly.domain.errors import IngestError
from ledgerly.ingest.adapters import everydollar
from ledgerly.ingest.csv_files import PathLike, read_csv_rows
from ledgerly.utils.normalize import normalize_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryGroup:
    """A category found in both taxonomies, with its EveryDollar group."""

    category: str
    group: str


def collect_mint_categories(rows: Iterable[Mapping[str, str]]) -> list[str]:
    """Distinct normalized Mint categories, in order of first appearance."""
    categories: dict[str, None] = {}
    for row in rows:
        name = normalize_name(row.get("Category"))
        if name:
            categories.setdefault(name, None)
    return list(categories)


def collect_everydollar_groups(rows: Iterable[Mapping[str, str]]) -> dict[str, str]:
    """Map normalized EveryDollar item -> normalized group.

    Rows need both an item and a group; if an item shows up under several
    groups the last one read wins.
    """
    groups: dict[str, str] = {}
    for row in rows:
        item = normalize_name(row.get("item"))
        group = normalize_name(row.get("group"))
        if item and group:
            groups[item] = group
    return groups


def find_overlapping_categories(
    mint_rows: Iterable[Mapping[str, str]],
    everydollar_rows: Iterable[Mapping[str, str]],
) -> list[CategoryGroup]:
    """Categories present in both exports, paired with their EveryDollar group."""
    mint_categories = collect_mint_categories(mint_rows)
    everydollar_groups = collect_everydollar_groups(everydollar_rows)

    overlaps = [
        CategoryGroup(category=name, group=everydollar_groups[name])
        for name in mint_categories
        if name in everydollar_groups
    ]
    logger.info(
        "Found %d overlapping categories (%d Mint, %d EveryDollar)",
        len(overlaps),
        len(mint_categories),
        len(everydollar_groups),
    )
    return overlaps


def category_group_map(overlaps: Iterable[CategoryGroup]) -> dict[str, str]:
    """The read-only ``category -> group`` lookup consumed by the Mint adapter."""
    return {item.category: item.group for item in overlaps}


def reconcile_sources(mint_path: PathLike, everydollar_dir: PathLike) -> list[CategoryGroup]:
    """Read both exports from disk and find their overlapping categories."""
    mint_rows = read_csv_rows(mint_path)
    everydollar_rows = everydollar.read_rows(everydollar_dir)
    return find_overlapping_categories(mint_rows, everydollar_rows)


def write_overlaps(path: PathLike, overlaps: Iterable[CategoryGroup]) -> None:
    """Save overlaps as a JSON list of ``{"category", "group"}`` objects."""
    payload = [asdict(item) for item in overlaps]
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except OSError as e:
        raise IngestError(f"Could not write overlapping categories to {path}: {e}") from e
    logger.info("Wrote %d overlapping categories to %s", len(payload), path)


def read_overlaps(path: PathLike) -> list[CategoryGroup]:
    """Load overlaps saved by :func:`write_overlaps`."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise IngestError(f"Overlapping categories file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise IngestError(f"Could not read overlapping categories from {path}: {e}") from e

    if not isinstance(payload, list):
        raise IngestError(f"Overlapping categories file {path} must contain a JSON list")
    overlaps = []
    for item in payload:
        if not isinstance(item, dict):
            raise IngestError(f"Malformed overlap entry in {path}: {item!r}")
        category = normalize_name(item.get("category"))
        group = normalize_name(item.get("group"))
        if category and group:
            overlaps.append(CategoryGroup(category=category, group=group))
    return overlaps
