"""Loading unified records into the store.

The load runs in five phases, each in its own database transaction and each
returning the name -> id map the next phase needs:

    groups -> categories -> tags -> transactions -> transaction tags

Every phase is insert-or-fetch, so re-running a load (or resuming one that
failed half way) never duplicates rows. Rows that reference something that
cannot be resolved are logged and skipped; only structural failures abort a
phase.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ledgerly.database.base import Database
from ledgerly.domain.entities import UNGROUPED
from ledgerly.domain.errors import IngestError, IntegrityError
from ledgerly.ingest.records import IntermediateRecord
from ledgerly.utils.normalize import normalize_name, normalize_quantity
from ledgerly.utils.transaction_id import is_valid_transaction_id

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Counts and skip reasons from one load."""

    groups: int = 0
    categories: int = 0
    tags: int = 0
    inserted: int = 0
    existing: int = 0
    skipped: int = 0
    tag_links: int = 0
    errors: list[str] = field(default_factory=list)

    def skip(self, error: IntegrityError) -> None:
        """Record and log a row that could not be loaded."""
        self.skipped += 1
        self.errors.append(str(error))
        logger.warning("Skipping: %s", error)


def _distinct(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(v for v in values if v))


class LoaderService:
    """Service for loading unified records into the store."""

    def __init__(self, db: Database):
        """Initialize loader service.

        Args:
            db: Database instance
        """
        self.db = db

    def load(self, records: Iterable[IntermediateRecord]) -> LoadResult:
        """Load unified records, phase by phase.

        Args:
            records: Unified records (ids already assigned)

        Returns:
            LoadResult with per-entity counts and the reasons rows were skipped

        Raises:
            IngestError: If the 'ungrouped' group is missing from the store
            TransientStoreError: If the store fails mid-phase (that phase is rolled back)
        """
        records = list(records)
        result = LoadResult()

        group_ids = self.load_groups(records)
        result.groups = len(group_ids)

        category_ids = self.load_categories(records, group_ids, result)
        result.categories = len(category_ids)

        tag_ids = self.load_tags(records)
        result.tags = len(tag_ids)

        loaded_ids = self.load_transactions(records, category_ids, group_ids, result)
        result.tag_links = self.load_transaction_tags(records, loaded_ids, tag_ids)

        logger.info(
            "Load complete: %d inserted, %d already present, %d skipped, %d tag links",
            result.inserted,
            result.existing,
            result.skipped,
            result.tag_links,
        )
        return result

    def load_groups(self, records: list[IntermediateRecord]) -> dict[str, int]:
        """Insert-or-fetch every group named by the records.

        The returned map always contains 'ungrouped'.
        """
        group_ids: dict[str, int] = {}
        with self.db.transaction():
            for name in _distinct(normalize_name(r.group_name) for r in records):
                group_ids[name] = self.db.insert_or_fetch_group(name)

            if UNGROUPED not in group_ids:
                ungrouped = self.db.get_group_by_name(UNGROUPED)
                if ungrouped is None:
                    raise IngestError(
                        f"Group '{UNGROUPED}' is missing from the database; initialize the schema first"
                    )
                group_ids[UNGROUPED] = ungrouped.id

        logger.info("Loaded %d groups", len(group_ids))
        return group_ids

    def load_categories(
        self,
        records: list[IntermediateRecord],
        group_ids: dict[str, int],
        result: LoadResult,
    ) -> dict[str, int]:
        """Insert-or-fetch every category, in the group of its first record."""
        first_group: dict[str, str] = {}
        for record in records:
            category = normalize_name(record.category)
            if category:
                first_group.setdefault(category, normalize_name(record.group_name))

        category_ids: dict[str, int] = {}
        with self.db.transaction():
            for category, group in first_group.items():
                group_id = group_ids.get(group)
                if group_id is None:
                    result.skip(
                        IntegrityError(f"category '{category}': group '{group}' not found")
                    )
                    continue
                category_ids[category] = self.db.insert_or_fetch_category(category, group_id)

        logger.info("Loaded %d categories", len(category_ids))
        return category_ids

    def load_tags(self, records: list[IntermediateRecord]) -> dict[str, int]:
        """Insert-or-fetch every tag named by the records."""
        tag_ids: dict[str, int] = {}
        with self.db.transaction():
            for name in _distinct(normalize_name(t) for r in records for t in r.tags):
                tag_ids[name] = self.db.insert_or_fetch_tag(name)

        logger.info("Loaded %d tags", len(tag_ids))
        return tag_ids

    def load_transactions(
        self,
        records: list[IntermediateRecord],
        category_ids: dict[str, int],
        group_ids: dict[str, int],
        result: LoadResult,
    ) -> set[str]:
        """Insert transactions, leaving already-loaded ids untouched.

        Returns:
            IDs of the records now present in the store, whether inserted by
            this call or by an earlier load
        """
        loaded: set[str] = set()

        # Parents before split children
        ordered = sorted(records, key=lambda r: r.parent_id is not None)

        with self.db.transaction():
            for record in ordered:
                row = record.id or "<no id>"
                if not is_valid_transaction_id(record.id):
                    result.skip(IntegrityError(f"transaction {row}: invalid or missing id"))
                    continue
                if record.date is None:
                    result.skip(IntegrityError(f"transaction {row}: missing date"))
                    continue

                group = normalize_name(record.group_name)
                category = normalize_name(record.category)
                if group not in group_ids:
                    result.skip(IntegrityError(f"transaction {row}: group '{group}' not found"))
                    continue
                if category not in category_ids:
                    result.skip(
                        IntegrityError(f"transaction {row}: category '{category}' not found")
                    )
                    continue

                if record.parent_id is not None and record.parent_id not in loaded:
                    if not self.db.transaction_exists(record.parent_id):
                        result.skip(
                            IntegrityError(
                                f"transaction {row}: parent '{record.parent_id}' not found"
                            )
                        )
                        continue

                inserted = self.db.insert_transaction(
                    transaction_id=record.id,
                    parent_id=record.parent_id,
                    date=record.date,
                    description=record.description,
                    original_description=record.original_description,
                    amount=record.amount,
                    category_id=category_ids[category],
                    is_split=record.is_split,
                    account_name=record.account_name,
                    notes=record.notes,
                    source=record.source,
                    quantity=normalize_quantity(record.quantity, default=1),
                    link=record.link,
                    location=record.location,
                    ignore_existing=True,
                )
                if inserted:
                    result.inserted += 1
                else:
                    result.existing += 1
                loaded.add(record.id)

        logger.info("Loaded %d transactions (%d already present)", result.inserted, result.existing)
        return loaded

    def load_transaction_tags(
        self,
        records: list[IntermediateRecord],
        loaded_ids: set[str],
        tag_ids: dict[str, int],
    ) -> int:
        """Link loaded transactions to their tags. Returns new links created."""
        created = 0
        with self.db.transaction():
            for record in records:
                if record.id not in loaded_ids:
                    continue
                for tag in _distinct(normalize_name(t) for t in record.tags):
                    tag_id = tag_ids.get(tag)
                    if tag_id is None:
                        logger.warning("Transaction %s: tag '%s' not found, link skipped", record.id, tag)
                        continue
                    if self.db.add_transaction_tag(record.id, tag_id):
                        created += 1

        logger.info("Created %d transaction tag links", created)
        return created
