"""Tag domain service."""

import logging
from collections.abc import Iterable

from ledgerly.database.base import Database
from ledgerly.domain.entities import Tag, Transaction as TransactionEntity
from ledgerly.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    invalid_transaction_id,
    transaction_not_found,
)
from ledgerly.utils.normalize import normalize_name
from ledgerly.utils.transaction_id import is_valid_transaction_id

logger = logging.getLogger(__name__)


def _tag_names(tags: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(name for name in (normalize_name(t) for t in tags) if name))


class TagService:
    """Service for managing tags and transaction tagging."""

    def __init__(self, db: Database):
        """Initialize tag service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_transaction(self, transaction_id: str) -> TransactionEntity:
        if not is_valid_transaction_id(transaction_id):
            raise ValidationError(invalid_transaction_id(transaction_id))
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def list_tags(self) -> list[Tag]:
        """List all tags ordered by name."""
        return self.db.list_tags()

    def create_tag(self, name: str) -> int:
        """Create a tag.

        Raises:
            ValidationError: If the name is empty
            ConflictError: If the tag already exists
        """
        normalized = normalize_name(name)
        if not normalized:
            raise ValidationError("Tag name must not be empty")
        if self.db.get_tag_by_name(normalized) is not None:
            raise ConflictError(f"Tag '{normalized}' already exists")
        return self.db.insert_or_fetch_tag(normalized)

    def add_tags(self, transaction_id: str, tags: Iterable[str]) -> int:
        """Attach tags to a transaction, creating missing tags.

        Returns:
            Number of new links
        """
        self._require_transaction(transaction_id)
        added = 0
        with self.db.transaction():
            for name in _tag_names(tags):
                if self.db.add_transaction_tag(transaction_id, self.db.insert_or_fetch_tag(name)):
                    added += 1
        return added

    def remove_tags(self, transaction_id: str, tags: Iterable[str]) -> None:
        """Detach tags from a transaction. Unknown tags are ignored."""
        self._require_transaction(transaction_id)
        with self.db.transaction():
            for name in _tag_names(tags):
                tag = self.db.get_tag_by_name(name)
                if tag is not None:
                    self.db.remove_transaction_tag(transaction_id, tag.id)

    def set_transaction_tags(self, transaction_id: str, tags: Iterable[str]) -> tuple[str, ...]:
        """Replace a transaction's tags with exactly ``tags``.

        Args:
            transaction_id: Transaction ID
            tags: Desired tag names; an empty iterable clears all tags

        Returns:
            The transaction's tags afterwards, sorted

        Raises:
            ValidationError: If the ID is malformed
            NotFoundError: If the transaction doesn't exist
        """
        txn = self._require_transaction(transaction_id)
        desired = _tag_names(tags)
        current = set(txn.tags)

        with self.db.transaction():
            for name in current - set(desired):
                tag = self.db.get_tag_by_name(name)
                if tag is not None:
                    self.db.remove_transaction_tag(transaction_id, tag.id)
            for name in desired:
                if name not in current:
                    self.db.add_transaction_tag(transaction_id, self.db.insert_or_fetch_tag(name))

        logger.info("Tags for transaction %s set to %s", transaction_id, ", ".join(sorted(desired)) or "none")
        return tuple(sorted(desired))

    def list_transactions_by_tags(
        self, tags: Iterable[str], match_all: bool = False
    ) -> list[TransactionEntity]:
        """List transactions carrying any (or, with ``match_all``, every) tag."""
        names = _tag_names(tags)
        if not names:
            raise ValidationError("At least one tag is required")
        return self.db.list_transactions(tag_names=names, match_all_tags=match_all)
