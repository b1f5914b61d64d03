"""Transaction domain service."""

import logging
from typing import Optional
from datetime import date
from decimal import Decimal

from ledgerly.database.base import Database
from ledgerly.domain.entities import Transaction as TransactionEntity, UNCATEGORIZED
from ledgerly.domain.errors import (
    ConflictError,
    NotFoundError,
    UnknownCategoryError,
    ValidationError,
    duplicate_transaction_id,
    invalid_transaction_id,
    transaction_not_found,
)
from ledgerly.ingest.records import SOURCE_MANUAL
from ledgerly.utils.normalize import normalize_name
from ledgerly.utils.transaction_id import (
    format_sequence_id,
    is_child_transaction_id,
    is_valid_transaction_id,
)

logger = logging.getLogger(__name__)


def _validate_id(transaction_id: str) -> None:
    if not is_valid_transaction_id(transaction_id):
        raise ValidationError(invalid_transaction_id(transaction_id))


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _category_id(self, category_name: str) -> int:
        category = self.db.get_category_by_name(normalize_name(category_name))
        if category is None:
            raise UnknownCategoryError(category_name)
        return category.id

    def _require(self, transaction_id: str) -> TransactionEntity:
        _validate_id(transaction_id)
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def next_transaction_id(self) -> str:
        """Return the next free top-level transaction ID."""
        current = self.db.get_max_transaction_id()
        return format_sequence_id(int(current) + 1 if current else 1)

    def create_transaction(
        self,
        date: date,
        amount: Decimal,
        transaction_id: Optional[str] = None,
        description: Optional[str] = None,
        category_name: Optional[str] = None,
        notes: Optional[str] = None,
        tags: tuple[str, ...] = (),
        source: str = SOURCE_MANUAL,
        quantity: int = 1,
        account_name: Optional[str] = None,
        link: Optional[str] = None,
        location: Optional[str] = None,
    ) -> str:
        """Insert a manual transaction.

        Args:
            date: Transaction date
            amount: Signed amount (negative for expenses)
            transaction_id: Optional 5-digit ID; the next free ID if omitted
            description: Optional description
            category_name: Category name; 'uncategorized' if omitted
            notes: Optional notes
            tags: Tag names to attach; missing tags are created
            source: Source label, 'manual' by default
            quantity: Positive item count
            account_name: Optional account name
            link: Optional link
            location: Optional location

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the ID is malformed, a split child ID, or the quantity isn't positive
            ConflictError: If a transaction with that ID already exists
            UnknownCategoryError: If the category doesn't exist
        """
        if transaction_id is None:
            transaction_id = self.next_transaction_id()
        _validate_id(transaction_id)
        if is_child_transaction_id(transaction_id):
            raise ValidationError(
                f"Transaction ID '{transaction_id}' is a split child ID; only splits create children"
            )
        if quantity < 1:
            raise ValidationError(f"Quantity must be a positive integer, got {quantity}")
        if self.db.transaction_exists(transaction_id):
            raise ConflictError(duplicate_transaction_id(transaction_id))

        category_id = self._category_id(category_name or UNCATEGORIZED)

        with self.db.transaction():
            self.db.insert_transaction(
                transaction_id=transaction_id,
                date=date,
                amount=amount,
                category_id=category_id,
                description=description,
                notes=notes,
                source=source,
                quantity=quantity,
                account_name=account_name,
                link=link,
                location=location,
            )
            for tag in dict.fromkeys(normalize_name(t) for t in tags):
                if tag:
                    self.db.add_transaction_tag(transaction_id, self.db.insert_or_fetch_tag(tag))

        logger.info("Created transaction %s", transaction_id)
        return transaction_id

    def get_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found

        Raises:
            ValidationError: If the ID is malformed
        """
        _validate_id(transaction_id)
        return self.db.get_transaction(transaction_id)

    def update_category(self, transaction_id: str, category_name: str) -> None:
        """Update transaction category.

        Raises:
            NotFoundError: If the transaction or category doesn't exist
        """
        self._require(transaction_id)
        self.db.update_transaction(transaction_id, category_id=self._category_id(category_name))

    def update_transaction(
        self,
        transaction_id: str,
        date: Optional[date] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category_name: Optional[str] = None,
        notes: Optional[str] = None,
        quantity: Optional[int] = None,
        account_name: Optional[str] = None,
        link: Optional[str] = None,
        location: Optional[str] = None,
    ) -> None:
        """Update transaction fields.

        Only fields that are not None are changed.

        Raises:
            ValidationError: If the ID is malformed, nothing is given to update,
                or the quantity isn't positive
            NotFoundError: If the transaction or category doesn't exist
        """
        self._require(transaction_id)

        fields = {
            "date": date,
            "amount": amount,
            "description": description,
            "notes": notes,
            "quantity": quantity,
            "account_name": account_name,
            "link": link,
            "location": location,
        }
        updates = {name: value for name, value in fields.items() if value is not None}
        if quantity is not None and quantity < 1:
            raise ValidationError(f"Quantity must be a positive integer, got {quantity}")
        if category_name is not None:
            updates["category_id"] = self._category_id(category_name)
        if not updates:
            raise ValidationError("No fields to update")

        self.db.update_transaction(transaction_id, **updates)

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction, along with any split children.

        Raises:
            ValidationError: If the ID is malformed
            NotFoundError: If the transaction doesn't exist
        """
        self._require(transaction_id)
        self.db.delete_transaction(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        categories: Optional[list[str]] = None,
        tags: Optional[list[str]] = None,
        match_all_tags: bool = False,
        min_amount: Optional[Decimal] = None,
        max_amount: Optional[Decimal] = None,
        limit: Optional[int] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters, most recent first.

        Category and tag names are normalized before matching.

        Raises:
            ValidationError: If a range is inverted
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError("Start date must not be after end date")
        if min_amount is not None and max_amount is not None and min_amount > max_amount:
            raise ValidationError("Minimum amount must not exceed maximum amount")

        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            category_names=[normalize_name(c) for c in categories] if categories else None,
            tag_names=[normalize_name(t) for t in tags] if tags else None,
            match_all_tags=match_all_tags,
            min_amount=min_amount,
            max_amount=max_amount,
            limit=limit,
        )

    def list_by_category(self, category_name: str) -> list[TransactionEntity]:
        """List a category's transactions.

        Raises:
            UnknownCategoryError: If the category doesn't exist
        """
        self._category_id(category_name)
        return self.db.list_transactions(category_names=[normalize_name(category_name)])

    def list_recent(self, limit: int = 20) -> list[TransactionEntity]:
        """List the most recent transactions."""
        return self.db.list_transactions(limit=limit)
