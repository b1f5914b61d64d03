"""Splitting a transaction into category-specific children.

A split redistributes the parent's amount over child transactions
``<parent>-1 .. <parent>-n``. The children must add up to the parent amount
exactly, and the whole split (children plus parent update) is applied in a
single database transaction or not at all.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ledgerly.database.base import Database
from ledgerly.domain.entities import Transaction as TransactionEntity, UNCATEGORIZED
from ledgerly.domain.errors import (
    AlreadySplitError,
    AmountMismatchError,
    NotFoundError,
    NotSplitError,
    UnknownCategoryError,
    ValidationError,
    already_split,
    invalid_transaction_id,
    not_split,
    transaction_not_found,
)
from ledgerly.utils.normalize import normalize_amount, normalize_name
from ledgerly.utils.transaction_id import child_transaction_id, is_valid_transaction_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplitSpec:
    """One child of a split.

    ``category`` is a category name; when omitted the child keeps the
    parent's category. ``description`` overrides the parent's.
    """

    amount: Decimal
    category: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class SplitResult:
    """The parent after a split and the children created."""

    parent: TransactionEntity
    children: list[TransactionEntity]


class SplitService:
    """Service for splitting and unsplitting transactions."""

    def __init__(self, db: Database):
        """Initialize split service.

        Args:
            db: Database instance
        """
        self.db = db

    def _get_parent(self, transaction_id: str) -> TransactionEntity:
        if not is_valid_transaction_id(transaction_id):
            raise ValidationError(invalid_transaction_id(transaction_id))
        parent = self.db.get_transaction(transaction_id)
        if parent is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return parent

    def split_transaction(self, transaction_id: str, children: list[SplitSpec]) -> SplitResult:
        """Split a transaction into children.

        Args:
            transaction_id: ID of the transaction to split
            children: One spec per child, in child-number order

        Returns:
            SplitResult with the updated parent and the created children

        Raises:
            ValidationError: If the ID is malformed, no children are given, or
                the transaction is itself a split child
            NotFoundError: If the transaction doesn't exist
            AlreadySplitError: If the transaction is already split
            AmountMismatchError: If child amounts don't sum to the parent amount
            UnknownCategoryError: If a child names a category that doesn't exist
        """
        parent = self._get_parent(transaction_id)
        if parent.is_split:
            raise AlreadySplitError(already_split(transaction_id))
        if parent.parent_id is not None:
            raise ValidationError(f"Transaction {transaction_id} is a split child and cannot be split")
        if not children:
            raise ValidationError("A split needs at least one child transaction")

        amounts = []
        for spec in children:
            amount = normalize_amount(spec.amount, default=None)
            # Sub-cent amounts would be rounded; reject instead
            if amount is None or (isinstance(spec.amount, Decimal) and amount != spec.amount):
                raise ValidationError(f"Invalid split amount '{spec.amount}'")
            amounts.append(amount)

        total = sum(amounts, Decimal("0.00"))
        if total != parent.amount:
            raise AmountMismatchError(transaction_id, expected=parent.amount, actual=total)

        category_ids = [self._resolve_category(spec.category, parent.category_id) for spec in children]

        default_category = self.db.get_category_by_name(UNCATEGORIZED)
        if default_category is None:
            raise UnknownCategoryError(UNCATEGORIZED)

        with self.db.transaction():
            if not self.db.set_split_flag(transaction_id, True):
                # Lost a race with another split of the same transaction
                raise AlreadySplitError(already_split(transaction_id))
            self.db.update_transaction(transaction_id, category_id=default_category.id)

            for index, (spec, amount, category_id) in enumerate(
                zip(children, amounts, category_ids), start=1
            ):
                self.db.insert_transaction(
                    transaction_id=child_transaction_id(transaction_id, index),
                    parent_id=transaction_id,
                    date=parent.date,
                    description=spec.description or parent.description,
                    amount=amount,
                    category_id=category_id,
                    is_split=False,
                    account_name=parent.account_name,
                    notes=spec.notes,
                    source=parent.source,
                    quantity=1,
                )

        logger.info("Split transaction %s into %d children", transaction_id, len(children))
        return SplitResult(
            parent=self.db.get_transaction(transaction_id),
            children=self.db.list_child_transactions(transaction_id),
        )

    def _resolve_category(self, name: Optional[str], fallback_id: Optional[int]) -> Optional[int]:
        if name is None or not name.strip():
            return fallback_id
        category = self.db.get_category_by_name(normalize_name(name))
        if category is None:
            raise UnknownCategoryError(name)
        return category.id

    def delete_split_transactions(self, transaction_id: str) -> int:
        """Remove a transaction's split children and mark it unsplit.

        Args:
            transaction_id: ID of the split parent

        Returns:
            Number of child transactions deleted

        Raises:
            ValidationError: If the ID is malformed
            NotFoundError: If the transaction doesn't exist
            NotSplitError: If the transaction is not split
        """
        parent = self._get_parent(transaction_id)
        if not parent.is_split:
            raise NotSplitError(not_split(transaction_id))

        with self.db.transaction():
            deleted = self.db.delete_child_transactions(transaction_id)
            if not self.db.set_split_flag(transaction_id, False):
                raise NotSplitError(not_split(transaction_id))

        logger.info(
            "Deleted %d split%s for transaction %s",
            deleted,
            "" if deleted == 1 else "s",
            transaction_id,
        )
        return deleted

    def list_splits(self, transaction_id: str) -> list[TransactionEntity]:
        """List the split children of a transaction."""
        self._get_parent(transaction_id)
        return self.db.list_child_transactions(transaction_id)
