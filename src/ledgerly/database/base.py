"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerly.domain.entities import (
    Group,
    Category,
    Tag,
    Transaction,
    GroupWithCategories,
)


class Database(ABC):
    """Abstract database interface for ledgerly.

    Write methods commit on their own unless they run inside
    :meth:`transaction`, in which case the enclosing block commits or rolls
    back all of them together.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create tables and seed the 'ungrouped' group and 'uncategorized' category."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Run the enclosed writes as one all-or-nothing unit."""
        pass

    # Group operations
    @abstractmethod
    def insert_or_fetch_group(self, name: str) -> int:
        """Insert a group unless it exists. Returns the group ID either way."""
        pass

    @abstractmethod
    def get_group_by_name(self, name: str) -> Optional[Group]:
        """Get group by name."""
        pass

    @abstractmethod
    def list_groups(self) -> list[Group]:
        """List all groups ordered by ID."""
        pass

    @abstractmethod
    def list_groups_with_categories(self) -> list[GroupWithCategories]:
        """List groups ordered by name, each with its categories."""
        pass

    # Category operations
    @abstractmethod
    def insert_or_fetch_category(self, name: str, group_id: int) -> int:
        """Insert a category unless one with that name exists. Returns the category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name."""
        pass

    @abstractmethod
    def list_categories(self, group_id: Optional[int] = None) -> list[Category]:
        """List categories, optionally filtered by group."""
        pass

    @abstractmethod
    def update_category_group(self, category_id: int, group_id: int) -> None:
        """Move a category to another group."""
        pass

    @abstractmethod
    def repoint_category_transactions(self, from_category_id: int, to_category_id: int) -> int:
        """Move every transaction of one category to another. Returns rows changed."""
        pass

    @abstractmethod
    def count_category_transactions(self, category_id: int) -> int:
        """Count transactions referencing a category."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass

    # Tag operations
    @abstractmethod
    def insert_or_fetch_tag(self, name: str) -> int:
        """Insert a tag unless it exists. Returns the tag ID."""
        pass

    @abstractmethod
    def get_tag_by_name(self, name: str) -> Optional[Tag]:
        """Get tag by name."""
        pass

    @abstractmethod
    def list_tags(self) -> list[Tag]:
        """List all tags ordered by name."""
        pass

    @abstractmethod
    def add_transaction_tag(self, transaction_id: str, tag_id: int) -> bool:
        """Link a tag to a transaction. Returns False if the pair already existed."""
        pass

    @abstractmethod
    def remove_transaction_tag(self, transaction_id: str, tag_id: int) -> None:
        """Unlink a tag from a transaction."""
        pass

    # Transaction operations
    @abstractmethod
    def insert_transaction(
        self,
        transaction_id: str,
        date: date,
        amount: Decimal,
        category_id: Optional[int],
        parent_id: Optional[str] = None,
        description: Optional[str] = None,
        original_description: Optional[str] = None,
        is_split: bool = False,
        account_name: Optional[str] = None,
        notes: Optional[str] = None,
        source: Optional[str] = None,
        quantity: Optional[int] = None,
        link: Optional[str] = None,
        location: Optional[str] = None,
        ignore_existing: bool = False,
    ) -> bool:
        """Insert a transaction.

        Returns True if a row was inserted. With ``ignore_existing`` an
        existing ID is left untouched and False is returned; without it the
        store raises on a duplicate ID.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID, with its category, group and tags."""
        pass

    @abstractmethod
    def transaction_exists(self, transaction_id: str) -> bool:
        """Check if a transaction with the given ID exists."""
        pass

    @abstractmethod
    def get_max_transaction_id(self) -> Optional[str]:
        """Return the highest top-level (non-child) transaction ID, if any."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: str, **fields) -> None:
        """Update the given transaction columns."""
        pass

    @abstractmethod
    def set_split_flag(self, transaction_id: str, is_split: bool) -> bool:
        """Flip ``is_split`` only if it currently has the opposite value.

        Returns True if the row changed. Used as the atomic guard against two
        concurrent split or unsplit requests on the same transaction.
        """
        pass

    @abstractmethod
    def list_child_transactions(self, parent_id: str) -> list[Transaction]:
        """List split children of a transaction."""
        pass

    @abstractmethod
    def delete_child_transactions(self, parent_id: str) -> int:
        """Delete split children of a transaction. Returns rows deleted."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction (its children and tag links go with it)."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_names: Optional[list[str]] = None,
        tag_names: Optional[list[str]] = None,
        match_all_tags: bool = False,
        min_amount: Optional[Decimal] = None,
        max_amount: Optional[Decimal] = None,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions, most recent first, with optional filters.

        Args:
            start_date: Optional inclusive start date filter
            end_date: Optional inclusive end date filter
            category_names: Only transactions in any of these categories
            tag_names: Only transactions carrying these tags
            match_all_tags: If True, require every tag in ``tag_names``; otherwise any
            min_amount: Optional inclusive lower amount bound
            max_amount: Optional inclusive upper amount bound
            limit: Optional maximum number of rows
        """
        pass
