"""Category domain service."""

import logging
from typing import Optional

from ledgerly.database.base import Database
from ledgerly.domain.entities import Category, GroupWithCategories, UNCATEGORIZED, UNGROUPED
from ledgerly.domain.errors import (
    ConflictError,
    NotFoundError,
    UnknownCategoryError,
    ValidationError,
    group_name_not_found,
)
from ledgerly.utils.normalize import normalize_name

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def _group_id(self, group_name: Optional[str]) -> int:
        name = normalize_name(group_name) or UNGROUPED
        group = self.db.get_group_by_name(name)
        if group is None:
            raise NotFoundError(group_name_not_found(name))
        return group.id

    def _require(self, name: str) -> Category:
        category = self.db.get_category_by_name(normalize_name(name))
        if category is None:
            raise UnknownCategoryError(name)
        return category

    def create_category(self, name: str, group_name: Optional[str] = None) -> int:
        """Create a category.

        Args:
            name: Category name (normalized before storing)
            group_name: Group to place it in; 'ungrouped' if omitted

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty
            NotFoundError: If the group doesn't exist
            ConflictError: If the category already exists
        """
        normalized = normalize_name(name)
        if not normalized:
            raise ValidationError("Category name must not be empty")
        group_id = self._group_id(group_name)
        if self.db.get_category_by_name(normalized) is not None:
            raise ConflictError(f"Category '{normalized}' already exists")

        category_id = self.db.insert_or_fetch_category(normalized, group_id)
        logger.info("Created category '%s'", normalized)
        return category_id

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category entity or None if not found
        """
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name, normalizing it first."""
        return self.db.get_category_by_name(normalize_name(name))

    def list_categories(self, group_name: Optional[str] = None) -> list[Category]:
        """List categories, optionally only those of one group.

        Raises:
            NotFoundError: If the group doesn't exist
        """
        group_id = self._group_id(group_name) if group_name is not None else None
        return self.db.list_categories(group_id=group_id)

    def list_grouped(self) -> list[GroupWithCategories]:
        """List every group with its categories."""
        return self.db.list_groups_with_categories()

    def rename_category(self, current_name: str, new_name: str, merge: bool = False) -> int:
        """Rename a category, or merge it into an existing one.

        Transactions of the old category are moved to the new one. The old
        category is deleted once nothing references it.

        Args:
            current_name: Existing category name
            new_name: New category name
            merge: Allow ``new_name`` to be an existing category

        Returns:
            ID of the category the transactions now belong to

        Raises:
            ValidationError: If the new name is empty, or the category is 'uncategorized'
            UnknownCategoryError: If the current category doesn't exist
            ConflictError: If the new name exists and merge is not set
        """
        target_name = normalize_name(new_name)
        if not target_name:
            raise ValidationError("Category name must not be empty")
        current = self._require(current_name)
        if current.name == UNCATEGORIZED:
            raise ValidationError(f"Category '{UNCATEGORIZED}' cannot be renamed")
        if current.name == target_name:
            return current.id

        existing = self.db.get_category_by_name(target_name)
        if existing is not None and not merge:
            raise ConflictError(
                f"Category '{target_name}' already exists; use merge to combine them"
            )

        with self.db.transaction():
            target_id = self.db.insert_or_fetch_category(target_name, current.group_id)
            moved = self.db.repoint_category_transactions(current.id, target_id)
            if self.db.count_category_transactions(current.id) == 0:
                self.db.delete_category(current.id)

        logger.info(
            "Renamed category '%s' to '%s' (%d transactions moved)", current.name, target_name, moved
        )
        return target_id

    def move_category(self, name: str, group_name: str) -> None:
        """Move a category to another group.

        Transactions follow automatically since their group comes from their
        category.

        Raises:
            UnknownCategoryError: If the category doesn't exist
            NotFoundError: If the group doesn't exist
        """
        category = self._require(name)
        group_id = self._group_id(group_name)
        self.db.update_category_group(category.id, group_id)
        logger.info("Moved category '%s' to group '%s'", category.name, normalize_name(group_name))
