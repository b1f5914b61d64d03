"""Group domain service."""

import logging
from typing import Optional

from ledgerly.database.base import Database
from ledgerly.domain.entities import Group, GroupWithCategories
from ledgerly.domain.errors import ConflictError, ValidationError
from ledgerly.utils.normalize import normalize_name

logger = logging.getLogger(__name__)


class GroupService:
    """Service for managing category groups."""

    def __init__(self, db: Database):
        """Initialize group service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_group(self, name: str) -> int:
        """Create a group.

        Args:
            name: Group name (normalized before storing)

        Returns:
            Group ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If the group already exists
        """
        normalized = normalize_name(name)
        if not normalized:
            raise ValidationError("Group name must not be empty")
        if self.db.get_group_by_name(normalized) is not None:
            raise ConflictError(f"Group '{normalized}' already exists")
        group_id = self.db.insert_or_fetch_group(normalized)
        logger.info("Created group '%s'", normalized)
        return group_id

    def get_group_by_name(self, name: str) -> Optional[Group]:
        return self.db.get_group_by_name(normalize_name(name))

    def list_groups(self) -> list[Group]:
        return self.db.list_groups()

    def list_with_categories(self) -> list[GroupWithCategories]:
        return self.db.list_groups_with_categories()
