"""Domain model entities for ledgerly.

These are pure data classes representing business concepts, independent of
database schema. A transaction's group is not stored on the transaction; it
is always derived through the transaction's category.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

# Seeded fallback group and the category a split parent is reset to
UNGROUPED = "ungrouped"
UNCATEGORIZED = "uncategorized"


@dataclass(frozen=True)
class Group:
    """Category group domain entity."""

    id: int
    name: str


@dataclass(frozen=True)
class Category:
    """Category domain entity; belongs to exactly one group."""

    id: int
    name: str
    group_id: int
    group_name: Optional[str] = None


@dataclass(frozen=True)
class Tag:
    """Tag domain entity."""

    id: int
    name: str


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: str
    parent_id: Optional[str]
    date: date
    description: Optional[str]
    original_description: Optional[str]
    amount: Decimal
    category_id: Optional[int]
    is_split: bool
    account_name: Optional[str]
    notes: Optional[str]
    source: Optional[str]
    quantity: Optional[int]
    link: Optional[str]
    location: Optional[str]
    category_name: Optional[str] = None
    group_id: Optional[int] = None
    group_name: Optional[str] = None
    tags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class GroupWithCategories:
    """A group together with its categories."""

    id: int
    name: str
    categories: tuple[Category, ...]
