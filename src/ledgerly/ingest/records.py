"""The intermediate transaction record shared by adapters, unifier and loader.

The unified interchange CSV is a flat serialization of these records with the
columns in ``UNIFIED_HEADERS``.
"""

from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerly.utils.date_parser import parse_source_date
from ledgerly.utils.normalize import normalize_amount, normalize_name, normalize_quantity

UNIFIED_HEADERS = [
    "id",
    "parent_id",
    "date",
    "description",
    "original_description",
    "amount",
    "category",
    "groupName",
    "is_split",
    "account_name",
    "notes",
    "tags",
    "source",
    "quantity",
    "link",
    "location",
]

SOURCE_MINT = "Mint"
SOURCE_EVERYDOLLAR = "EveryDollar"
SOURCE_MANUAL = "manual"


@dataclass
class IntermediateRecord:
    """One transaction in the unified schema.

    ``id`` stays None until the unifier numbers the record set.
    """

    date: Optional[date]
    description: Optional[str]
    amount: Decimal
    category: str
    group_name: str
    source: str
    id: Optional[str] = None
    parent_id: Optional[str] = None
    original_description: Optional[str] = None
    is_split: bool = False
    account_name: Optional[str] = None
    notes: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    quantity: Optional[int] = None
    link: Optional[str] = None
    location: Optional[str] = None

    def is_blank(self) -> bool:
        """True when no field carries a non-blank value."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, list):
                if any(str(v).strip() for v in value):
                    return False
            elif isinstance(value, bool):
                if value:
                    return False
            elif value is not None and str(value).strip() != "":
                return False
        return True

    def to_row(self) -> dict[str, str]:
        """Serialize to a unified CSV row."""
        return {
            "id": self.id or "",
            "parent_id": self.parent_id or "",
            "date": self.date.isoformat() if self.date is not None else "",
            "description": self.description or "",
            "original_description": self.original_description or "",
            "amount": str(self.amount),
            "category": self.category,
            "groupName": self.group_name,
            "is_split": "true" if self.is_split else "false",
            "account_name": self.account_name or "",
            "notes": self.notes or "",
            "tags": ",".join(self.tags),
            "source": self.source,
            "quantity": str(self.quantity) if self.quantity is not None else "",
            "link": self.link or "",
            "location": self.location or "",
        }

    @classmethod
    def from_row(cls, row: dict[str, Optional[str]]) -> "IntermediateRecord":
        """Parse a unified CSV row. Names are re-normalized on the way in."""

        def text(key: str) -> Optional[str]:
            value = row.get(key)
            if value is None or value.strip() == "":
                return None
            return value

        tags_cell = row.get("tags") or ""
        return cls(
            id=text("id"),
            parent_id=text("parent_id"),
            date=parse_source_date(row.get("date")),
            description=text("description"),
            original_description=text("original_description"),
            amount=normalize_amount(row.get("amount")),
            category=normalize_name(row.get("category")),
            group_name=normalize_name(row.get("groupName")),
            is_split=(row.get("is_split") or "").strip().lower() == "true",
            account_name=text("account_name"),
            notes=text("notes"),
            tags=[t for t in (normalize_name(part) for part in tags_cell.split(",")) if t],
            source=text("source") or "",
            quantity=normalize_quantity(row.get("quantity")),
            link=text("link"),
            location=text("location"),
        )
