"""Utility functions for ledgerly."""

from ledgerly.utils.normalize import (
    normalize_name,
    normalize_amount,
    normalize_quantity,
    parse_amount,
)
from ledgerly.utils.date_parser import parse_date, parse_source_date
from ledgerly.utils.transaction_id import is_valid_transaction_id

__all__ = [
    "normalize_name",
    "normalize_amount",
    "normalize_quantity",
    "parse_amount",
    "parse_date",
    "parse_source_date",
    "is_valid_transaction_id",
]
