"""Transaction id format helpers."""

import re

# Five-digit sequence ids, optionally followed by a split child suffix.
TRANSACTION_ID_PATTERN = re.compile(r"^\d{5}(-\d+)?$")


def is_valid_transaction_id(transaction_id: object) -> bool:
    """Return True if ``transaction_id`` looks like ``00042`` or ``00042-3``."""
    if not isinstance(transaction_id, str):
        return False
    return TRANSACTION_ID_PATTERN.match(transaction_id) is not None


def format_sequence_id(sequence: int) -> str:
    """Format a positive sequence number as a zero-padded 5-digit id."""
    return str(sequence).zfill(5)


def child_transaction_id(parent_id: str, index: int) -> str:
    """Return the id of the ``index``-th (1-based) split child of ``parent_id``."""
    return f"{parent_id}-{index}"


def is_child_transaction_id(transaction_id: str) -> bool:
    """Return True for split child ids such as ``00042-3``."""
    return "-" in transaction_id
