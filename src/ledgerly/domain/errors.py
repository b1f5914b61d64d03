"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class IntegrityError(DomainError):
    """A row references a group, category or tag that could not be resolved."""


class IngestError(DomainError):
    """A structural ingestion failure that aborts the whole run."""


class TransientStoreError(DomainError):
    """Connection or I/O failure talking to the store; safe to retry."""


class AmountMismatchError(ValidationError):
    """Split children do not add up to the parent amount."""

    def __init__(self, transaction_id: str, expected: Decimal, actual: Decimal):
        self.transaction_id = transaction_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Split amounts for transaction {transaction_id} sum to {actual}, "
            f"expected {expected}"
        )


class UnknownCategoryError(NotFoundError):
    """A category referenced by name does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(category_name_not_found(name))


class AlreadySplitError(ConflictError):
    """The transaction is already split."""


class NotSplitError(ConflictError):
    """The transaction is not split."""


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def invalid_transaction_id(transaction_id: object) -> str:
    """Return message for malformed transaction IDs."""
    return f"Invalid transaction id '{transaction_id}': expected 5 digits, optionally followed by -<n>"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def group_name_not_found(name: str) -> str:
    """Return message for missing group by name."""
    return f"Group '{name}' not found"


def duplicate_transaction_id(transaction_id: str) -> str:
    """Return message for duplicate transaction ID."""
    return f"Transaction with id '{transaction_id}' already exists"


def already_split(transaction_id: str) -> str:
    """Return message when splitting a split transaction."""
    return f"Transaction {transaction_id} is already split"


def not_split(transaction_id: str) -> str:
    """Return message when unsplitting a transaction that is not split."""
    return f"Transaction {transaction_id} is not marked as split"
