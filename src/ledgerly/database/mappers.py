"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic. The derived fields of a domain
transaction (category name, group, tags) are read through relationships here,
so nothing above the database layer needs to know how they are joined.
"""

from ledgerly.domain import entities as domain
from ledgerly.database.models import (
    Group as ORMGroup,
    Category as ORMCategory,
    Tag as ORMTag,
    Transaction as ORMTransaction,
)


def group_to_domain(orm_group: ORMGroup) -> domain.Group:
    """Convert SQLAlchemy Group model to domain Group entity."""
    return domain.Group(id=orm_group.id, name=orm_group.name)


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        group_id=orm_category.group_id,
        group_name=orm_category.group.name if orm_category.group is not None else None,
    )


def tag_to_domain(orm_tag: ORMTag) -> domain.Tag:
    """Convert SQLAlchemy Tag model to domain Tag entity."""
    return domain.Tag(id=orm_tag.id, name=orm_tag.name)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    category = orm_transaction.category
    group = category.group if category is not None else None
    return domain.Transaction(
        id=orm_transaction.id,
        parent_id=orm_transaction.parent_id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        original_description=orm_transaction.original_description,
        amount=orm_transaction.amount,
        category_id=orm_transaction.category_id,
        is_split=bool(orm_transaction.is_split),
        account_name=orm_transaction.account_name,
        notes=orm_transaction.notes,
        source=orm_transaction.source,
        quantity=orm_transaction.quantity,
        link=orm_transaction.link,
        location=orm_transaction.location,
        category_name=category.name if category is not None else None,
        group_id=group.id if group is not None else None,
        group_name=group.name if group is not None else None,
        tags=tuple(sorted(tag.name for tag in orm_transaction.tags)),
    )
