"""Tests for database mappers."""

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from ledgerly.database.models import (
    Group as ORMGroup,
    Category as ORMCategory,
    Tag as ORMTag,
    Transaction as ORMTransaction,
)
from ledgerly.database.mappers import (
    group_to_domain,
    category_to_domain,
    tag_to_domain,
    transaction_to_domain,
)
from ledgerly.domain.entities import Category, Group, Tag, Transaction


class TestGroupAndTagMappers:
    """Tests for Group and Tag mappers."""

    def test_group_to_domain(self):
        group = group_to_domain(ORMGroup(id=3, name="food"))
        assert group == Group(id=3, name="food")

    def test_tag_to_domain(self):
        tag = tag_to_domain(ORMTag(id=7, name="vacation"))
        assert tag == Tag(id=7, name="vacation")


class TestCategoryMapper:
    """Tests for Category mapper."""

    def test_category_to_domain(self):
        orm_group = ORMGroup(id=2, name="food")
        orm_category = ORMCategory(id=5, name="groceries", group_id=2, group=orm_group)

        category = category_to_domain(orm_category)

        assert isinstance(category, Category)
        assert category.group_id == 2
        assert category.group_name == "food"


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain_derives_group_and_tags(self):
        orm_group = ORMGroup(id=2, name="food")
        orm_category = ORMCategory(id=5, name="groceries", group_id=2, group=orm_group)
        orm_txn = ORMTransaction(
            id="00001",
            parent_id=None,
            date=date(2019, 3, 14),
            description="whole foods",
            amount=Decimal("-42.50"),
            category_id=5,
            category=orm_category,
            is_split=False,
            source="Mint",
            quantity=1,
            tags=[ORMTag(id=2, name="vacation"), ORMTag(id=1, name="food")],
        )

        txn = transaction_to_domain(orm_txn)

        assert isinstance(txn, Transaction)
        assert txn.id == "00001"
        assert txn.category_name == "groceries"
        assert txn.group_id == 2
        assert txn.group_name == "food"
        assert txn.tags == ("food", "vacation")
        assert txn.amount == Decimal("-42.50")

    def test_transaction_without_category(self):
        orm_txn = ORMTransaction(
            id="00002",
            date=date(2019, 3, 14),
            amount=Decimal("1.00"),
            is_split=None,
        )

        txn = transaction_to_domain(orm_txn)

        assert txn.category_name is None
        assert txn.group_id is None
        assert txn.group_name is None
        assert txn.tags == ()
        assert txn.is_split is False

    def test_domain_transaction_is_immutable(self):
        txn = transaction_to_domain(
            ORMTransaction(id="00003", date=date(2019, 1, 1), amount=Decimal("1.00"), is_split=False)
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            txn.amount = Decimal("2.00")
