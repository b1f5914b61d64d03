"""Tests for loading unified records into the database."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerly.database.factories import create_sqlite_database
from ledgerly.domain.errors import IngestError
from ledgerly.domain.loader import LoaderService
from ledgerly.ingest.records import IntermediateRecord


def record(transaction_id, category="groceries", group="food", tags=(), **kwargs):
    return IntermediateRecord(
        id=transaction_id,
        date=kwargs.pop("date", date(2019, 3, 14)),
        description=kwargs.pop("description", "whole foods"),
        amount=kwargs.pop("amount", Decimal("-42.50")),
        category=category,
        group_name=group,
        source=kwargs.pop("source", "Mint"),
        tags=list(tags),
        **kwargs,
    )


def test_load_creates_everything(loader_service, temp_db):
    records = [
        record("00002", tags=["vacation"]),
        record("00001", category="salary", group="income", amount=Decimal("100.00")),
    ]

    result = loader_service.load(records)

    assert result.inserted == 2
    assert result.skipped == 0
    assert result.tag_links == 1

    txn = temp_db.get_transaction("00002")
    assert txn.category_name == "groceries"
    assert txn.group_name == "food"
    assert txn.tags == ("vacation",)
    assert txn.quantity == 1
    assert txn.amount == Decimal("-42.50")

    assert temp_db.get_transaction("00001").group_name == "income"


def test_load_is_idempotent(loader_service, temp_db):
    records = [record("00002", tags=["vacation"]), record("00001")]
    loader_service.load(records)

    second = loader_service.load(records)

    assert second.inserted == 0
    assert second.existing == 2
    assert second.tag_links == 0
    assert len(temp_db.list_transactions()) == 2
    assert [g.name for g in temp_db.list_groups()].count("food") == 1
    assert len(temp_db.list_tags()) == 1


def test_load_does_not_overwrite_existing_rows(loader_service, temp_db):
    loader_service.load([record("00001", description="first")])
    loader_service.load([record("00001", description="second")])
    assert temp_db.get_transaction("00001").description == "first"


def test_ungrouped_always_present(loader_service, temp_db):
    result = loader_service.load([record("00001", category="travel", group="ungrouped")])
    assert result.inserted == 1
    assert temp_db.get_transaction("00001").group_name == "ungrouped"


def test_ungrouped_missing_is_fatal(tmp_path):
    db = create_sqlite_database(str(tmp_path / "bare.db"))
    # Tables exist, but the schema was never seeded
    try:
        with pytest.raises(IngestError, match="ungrouped"):
            LoaderService(db).load([record("00001")])
    finally:
        db.disconnect()


def test_category_keeps_first_group(loader_service, temp_db):
    loader_service.load(
        [
            record("00002", category="gas", group="transportation"),
            record("00001", category="gas", group="auto"),
        ]
    )
    assert temp_db.get_category_by_name("gas").group_name == "transportation"
    assert temp_db.get_transaction("00001").group_name == "transportation"


def test_existing_category_keeps_its_group(loader_service, category_service, group_service, temp_db):
    group_service.create_group("auto")
    category_service.create_category("gas", group_name="auto")

    loader_service.load([record("00001", category="gas", group="transportation")])

    assert temp_db.get_category_by_name("gas").group_name == "auto"


def test_invalid_id_is_skipped(loader_service, temp_db):
    result = loader_service.load([record("1"), record(None), record("00001")])
    assert result.inserted == 1
    assert result.skipped == 2
    assert any("invalid or missing id" in e for e in result.errors)


def test_missing_date_is_skipped(loader_service):
    result = loader_service.load([record("00001", date=None)])
    assert result.inserted == 0
    assert result.skipped == 1
    assert "missing date" in result.errors[0]


def test_blank_category_is_skipped(loader_service):
    result = loader_service.load([record("00001", category="")])
    assert result.skipped == 1
    assert "category" in result.errors[0]


def test_child_loaded_after_parent(loader_service, temp_db):
    child = record("00001-1", parent_id="00001", amount=Decimal("-20.00"))
    parent = record("00001", is_split=True)

    result = loader_service.load([child, parent])

    assert result.inserted == 2
    assert temp_db.get_transaction("00001-1").parent_id == "00001"


def test_child_with_unknown_parent_is_skipped(loader_service, temp_db):
    result = loader_service.load([record("00009-1", parent_id="00009")])
    assert result.skipped == 1
    assert "parent" in result.errors[0]
    assert temp_db.get_transaction("00009-1") is None


def test_child_of_skipped_parent_is_skipped(loader_service, temp_db):
    result = loader_service.load(
        [
            record("00002"),
            record("00001", category="", is_split=True),
            record("00001-1", parent_id="00001", amount=Decimal("-20.00")),
        ]
    )

    assert result.inserted == 1
    assert result.skipped == 2
    assert any("parent '00001' not found" in e for e in result.errors)
    assert temp_db.get_transaction("00002") is not None
    assert temp_db.get_transaction("00001-1") is None


def test_tags_linked_for_previously_loaded_rows(loader_service, temp_db):
    loader_service.load([record("00001")])
    result = loader_service.load([record("00001", tags=["Vacation"])])
    assert result.tag_links == 1
    assert temp_db.get_transaction("00001").tags == ("vacation",)


def test_quantity_is_carried(loader_service, temp_db):
    loader_service.load([record("00001", quantity=3)])
    assert temp_db.get_transaction("00001").quantity == 3
