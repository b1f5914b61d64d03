"""Tests for tags and transaction tagging."""

import pytest

from ledgerly.cli.main import cli
from ledgerly.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_and_list_tags(tag_service):
    tag_service.create_tag("Vacation")
    tag_service.create_tag("2019")
    assert [t.name for t in tag_service.list_tags()] == ["2019", "vacation"]


def test_create_duplicate_tag(tag_service):
    tag_service.create_tag("vacation")
    with pytest.raises(ConflictError):
        tag_service.create_tag(" VACATION ")


def test_create_empty_tag(tag_service):
    with pytest.raises(ValidationError):
        tag_service.create_tag("  ")


def test_set_transaction_tags_adds_and_removes(tag_service, sample_transaction, temp_db):
    assert tag_service.set_transaction_tags("00001", ["Vacation", "Food"]) == ("food", "vacation")
    assert temp_db.get_transaction("00001").tags == ("food", "vacation")

    assert tag_service.set_transaction_tags("00001", ["food", "work"]) == ("food", "work")
    assert temp_db.get_transaction("00001").tags == ("food", "work")


def test_set_transaction_tags_clears(tag_service, sample_transaction, temp_db):
    tag_service.set_transaction_tags("00001", ["vacation"])
    assert tag_service.set_transaction_tags("00001", []) == ()
    assert temp_db.get_transaction("00001").tags == ()
    # The tag itself is kept
    assert [t.name for t in tag_service.list_tags()] == ["vacation"]


def test_set_tags_unknown_transaction(tag_service):
    with pytest.raises(NotFoundError):
        tag_service.set_transaction_tags("00099", ["vacation"])


def test_add_and_remove_tags(tag_service, sample_transaction, temp_db):
    assert tag_service.add_tags("00001", ["a", "b", "a"]) == 2
    assert tag_service.add_tags("00001", ["b"]) == 0

    tag_service.remove_tags("00001", ["a", "never-created"])
    assert temp_db.get_transaction("00001").tags == ("b",)


def test_list_transactions_by_tags(tag_service, sample_transaction):
    tag_service.set_transaction_tags("00001", ["vacation", "food"])

    assert [t.id for t in tag_service.list_transactions_by_tags(["vacation", "work"])] == ["00001"]
    assert tag_service.list_transactions_by_tags(["vacation", "work"], match_all=True) == []

    with pytest.raises(ValidationError):
        tag_service.list_transactions_by_tags([" "])


def test_tag_cli(cli_runner, temp_db, sample_transaction, reopen_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "tag", "create", "Vacation"])
    assert result.exit_code == 0
    assert "Created tag 'Vacation'" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "tag", "create", "vacation"])
    assert result.exit_code == 1
    assert "already exists" in result.output

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "tag", "set", "00001", "vacation", "2019"]
    )
    assert result.exit_code == 0
    assert "Tags for 00001: 2019, vacation" in result.output
    assert reopen_db().get_transaction("00001").tags == ("2019", "vacation")

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "tag", "list"])
    assert "2019" in result.output
    assert "vacation" in result.output
