"""Shared pytest fixtures for ledgerly tests."""

import csv
import logging
import os
import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from ledgerly.database.factories import create_sqlite_database
from ledgerly.domain.category import CategoryService
from ledgerly.domain.group import GroupService
from ledgerly.domain.loader import LoaderService
from ledgerly.domain.split import SplitService
from ledgerly.domain.tag import TagService
from ledgerly.domain.transaction import TransactionService

MINT_HEADERS = [
    "Date",
    "Description",
    "Original Description",
    "Amount",
    "Transaction Type",
    "Category",
    "Account Name",
    "Labels",
    "Notes",
]

EVERYDOLLAR_HEADERS = ["Date", "Merchant", "Amount", "Item", "Group"]


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers the CLI attached so later tests don't log to a closed stream."""
    yield
    logger = logging.getLogger("ledgerly")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def reopen_db(temp_db):
    """Open a fresh connection to the temporary database (sees CLI writes)."""
    opened = []

    def _open():
        db = create_sqlite_database(database_path=temp_db.database_path)
        opened.append(db)
        return db

    yield _open

    for db in opened:
        db.disconnect()


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def group_service(temp_db):
    """Create a GroupService with a temporary database."""
    return GroupService(temp_db)


@pytest.fixture
def tag_service(temp_db):
    """Create a TagService with a temporary database."""
    return TagService(temp_db)


@pytest.fixture
def loader_service(temp_db):
    """Create a LoaderService with a temporary database."""
    return LoaderService(temp_db)


@pytest.fixture
def split_service(temp_db):
    """Create a SplitService with a temporary database."""
    return SplitService(temp_db)


@pytest.fixture
def groceries(temp_db):
    """A 'groceries' category in a 'food' group. Returns the category ID."""
    group_id = temp_db.insert_or_fetch_group("food")
    return temp_db.insert_or_fetch_category("groceries", group_id)


@pytest.fixture
def sample_transaction(temp_db, groceries):
    """Transaction 00001: -42.50 of groceries."""
    temp_db.insert_transaction(
        transaction_id="00001",
        date=date(2019, 3, 14),
        description="whole foods",
        amount=Decimal("-42.50"),
        category_id=groceries,
        account_name="Checking",
        source="Mint",
        quantity=1,
    )
    return temp_db.get_transaction("00001")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def write_csv(path: Path, headers: list[str], rows: list[list[str]]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(headers)
        writer.writerows(rows)
    return path


@pytest.fixture
def source_files(tmp_path):
    """A Mint export and an EveryDollar directory with two monthly files."""
    mint_path = write_csv(
        tmp_path / "mint" / "mint_transactions.csv",
        MINT_HEADERS,
        [
            ["3/14/2019", "Whole Foods", "WHOLEFDS #123", "42.50", "debit", "Groceries", "Checking", "", ""],
            ["3/01/2019", "Acme Payroll", "ACME PAYROLL", "2500.00", "credit", "Paycheck", "Checking", "", "march"],
            ["2/20/2019", "Hotel", "HOTEL", "310.00", "debit", "Travel", "Visa", "Vacation", ""],
            ["", "", "", "", "", "", "", "", ""],
        ],
    )
    everydollar_dir = tmp_path / "everydollar"
    write_csv(
        everydollar_dir / "2019-03.csv",
        EVERYDOLLAR_HEADERS,
        [
            ["2019-03-20", "Trader Joes", "-35.10", "Groceries", "Food"],
            ["2019-03-15", "Employer", "100.00", "Salary", "Income"],
        ],
    )
    write_csv(
        everydollar_dir / "2019-02.csv",
        EVERYDOLLAR_HEADERS,
        [
            ["2019-02-10", "Shell", "-30.00", "Gas", "Transportation"],
            ["2019-02-11", "Unknown", "-5.00", "", "Misc"],
        ],
    )
    return {"mint": mint_path, "everydollar": everydollar_dir, "root": tmp_path}
