"""Integration tests for end-to-end workflows."""

import json
from decimal import Decimal

from ledgerly.cli.main import cli
from ledgerly.ingest import read_unified_csv


def ingest_args(temp_db, source_files):
    root = source_files["root"]
    return [
        "--db-path",
        temp_db.database_path,
        "ingest",
        "--mint",
        str(source_files["mint"]),
        "--everydollar",
        str(source_files["everydollar"]),
        "--overlaps",
        str(root / "db" / "overlappingCategories.json"),
        "--unified",
        str(root / "db" / "unified.csv"),
    ]


def test_step_by_step_workflow(cli_runner, temp_db, source_files, reopen_db):
    """reconcile -> unify -> load -> split -> tag -> list."""
    root = source_files["root"]
    overlaps = root / "out" / "overlaps.json"
    unified = root / "out" / "unified.csv"
    sources = ["--mint", str(source_files["mint"]), "--everydollar", str(source_files["everydollar"])]

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "reconcile", *sources, "--overlaps", str(overlaps)]
    )
    assert result.exit_code == 0, result.output
    assert "Found 1 overlapping categories" in result.output
    assert json.loads(overlaps.read_text()) == [{"category": "groceries", "group": "food"}]

    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "unify",
            *sources,
            "--overlaps",
            str(overlaps),
            "--unified",
            str(unified),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Wrote 6 unified transactions" in result.output
    assert [r.id for r in read_unified_csv(unified)] == ["00006", "00005", "00004", "00003", "00002", "00001"]

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "load", "--unified", str(unified)]
    )
    assert result.exit_code == 0, result.output
    assert "Inserted: 6 transactions" in result.output
    assert "Tag links: 1" in result.output

    db = reopen_db()
    whole_foods = db.get_transaction("00004")
    assert whole_foods.description == "whole foods"
    assert whole_foods.amount == Decimal("-42.50")
    assert whole_foods.group_name == "food"
    assert db.get_transaction("00003").group_name == "ungrouped"
    assert db.get_transaction("00002").tags == ("vacation",)

    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "transaction",
            "split",
            "00004",
            "--part",
            "-40.00",
            "--part",
            "-2.50:uncategorized",
        ],
    )
    assert result.exit_code == 0, result.output

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "transaction", "list", "--category", "groceries"]
    )
    assert result.exit_code == 0
    assert "00004-1" in result.output
    assert "00006" in result.output


def test_ingest_is_repeatable(cli_runner, temp_db, source_files, reopen_db):
    result = cli_runner.invoke(cli, ingest_args(temp_db, source_files))
    assert result.exit_code == 0, result.output
    assert "unified 6 transactions" in result.output
    assert "Inserted: 6 transactions" in result.output

    result = cli_runner.invoke(cli, ingest_args(temp_db, source_files))
    assert result.exit_code == 0, result.output
    assert "Inserted: 0 transactions" in result.output
    assert "Already present: 6" in result.output

    assert len(reopen_db().list_transactions()) == 6


def test_ingest_missing_source_aborts(cli_runner, temp_db, source_files, reopen_db):
    args = ingest_args(temp_db, source_files)
    args[args.index("--everydollar") + 1] = str(source_files["root"] / "nope")

    result = cli_runner.invoke(cli, args)

    assert result.exit_code == 1
    assert "Error: CSV directory not found" in result.output
    assert reopen_db().list_transactions() == []


def test_load_missing_unified_file(cli_runner, temp_db, tmp_path):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "load", "--unified", str(tmp_path / "none.csv")]
    )
    assert result.exit_code == 1
    assert "not found" in result.output


def test_unknown_log_level(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--log-level", "chatty", "tag", "list"]
    )
    assert result.exit_code != 0
    assert "Unknown log level" in result.output


def test_db_path_from_environment(cli_runner, tmp_path):
    db_path = tmp_path / "env.db"
    result = cli_runner.invoke(cli, ["group", "list"], env={"LEDGERLY_DB_PATH": str(db_path)})
    assert result.exit_code == 0
    assert "ungrouped" in result.output
    assert db_path.exists()
