"""Tests for category/group reconciliation."""

import json

import pytest

from ledgerly.domain.errors import IngestError
from ledgerly.ingest.reconciler import (
    CategoryGroup,
    category_group_map,
    collect_everydollar_groups,
    find_overlapping_categories,
    read_overlaps,
    reconcile_sources,
    write_overlaps,
)


def test_overlap_pairs_mint_category_with_everydollar_group():
    mint_rows = [{"Category": "Groceries"}, {"Category": "Travel"}, {"Category": "groceries "}]
    everydollar_rows = [
        {"item": "Groceries", "group": "Food"},
        {"item": "Salary", "group": "Income"},
    ]
    assert find_overlapping_categories(mint_rows, everydollar_rows) == [
        CategoryGroup(category="groceries", group="food")
    ]


def test_overlap_keeps_mint_order():
    mint_rows = [{"Category": "Gas"}, {"Category": "Groceries"}]
    everydollar_rows = [
        {"item": "groceries", "group": "food"},
        {"item": "gas", "group": "transportation"},
    ]
    overlaps = find_overlapping_categories(mint_rows, everydollar_rows)
    assert [o.category for o in overlaps] == ["gas", "groceries"]


def test_everydollar_rows_without_group_are_ignored():
    rows = [{"item": "Gas", "group": ""}, {"item": "", "group": "Auto"}]
    assert collect_everydollar_groups(rows) == {}


def test_everydollar_last_group_wins():
    rows = [{"item": "Gas", "group": "Auto"}, {"item": "gas", "group": "Transportation"}]
    assert collect_everydollar_groups(rows) == {"gas": "transportation"}


def test_no_overlap():
    assert find_overlapping_categories([{"Category": "Travel"}], [{"item": "Gas", "group": "Auto"}]) == []


def test_category_group_map():
    overlaps = [CategoryGroup("groceries", "food"), CategoryGroup("gas", "auto")]
    assert category_group_map(overlaps) == {"groceries": "food", "gas": "auto"}


def test_reconcile_sources(source_files):
    overlaps = reconcile_sources(source_files["mint"], source_files["everydollar"])
    assert overlaps == [CategoryGroup(category="groceries", group="food")]


def test_reconcile_sources_missing_mint_file(source_files, tmp_path):
    with pytest.raises(IngestError):
        reconcile_sources(tmp_path / "missing.csv", source_files["everydollar"])


def test_overlaps_json_round_trip(tmp_path):
    path = tmp_path / "out" / "overlappingCategories.json"
    overlaps = [CategoryGroup("groceries", "food")]
    write_overlaps(path, overlaps)

    assert json.loads(path.read_text()) == [{"category": "groceries", "group": "food"}]
    assert read_overlaps(path) == overlaps


def test_read_overlaps_missing_file(tmp_path):
    with pytest.raises(IngestError, match="not found"):
        read_overlaps(tmp_path / "missing.json")


@pytest.mark.parametrize("content", ["{not json", '{"category": "x"}', "[1, 2]"])
def test_read_overlaps_malformed(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content)
    with pytest.raises(IngestError):
        read_overlaps(path)
