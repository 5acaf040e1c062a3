"""
Unit tests for row/record/DataFrame conversions.
Run with: pytest tests/test_rows.py -v
"""
import os
import sys
import pytest
import pandas as pd

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sheets.rows import frame_to_rows, records_to_frame, rows_to_records, sheet_to_frame
from sheets.schema.registry import NotFoundError, SchemaRegistry, TableDefinition


@pytest.fixture
def registry():
    return SchemaRegistry([
        TableDefinition(
            table="scores",
            versions={
                "v1": {"behavior": "Behavior", "score": "Score"},
                "v2": {"behavior": "Behavior", "score": "Score", "category": "Category"},
            },
            active_version="v2",
        ),
    ])


class TestRowsToRecords:

    def test_decodes_each_row(self, registry):
        records = rows_to_records(
            registry, "scores", ["Score", "Behavior"], [["1", "run"], ["2", "read"]]
        )
        assert records == [
            {"behavior": "run", "score": "1"},
            {"behavior": "read", "score": "2"},
        ]

    def test_no_rows(self, registry):
        assert rows_to_records(registry, "scores", ["Behavior"], []) == []


class TestRecordsToFrame:

    def test_columns_follow_schema(self, registry):
        frame = records_to_frame(registry, "scores", [{"score": 3}])
        assert list(frame.columns) == ["behavior", "score", "category"]
        assert frame.loc[0, "score"] == 3
        assert frame.loc[0, "behavior"] is None

    def test_named_version(self, registry):
        frame = records_to_frame(registry, "scores", [], version="v1")
        assert list(frame.columns) == ["behavior", "score"]
        assert len(frame) == 0


class TestSheetToFrame:

    def test_decodes_grid(self, registry):
        values = [
            [" Behavior ", "Score", "Notes"],
            ["run", "5", "ignored"],
            ["read"],
        ]
        frame = sheet_to_frame(registry, "scores", values)

        assert len(frame) == 2
        assert frame.loc[0, "behavior"] == "run"
        assert frame.loc[0, "score"] == "5"
        assert frame.loc[1, "score"] is None

    def test_empty_grid(self, registry):
        frame = sheet_to_frame(registry, "scores", [])
        assert list(frame.columns) == ["behavior", "score", "category"]
        assert frame.empty

    def test_unknown_table(self, registry):
        with pytest.raises(NotFoundError):
            sheet_to_frame(registry, "nope", [["Behavior"]])


class TestFrameToRows:

    def test_header_row_first(self, registry):
        frame = pd.DataFrame([{"behavior": "run", "score": 5, "category": "health"}])
        rows = frame_to_rows(registry, "scores", frame)
        assert rows == [["Behavior", "Score", "Category"], ["run", 5, "health"]]

    def test_missing_values_blank(self, registry):
        frame = pd.DataFrame([{"behavior": "run", "score": None}])
        rows = frame_to_rows(registry, "scores", frame)
        assert rows[1] == ["run", "", ""]

    def test_sheet_round_trip(self, registry):
        values = [["Behavior", "Score", "Category"], ["run", "5", "health"]]
        frame = sheet_to_frame(registry, "scores", values)
        assert frame_to_rows(registry, "scores", frame) == values


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
