"""Tests for tabular allocation reports."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.allocation import ParticipantInput
from engine.allocation_engine import allocate
from engine.report import result_to_dataframe, summarize_allocation
from config.defaults import REPORT_COLUMNS


def make_participants(*amounts):
    return [ParticipantInput(chr(ord("a") + i), amount) for i, amount in enumerate(amounts)]


class TestResultToDataFrame:
    def test_columns_and_order(self):
        result = allocate(10, make_participants(1, 1, 1))
        df = result_to_dataframe(result)

        assert list(df.columns) == REPORT_COLUMNS
        assert df["Participant ID"].tolist() == ["a", "b", "c"]
        assert df["Allocated Amount"].tolist() == [4, 3, 3]
        assert df["Extra Share"].tolist() == [1, 0, 0]

    def test_exact_mode_values_are_floats(self):
        result = allocate(10, make_participants(1, 1, 1), rule_config={"arithmetic": "exact"})
        df = result_to_dataframe(result)

        assert df["Weight"].tolist() == pytest.approx([1 / 3] * 3)
        assert df["Deviation"].tolist() == pytest.approx([2 / 3, -1 / 3, -1 / 3])

    def test_missing_names_are_blank(self):
        result = allocate(10, [ParticipantInput("a", 1, name="Alice"), ParticipantInput("b", 1)])
        df = result_to_dataframe(result)
        assert df["Name"].tolist() == ["Alice", ""]


class TestSummarizeAllocation:
    def test_discount_summary(self):
        result = allocate(90, make_participants(50, 30, 20), rule_config={"arithmetic": "exact"})
        summary = summarize_allocation(result)

        assert summary["original_total"] == 100
        assert summary["final_total"] == 90
        assert summary["discount"] == 10
        assert summary["leftover_before_distribution"] == 0
        assert summary["participants"] == 3
        assert summary["rows_with_extra"] == 0
        assert summary["max_abs_deviation"] == 0.0

    def test_leftover_summary(self):
        summary = summarize_allocation(allocate(10, make_participants(1, 1, 1)))

        assert summary["rows_with_extra"] == 1
        assert summary["max_abs_deviation"] == pytest.approx(2 / 3)
