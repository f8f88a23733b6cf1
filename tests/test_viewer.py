"""Tests for viewer projections."""

import pytest
from pathlib import Path
import pandas as pd

from src.core.viewer import (
    MISSING,
    XBRLViewer,
    build_table,
    build_tree,
    format_number_with_commas,
    labeled_quarter,
)
from src.models import ExtractedFinancials, ExtractionConfig
from src.parsers import parse_xbrl

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def financials():
    text = (FIXTURES_DIR / "abc_manufacturing_2024.xbrl").read_text(encoding="utf-8")
    return parse_xbrl(text)


class TestFormatting:
    @pytest.mark.parametrize(
        "num, expected",
        [
            (0, "0"),
            (999, "999"),
            (-999, "-999"),
            (1000, "1,000"),
            (-1000, "-1,000"),
            (1505000, "1,505,000"),
            (1505000.0, "1,505,000"),
            (12.5, "12.5"),
            (1234.5, "1,234.5"),
            (1234.5678, "1,234.568"),
            (-1234.5678, "-1,234.568"),
            (1000.0004, "1,000"),
            (12.3456, "12.3456"),
        ],
    )
    def test_format_number_with_commas(self, num, expected):
        assert format_number_with_commas(num) == expected

    @pytest.mark.parametrize(
        "quarter, expected",
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (5, "5")],
    )
    def test_labeled_quarter(self, quarter, expected):
        assert labeled_quarter(quarter) == expected


class TestTable:
    """Element/value/context table."""

    def test_table_shape(self, financials):
        table = build_table(financials)
        assert isinstance(table, pd.DataFrame)
        assert list(table.columns) == ["key", "element", "value", "context"]
        assert len(table) == 11
        assert table["key"].tolist() == [str(i) for i in range(1, 12)]

    def test_row_order(self, financials):
        table = build_table(financials)
        assert table["element"].tolist() == [
            "Company Name",
            "Year",
            "Quarter",
            "Total Assets",
            "Total Liabilities",
            "Total Equity",
            "Gross Profit",
            "Net Profit",
            "Operating Profit",
            "Profit Before Tax",
            "EBITDA",
        ]

    def test_values_and_contexts(self, financials):
        table = build_table(financials).set_index("element")
        assert table.loc["Company Name", "value"] == "ABC Manufacturing Corp"
        assert table.loc["Total Assets", "value"] == 1505000
        assert table.loc["Total Assets", "context"] == "AsOf_2024-12-31"
        assert table.loc["EBITDA", "context"] == "Period_2024"
        assert pd.isna(table.loc["Year", "context"])

    def test_missing_values_show_placeholder(self, financials):
        table = build_table(financials).set_index("element")
        assert table.loc["Profit Before Tax", "value"] == MISSING

    def test_configured_contexts_are_shown(self):
        config = ExtractionConfig(
            balance_sheet_context="AsOf_2025-03-31", period_context="Period_2025Q1"
        )
        table = build_table(ExtractedFinancials(), config).set_index("element")
        assert table.loc["Total Equity", "context"] == "AsOf_2025-03-31"
        assert table.loc["Net Profit", "context"] == "Period_2025Q1"
        assert (table["value"] == MISSING).all()


class TestTree:
    """Structure view."""

    def test_groups(self, financials):
        tree = build_tree(financials)
        assert [node.key for node in tree] == ["company", "balance-sheet", "income-statement"]
        assert [node.title for node in tree] == [
            "Company Information",
            "Balance Sheet",
            "Income Statement",
        ]

    def test_children(self, financials):
        company, balance, income = build_tree(financials)
        assert [c.title for c in company.children] == [
            "Name: ABC Manufacturing Corp",
            "Year: 2024",
            "Quarter: 4",
        ]
        assert balance.children[0].title == "Total Assets: 1505000"
        assert [c.key for c in income.children] == [
            "gross-profit",
            "operating-profit",
            "profit-before-tax",
            "net-profit",
            "ebitda",
        ]
        assert income.children[2].title == "Profit Before Tax: N/A"


class TestXBRLViewer:
    def test_view_bytes(self):
        data = (FIXTURES_DIR / "abc_manufacturing_2024.xbrl").read_bytes()
        result = XBRLViewer().view_bytes(data)
        assert result.financials.company_name == "ABC Manufacturing Corp"
        assert len(result.table) == 11
        assert len(result.tree) == 3

    def test_view_undecodable_bytes_raises(self):
        with pytest.raises(UnicodeDecodeError):
            XBRLViewer().view_bytes(b"\xff\xfe\xfa")
