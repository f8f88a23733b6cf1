"""Table and structure views over extracted XBRL data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

import pandas as pd

from src.models import ExtractedFinancials, ExtractionConfig, TreeNode
from src.parsers import XBRLParser

MISSING = "N/A"

TABLE_COLUMNS = ["key", "element", "value", "context"]

# (field, table label, tree label, tree key, statement)
VIEW_FIELDS = [
    ("company_name", "Company Name", "Name", "company-name", None),
    ("year", "Year", "Year", "company-year", None),
    ("quarter", "Quarter", "Quarter", "company-quarter", None),
    ("total_assets", "Total Assets", "Total Assets", "assets", "BS"),
    ("total_liabilities", "Total Liabilities", "Total Liabilities", "liabilities", "BS"),
    ("total_equity", "Total Equity", "Total Equity", "equity", "BS"),
    ("gross_profit", "Gross Profit", "Gross Profit", "gross-profit", "IS"),
    ("net_profit", "Net Profit", "Net Profit", "net-profit", "IS"),
    ("operating_profit", "Operating Profit", "Operating Profit", "operating-profit", "IS"),
    ("profit_before_tax", "Profit Before Tax", "Profit Before Tax", "profit-before-tax", "IS"),
    ("ebitda", "EBITDA", "EBITDA", "ebitda", "IS"),
]

TREE_GROUPS = [
    ("Company Information", "company", ["company_name", "year", "quarter"]),
    ("Balance Sheet", "balance-sheet", ["total_assets", "total_liabilities", "total_equity"]),
    (
        "Income Statement",
        "income-statement",
        ["gross_profit", "operating_profit", "profit_before_tax", "net_profit", "ebitda"],
    ),
]


def format_number_with_commas(num: Union[int, float]) -> str:
    """
    Format numbers with magnitude above 999 using thousands separators.

    Args:
        num: Number to format

    Returns:
        '1,505,000' style text, or the plain number for small values
    """
    if isinstance(num, float) and num.is_integer():
        num = int(num)
    if num < -999 or num > 999:
        if isinstance(num, float):
            # At most three fraction digits, trailing zeros dropped.
            return f"{num:,.3f}".rstrip("0").rstrip(".")
        return f"{num:,}"
    return str(num)


def labeled_quarter(quarter: int) -> str:
    """Ordinal label for a quarter number ('1st'..'4th')."""
    labels = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th"}
    return labels.get(quarter, str(quarter))


def _display(value: object) -> object:
    if value is None:
        return MISSING
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def build_table(
    financials: ExtractedFinancials, config: Optional[ExtractionConfig] = None
) -> pd.DataFrame:
    """
    Build the element/value/context table shown by the viewer.

    Args:
        financials: Extracted record
        config: Supplies the context ids shown next to statement rows

    Returns:
        DataFrame with columns key, element, value, context
    """
    config = config or ExtractionConfig()
    contexts = {"BS": config.balance_sheet_context, "IS": config.period_context}

    rows = []
    for index, (name, label, _, _, statement) in enumerate(VIEW_FIELDS, start=1):
        rows.append(
            {
                "key": str(index),
                "element": label,
                "value": _display(getattr(financials, name)),
                "context": contexts.get(statement),
            }
        )
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def build_tree(financials: ExtractedFinancials) -> List[TreeNode]:
    """Group extracted values into company, balance sheet and income nodes."""
    labels = {name: (tree_label, key) for name, _, tree_label, key, _ in VIEW_FIELDS}

    tree = []
    for title, group_key, names in TREE_GROUPS:
        children = []
        for name in names:
            tree_label, key = labels[name]
            value = _display(getattr(financials, name))
            children.append(TreeNode(title=f"{tree_label}: {value}", key=key))
        tree.append(TreeNode(title=title, key=group_key, children=children))
    return tree


@dataclass
class ViewerResult:
    """Extracted record with its table and tree projections."""

    financials: ExtractedFinancials
    table: pd.DataFrame
    tree: List[TreeNode] = field(default_factory=list)


class XBRLViewer:
    """Re-runs extraction over stored document bytes for display."""

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        parser: Optional[XBRLParser] = None,
    ):
        self.config = config or ExtractionConfig()
        self.parser = parser or XBRLParser(self.config)

    def view_text(self, xml_text: str) -> ViewerResult:
        financials = self.parser.parse(xml_text)
        return ViewerResult(
            financials=financials,
            table=build_table(financials, self.config),
            tree=build_tree(financials),
        )

    def view_bytes(self, file_data: bytes) -> ViewerResult:
        """
        Decode stored file bytes and build both views.

        Raises:
            UnicodeDecodeError: If the bytes are not valid in the configured encoding
        """
        return self.view_text(file_data.decode(self.config.text_encoding))
