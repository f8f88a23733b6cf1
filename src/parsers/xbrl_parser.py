"""Parser for XBRL instance documents (.xbrl / .xml)."""

import logging
import math
import re
from datetime import date
from typing import Dict, Optional, Tuple

import pandas as pd
from lxml import etree

from src.models import ExtractedFinancials, ExtractionConfig

logger = logging.getLogger(__name__)

ISO_DATE_PREFIX = re.compile(r"\d{4}-\d{2}-\d{2}")


def _split_tag(element: etree._Element) -> str:
    tag = element.tag
    return tag.split("}", 1)[1] if tag.startswith("{") else tag


def qualified_name(element: etree._Element) -> str:
    """Return the element name as written in the source, e.g. 'us-gaap:Assets'."""
    local = _split_tag(element)
    return f"{element.prefix}:{local}" if element.prefix else local


def local_name(element: etree._Element) -> str:
    """Return the element name without any namespace prefix."""
    return _split_tag(element).rsplit(":", 1)[-1]


def text_content(element: etree._Element) -> str:
    """Concatenated descendant text of an element, trimmed."""
    return str(element.xpath("string()")).strip()


def parse_number(text: Optional[str]) -> Optional[float]:
    """
    Convert fact text to a float.

    Args:
        text: Raw element text

    Returns:
        Float value, or None for empty, non-numeric or non-finite text
    """
    if text is None:
        return None

    cleaned = text.strip()
    if not cleaned:
        return None

    value = pd.to_numeric(cleaned, errors="coerce")
    if pd.isna(value):
        return None

    value = float(value)
    return value if math.isfinite(value) else None


def parse_date(text: Optional[str]) -> Optional[date]:
    """Parse the YYYY-MM-DD prefix of an XBRL date; None when invalid."""
    if not text:
        return None
    prefix = text.strip()[:10]
    if not ISO_DATE_PREFIX.fullmatch(prefix):
        return None
    try:
        return date.fromisoformat(prefix)
    except ValueError:
        return None


def quarter_of(month: int) -> int:
    return math.ceil(month / 3)


class XBRLParser:
    """
    Extracts company identity, reporting period and core statement figures
    from a single XBRL instance document.

    Matching is by qualified element name and exact contextRef; the first
    match in document order wins.
    """

    COMPANY_NAME_TAG = "dei:EntityRegistrantName"
    PERIOD_TAG = "period"
    PERIOD_DATE_TAGS = ("endDate", "instant")

    BALANCE_SHEET_TAGS = {
        "total_assets": "us-gaap:Assets",
        "total_liabilities": "us-gaap:Liabilities",
        "total_equity": "us-gaap:StockholdersEquity",
    }
    INCOME_STATEMENT_TAGS = {
        "gross_profit": "us-gaap:GrossProfit",
        "net_profit": "us-gaap:NetIncomeLoss",
        "operating_profit": "us-gaap:OperatingIncomeLoss",
        "profit_before_tax": (
            "us-gaap:IncomeLossFromContinuingOperationsBeforeIncomeTaxes"
            "ExtraordinaryItemsNoncontrollingInterest"
        ),
    }

    def __init__(self, config: Optional[ExtractionConfig] = None):
        """
        Initialize parser.

        Args:
            config: Context ids to match facts against (defaults apply when None)
        """
        self.config = config or ExtractionConfig()

    def parse(self, xml_text: str) -> ExtractedFinancials:
        """
        Extract financial figures from XBRL text.

        Malformed or incomplete documents yield absent fields, never an error.

        Args:
            xml_text: Decoded document text

        Returns:
            ExtractedFinancials with every field independently optional

        Raises:
            TypeError: If xml_text is not a string
            UnicodeEncodeError: If xml_text cannot be represented as UTF-8
        """
        if not isinstance(xml_text, str):
            raise TypeError(f"XBRL content must be str, not {type(xml_text).__name__}")

        root = self._build_tree(xml_text)
        if root is None:
            return ExtractedFinancials()

        first_by_name, first_by_context = self._index_elements(root)
        values: Dict[str, object] = {}

        name_element = first_by_name.get(self.COMPANY_NAME_TAG)
        if name_element is not None:
            values["company_name"] = text_content(name_element)

        reporting_date = self._find_reporting_date(root)
        if reporting_date is not None:
            values["year"] = reporting_date.year
            values["quarter"] = quarter_of(reporting_date.month)

        for field, tag in self.BALANCE_SHEET_TAGS.items():
            values[field] = self._fact_value(
                first_by_context, tag, self.config.balance_sheet_context
            )
        for field, tag in self.INCOME_STATEMENT_TAGS.items():
            values[field] = self._fact_value(
                first_by_context, tag, self.config.period_context
            )

        liabilities = values["total_liabilities"]
        equity = values["total_equity"]
        if liabilities is not None and equity is not None:
            values["total_liabilities_and_equity"] = liabilities + equity

        # Operating income stands in for EBITDA; no D&A add-back.
        values["ebitda"] = values["operating_profit"]

        return ExtractedFinancials(**values)

    def _build_tree(self, xml_text: str) -> Optional[etree._Element]:
        """Parse leniently; None when no usable root element exists."""
        if not xml_text.strip():
            return None

        parser = etree.XMLParser(
            recover=True,
            encoding="utf-8",
            resolve_entities=False,
            no_network=True,
        )
        try:
            root = etree.fromstring(xml_text.encode("utf-8"), parser)
        except etree.XMLSyntaxError as exc:
            logger.debug("Document is not parseable as XML: %s", exc)
            return None

        if root is None:
            logger.debug("Document has no root element")
        return root

    @staticmethod
    def _index_elements(
        root: etree._Element,
    ) -> Tuple[Dict[str, etree._Element], Dict[Tuple[str, Optional[str]], etree._Element]]:
        """
        Record the first element per qualified name and per (name, contextRef).

        Args:
            root: Document root

        Returns:
            Tuple of (first element by name, first element by name and context)
        """
        first_by_name: Dict[str, etree._Element] = {}
        first_by_context: Dict[Tuple[str, Optional[str]], etree._Element] = {}

        for element in root.iter(etree.Element):
            name = qualified_name(element)
            first_by_name.setdefault(name, element)
            first_by_context.setdefault((name, element.get("contextRef")), element)

        return first_by_name, first_by_context

    def _find_reporting_date(self, root: etree._Element) -> Optional[date]:
        for element in root.iter(etree.Element):
            if local_name(element) not in self.PERIOD_DATE_TAGS:
                continue
            if not any(local_name(a) == self.PERIOD_TAG for a in element.iterancestors()):
                continue
            return parse_date(text_content(element))
        return None

    @staticmethod
    def _fact_value(
        first_by_context: Dict[Tuple[str, Optional[str]], etree._Element],
        tag: str,
        context_ref: str,
    ) -> Optional[float]:
        element = first_by_context.get((tag, context_ref))
        if element is None:
            return None
        value = parse_number(text_content(element))
        if value is None:
            logger.debug("Non-numeric value for %s in context %s", tag, context_ref)
        return value


def parse_xbrl(xml_text: str, config: Optional[ExtractionConfig] = None) -> ExtractedFinancials:
    """Convenience wrapper around XBRLParser.parse."""
    return XBRLParser(config).parse(xml_text)
