"""Main engine for XBRL financial extraction."""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from src.core.intake import DocumentIntake, is_xbrl_filename
from src.core.viewer import ViewerResult, XBRLViewer
from src.models import ExtractedFinancials, ExtractionConfig, IntakeResult
from src.parsers import XBRLParser

logger = logging.getLogger(__name__)


class XBRLExtractionEngine:
    """
    Entry point for extracting, ingesting and viewing XBRL documents.

    All collaborators share one ExtractionConfig.
    """

    REQUIRED_FIELDS = [
        "company_name",
        "year",
        "quarter",
        "total_assets",
        "total_liabilities",
        "total_equity",
        "gross_profit",
        "net_profit",
        "operating_profit",
        "profit_before_tax",
    ]

    def __init__(self, config: Optional[ExtractionConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Extraction settings (defaults apply when None)
        """
        self.config = config or ExtractionConfig()
        self.parser = XBRLParser(self.config)
        self.intake = DocumentIntake(self.config, parser=self.parser)
        self.viewer = XBRLViewer(self.config, parser=self.parser)

    def extract_text(self, xml_text: str) -> ExtractedFinancials:
        return self.parser.parse(xml_text)

    def extract_file(self, path: Path) -> ExtractedFinancials:
        """
        Extract financials from a document on disk.

        Args:
            path: Path to an XBRL instance document

        Returns:
            ExtractedFinancials record
        """
        data = Path(path).read_bytes()
        return self.parser.parse(data.decode(self.config.text_encoding))

    def list_documents(self, directory: Path) -> List[Path]:
        """XBRL documents directly inside a directory, sorted by name."""
        directory = Path(directory)
        return sorted(
            p
            for p in directory.iterdir()
            if p.is_file() and is_xbrl_filename(p.name, self.config.xbrl_extensions)
        )

    def extract_directory(self, directory: Path) -> pd.DataFrame:
        """
        Extract every XBRL document in a directory.

        Args:
            directory: Directory to scan (not recursive)

        Returns:
            DataFrame with a 'file' column plus one camelCase column per field
        """
        columns = ["file"] + list(ExtractedFinancials().to_record())
        rows = []
        for path in self.list_documents(directory):
            try:
                financials = self.extract_file(path)
            except UnicodeDecodeError as exc:
                logger.warning("Skipping %s: %s", path.name, exc)
                continue
            rows.append({"file": path.name, **financials.to_record()})

        logger.info("Extracted %d documents from %s", len(rows), directory)
        return pd.DataFrame(rows, columns=columns)

    def ingest(
        self,
        file_name: str,
        file_data: bytes,
        file_type: Optional[str] = None,
        name: Optional[str] = None,
    ) -> IntakeResult:
        return self.intake.ingest(file_name, file_data, file_type=file_type, name=name)

    def view(self, file_data: bytes) -> ViewerResult:
        return self.viewer.view_bytes(file_data)

    def validate_financials(self, financials: ExtractedFinancials) -> Dict[str, object]:
        """
        Check an extracted record for completeness and balance.

        Args:
            financials: Extracted record

        Returns:
            Dictionary with balance_check, missing_fields and status
        """
        missing = [f for f in self.REQUIRED_FIELDS if getattr(financials, f) is None]

        assets = financials.total_assets
        liabilities_and_equity = financials.total_liabilities_and_equity
        if assets is None or liabilities_and_equity is None:
            balance_check = {"checked": False, "passed": True, "difference": None}
        else:
            difference = assets - liabilities_and_equity
            balance_check = {
                "checked": True,
                "passed": abs(difference) < 0.5,
                "difference": difference,
            }

        passed = balance_check["passed"] and not missing
        return {
            "balance_check": balance_check,
            "missing_fields": missing,
            "status": "pass" if passed else "warn",
        }
