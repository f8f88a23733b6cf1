"""Test suite for the XBRL extraction engine."""

import json

import pytest
from pathlib import Path
import pandas as pd
from pydantic import ValidationError

from src.core.engine import XBRLExtractionEngine
from src.models import ExtractedFinancials, ExtractionConfig, load_config

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


class TestConfig:
    """Tests for configuration loading."""

    def test_defaults(self):
        config = load_config()
        assert config.balance_sheet_context == "AsOf_2024-12-31"
        assert config.period_context == "Period_2024"
        assert config.xbrl_extensions == (".xbrl", ".xml")
        assert config.text_encoding == "utf-8"

    def test_load_from_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "balance_sheet_context": "AsOf_2024-03-31",
                    "period_context": "Period_2024Q1",
                    "xbrl_extensions": [".xbrl"],
                }
            ),
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.balance_sheet_context == "AsOf_2024-03-31"
        assert config.xbrl_extensions == (".xbrl",)

    def test_unknown_keys_rejected(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"fiscal_year": 2024}), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)


class TestXBRLExtractionEngine:
    """Tests for main engine."""

    @pytest.fixture
    def engine(self):
        """Create engine instance."""
        return XBRLExtractionEngine()

    def test_engine_initialization(self, engine):
        assert engine.parser.config is engine.config
        assert engine.intake.parser is engine.parser
        assert engine.viewer.parser is engine.parser

    def test_extract_file(self, engine):
        financials = engine.extract_file(FIXTURES_DIR / "abc_manufacturing_2024.xbrl")
        assert financials.company_name == "ABC Manufacturing Corp"
        assert financials.total_liabilities_and_equity == 1505000

    def test_extract_text(self, engine):
        assert engine.extract_text("<xbrl></xbrl>") == ExtractedFinancials()

    def test_extract_directory(self, engine):
        table = engine.extract_directory(FIXTURES_DIR)
        assert isinstance(table, pd.DataFrame)
        assert table["file"].tolist() == [
            "abc_manufacturing_2024.xbrl",
            "northwind_q1_2024.xml",
        ]
        assert {"companyName", "year", "quarter", "totalAssets", "ebitda"}.issubset(table.columns)
        northwind = table.set_index("file").loc["northwind_q1_2024.xml"]
        assert northwind["companyName"] == "Northwind Traders Inc."
        assert pd.isna(northwind["totalAssets"])

    def test_extract_directory_skips_other_files(self, engine, tmp_path):
        (tmp_path / "notes.txt").write_text("<xbrl></xbrl>", encoding="utf-8")
        (tmp_path / "broken.xbrl").write_bytes(b"\xff\xfe\xfa")
        (tmp_path / "empty.xbrl").write_text("<xbrl></xbrl>", encoding="utf-8")
        table = engine.extract_directory(tmp_path)
        assert table["file"].tolist() == ["empty.xbrl"]

    def test_extract_empty_directory(self, engine, tmp_path):
        table = engine.extract_directory(tmp_path)
        assert table.empty
        assert "companyName" in table.columns

    def test_configured_engine(self):
        engine = XBRLExtractionEngine(
            ExtractionConfig(
                balance_sheet_context="AsOf_2024-03-31",
                period_context="Period_2024Q1",
            )
        )
        financials = engine.extract_file(FIXTURES_DIR / "northwind_q1_2024.xml")
        assert financials.total_equity == 975000
        assert financials.ebitda == 125000

    def test_ingest(self, engine):
        data = (FIXTURES_DIR / "abc_manufacturing_2024.xbrl").read_bytes()
        result = engine.ingest("abc.xbrl", data)
        assert result.auto_filled
        assert result.financials.total_assets == 1505000

    def test_view(self, engine):
        data = (FIXTURES_DIR / "abc_manufacturing_2024.xbrl").read_bytes()
        result = engine.view(data)
        assert result.table.set_index("element").loc["Net Profit", "value"] == 141000

    def test_validate_financials(self, engine):
        financials = engine.extract_file(FIXTURES_DIR / "abc_manufacturing_2024.xbrl")
        report = engine.validate_financials(financials)
        assert report["balance_check"]["checked"] is True
        assert report["balance_check"]["passed"] is True
        assert report["balance_check"]["difference"] == 0
        assert report["missing_fields"] == ["profit_before_tax"]
        assert report["status"] == "warn"

    def test_validate_unbalanced(self, engine):
        financials = ExtractedFinancials(
            total_assets=100,
            total_liabilities=30,
            total_equity=50,
            total_liabilities_and_equity=80,
        )
        report = engine.validate_financials(financials)
        assert report["balance_check"]["passed"] is False
        assert report["balance_check"]["difference"] == 20

    def test_validate_complete_record_passes(self, engine):
        text = (FIXTURES_DIR / "northwind_q1_2024.xml").read_text(encoding="utf-8")
        engine = XBRLExtractionEngine(
            ExtractionConfig(
                balance_sheet_context="AsOf_2024-03-31",
                period_context="Period_2024Q1",
            )
        )
        report = engine.validate_financials(engine.extract_text(text))
        assert report["missing_fields"] == []
        assert report["status"] == "pass"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
