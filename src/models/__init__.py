"""Data models and schemas for extracted financial data."""

from .financial_entities import (
    UploadedDocument,
    ConsolidatedBalanceSheetData,
    ConsolidatedIncomeData,
    EarningReleaseDraft,
    IntakeResult,
    TreeNode,
)
from .config import ExtractionConfig, load_config
from .xbrl_models import ExtractedFinancials

__all__ = [
    "UploadedDocument",
    "ConsolidatedBalanceSheetData",
    "ConsolidatedIncomeData",
    "EarningReleaseDraft",
    "IntakeResult",
    "TreeNode",
    "ExtractedFinancials",
    "ExtractionConfig",
    "load_config",
]
