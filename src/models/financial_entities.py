"""Document intake and earning release form models."""

from pydantic import BaseModel, Field
from typing import Optional, List

from .xbrl_models import ExtractedFinancials


class UploadedDocument(BaseModel):
    """File accepted by the intake flow, ready for submission."""

    name: str = Field(..., description="Document display name")
    file_hash: str = Field(..., description="Hex SHA-256 digest of the file bytes")
    file_size: int = Field(..., ge=0, description="File size in bytes")
    file_type: str = Field(..., description="MIME type of the upload")
    file_data: bytes = Field(default=b"", repr=False, description="Raw file bytes")


class ConsolidatedBalanceSheetData(BaseModel):
    """Balance sheet section of an earning release."""

    total_assets: Optional[float] = None
    total_liabilities: Optional[float] = None
    total_equity: Optional[float] = None
    total_liabilities_and_equity: Optional[float] = None


class ConsolidatedIncomeData(BaseModel):
    """Income section of an earning release."""

    gross_profit: Optional[float] = None
    net_profit: Optional[float] = None
    operating_profit: Optional[float] = None
    profit_before_tax: Optional[float] = None
    ebitda: Optional[float] = None


class EarningReleaseDraft(BaseModel):
    """Pre-filled earning release form values.

    Absent values are left for manual entry.
    """

    company_name: Optional[str] = None
    year: Optional[int] = None
    quarter: Optional[int] = Field(None, ge=1, le=4)
    consolidated_balance_sheet_data: ConsolidatedBalanceSheetData = Field(
        default_factory=ConsolidatedBalanceSheetData
    )
    consolidated_income_data: ConsolidatedIncomeData = Field(
        default_factory=ConsolidatedIncomeData
    )

    @classmethod
    def from_financials(cls, financials: ExtractedFinancials) -> "EarningReleaseDraft":
        return cls(
            company_name=financials.company_name,
            year=financials.year,
            quarter=financials.quarter,
            consolidated_balance_sheet_data=ConsolidatedBalanceSheetData(
                total_assets=financials.total_assets,
                total_liabilities=financials.total_liabilities,
                total_equity=financials.total_equity,
                total_liabilities_and_equity=financials.total_liabilities_and_equity,
            ),
            consolidated_income_data=ConsolidatedIncomeData(
                gross_profit=financials.gross_profit,
                net_profit=financials.net_profit,
                operating_profit=financials.operating_profit,
                profit_before_tax=financials.profit_before_tax,
                ebitda=financials.ebitda,
            ),
        )

    def filled_fields(self) -> List[str]:
        """
        List dotted paths of the form fields that carry a value.

        Returns:
            Paths such as 'year' or 'consolidated_income_data.ebitda'
        """
        filled = []
        for name in ("company_name", "year", "quarter"):
            if getattr(self, name) is not None:
                filled.append(name)
        for section in ("consolidated_balance_sheet_data", "consolidated_income_data"):
            for name, value in getattr(self, section):
                if value is not None:
                    filled.append(f"{section}.{name}")
        return filled


class IntakeResult(BaseModel):
    """Outcome of ingesting one upload."""

    document: UploadedDocument
    is_xbrl: bool = False
    auto_filled: bool = False
    draft: Optional[EarningReleaseDraft] = None
    financials: Optional[ExtractedFinancials] = None
    message: str = ""


class TreeNode(BaseModel):
    """Node of the viewer structure tree."""

    title: str
    key: str
    children: List["TreeNode"] = Field(default_factory=list)
