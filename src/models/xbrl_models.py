"""XBRL-specific data models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, Dict, Any, List


class ExtractedFinancials(BaseModel):
    """Normalized summary of one XBRL instance document.

    Every field is optional; ``None`` means the figure was not found in the
    source document. Serializes with camelCase keys (``companyName``, ...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    company_name: Optional[str] = Field(None, description="dei:EntityRegistrantName")
    year: Optional[int] = Field(None, description="Calendar year of the reporting end date")
    quarter: Optional[int] = Field(None, ge=1, le=4, description="Quarter of the reporting end date")

    total_assets: Optional[float] = Field(None, description="us-gaap:Assets")
    total_liabilities: Optional[float] = Field(None, description="us-gaap:Liabilities")
    total_equity: Optional[float] = Field(None, description="us-gaap:StockholdersEquity")
    total_liabilities_and_equity: Optional[float] = Field(
        None, description="Derived: total liabilities + total equity"
    )

    gross_profit: Optional[float] = Field(None, description="us-gaap:GrossProfit")
    net_profit: Optional[float] = Field(None, description="us-gaap:NetIncomeLoss")
    operating_profit: Optional[float] = Field(None, description="us-gaap:OperatingIncomeLoss")
    profit_before_tax: Optional[float] = Field(
        None, description="Income from continuing operations before income taxes"
    )
    ebitda: Optional[float] = Field(None, description="Operating income used as EBITDA")

    def to_record(self) -> Dict[str, Any]:
        """Flat camelCase dictionary, absent fields included as ``None``."""
        return self.model_dump(by_alias=True)

    def found_fields(self) -> List[str]:
        """Names of the fields that were found in the document."""
        return [name for name, value in self if value is not None]

    def is_empty(self) -> bool:
        return not self.found_fields()
