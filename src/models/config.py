"""Extraction configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_BALANCE_SHEET_CONTEXT = "AsOf_2024-12-31"
DEFAULT_PERIOD_CONTEXT = "Period_2024"


class ExtractionConfig(BaseModel):
    """Context ids and file handling used by the extractor and intake flow."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    balance_sheet_context: str = Field(
        DEFAULT_BALANCE_SHEET_CONTEXT,
        description="contextRef of point-in-time balance sheet facts",
    )
    period_context: str = Field(
        DEFAULT_PERIOD_CONTEXT,
        description="contextRef of income statement (duration) facts",
    )
    xbrl_extensions: Tuple[str, ...] = Field(
        (".xbrl", ".xml"),
        description="File name suffixes treated as XBRL instance documents",
    )
    text_encoding: str = Field("utf-8", description="Encoding of uploaded file bytes")


def load_config(path: Optional[Path] = None) -> ExtractionConfig:
    """
    Load extraction settings from a JSON file.

    Args:
        path: JSON file with ExtractionConfig keys, or None for defaults

    Returns:
        Validated ExtractionConfig
    """
    if path is None:
        return ExtractionConfig()

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return ExtractionConfig.model_validate(data)
