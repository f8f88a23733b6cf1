"""Intake of uploaded documents with XBRL auto-fill."""

from __future__ import annotations

import hashlib
import logging
from typing import Iterable, Optional

from lxml import etree

from src.models import (
    EarningReleaseDraft,
    ExtractionConfig,
    IntakeResult,
    UploadedDocument,
)
from src.parsers import XBRLParser

logger = logging.getLogger(__name__)

XBRL_MIME_TYPE = "application/xml"
DEFAULT_MIME_TYPE = "application/octet-stream"

# Errors that mean "auto-fill unavailable", never "reject the upload".
AUTO_FILL_ERRORS = (UnicodeError, ValueError, TypeError, etree.LxmlError)


def compute_file_hash(data: bytes) -> str:
    """Hex SHA-256 digest of the file bytes."""
    return hashlib.sha256(data).hexdigest()


def is_xbrl_filename(file_name: str, extensions: Iterable[str]) -> bool:
    lowered = file_name.lower()
    return any(lowered.endswith(ext.lower()) for ext in extensions)


class DocumentIntake:
    """
    Accepts uploaded files for notarization.

    XBRL uploads are run through the extractor to pre-fill the earning
    release form. Extraction problems never block the upload itself.
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        parser: Optional[XBRLParser] = None,
    ):
        self.config = config or ExtractionConfig()
        self.parser = parser or XBRLParser(self.config)

    def ingest(
        self,
        file_name: str,
        file_data: bytes,
        file_type: Optional[str] = None,
        name: Optional[str] = None,
    ) -> IntakeResult:
        """
        Accept one upload and pre-fill what can be extracted.

        Args:
            file_name: Original file name (used for XBRL detection)
            file_data: Raw file bytes
            file_type: MIME type reported by the client, if any
            name: Display name; defaults to file_name

        Returns:
            IntakeResult with the uploaded document and optional draft
        """
        is_xbrl = is_xbrl_filename(file_name, self.config.xbrl_extensions)
        document = UploadedDocument(
            name=name or file_name,
            file_hash=compute_file_hash(file_data),
            file_size=len(file_data),
            file_type=file_type or (XBRL_MIME_TYPE if is_xbrl else DEFAULT_MIME_TYPE),
            file_data=file_data,
        )
        logger.info(
            "Accepted upload %s (%d bytes, sha256=%s)",
            file_name,
            document.file_size,
            document.file_hash,
        )

        if not is_xbrl:
            return IntakeResult(
                document=document,
                message=f"{file_name} file uploaded successfully.",
            )

        try:
            financials = self.parser.parse(file_data.decode(self.config.text_encoding))
        except AUTO_FILL_ERRORS as exc:
            logger.warning("Auto-fill unavailable for %s: %s", file_name, exc)
            return IntakeResult(
                document=document,
                is_xbrl=True,
                message=(
                    f"{file_name} file uploaded successfully, "
                    "but its data could not be read. Please fill in the form manually."
                ),
            )

        draft = EarningReleaseDraft.from_financials(financials)
        filled = draft.filled_fields()
        logger.info("Pre-filled %d form fields from %s", len(filled), file_name)

        return IntakeResult(
            document=document,
            is_xbrl=True,
            auto_filled=bool(filled),
            draft=draft,
            financials=financials,
            message=f"{file_name} file uploaded successfully.",
        )
