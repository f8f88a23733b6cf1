"""Core engine functionality for extracting and presenting XBRL financials."""

from .engine import XBRLExtractionEngine
from .intake import DocumentIntake, compute_file_hash
from .viewer import XBRLViewer, build_table, build_tree

__all__ = [
    "XBRLExtractionEngine",
    "DocumentIntake",
    "compute_file_hash",
    "XBRLViewer",
    "build_table",
    "build_tree",
]
