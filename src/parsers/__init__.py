"""Parsers for XBRL instance documents."""

from .xbrl_parser import XBRLParser, parse_xbrl

__all__ = [
    "XBRLParser",
    "parse_xbrl",
]
