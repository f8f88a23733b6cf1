"""Export the extraction of one document to a JSON file for golden regression approval."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.core.engine import XBRLExtractionEngine
from src.models import load_config


def main() -> int:
    parser = argparse.ArgumentParser(description="Export extracted financials to a golden JSON file.")
    parser.add_argument("document", help="Path to the XBRL instance document")
    parser.add_argument("--config", default=None, help="Optional extraction config JSON")
    parser.add_argument(
        "--out",
        default=None,
        help="Output JSON path (default: golden/<document stem>.json)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    document = Path(args.document)
    engine = XBRLExtractionEngine(load_config(Path(args.config) if args.config else None))
    financials = engine.extract_file(document)
    if financials.is_empty():
        raise SystemExit(f"Nothing extracted from {document}")

    out_path = Path(args.out) if args.out else Path("golden") / f"{document.stem}.json"
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(financials.to_record(), indent=2) + "\n", encoding="utf-8")

    print(f"Exported {len(financials.found_fields())} fields to {out_path}")
    print("Compare this JSON to the filing manually before adding it to golden/manifest.json.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
