"""Extract core financial figures from XBRL documents on disk.

Accepts files and directories; directories are scanned (non-recursively) for
files with a configured XBRL extension.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import pandas as pd

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.core.engine import XBRLExtractionEngine
from src.models import load_config


logger = logging.getLogger("extract_financials")


def expand_paths(engine: XBRLExtractionEngine, paths: list[Path]) -> list[Path]:
    documents: list[Path] = []
    for path in paths:
        if path.is_dir():
            documents.extend(engine.list_documents(path))
        elif path.is_file():
            documents.append(path)
        else:
            logger.warning("No such file or directory: %s", path)
    return documents


def collect_records(engine: XBRLExtractionEngine, paths: list[Path]) -> pd.DataFrame:
    rows: list[dict[str, Any]] = []
    for path in expand_paths(engine, paths):
        try:
            financials = engine.extract_file(path)
        except UnicodeDecodeError as exc:
            logger.warning("Skipping %s: %s", path, exc)
            continue
        report = engine.validate_financials(financials)
        rows.append(
            {
                "file": str(path),
                **financials.to_record(),
                "validation_status": report["status"],
            }
        )
    return pd.DataFrame(rows)


def main() -> int:
    parser = argparse.ArgumentParser(description="Extract financial figures from XBRL documents.")
    parser.add_argument("paths", nargs="+", help="XBRL files or directories containing them.")
    parser.add_argument("--config", default=None, help="Extraction config JSON (context ids, extensions).")
    parser.add_argument("--format", choices=["json", "csv"], default="json", help="Output format.")
    parser.add_argument("--out", default=None, help="Write output to this file instead of stdout.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    engine = XBRLExtractionEngine(load_config(Path(args.config) if args.config else None))
    table = collect_records(engine, [Path(p) for p in args.paths])
    if table.empty:
        raise SystemExit("No XBRL documents found.")

    if args.format == "csv":
        output = table.to_csv(index=False)
    else:
        output = table.to_json(orient="records", indent=2)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(output, encoding="utf-8")
        print(f"Wrote {len(table)} records to {out_path}")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
