"""Quick start script to try the extractor on the bundled sample."""

from pathlib import Path
from src.core.engine import XBRLExtractionEngine
from src.core.viewer import format_number_with_commas, labeled_quarter

# Initialize engine
sample = Path(__file__).parent / 'tests' / 'fixtures' / 'abc_manufacturing_2024.xbrl'
print(f"Loading sample from: {sample}")

engine = XBRLExtractionEngine()
result = engine.view(sample.read_bytes())
financials = result.financials

print(f"\n{'=' * 50}")
print(f"Company: {financials.company_name}")
if financials.quarter is not None:
    print(f"Period: {labeled_quarter(financials.quarter)} quarter {financials.year}")
if financials.total_assets is not None:
    print(f"Total assets: {format_number_with_commas(financials.total_assets)}")
print(f"{'=' * 50}")

print("\nTable view:")
print(result.table.to_string(index=False))

print("\nStructure view:")
for group in result.tree:
    print(group.title)
    for child in group.children:
        print(f"  {child.title}")

report = engine.validate_financials(financials)
print(f"\nValidation status: {report['status']} (missing: {report['missing_fields']})")

print("\nNext steps:")
print("1. Run 'python tools/extract_financials.py <files or dirs>' on your own filings")
print("2. Run 'pytest tests/' to run unit tests")
