"""
Ingredient Price Sheet Importer
===============================

Updates ingredient prices in the pricing document from a supplier sheet.

Input:
- data/ingredient_prices.xlsx (or a path given on the command line)
  - Columns: "name", "price" and optionally "unit" (case-insensitive,
    Turkish headers "ad"/"fiyat"/"birim" also accepted)
  - Or: first two columns as (name, price)

Behaviour:
- Rows are matched to ingredients by name (case-insensitive, trimmed)
- Unknown names are reported, never created
- Blank or unparsable prices are skipped
- A unit cell, when present and valid, replaces the ingredient's unit

Usage:
    python tools/import_ingredient_prices.py [sheet.xlsx] [--dry-run]

Requirements:
    pip install pandas openpyxl

Related Files:
- services/repositories/ingredient_repository.py: price/unit validation
- services/config_manager.py: load/save of the document
"""

from __future__ import annotations
import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from services import config_manager  # noqa: E402
from services.errors import ValidationError  # noqa: E402
from services.repositories import IngredientRepository  # noqa: E402
from services.utils import parse_number  # noqa: E402
from services.utils.logging_setup import configure_logging  # noqa: E402

logger = logging.getLogger(__name__)


# ============================================================================
# CONFIGURATION
# ============================================================================

INPUT_XLSX = Path("data/ingredient_prices.xlsx")

NAME_HEADERS = ("name", "ad", "malzeme")
PRICE_HEADERS = ("price", "fiyat")
UNIT_HEADERS = ("unit", "birim")


@dataclass
class ImportReport:
    updated: List[str] = field(default_factory=list)
    unknown: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


# ============================================================================
# COLUMN DETECTION
# ============================================================================

def _find_column(columns: List[str], candidates: Tuple[str, ...]) -> Optional[str]:
    for col in columns:
        if str(col).strip().lower() in candidates:
            return col
    return None


def detect_columns(df: pd.DataFrame) -> Tuple[str, str, Optional[str]]:
    """
    Detect name, price and unit columns.

    Falls back to the first two columns for name and price.

    Returns:
        (name_column, price_column, unit_column or None)

    Raises:
        ValueError: If the sheet has fewer than two columns
    """
    columns = list(df.columns)
    name_col = _find_column(columns, NAME_HEADERS)
    price_col = _find_column(columns, PRICE_HEADERS)
    unit_col = _find_column(columns, UNIT_HEADERS)

    if name_col is None or price_col is None:
        if len(columns) < 2:
            raise ValueError("Sheet needs at least a name and a price column.")
        name_col, price_col = columns[0], columns[1]
    return name_col, price_col, unit_col


# ============================================================================
# IMPORT
# ============================================================================

def apply_price_sheet(document: Dict[str, Any], df: pd.DataFrame) -> Tuple[Dict[str, Any], ImportReport]:
    """
    Apply every usable sheet row to the document.

    Returns:
        (updated_document, report)
    """
    name_col, price_col, unit_col = detect_columns(df)
    by_name = {
        str(i.get("name", "")).strip().lower(): i["id"]
        for i in IngredientRepository.list_all(document)
    }

    report = ImportReport()
    updated = document
    for _, row in df.iterrows():
        raw_name = row[name_col]
        if pd.isna(raw_name) or not str(raw_name).strip():
            continue
        name = str(raw_name).strip()

        ingredient_id = by_name.get(name.lower())
        if ingredient_id is None:
            report.unknown.append(name)
            continue

        price = parse_number(row[price_col])
        if price is None:
            report.skipped.append(name)
            continue

        payload: Dict[str, Any] = {"price": price}
        if unit_col is not None and not pd.isna(row[unit_col]) and str(row[unit_col]).strip():
            payload["unit"] = str(row[unit_col]).strip()

        try:
            updated = IngredientRepository.update(updated, ingredient_id, payload)
        except ValidationError as e:
            logger.warning("Row %r skipped: %s", name, e)
            report.skipped.append(name)
            continue
        report.updated.append(name)

    return updated, report


def import_prices(xlsx_path: Path, dry_run: bool = False) -> ImportReport:
    """Read the sheet, apply it and save the document unless dry_run."""
    df = pd.read_excel(xlsx_path, engine="openpyxl")
    document = config_manager.load_document()
    updated, report = apply_price_sheet(document, df)
    if report.updated and not dry_run:
        config_manager.save_document(updated)
    return report


# ============================================================================
# MAIN
# ============================================================================

def main() -> None:
    configure_logging()
    parser = argparse.ArgumentParser(description="Update ingredient prices from an Excel sheet.")
    parser.add_argument("xlsx", nargs="?", type=Path, default=INPUT_XLSX)
    parser.add_argument("--dry-run", action="store_true")
    args = parser.parse_args()

    if not args.xlsx.exists():
        print(f"❌ Error: {args.xlsx} not found")
        sys.exit(1)

    report = import_prices(args.xlsx, dry_run=args.dry_run)
    print(f"✅ Updated {len(report.updated)} ingredient(s)")
    if report.unknown:
        print(f"⚠️  Unknown: {', '.join(report.unknown)}")
    if report.skipped:
        print(f"⚠️  Skipped: {', '.join(report.skipped)}")
    if args.dry_run:
        print("(dry run, nothing saved)")


if __name__ == "__main__":
    main()
