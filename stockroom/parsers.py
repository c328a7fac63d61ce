import logging
from pathlib import Path
import pandas as pd

from . import settings
from .utils import load_csv

logger = logging.getLogger(__name__)


def _normalize_columns(
    df: pd.DataFrame, aliases: dict[str, str], required: list[str], source_name: str
) -> pd.DataFrame | None:
    """
    A reusable helper for import reports.
    - Maps known header spellings (case and whitespace insensitive) to internal names.
    - Drops columns we do not know about.
    - Fails (returns None) when a required column is missing.
    """
    rename_map = {}
    for column in df.columns:
        key = str(column).strip().lower()
        if key in aliases and aliases[key] not in rename_map.values():
            rename_map[column] = aliases[key]

    df = df.rename(columns=rename_map)
    missing = [col for col in required if col not in df.columns]
    if missing:
        logger.error(f"❌ {source_name} is missing required column(s): {', '.join(missing)}")
        return None

    df = df[required].copy()
    # Blank lines in hand-edited CSVs come through as all-NaN rows.
    return df.dropna(how="all").reset_index(drop=True)


def parse_inventory_report(path: Path) -> pd.DataFrame | None:
    """
    Loads an inventory import file into 'name', 'quantity', 'price' columns.
    Values are coerced but not validated; the store rejects bad rows itself.
    """
    df = load_csv(path)
    if df is None:
        return None

    df = _normalize_columns(
        df, settings.INVENTORY_COLUMN_ALIASES, ["name", "quantity", "price"], path.name
    )
    if df is None:
        return None

    df["name"] = df["name"].fillna("").astype(str).str.strip()
    df["quantity"] = pd.to_numeric(df["quantity"], errors="coerce")
    df["price"] = pd.to_numeric(df["price"], errors="coerce")

    logger.info(f"✅ Parsed {path.name} successfully ({len(df)} rows).")
    return df


def parse_sales_report(path: Path) -> pd.DataFrame | None:
    """
    Loads a sales import file of 'order_id', 'item_id', 'quantity' lines.
    Lines sharing an order_id make up one sale.
    """
    df = load_csv(path)
    if df is None:
        return None

    df = _normalize_columns(
        df, settings.SALES_COLUMN_ALIASES, ["order_id", "item_id", "quantity"], path.name
    )
    if df is None:
        return None

    df = df[df["order_id"].notna()].copy()
    df["order_id"] = df["order_id"].astype(str).str.strip()
    df["item_id"] = pd.to_numeric(df["item_id"], errors="coerce")
    df["quantity"] = pd.to_numeric(df["quantity"], errors="coerce")

    logger.info(f"✅ Parsed {path.name} successfully ({len(df)} lines).")
    return df
