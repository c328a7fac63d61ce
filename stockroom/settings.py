import os
from pathlib import Path
from dotenv import load_dotenv


def env_non_negative_int(name: str, default: str) -> int:
    """Reads a whole, non-negative count from the environment, failing fast on bad values."""
    raw = os.getenv(name, default)
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be a whole number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Filename Configuration ---
# Import files are expected as <prefix><YYYY-MM-DD>.csv, newest date wins.
INVENTORY_FILENAME_PREFIX = os.getenv("INVENTORY_FILENAME_PREFIX", "inventory_import_")
SALES_FILENAME_PREFIX = os.getenv("SALES_FILENAME_PREFIX", "sales_import_")
REPORT_FILENAME_BASE = os.getenv("REPORT_FILENAME_BASE", "store")
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "false").lower() in ("1", "true", "yes")

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")
WEBHOOK_TIMEOUT = float(os.getenv("WEBHOOK_TIMEOUT", "15"))

# --- Shared Business Logic ---
# Items with stock strictly below this are flagged in the summary report.
REORDER_THRESHOLD = env_non_negative_int("REORDER_THRESHOLD", "5")
TOP_SELLERS_COUNT = env_non_negative_int("TOP_SELLERS_COUNT", "10")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Column aliases accepted by the CSV parsers, mapped to internal field names.
INVENTORY_COLUMN_ALIASES = {
    "name": "name",
    "item": "name",
    "item name": "name",
    "product": "name",
    "quantity": "quantity",
    "qty": "quantity",
    "stock": "quantity",
    "price": "price",
    "unit price": "price",
    "unit_price": "price",
}

SALES_COLUMN_ALIASES = {
    "order_id": "order_id",
    "order id": "order_id",
    "order": "order_id",
    "item_id": "item_id",
    "item id": "item_id",
    "id": "item_id",
    "quantity": "quantity",
    "qty": "quantity",
    "units": "quantity",
}
