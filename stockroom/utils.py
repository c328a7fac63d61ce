import logging
import re
import time
from datetime import date, datetime
from pathlib import Path
import pandas as pd

from stockroom.errors import InvalidInput

logger = logging.getLogger(__name__)


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def now_ns() -> int:
    """Default sale clock: wall time in nanoseconds since the epoch."""
    return time.time_ns()


def require_non_negative_int(name: str, value) -> int:
    # bool is an int subclass but never a meaningful count.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidInput(f"{name} must be non-negative, got {value}")
    return value


def whole_number(value):
    """
    Turns a CSV cell like 10.0 (pandas upcasts int columns holding blanks to
    float) back into 10. Anything else is returned as-is for the store to judge.
    """
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def find_latest_report(directory: Path, prefix: str) -> tuple[Path, date] | None:
    """
    Finds the newest '<prefix><YYYY-MM-DD>.csv' file in a directory.
    Returns the path together with the date parsed from its name, or None.
    """
    if not directory.is_dir():
        return None

    date_pattern = re.compile(rf"^{re.escape(prefix)}(\d{{4}}-\d{{2}}-\d{{2}})\.csv$")
    candidates = []
    for path in directory.iterdir():
        match = date_pattern.match(path.name)
        if not match:
            continue
        try:
            report_date = datetime.strptime(match.group(1), "%Y-%m-%d").date()
        except ValueError:
            logger.warning(f"Ignoring {path.name}: '{match.group(1)}' is not a valid date.")
            continue
        candidates.append((report_date, path))

    if not candidates:
        return None

    report_date, path = max(candidates)
    return path, report_date


def load_csv(file_path: Path, skiprows: int = 0) -> pd.DataFrame | None:
    """
    A CSV loader with a multi-stage encoding fallback.
    It will attempt to read a file in the following order:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, a permissive fallback that can decode any byte.
    """
    try:
        return pd.read_csv(file_path, encoding="utf-8-sig", skiprows=skiprows)

    except UnicodeDecodeError:
        logger.info(f"UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'.")
        try:
            return pd.read_csv(file_path, encoding="latin-1", skiprows=skiprows)
        except (OSError, ValueError) as e_latin1:
            logger.error(f"Could not read {file_path.name} even with latin-1. Reason: {e_latin1}")
            return None

    except FileNotFoundError:
        logger.info(f"Report not found at {file_path}, skipping.")
        return None

    except pd.errors.EmptyDataError:
        logger.warning(f"{file_path.name} is empty, skipping.")
        return None

    except (OSError, ValueError) as e_general:
        logger.error(f"An unexpected error occurred while reading {file_path.name}. Reason: {e_general}")
        return None
