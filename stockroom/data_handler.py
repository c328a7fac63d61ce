import json
import logging
from pathlib import Path
from typing import Any, Optional
import pandas as pd
import requests
from pydantic import BaseModel

from . import settings
from . import utils

logger = logging.getLogger(__name__)


def save_outputs(
    validated_data: list[BaseModel],
    report_name: str,
    model: Optional[type[BaseModel]] = None,
) -> list[Path]:
    """
    Saves validated records to CSV and, if configured, to JSON, with dated filenames.
    Column headers come from the model's field aliases; pass ``model`` so an
    empty report still gets its header row. Returns the written paths.
    """
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.csv"
    json_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.json"
    written = []

    rows = [item.model_dump(mode="json", by_alias=True) for item in validated_data]
    if rows:
        df = pd.DataFrame(rows)
    else:
        df = pd.DataFrame(columns=_headers_for(model))
    df.to_csv(csv_path, index=False)
    written.append(csv_path)
    logger.info(f"✅ {report_name} saved to: {csv_path}")

    if settings.SAVE_JSON_OUTPUT:
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2, default=str)
        written.append(json_path)
        logger.info(f"✅ JSON output saved to: {json_path}")
    else:
        logger.info("Skipping JSON file save as per configuration.")

    return written


def post_to_webhook(
    validated_data: list[BaseModel],
    metadata: Optional[dict[str, Any]] = None,
    report_type: str = "report",
) -> bool:
    """
    Posts the validated data and a metadata block to the configured webhook.
    Failures are logged, never raised; returns whether the post succeeded.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting {report_type} data to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportType": report_type,
        "reportData": [
            item.model_dump(mode="json", by_alias=True) for item in validated_data
        ],
        "metadata": metadata or {},
    }

    try:
        response = requests.post(
            settings.WEBHOOK_URL, json=payload, timeout=settings.WEBHOOK_TIMEOUT
        )
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False

    logger.info(f"✅ {report_type.capitalize()} data successfully posted to webhook.")
    return True


def _headers_for(model: Optional[type[BaseModel]]) -> list[str]:
    if model is None:
        return []
    return [field.alias or name for name, field in model.model_fields.items()]
