import logging
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Any, Optional
import pandas as pd
from pydantic import BaseModel

from stockroom import settings, data_handler, utils
from stockroom.store import Store

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for import pipelines (Inventory, Sales).
    Follows an Extract -> Transform -> Load (ETL) pattern, where Transform
    applies each parsed row to the store and Load exports the resulting state.
    """

    #: prefix of the '<prefix><YYYY-MM-DD>.csv' input file this pipeline reads
    file_prefix: str = ""
    #: model used for the exported snapshot's headers
    export_model: type[BaseModel]

    def __init__(self, report_type: str, store: Store, test_mode: bool = False):
        self.report_type = report_type
        self.store = store
        self.test_mode = test_mode
        # Status summary tracks where the data came from and how much of it was applied
        self.status_summary: dict[str, Any] = {
            "source": None,
            "report_date": None,
            "applied": 0,
            "rejected": 0,
        }

    def run(self) -> list[Any]:
        """
        Orchestrates the pipeline execution. Returns what the transform step applied.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} IMPORT")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()
        if raw_data is None or raw_data.empty:
            logger.warning(f"⚠️ No data extracted for {self.report_type}. Exporting current state only.")
            self.load()
            return []

        # --- 2. TRANSFORM ---
        applied = self.transform(raw_data)

        # --- 3. LOAD ---
        self.load()

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return applied

    def locate_input(self) -> Optional[Path]:
        """Finds the newest input file for this pipeline and records it in the summary."""
        found_info = utils.find_latest_report(settings.INPUT_DIR, self.file_prefix)
        if not found_info:
            logger.warning(f"  > ⚠️  File missing ({self.file_prefix}*.csv in {settings.INPUT_DIR}). Skipping.")
            return None

        path, report_date = found_info
        logger.info(f"  > Found: {path.name} (File Date: {report_date})")
        self.status_summary["source"] = path.name
        self.status_summary["report_date"] = report_date
        return path

    @abstractmethod
    def extract(self) -> pd.DataFrame | None:
        """
        Responsible for finding the input file and running its parser.
        """
        pass

    @abstractmethod
    def transform(self, df: pd.DataFrame) -> list[Any]:
        """
        Applies each parsed row to the store, counting applied and rejected rows.
        """
        pass

    @abstractmethod
    def snapshot(self) -> list[BaseModel]:
        """
        Returns the store state this pipeline exports after it has run.
        """
        pass

    def load(self):
        """
        Prints the status summary, saves the snapshot to disk and posts it to the webhook.
        """
        # 1. Print Status Summary
        logger.info("\n--- Final Status Summary ---")
        for key, value in self.status_summary.items():
            if isinstance(value, date):
                value = value.isoformat()
            logger.info(f"{key}: {value if value is not None else 'No data'}")

        # 2. Save Outputs (CSV/JSON)
        records = self.snapshot()
        report_name = f"{settings.REPORT_FILENAME_BASE}_{self.report_type}"
        data_handler.save_outputs(records, report_name, model=self.export_model)

        # 3. Post to Webhook
        if not self.test_mode:
            data_handler.post_to_webhook(
                validated_data=records,
                metadata=self._metadata(),
                report_type=self.report_type,
            )
        else:
            logger.info("🧪 Test Mode: Skipping webhook post.")

    def _metadata(self) -> dict[str, Any]:
        return {
            key: value.isoformat() if isinstance(value, date) else value
            for key, value in self.status_summary.items()
        }
