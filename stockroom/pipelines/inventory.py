import logging
import pandas as pd

from stockroom import parsers, settings
from stockroom.errors import StoreError
from stockroom.pipeline import DataPipeline
from stockroom.schemas import InventoryItem
from stockroom.store import Store
from stockroom.utils import whole_number

logger = logging.getLogger(__name__)


class InventoryImportPipeline(DataPipeline):
    """Adds every row of the newest inventory import file as a new item."""

    export_model = InventoryItem

    def __init__(self, store: Store, test_mode: bool = False):
        super().__init__("inventory", store, test_mode=test_mode)
        self.file_prefix = settings.INVENTORY_FILENAME_PREFIX

    def extract(self) -> pd.DataFrame | None:
        logger.info("--- Starting Inventory Import ---")
        path = self.locate_input()
        if path is None:
            return None
        return parsers.parse_inventory_report(path)

    def transform(self, df: pd.DataFrame) -> list[int]:
        logger.info("\n--- Adding Items ---")
        created_ids = []

        for row_number, row in enumerate(df.to_dict("records"), start=1):
            try:
                item_id = self.store.add_item(row["name"], whole_number(row["quantity"]), row["price"])
            except StoreError as e:
                self.status_summary["rejected"] += 1
                logger.warning(f"  > ⚠️  Row {row_number} skipped ({e.code}): {e.message}")
                continue
            created_ids.append(item_id)

        self.status_summary["applied"] = len(created_ids)
        logger.info(
            f"  > 📊 Added {len(created_ids)} item(s), "
            f"rejected {self.status_summary['rejected']} row(s)."
        )
        return created_ids

    def snapshot(self) -> list[InventoryItem]:
        return self.store.get_inventory()
