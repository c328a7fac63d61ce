import logging
import pandas as pd

from stockroom import parsers, settings
from stockroom.errors import StoreError
from stockroom.pipeline import DataPipeline
from stockroom.schemas import SaleLine, SaleRecord
from stockroom.store import Store
from stockroom.utils import whole_number

logger = logging.getLogger(__name__)


class SalesImportPipeline(DataPipeline):
    """
    Replays the newest sales import file against the store.

    Lines are grouped by order_id, in the order each order first appears,
    and every order becomes one record_sale call. A rejected order changes
    nothing (the store's sales are all-or-nothing) and the rest still run.
    """

    export_model = SaleLine

    def __init__(self, store: Store, test_mode: bool = False):
        super().__init__("sales", store, test_mode=test_mode)
        self.file_prefix = settings.SALES_FILENAME_PREFIX

    def extract(self) -> pd.DataFrame | None:
        logger.info("--- Starting Sales Import ---")
        path = self.locate_input()
        if path is None:
            return None
        return parsers.parse_sales_report(path)

    def transform(self, df: pd.DataFrame) -> list[SaleRecord]:
        logger.info("\n--- Recording Sales ---")
        recorded = []

        for order_id, order_df in df.groupby("order_id", sort=False):
            lines = [
                (whole_number(item_id), whole_number(quantity))
                for item_id, quantity in zip(order_df["item_id"].tolist(), order_df["quantity"].tolist())
            ]
            try:
                record = self.store.record_sale(lines)
            except StoreError as e:
                self.status_summary["rejected"] += 1
                logger.warning(f"  > ⚠️  Order {order_id} rejected ({e.code}): {e.message}")
                continue
            recorded.append(record)
            logger.info(f"  > Order {order_id}: {len(lines)} line(s), total {record.total_amount:.2f}")

        self.status_summary["applied"] = len(recorded)
        logger.info(
            f"  > 📊 Recorded {len(recorded)} sale(s), "
            f"rejected {self.status_summary['rejected']} order(s)."
        )
        return recorded

    def snapshot(self) -> list[SaleLine]:
        return self.store.sale_lines()
