import argparse
import logging

from stockroom import data_handler, settings
from stockroom.logger import setup_logger
from stockroom.pipelines.inventory import InventoryImportPipeline
from stockroom.pipelines.sales import SalesImportPipeline
from stockroom.schemas import SummaryRow
from stockroom.store import Store

logger = logging.getLogger(__name__)


def run_process(store: Store | None = None, test_mode: bool = False) -> Store:
    """Main orchestration function: import inventory, replay sales, export the summary."""
    store = store if store is not None else Store()
    logger.info("--- Starting Store Import & Report Process ---")

    # 1. Inventory first, so the sales file can reference the new item ids
    InventoryImportPipeline(store, test_mode=test_mode).run()

    # 2. Sales
    SalesImportPipeline(store, test_mode=test_mode).run()

    # 3. Summary: financials, top sellers and reorder suggestions
    logger.info("🚀 STEP: SUMMARY REPORT")
    overview = store.financial_overview()
    logger.info(f"Total sales revenue:   {overview.total_sales_revenue:.2f}")
    logger.info(f"Total inventory value: {overview.total_inventory_value:.2f}")

    reorder = store.reorder_suggestions(settings.REORDER_THRESHOLD)
    if reorder:
        logger.warning(f"⚠️ {len(reorder)} item(s) below reorder threshold {settings.REORDER_THRESHOLD}:")
        for item in reorder:
            logger.warning(f"    - {item.id}: {item.name} ({item.quantity} left)")

    summary = store.summary_rows(settings.TOP_SELLERS_COUNT, settings.REORDER_THRESHOLD)
    data_handler.save_outputs(summary, f"{settings.REPORT_FILENAME_BASE}_summary", model=SummaryRow)
    if not test_mode:
        data_handler.post_to_webhook(
            validated_data=summary,
            metadata={"sales": len(store.get_sales()), "items": len(store.get_inventory())},
            report_type="summary",
        )

    logger.info("\n--- Process Finished Successfully ---")
    return store


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Import inventory and sales files and export store reports.")
    parser.add_argument("--test", action="store_true", help="Skip webhook posts.")
    args = parser.parse_args()

    setup_logger()
    run_process(test_mode=args.test)
