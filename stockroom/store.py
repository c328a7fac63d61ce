import threading
from collections.abc import Callable, Iterable
from functools import wraps
from typing import Optional

from stockroom import reporting
from stockroom.inventory import InventoryManager
from stockroom.sales import SalesLedger
from stockroom.schemas import (
    FinancialOverview,
    InventoryItem,
    SaleLine,
    SaleRecord,
    SummaryRow,
    TopSeller,
)
from stockroom.state import StoreState
from stockroom.utils import now_ns


def _exclusive(method):
    """Runs a store operation under the store's lock."""

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class Store:
    """
    Public entry point over one shared StoreState.

    Every operation, read or write, runs to completion under a single
    re-entrant lock, so a sale's validate and commit phases always see the
    same inventory and readers never observe a half-applied mutation.
    """

    def __init__(self, clock: Callable[[], int] = now_ns, state: Optional[StoreState] = None):
        self.state = state if state is not None else StoreState()
        self._lock = threading.RLock()
        self.inventory = InventoryManager(self.state)
        self.ledger = SalesLedger(self.state, self.inventory, clock=clock)

    # --- Inventory ---

    @_exclusive
    def add_item(self, name: str, quantity: int, price: float) -> int:
        return self.inventory.add_item(name, quantity, price)

    @_exclusive
    def update_item(self, item_id: int, **changes) -> None:
        self.inventory.update_item(item_id, **changes)

    @_exclusive
    def remove_item(self, item_id: int) -> None:
        self.inventory.remove_item(item_id)

    @_exclusive
    def get_item_details(self, item_id: int) -> Optional[InventoryItem]:
        return self.inventory.get_item_details(item_id)

    @_exclusive
    def get_inventory(self) -> list[InventoryItem]:
        return self.inventory.get_inventory()

    @_exclusive
    def search_item_by_name(self, query: str) -> list[InventoryItem]:
        return self.inventory.search_item_by_name(query)

    @_exclusive
    def reorder_suggestions(self, threshold: int) -> list[InventoryItem]:
        return self.inventory.reorder_suggestions(threshold)

    # --- Sales ---

    @_exclusive
    def record_sale(self, requested_items: Iterable) -> SaleRecord:
        return self.ledger.record_sale(requested_items)

    @_exclusive
    def get_sales(self) -> list[SaleRecord]:
        return self.ledger.get_sales()

    # --- Reporting ---

    @_exclusive
    def financial_overview(self) -> FinancialOverview:
        return reporting.financial_overview(self.state)

    @_exclusive
    def get_top_selling_items(self, n: int) -> list[TopSeller]:
        return reporting.get_top_selling_items(self.state, n)

    @_exclusive
    def sale_lines(self) -> list[SaleLine]:
        return reporting.flatten_sales(self.state)

    @_exclusive
    def summary_rows(self, top_n: int, reorder_threshold: int) -> list[SummaryRow]:
        return reporting.build_summary_rows(self.state, top_n, reorder_threshold)
