"""
Read-only views over the inventory table and the sales ledger.

Everything here is recomputed on each call; nothing is cached.
"""

from stockroom.schemas import FinancialOverview, SaleLine, SummaryRow, TopSeller
from stockroom.state import StoreState
from stockroom.utils import require_non_negative_int


def financial_overview(state: StoreState) -> FinancialOverview:
    total_sales_revenue = sum(sale.total_amount for sale in state.sales)
    total_inventory_value = sum(
        item.quantity * item.price for item in state.inventory.values()
    )
    return FinancialOverview(
        total_sales_revenue=total_sales_revenue,
        total_inventory_value=total_inventory_value,
    )


def get_top_selling_items(state: StoreState, n: int) -> list[TopSeller]:
    """
    Ranks item names by total quantity sold across every sale line.
    Ties keep the order in which the names first appear in the ledger.
    """
    require_non_negative_int("n", n)

    # dicts keep insertion order, which gives first-appearance order for free
    totals: dict[str, int] = {}
    for sale in state.sales:
        for line in sale.items:
            totals[line.name] = totals.get(line.name, 0) + line.quantity

    # sorted() is stable, so equal totals stay in first-appearance order
    ranked = sorted(totals.items(), key=lambda entry: entry[1], reverse=True)
    return [TopSeller(name=name, quantity_sold=qty) for name, qty in ranked[:n]]


def flatten_sales(state: StoreState) -> list[SaleLine]:
    """One row per sale line, numbered by position in the ledger (1-based)."""
    rows = []
    for number, sale in enumerate(state.sales, start=1):
        for line in sale.items:
            rows.append(
                SaleLine(
                    sale_number=number,
                    timestamp=sale.timestamp,
                    item_id=line.id,
                    name=line.name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    line_total=round(line.unit_price * line.quantity, 2),
                )
            )
    return rows


def build_summary_rows(state: StoreState, top_n: int, reorder_threshold: int) -> list[SummaryRow]:
    """
    Flattens the financial overview, top sellers and reorder list into
    Section / Metric / Value rows for the exported summary report.
    """
    overview = financial_overview(state)
    rows = [
        SummaryRow(section="Financials", label="Total Sales Revenue",
                   value=round(overview.total_sales_revenue, 2)),
        SummaryRow(section="Financials", label="Total Inventory Value",
                   value=round(overview.total_inventory_value, 2)),
        SummaryRow(section="Financials", label="Sales Recorded", value=len(state.sales)),
    ]

    for seller in get_top_selling_items(state, top_n):
        rows.append(SummaryRow(section="Top Sellers", label=seller.name, value=seller.quantity_sold))

    require_non_negative_int("reorder_threshold", reorder_threshold)
    for item in state.inventory.values():
        if item.quantity < reorder_threshold:
            rows.append(
                SummaryRow(section="Reorder", label=f"{item.id}: {item.name}", value=item.quantity)
            )
    return rows
