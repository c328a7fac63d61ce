import pytest

from stockroom import reporting
from stockroom.errors import InvalidInput
from stockroom.schemas import TopSeller


def test_financial_overview_of_empty_store(store):
    overview = store.financial_overview()
    assert overview.total_sales_revenue == 0.0
    assert overview.total_inventory_value == 0.0


def test_financial_overview_tracks_sales_and_stock(seeded_store):
    assert seeded_store.financial_overview().total_inventory_value == pytest.approx(70.0)

    seeded_store.record_sale([(0, 3), (1, 1)])
    seeded_store.record_sale([(1, 2)])
    overview = seeded_store.financial_overview()

    assert overview.total_sales_revenue == pytest.approx(16.5 + 18.0)
    assert overview.total_inventory_value == pytest.approx(7 * 2.5 + 2 * 9.0)
    assert overview.total_inventory_value == pytest.approx(
        sum(item.quantity * item.price for item in seeded_store.get_inventory())
    )


def test_revenue_is_not_affected_by_later_price_changes(seeded_store):
    seeded_store.record_sale([(0, 2)])
    seeded_store.update_item(0, price=100.0)
    seeded_store.remove_item(1)

    assert seeded_store.financial_overview().total_sales_revenue == pytest.approx(5.0)


@pytest.fixture
def busy_store(store):
    for name in ("Apple", "Banana", "Cherry", "Date"):
        store.add_item(name, 50, 1.0)
    store.record_sale([(1, 2), (0, 3)])
    store.record_sale([(2, 5), (0, 2)])
    store.record_sale([(3, 1), (1, 3)])
    return store


def test_top_selling_items_sorted_descending(busy_store):
    busy_store.record_sale([(3, 9)])

    top = busy_store.get_top_selling_items(2)

    assert top == [
        TopSeller(name="Date", quantity_sold=10),
        TopSeller(name="Banana", quantity_sold=5),
    ]


def test_top_selling_ties_keep_first_appearance_order(busy_store):
    # Banana and Apple both sold 5, Cherry 5 too; Banana appeared first.
    ranked = busy_store.get_top_selling_items(10)

    assert [(entry.name, entry.quantity_sold) for entry in ranked] == [
        ("Banana", 5),
        ("Apple", 5),
        ("Cherry", 5),
        ("Date", 1),
    ]


def test_top_selling_items_limits_and_conserves_totals(busy_store):
    all_sold = sum(
        line.quantity for sale in busy_store.get_sales() for line in sale.items
    )
    full = busy_store.get_top_selling_items(100)

    for n in range(0, 6):
        top = busy_store.get_top_selling_items(n)
        assert len(top) == min(n, 4)
        assert top == full[:n]
        quantities = [entry.quantity_sold for entry in top]
        assert quantities == sorted(quantities, reverse=True)

    assert busy_store.get_top_selling_items(0) == []
    assert sum(entry.quantity_sold for entry in full) == all_sold


def test_top_selling_aggregates_by_name(store):
    store.add_item("Widget", 10, 1.0)
    store.add_item("Widget", 10, 2.0)
    store.add_item("Gadget", 10, 1.0)
    store.record_sale([(2, 3), (0, 2)])
    store.record_sale([(1, 2)])

    assert store.get_top_selling_items(5) == [
        TopSeller(name="Widget", quantity_sold=4),
        TopSeller(name="Gadget", quantity_sold=3),
    ]


def test_top_selling_items_with_no_sales(seeded_store):
    assert seeded_store.get_top_selling_items(3) == []


@pytest.mark.parametrize("n", [-1, 2.5, "3"])
def test_top_selling_items_rejects_bad_n(seeded_store, n):
    with pytest.raises(InvalidInput):
        seeded_store.get_top_selling_items(n)


def test_flatten_sales_numbers_lines_by_sale(seeded_store):
    seeded_store.record_sale([(0, 3), (1, 1)])
    seeded_store.record_sale([(1, 2)])

    rows = reporting.flatten_sales(seeded_store.state)

    assert [(row.sale_number, row.item_id, row.quantity, row.line_total) for row in rows] == [
        (1, 0, 3, 7.5),
        (1, 1, 1, 9.0),
        (2, 1, 2, 18.0),
    ]
    assert rows[0].timestamp == 1000
    assert rows[2].timestamp == 2000


def test_summary_rows(seeded_store):
    seeded_store.record_sale([(1, 4)])

    rows = seeded_store.summary_rows(top_n=5, reorder_threshold=2)
    by_section = {}
    for row in rows:
        by_section.setdefault(row.section, []).append((row.label, row.value))

    assert by_section["Financials"] == [
        ("Total Sales Revenue", 36.0),
        ("Total Inventory Value", 34.0),
        ("Sales Recorded", 1),
    ]
    assert by_section["Top Sellers"] == [("Gadget", 4)]
    assert by_section["Reorder"] == [("1: Gadget", 1)]
