import pytest

from stockroom.dispatcher import PUBLIC_OPERATIONS, RequestDispatcher


@pytest.fixture
def dispatcher(store):
    return RequestDispatcher(store)


def _seed(dispatcher):
    dispatcher.dispatch("add_item", {"name": "Widget", "quantity": 10, "price": 2.5})
    dispatcher.dispatch("add_item", {"name": "Gadget", "quantity": 5, "price": 9.0})


def test_every_public_operation_is_routed(dispatcher):
    assert dispatcher.operations == list(PUBLIC_OPERATIONS)


def test_add_item_returns_new_id(dispatcher):
    outcome = dispatcher.dispatch("add_item", {"name": "Widget", "quantity": 10, "price": 2.5})

    assert outcome.ok is True
    assert outcome.result == 0
    assert outcome.error is None


def test_results_are_json_ready(dispatcher):
    _seed(dispatcher)

    inventory = dispatcher.dispatch("get_inventory").result
    sale = dispatcher.dispatch("record_sale", {"requested_items": [[0, 3], [1, 1]]}).result

    assert inventory == [
        {"id": 0, "name": "Widget", "quantity": 10, "price": 2.5},
        {"id": 1, "name": "Gadget", "quantity": 5, "price": 9.0},
    ]
    assert sale == {
        "timestamp": 1000,
        "items": [
            {"id": 0, "name": "Widget", "quantity": 3, "unit_price": 2.5},
            {"id": 1, "name": "Gadget", "quantity": 1, "unit_price": 9.0},
        ],
        "total_amount": 16.5,
    }
    assert dispatcher.dispatch("financial_overview").result == {
        "total_sales_revenue": 16.5,
        "total_inventory_value": 7 * 2.5 + 4 * 9.0,
    }
    assert dispatcher.dispatch("get_top_selling_items", {"n": 1}).result == [
        {"name": "Widget", "quantity_sold": 3}
    ]


def test_record_sale_accepts_object_lines(dispatcher):
    _seed(dispatcher)
    outcome = dispatcher.dispatch(
        "record_sale", {"requested_items": [{"item_id": 1, "quantity": 2}]}
    )
    assert outcome.ok
    assert dispatcher.dispatch("get_item_details", {"item_id": 1}).result["quantity"] == 3


def test_missing_item_details_is_not_an_error(dispatcher):
    outcome = dispatcher.dispatch("get_item_details", {"item_id": 5})
    assert outcome.ok is True
    assert outcome.result is None


def test_partial_update(dispatcher):
    _seed(dispatcher)
    outcome = dispatcher.dispatch("update_item", {"item_id": 0, "price": 3.0})

    assert outcome.ok and outcome.result is None
    item = dispatcher.dispatch("get_item_details", {"item_id": 0}).result
    assert item == {"id": 0, "name": "Widget", "quantity": 10, "price": 3.0}


@pytest.mark.parametrize(
    "operation, params, code",
    [
        ("remove_item", {"item_id": 9}, "NOT_FOUND"),
        ("update_item", {"item_id": 9, "name": "x"}, "NOT_FOUND"),
        ("record_sale", {"requested_items": [[0, 100]]}, "INSUFFICIENT_STOCK"),
        ("record_sale", {"requested_items": [[7, 1]]}, "NOT_FOUND"),
        ("record_sale", {"requested_items": []}, "INVALID_INPUT"),
        ("add_item", {"name": "", "quantity": 1, "price": 1.0}, "INVALID_INPUT"),
        ("add_item", {"name": "x", "quantity": -1, "price": 1.0}, "INVALID_INPUT"),
        ("add_item", {"name": "x"}, "INVALID_INPUT"),
        ("get_inventory", {"unexpected": 1}, "INVALID_INPUT"),
        ("update_item", {"item_id": 0, "quantity": None}, "INVALID_INPUT"),
        ("reorder_suggestions", {"threshold": -5}, "INVALID_INPUT"),
        ("get_item_details", {"item_id": [0]}, "INVALID_INPUT"),
        ("remove_item", {"item_id": "0"}, "INVALID_INPUT"),
        ("drop_tables", {}, "UNKNOWN_OPERATION"),
    ],
)
def test_errors_are_returned_as_values(dispatcher, operation, params, code):
    _seed(dispatcher)
    before = dispatcher.dispatch("get_inventory").result

    outcome = dispatcher.dispatch(operation, params)

    assert outcome.ok is False
    assert outcome.operation == operation
    assert outcome.error["code"] == code
    assert outcome.error["message"]
    assert dispatcher.dispatch("get_inventory").result == before
    assert dispatcher.dispatch("get_sales").result == []


def test_params_must_be_a_mapping(dispatcher):
    outcome = dispatcher.dispatch("get_inventory", [1, 2])
    assert outcome.error["code"] == "INVALID_INPUT"


@pytest.mark.parametrize("operation", [["add_item"], {"name": "add_item"}, None, 3])
def test_non_text_operation_names_are_unknown(dispatcher, operation):
    outcome = dispatcher.dispatch(operation, {})

    assert outcome.ok is False
    assert outcome.operation == str(operation)
    assert outcome.error["code"] == "UNKNOWN_OPERATION"
    assert dispatcher.dispatch("get_inventory").result == []
