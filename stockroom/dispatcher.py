"""
Request Dispatcher
==================
The remote-callable surface of the store: operation name + params in,
DispatchResult out.

Every outcome is returned as a value. Store errors, malformed parameters and
unknown operations all come back as ``ok=False`` with a machine-readable
error code; nothing raised by a request escapes ``dispatch``.
"""

import inspect
import logging
from typing import Any, Callable, Optional
from pydantic import BaseModel, TypeAdapter, ValidationError

from stockroom.errors import InvalidInput, StoreError
from stockroom.store import Store

logger = logging.getLogger(__name__)

UNKNOWN_OPERATION = "UNKNOWN_OPERATION"

PUBLIC_OPERATIONS = (
    "add_item",
    "update_item",
    "remove_item",
    "get_item_details",
    "get_inventory",
    "search_item_by_name",
    "reorder_suggestions",
    "record_sale",
    "get_sales",
    "financial_overview",
    "get_top_selling_items",
)

_json = TypeAdapter(Any)


class DispatchResult(BaseModel):
    """
    Outcome of one dispatched request.

    ``result`` holds the JSON-ready return value when ``ok`` is true;
    ``error`` holds ``{"code", "message"}`` when it is false.
    """

    operation: str
    ok: bool
    result: Any = None
    error: Optional[dict[str, str]] = None


class RequestDispatcher:
    """
    Routes named requests to a Store.

    Usage:
        dispatcher = RequestDispatcher(store)
        outcome = dispatcher.dispatch("add_item", {"name": "Widget", "quantity": 10, "price": 2.5})
        # outcome.ok, outcome.result == 0
    """

    def __init__(self, store: Store):
        self.store = store
        self._handlers: dict[str, Callable[..., Any]] = {
            name: getattr(store, name) for name in PUBLIC_OPERATIONS
        }

    @property
    def operations(self) -> list[str]:
        return list(self._handlers)

    def dispatch(self, operation: str, params: Optional[dict] = None) -> DispatchResult:
        handler = self._handlers.get(operation) if isinstance(operation, str) else None
        if handler is None:
            logger.info(f"Rejected unknown operation '{operation}'")
            return self._failure(
                operation, UNKNOWN_OPERATION, f"Unknown operation '{operation}'"
            )

        if params is None:
            params = {}
        if not isinstance(params, dict):
            return self._error(operation, InvalidInput("params must be a mapping of argument names to values"))

        try:
            bound = inspect.signature(handler).bind(**params)
        except TypeError as e:
            return self._error(operation, InvalidInput(f"bad arguments for {operation}: {e}"))

        try:
            value = handler(*bound.args, **bound.kwargs)
        except StoreError as e:
            return self._error(operation, e)
        except ValidationError as e:
            return self._error(operation, InvalidInput.from_validation_error(e))

        return DispatchResult(operation=operation, ok=True, result=_json.dump_python(value, mode="json"))

    def _error(self, operation: str, error: StoreError) -> DispatchResult:
        logger.info(f"Operation {operation} failed: [{error.code}] {error.message}")
        return self._failure(operation, error.code, error.message)

    @staticmethod
    def _failure(operation: str, code: str, message: str) -> DispatchResult:
        return DispatchResult(
            operation=str(operation), ok=False, error={"code": code, "message": message}
        )
