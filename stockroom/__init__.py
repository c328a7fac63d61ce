from stockroom.dispatcher import DispatchResult, RequestDispatcher
from stockroom.errors import InsufficientStock, InvalidInput, NotFound, StoreError
from stockroom.store import Store

__all__ = [
    "DispatchResult",
    "InsufficientStock",
    "InvalidInput",
    "NotFound",
    "RequestDispatcher",
    "Store",
    "StoreError",
]
