import logging
from typing import Optional
from pydantic import ValidationError

from stockroom.errors import InsufficientStock, InvalidInput, NotFound
from stockroom.schemas import InventoryItem, ItemUpdate
from stockroom.state import StoreState
from stockroom.utils import require_non_negative_int

logger = logging.getLogger(__name__)


def _as_key(item_id) -> int:
    if isinstance(item_id, bool) or not isinstance(item_id, int):
        raise InvalidInput(f"item id must be an integer, got {type(item_id).__name__}")
    return item_id


class InventoryManager:
    """
    Owns the inventory table: create/read/update/delete plus the derived
    queries (search, reorder suggestions). Read methods hand out copies so
    stored items can only change through this class.
    """

    def __init__(self, state: StoreState):
        self.state = state

    # --- Mutations ---

    def add_item(self, name: str, quantity: int, price: float) -> int:
        try:
            # Validate before allocating so a rejected item never burns an id.
            item = InventoryItem(id=self.state.next_item_id, name=name, quantity=quantity, price=price)
        except ValidationError as e:
            raise InvalidInput.from_validation_error(e) from e

        item_id = self.state.allocate_item_id()
        self.state.inventory[item_id] = item
        logger.info(f"Added item {item_id} '{item.name}' (qty={item.quantity}, price={item.price})")
        return item_id

    def update_item(self, item_id: int, **changes) -> None:
        item = self._require(item_id)
        try:
            patch = ItemUpdate(**changes)
        except ValidationError as e:
            raise InvalidInput.from_validation_error(e) from e

        # The patch is fully validated, so these assignments cannot fail halfway.
        applied = patch.changes()
        for field, value in applied.items():
            setattr(item, field, value)
        logger.info(f"Updated item {item_id}: {applied or 'no changes'}")

    def remove_item(self, item_id: int) -> None:
        item = self._require(item_id)
        del self.state.inventory[item_id]
        logger.info(f"Removed item {item_id} '{item.name}'")

    def decrement_stock(self, item_id: int, amount: int) -> None:
        """Takes ``amount`` units off an item's stock, refusing to go negative."""
        item = self._require(item_id)
        self.check_stock(item, amount)
        item.quantity -= amount

    # --- Queries ---

    def get_item_details(self, item_id: int) -> Optional[InventoryItem]:
        item = self.state.inventory.get(_as_key(item_id))
        return item.model_copy() if item is not None else None

    def get_inventory(self) -> list[InventoryItem]:
        return [item.model_copy() for item in self.state.inventory.values()]

    def search_item_by_name(self, query: str) -> list[InventoryItem]:
        if not isinstance(query, str):
            raise InvalidInput(f"query must be text, got {type(query).__name__}")
        needle = query.casefold()
        return [
            item.model_copy()
            for item in self.state.inventory.values()
            if needle in item.name.casefold()
        ]

    def reorder_suggestions(self, threshold: int) -> list[InventoryItem]:
        require_non_negative_int("threshold", threshold)
        return [
            item.model_copy()
            for item in self.state.inventory.values()
            if item.quantity < threshold
        ]

    # --- Helpers ---

    def lookup(self, item_id: int) -> Optional[InventoryItem]:
        """Returns the live (uncopied) item, for use by the sales ledger."""
        return self.state.inventory.get(item_id)

    @staticmethod
    def check_stock(item: InventoryItem, amount: int) -> None:
        if amount > item.quantity:
            raise InsufficientStock(
                f"Insufficient stock for item: {item.name} "
                f"(requested {amount}, available {item.quantity})"
            )

    def _require(self, item_id: int) -> InventoryItem:
        item = self.state.inventory.get(_as_key(item_id))
        if item is None:
            raise NotFound(f"Item with ID {item_id} not found")
        return item
