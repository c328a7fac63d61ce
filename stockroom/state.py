from stockroom.schemas import InventoryItem, SaleRecord


class StoreState:
    """
    The single process-wide state container.

    Holds the inventory table (id -> item, insertion ordered), the next id to
    hand out, and the append-only sales ledger. Components receive this
    object by reference; it is never copied between operations.
    """

    def __init__(self):
        self.inventory: dict[int, InventoryItem] = {}
        self.next_item_id: int = 0
        self.sales: list[SaleRecord] = []

    def allocate_item_id(self) -> int:
        item_id = self.next_item_id
        self.next_item_id += 1
        return item_id
