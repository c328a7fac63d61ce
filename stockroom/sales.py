import logging
from collections.abc import Callable, Iterable
from pydantic import ValidationError

from stockroom.errors import InvalidInput, NotFound
from stockroom.inventory import InventoryManager
from stockroom.schemas import SaleItem, SaleLineRequest, SaleRecord
from stockroom.state import StoreState
from stockroom.utils import now_ns

logger = logging.getLogger(__name__)


class SalesLedger:
    """
    Owns the append-only list of sale records.

    A sale is checked and fully built (line snapshots, timestamp, total)
    before any stock changes. Only then is stock decremented and the record
    appended, so a sale either applies completely or not at all.
    """

    def __init__(
        self,
        state: StoreState,
        inventory: InventoryManager,
        clock: Callable[[], int] = now_ns,
    ):
        self.state = state
        self.inventory = inventory
        self.clock = clock

    def record_sale(self, requested_items: Iterable) -> SaleRecord:
        lines = self._parse_lines(requested_items)

        # --- 1. VALIDATE ---
        for line in lines:
            if self.inventory.lookup(line.item_id) is None:
                raise NotFound(f"Item with ID {line.item_id} not found")

        # The same item may appear on several lines; check the combined demand.
        demand: dict[int, int] = {}
        for line in lines:
            demand[line.item_id] = demand.get(line.item_id, 0) + line.quantity
        for item_id, amount in demand.items():
            InventoryManager.check_stock(self.inventory.lookup(item_id), amount)

        # --- 2. BUILD ---
        # Everything that can still fail (snapshots, the clock, the record
        # itself) happens before the first stock change.
        sale_items = []
        total_amount = 0.0
        for line in lines:
            item = self.inventory.lookup(line.item_id)
            sale_items.append(
                SaleItem(
                    id=item.id,
                    name=item.name,
                    quantity=line.quantity,
                    unit_price=item.price,
                )
            )
            total_amount += item.price * line.quantity

        record = SaleRecord(
            timestamp=self.clock(),
            items=tuple(sale_items),
            total_amount=total_amount,
        )

        # --- 3. COMMIT ---
        for line in lines:
            self.inventory.decrement_stock(line.item_id, line.quantity)
        self.state.sales.append(record)
        logger.info(
            f"Recorded sale #{len(self.state.sales)}: "
            f"{len(sale_items)} line(s), total {total_amount:.2f}"
        )
        return record

    def get_sales(self) -> list[SaleRecord]:
        # Records are frozen, so the list copy is enough to keep the ledger private.
        return list(self.state.sales)

    @staticmethod
    def _parse_lines(requested_items: Iterable) -> list[SaleLineRequest]:
        """
        Accepts (item_id, quantity) pairs or mappings with those keys and
        returns validated line requests.
        """
        if isinstance(requested_items, (str, bytes)) or not isinstance(requested_items, Iterable):
            raise InvalidInput("requested_items must be a list of (item_id, quantity) pairs")

        lines = []
        for position, raw in enumerate(requested_items):
            try:
                if isinstance(raw, SaleLineRequest):
                    lines.append(raw)
                elif isinstance(raw, dict):
                    lines.append(SaleLineRequest(**raw))
                else:
                    item_id, quantity = raw
                    lines.append(SaleLineRequest(item_id=item_id, quantity=quantity))
            except ValidationError as e:
                raise InvalidInput(
                    f"line {position}: {InvalidInput.from_validation_error(e).message}"
                ) from e
            except (TypeError, ValueError) as e:
                raise InvalidInput(
                    f"line {position}: expected an (item_id, quantity) pair, got {raw!r}"
                ) from e

        if not lines:
            raise InvalidInput("a sale needs at least one line item")
        return lines
