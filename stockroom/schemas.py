from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("name must be non-empty")
    return value


class InventoryItem(BaseModel):
    """
    A stocked product. Lives in the inventory table and is mutated in place
    by updates and sale commits, so assignments are validated too.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: int = Field(..., ge=0, strict=True, alias="ID")
    name: str = Field(..., alias="Name")
    quantity: int = Field(default=0, ge=0, strict=True, alias="Quantity")
    price: float = Field(default=0.0, ge=0, allow_inf_nan=False, alias="Price")

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _require_text(value)


class ItemUpdate(BaseModel):
    """
    A partial patch for an inventory item.

    Presence is tracked through ``model_fields_set``: a field the caller did
    not pass is left alone, while an explicit ``quantity=0`` is applied.
    Explicit ``None`` is rejected.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=0, strict=True)
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    @field_validator("name", "quantity", "price", mode="before")
    @classmethod
    def reject_explicit_none(cls, value):
        # Defaults are not validated, so None here was passed on purpose.
        if value is None:
            raise ValueError("value may be omitted but not null")
        return value

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _require_text(value)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class SaleLineRequest(BaseModel):
    """
    One requested line of a sale: which item and how many units.
    Ids and counts are strict ints, like every other id the store takes.
    """

    item_id: int = Field(..., ge=0, strict=True)
    quantity: int = Field(..., gt=0, strict=True)


class SaleItem(BaseModel):
    """Snapshot of an inventory item as it was sold on one sale line."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    quantity: int
    unit_price: float


class SaleRecord(BaseModel):
    """An immutable, completed transaction in the sales ledger."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(..., ge=0)  # nanoseconds
    items: tuple[SaleItem, ...]
    total_amount: float


class SaleLine(BaseModel):
    """
    Flattened, one-row-per-line view of the ledger used for CSV export.
    """

    model_config = ConfigDict(populate_by_name=True)

    sale_number: int = Field(..., ge=1, alias="Sale")
    timestamp: int = Field(..., alias="Timestamp")
    item_id: int = Field(..., alias="Item ID")
    name: str = Field(..., alias="Name")
    quantity: int = Field(..., alias="Quantity")
    unit_price: float = Field(..., alias="Unit Price")
    line_total: float = Field(..., alias="Line Total")


class FinancialOverview(BaseModel):
    total_sales_revenue: float
    total_inventory_value: float


class TopSeller(BaseModel):
    name: str
    quantity_sold: int


class SummaryRow(BaseModel):
    """A single metric in the exported store summary."""

    model_config = ConfigDict(populate_by_name=True)

    section: str = Field(..., alias="Section")
    label: str = Field(..., alias="Metric")
    value: float = Field(..., alias="Value")
