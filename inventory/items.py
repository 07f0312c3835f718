from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation

from django.conf import settings

DEFAULT_MIN_STOCK = 5

AVAILABLE = "Available"
NEED_TO_RESTOCK = "Need to Restock"
NOT_AVAILABLE = "Not Available"

STATUS_CHOICES = (
    (AVAILABLE, "Available"),
    (NEED_TO_RESTOCK, "Need to Restock"),
    (NOT_AVAILABLE, "Not Available"),
)


def default_min_stock():
    return getattr(settings, "INVENTORY_DEFAULT_MIN_STOCK", DEFAULT_MIN_STOCK)


def stock_status(quantity, min_stock=DEFAULT_MIN_STOCK):
    if quantity == 0:
        return NOT_AVAILABLE
    if quantity < min_stock:
        return NEED_TO_RESTOCK
    return AVAILABLE


def to_decimal(value):
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise ValueError(f"Invalid price: {value!r}")
    # NaN and Infinity neither compare nor serialize to JSON
    if not value.is_finite():
        raise ValueError(f"Invalid price: {value!r}")
    return value


def to_count(value, field):
    try:
        return int(value)
    except (OverflowError, TypeError, ValueError):
        raise ValueError(f"Invalid {field}: {value!r}")


def normalize_name(name):
    """Lowercase and collapse whitespace; the comparison key for item names."""
    return " ".join(str(name or "").split()).lower()


@dataclass(frozen=True)
class InventoryItem:
    item_id: str
    item_name: str
    price: Decimal
    quantity: int
    min_stock: int = DEFAULT_MIN_STOCK

    def __post_init__(self):
        if not str(self.item_name or "").strip():
            raise ValueError("item_name is required")
        object.__setattr__(self, "price", to_decimal(self.price))
        object.__setattr__(self, "quantity", to_count(self.quantity, "quantity"))
        object.__setattr__(self, "min_stock", to_count(self.min_stock, "min_stock"))
        if self.price < 0:
            raise ValueError("price must not be negative")
        if self.quantity < 0:
            raise ValueError("quantity must not be negative")
        if self.min_stock < 0:
            raise ValueError("min_stock must not be negative")

    @property
    def key(self):
        return normalize_name(self.item_name)

    @property
    def status(self):
        return stock_status(self.quantity, self.min_stock)

    @property
    def is_out_of_stock(self):
        return self.quantity == 0

    @property
    def is_low_stock(self):
        return 0 < self.quantity < self.min_stock

    def with_changes(self, **fields):
        fields.pop("item_id", None)
        return replace(self, **fields)

    def to_dict(self):
        return {
            "item_id": self.item_id,
            "item_name": self.item_name,
            "price": float(self.price),
            "quantity": self.quantity,
            "min_stock": self.min_stock,
        }

    @classmethod
    def from_dict(cls, data):
        # Older menus may lack stock fields
        quantity = data.get("quantity")
        price = data.get("price")
        min_stock = data.get("min_stock")
        return cls(
            item_id=str(data["item_id"]),
            item_name=data["item_name"],
            price=0 if price is None else price,
            quantity=0 if quantity is None else quantity,
            min_stock=default_min_stock() if min_stock is None else min_stock,
        )
