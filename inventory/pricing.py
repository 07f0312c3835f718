from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from .items import normalize_name
from .resolver import NameResolver


@dataclass
class LineDetail:
    name: str
    item_name: Optional[str]
    quantity: int
    price: Decimal
    is_out_of_stock: bool
    is_low_stock: bool

    @property
    def line_total(self):
        if self.is_out_of_stock:
            return Decimal("0")
        return self.price * self.quantity

    def to_dict(self):
        return {
            "name": self.name,
            "quantity": self.quantity,
            "price": float(self.price),
            "isOutOfStock": self.is_out_of_stock,
            "isLowStock": self.is_low_stock,
        }


@dataclass
class PricedOrder:
    total: Decimal = Decimal("0")
    item_details: List[LineDetail] = field(default_factory=list)

    @property
    def has_unavailable(self):
        return any(line.is_out_of_stock for line in self.item_details)

    def to_dict(self):
        return {
            "total": float(self.total),
            "itemDetails": [line.to_dict() for line in self.item_details],
        }


def price_order(item_names, items, resolver=None):
    """
    Price a flattened item list against an inventory snapshot.

    Lines are grouped per resolved item (or per unresolved name) in the order
    first seen. Unresolved and zero-stock lines are reported but add nothing
    to the total.
    """
    resolver = resolver or NameResolver()
    items = list(items)

    groups = {}
    for raw in item_names:
        item = resolver.resolve(raw, items)
        group_key = ("item", item.item_id) if item else ("name", normalize_name(raw))
        if group_key not in groups:
            groups[group_key] = {"name": str(raw).strip(), "item": item, "quantity": 0}
        groups[group_key]["quantity"] += 1

    priced = PricedOrder()
    for group in groups.values():
        item = group["item"]
        line = LineDetail(
            name=group["name"],
            item_name=item.item_name if item else None,
            quantity=group["quantity"],
            price=item.price if item else Decimal("0"),
            is_out_of_stock=item is None or item.is_out_of_stock,
            is_low_stock=bool(item and item.is_low_stock),
        )
        priced.total += line.line_total
        priced.item_details.append(line)
    return priced


def format_inr(amount):
    """1234.5 -> '₹1,234.50'"""
    return f"₹{Decimal(str(amount)):,.2f}"
