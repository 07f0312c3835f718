from dataclasses import dataclass, field
from typing import List, Optional

PREPARING = "preparing"
READY = "ready"
DELIVERED = "delivered"

STATUS_CHOICES = (
    (PREPARING, "Preparing"),
    (READY, "Ready"),
    (DELIVERED, "Delivered"),
)

# statuses an admin can set by hand; delivery has its own path
ACTIVE_STATUSES = (PREPARING, READY)

# most units of one item a single cart line may ask for
MAX_LINE_QUANTITY = 50


def flatten_lines(lines):
    """("burger", 2), "fries" -> ["burger", "burger", "fries"]"""
    flat = []
    for line in lines:
        if isinstance(line, str):
            flat.append(line)
            continue
        name, quantity = line
        try:
            quantity = int(quantity)
        except (OverflowError, TypeError, ValueError):
            raise ValueError(f"Invalid quantity for {name!r}: {quantity!r}")
        if quantity < 1:
            raise ValueError(f"Quantity for {name!r} must be at least 1")
        if quantity > MAX_LINE_QUANTITY:
            raise ValueError(f"Quantity for {name!r} must be at most {MAX_LINE_QUANTITY}")
        flat.extend([name] * quantity)
    return flat


@dataclass
class Order:
    id: str
    customer_name: str
    phone: str
    items: List[str]
    order_time: str
    status: str = PREPARING
    delivered_time: Optional[str] = None
    total: Optional[float] = None
    extra: dict = field(default_factory=dict)

    def to_dict(self):
        data = dict(self.extra)
        data.update({
            "id": self.id,
            "customerName": self.customer_name,
            "phone": self.phone,
            "items": list(self.items),
            "orderTime": self.order_time,
            "status": self.status,
        })
        if self.delivered_time is not None:
            data["deliveredTime"] = self.delivered_time
        if self.total is not None:
            data["total"] = self.total
        return data

    @classmethod
    def from_dict(cls, data):
        known = {"id", "customerName", "phone", "items", "orderTime", "status", "deliveredTime", "total"}
        items = data.get("items") or []
        if not isinstance(items, list):
            raise ValueError("items must be a list")
        return cls(
            id=str(data["id"]),
            customer_name=data.get("customerName") or "",
            phone=data.get("phone") or "",
            items=[str(i) for i in items],
            order_time=data.get("orderTime") or "",
            status=data.get("status") or PREPARING,
            delivered_time=data.get("deliveredTime") or data.get("deliveredAt"),
            total=data.get("total"),
            extra={k: v for k, v in data.items() if k not in known},
        )
