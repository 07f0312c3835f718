import logging
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from django.conf import settings
from django.utils import timezone

from inventory.pricing import price_order
from inventory.stock import check_availability, reduce_stock
from inventory.storage import DatabaseStorage, read_collection, write_collection
from inventory.store import InventoryStore

from .records import ACTIVE_STATUSES, DELIVERED, PREPARING, READY, Order, flatten_lines

logger = logging.getLogger(__name__)

ACTIVE_ORDERS_KEY = "activeOrders"
DELIVERED_ORDERS_KEY = "deliveredOrders"

# delivery outcomes
NOT_FOUND = "not_found"
NOT_READY = "not_ready"
UNAVAILABLE = "unavailable"
NO_CHANGE = "no_change"


@dataclass
class DeliveryResult:
    delivered: bool
    order: Optional[Order] = None
    reason: Optional[str] = None
    unavailable_items: List[str] = field(default_factory=list)

    def __bool__(self):
        return self.delivered


def new_order_id():
    return f"ORD-{uuid.uuid4().hex[:8].upper()}"


class OrderBook:
    """Active and delivered orders, priced live against the inventory."""

    def __init__(self, storage=None, inventory=None):
        self.storage = storage or DatabaseStorage()
        self.inventory = inventory or InventoryStore(storage=self.storage)
        self.active_key = getattr(settings, "ACTIVE_ORDERS_STORAGE_KEY", ACTIVE_ORDERS_KEY)
        self.delivered_key = getattr(settings, "DELIVERED_ORDERS_STORAGE_KEY", DELIVERED_ORDERS_KEY)

    # ---------------------------
    # Collections
    # ---------------------------
    def _load(self, key):
        orders = []
        for record in read_collection(self.storage, key):
            try:
                orders.append(Order.from_dict(record))
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning("Skipping malformed order under %r: %s", key, exc)
        return orders

    def _save(self, key, orders):
        write_collection(self.storage, key, [o.to_dict() for o in orders])

    def active_orders(self):
        return [o for o in self._load(self.active_key) if o.status in ACTIVE_STATUSES]

    def delivered_orders(self):
        return self._load(self.delivered_key)

    def get(self, order_id):
        return next((o for o in self.active_orders() if o.id == str(order_id)), None)

    # ---------------------------
    # Lifecycle
    # ---------------------------
    def create_order(self, customer_name, phone, items, order_id=None):
        flat = flatten_lines(items)
        if not flat:
            raise ValueError("An order needs at least one item")

        order = Order(
            id=order_id or new_order_id(),
            customer_name=(customer_name or "").strip(),
            phone=(phone or "").strip(),
            items=flat,
            order_time=timezone.now().isoformat(),
            status=PREPARING,
        )
        self._save(self.active_key, self._load(self.active_key) + [order])
        logger.info("Order %s created with %d item(s)", order.id, len(flat))
        return order

    def set_status(self, order_id, status):
        if status not in ACTIVE_STATUSES:
            raise ValueError(
                f"Invalid status. Valid statuses are {list(ACTIVE_STATUSES)}; use deliver() for delivery"
            )

        orders = self._load(self.active_key)
        order = next((o for o in orders if o.id == str(order_id)), None)
        if order is None:
            return None

        # preparing -> ready only; repeating the current status is a no-op
        current = order.status
        if current in ACTIVE_STATUSES and ACTIVE_STATUSES.index(status) < ACTIVE_STATUSES.index(current):
            raise ValueError(f"Order {order.id} is already {order.status}")

        order.status = status
        self._save(self.active_key, orders)
        return order

    def price(self, order):
        items = order.items if isinstance(order, Order) else order
        return price_order(items, self.inventory.all(), self.inventory.resolver)

    def active_orders_with_totals(self):
        snapshot = self.inventory.all()
        return [
            (order, price_order(order.items, snapshot, self.inventory.resolver))
            for order in self.active_orders()
        ]

    def summary(self):
        active = self.active_orders()
        return {
            "preparing": sum(1 for o in active if o.status == PREPARING),
            "ready": sum(1 for o in active if o.status == READY),
            "active": len(active),
        }

    def deliver(self, order_id):
        """
        Hand over a ready order.

        Inventory is only touched when every item is in stock. The total is
        priced before the stock decrement and frozen on the archived order.
        """
        orders = self._load(self.active_key)
        order = next((o for o in orders if o.id == str(order_id)), None)
        if order is None:
            return DeliveryResult(delivered=False, reason=NOT_FOUND)
        if order.status != READY:
            return DeliveryResult(delivered=False, order=order, reason=NOT_READY)

        snapshot = self.inventory.all()
        resolver = self.inventory.resolver
        unavailable = check_availability(order.items, snapshot, resolver)
        if unavailable:
            logger.warning("Order %s not delivered, unavailable: %s", order.id, unavailable)
            return DeliveryResult(
                delivered=False, order=order, reason=UNAVAILABLE, unavailable_items=unavailable
            )

        priced = price_order(order.items, snapshot, resolver)
        change = reduce_stock(order.items, self.inventory, resolver)
        if not change:
            logger.error("Order %s: stock reduction changed nothing", order.id)
            return DeliveryResult(delivered=False, order=order, reason=NO_CHANGE)

        order.status = DELIVERED
        order.delivered_time = timezone.now().isoformat()
        order.total = float(priced.total)

        self._save(self.active_key, [o for o in orders if o.id != order.id])
        self._save(self.delivered_key, self._load(self.delivered_key) + [order])
        logger.info("Order %s delivered, total %s", order.id, priced.total)
        return DeliveryResult(delivered=True, order=order)
