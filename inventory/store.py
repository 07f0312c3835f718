import logging
import uuid
from decimal import InvalidOperation

from django.conf import settings

from .items import InventoryItem, default_min_stock
from .resolver import NameResolver
from .signals import ChangeNotification, InventoryEvent, bus as default_bus
from .storage import DatabaseStorage, read_collection, write_collection

logger = logging.getLogger(__name__)

INVENTORY_KEY = "menu"

EDITABLE_FIELDS = ("item_name", "price", "quantity", "min_stock")


def diff_inventory(previous, current):
    """
    Classify what changed between two snapshots, matched by item_id.

    Returns (newly_available, updated, removed): new or back-in-stock items,
    items whose quantity or price moved, and names of items that vanished.
    """
    before = {item.item_id: item for item in previous}
    after_ids = {item.item_id for item in current}

    newly_available = []
    updated = []
    for item in current:
        old = before.get(item.item_id)
        if old is None:
            newly_available.append({
                "name": item.item_name,
                "quantity": item.quantity,
                "price": float(item.price),
                "isNewItem": True,
            })
            continue

        if old.quantity == 0 and item.quantity > 0:
            newly_available.append({
                "name": item.item_name,
                "quantity": item.quantity,
                "price": float(item.price),
                "previousQuantity": old.quantity,
                "isNewItem": False,
            })

        quantity_changed = old.quantity != item.quantity
        price_changed = old.price != item.price
        if quantity_changed or price_changed:
            updated.append({
                "name": item.item_name,
                "itemId": item.item_id,
                "quantity": item.quantity,
                "price": float(item.price),
                "minStock": item.min_stock,
                "previousQuantity": old.quantity,
                "previousPrice": float(old.price),
                "quantityChanged": quantity_changed,
                "priceChanged": price_changed,
            })

    removed = [item.item_name for item in previous if item.item_id not in after_ids]
    return newly_available, updated, removed


class InventoryStore:
    """
    CRUD over the menu collection.

    Every mutation goes through save(): read the previous snapshot, write
    the new one in a single call, diff the two and publish on the bus.
    """

    def __init__(self, storage=None, bus=None, resolver=None, key=None):
        self.storage = storage or DatabaseStorage()
        self.bus = bus or default_bus
        self.resolver = resolver or NameResolver()
        self.key = key or getattr(settings, "INVENTORY_STORAGE_KEY", INVENTORY_KEY)

    # ---------------------------
    # Reads
    # ---------------------------
    def all(self):
        items = []
        for record in read_collection(self.storage, self.key):
            try:
                items.append(InventoryItem.from_dict(record))
            except (KeyError, TypeError, ValueError, InvalidOperation, AttributeError) as exc:
                logger.warning("Skipping malformed inventory record %r: %s", record, exc)
        return items

    def get(self, item_id):
        item_id = str(item_id)
        return next((item for item in self.all() if item.item_id == item_id), None)

    def resolve(self, name):
        return self.resolver.resolve(name, self.all())

    def status_map(self):
        """item_name -> quantity, price and derived stock flags."""
        return {
            item.item_name: {
                "quantity": item.quantity,
                "price": float(item.price),
                "min_stock": item.min_stock,
                "status": item.status,
                "isOutOfStock": item.is_out_of_stock,
                "isLowStock": item.is_low_stock,
            }
            for item in self.all()
        }

    def low_stock_items(self):
        return [item for item in self.all() if item.is_low_stock]

    def out_of_stock_items(self):
        return [item for item in self.all() if item.is_out_of_stock]

    # ---------------------------
    # Writes
    # ---------------------------
    def add(self, item_name, price, quantity, min_stock=None):
        item = InventoryItem(
            item_id=uuid.uuid4().hex,
            item_name=str(item_name).strip(),
            price=price,
            quantity=quantity,
            min_stock=default_min_stock() if min_stock is None else min_stock,
        )
        self.save(self.all() + [item], change_type="add", changed_item=item)
        return item

    def update(self, item_id, **fields):
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot edit fields: {sorted(unknown)}")

        items = self.all()
        current = next((item for item in items if item.item_id == str(item_id)), None)
        if current is None:
            return None

        if "item_name" in fields:
            fields["item_name"] = str(fields["item_name"]).strip()
        edited = current.with_changes(**fields)
        change_type = "quantity" if set(fields) == {"quantity"} else "edit"
        self.save(
            [edited if item.item_id == current.item_id else item for item in items],
            change_type=change_type,
            changed_item=edited,
        )
        return edited

    def set_quantity(self, item_id, quantity):
        return self.update(item_id, quantity=quantity)

    def delete(self, item_id):
        items = self.all()
        target = next((item for item in items if item.item_id == str(item_id)), None)
        if target is None:
            return False

        self.save(
            [item for item in items if item.item_id != target.item_id],
            change_type="delete",
            changed_item=target,
        )
        return True

    def replace_all(self, items):
        self.save(list(items), change_type="update")

    def save(self, items, change_type="update", changed_item=None):
        previous = self.all()
        write_collection(self.storage, self.key, [item.to_dict() for item in items])
        logger.debug("Saved %d inventory items (%s)", len(items), change_type)

        newly_available, updated, removed = diff_inventory(previous, items)
        notification = ChangeNotification(
            event=InventoryEvent.INVENTORY_UPDATED,
            change_type=change_type,
            newly_available_items=newly_available,
            updated_items=updated,
            removed_items=removed,
            all_items=[item.to_dict() for item in items],
            changed_item=changed_item.to_dict() if changed_item else None,
        )
        self.notify(notification)
        return notification

    def notify(self, notification):
        events = [InventoryEvent.INVENTORY_UPDATED]
        if any(entry["priceChanged"] for entry in notification.updated_items):
            events.append(InventoryEvent.PRICES_UPDATED)
        if any(entry["quantityChanged"] for entry in notification.updated_items):
            events.append(InventoryEvent.QUANTITY_UPDATED)
        if notification.change_type == "add" or any(
            entry.get("isNewItem") for entry in notification.newly_available_items
        ):
            events.append(InventoryEvent.ITEM_ADDED)
        if notification.change_type == "delete" or notification.removed_items:
            events.append(InventoryEvent.ITEM_REMOVED)

        for event in events:
            self.bus.publish(event, notification, sender=self.__class__)

        logger.info(
            "Inventory %s: %s",
            notification.change_type,
            ", ".join(event.value for event in events),
        )
        return events
