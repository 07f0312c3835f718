"""
Change notification bus.

Inventory writes publish typed notifications that any consumer (dashboard,
menu board, restock alerts) can subscribe to and react by re-reading the
store. Delivery is synchronous and nothing is queued: a notification sent
while nobody listens is lost. One logical write can emit up to four
overlapping notifications, so receivers must tolerate duplicates.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.dispatch import Signal
from django.utils import timezone

logger = logging.getLogger(__name__)


class InventoryEvent(str, enum.Enum):
    INVENTORY_UPDATED = "inventory-updated"
    PRICES_UPDATED = "prices-updated"
    QUANTITY_UPDATED = "quantity-updated"
    ITEM_ADDED = "item-added"
    ITEM_REMOVED = "item-removed"


@dataclass
class ChangeNotification:
    event: InventoryEvent
    change_type: str
    newly_available_items: List[dict] = field(default_factory=list)
    updated_items: List[dict] = field(default_factory=list)
    removed_items: List[str] = field(default_factory=list)
    all_items: List[dict] = field(default_factory=list)
    changed_item: Optional[dict] = None
    timestamp: str = field(default_factory=lambda: timezone.now().isoformat())

    def for_event(self, event):
        return ChangeNotification(
            event=event,
            change_type=self.change_type,
            newly_available_items=self.newly_available_items,
            updated_items=self.updated_items,
            removed_items=self.removed_items,
            all_items=self.all_items,
            changed_item=self.changed_item,
            timestamp=self.timestamp,
        )

    def to_dict(self):
        return {
            "event": self.event.value,
            "newlyAvailableItems": self.newly_available_items,
            "updatedItems": self.updated_items,
            "removedItems": self.removed_items,
            "allItems": self.all_items,
            "changeType": self.change_type,
            "changedItem": self.changed_item,
            "timestamp": self.timestamp,
        }


class NotificationBus:
    """One django Signal per InventoryEvent."""

    def __init__(self):
        self._signals = {event: Signal() for event in InventoryEvent}

    def signal(self, event):
        return self._signals[InventoryEvent(event)]

    def subscribe(self, event, receiver, weak=True, dispatch_uid=None):
        self.signal(event).connect(receiver, weak=weak, dispatch_uid=dispatch_uid)

    def unsubscribe(self, event, receiver=None, dispatch_uid=None):
        return self.signal(event).disconnect(receiver, dispatch_uid=dispatch_uid)

    def has_listeners(self, event):
        return self.signal(event).has_listeners()

    def publish(self, event, notification, sender=None):
        event = InventoryEvent(event)
        if notification.event is not event:
            notification = notification.for_event(event)

        responses = self.signal(event).send_robust(sender=sender, notification=notification)
        for receiver, response in responses:
            if isinstance(response, Exception):
                logger.error(
                    "Receiver %r failed on %s: %s", receiver, event.value, response,
                    exc_info=(type(response), response, response.__traceback__),
                )
        return responses


# process-wide default
bus = NotificationBus()
