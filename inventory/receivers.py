import logging

from .items import AVAILABLE, stock_status
from .signals import InventoryEvent, bus

logger = logging.getLogger(__name__)


def alert_on_low_stock(sender, notification, **kwargs):
    """Queue a restock email for items that just fell below min stock."""
    falling = []
    for entry in notification.updated_items:
        if not entry["quantityChanged"] or entry["quantity"] >= entry["previousQuantity"]:
            continue
        min_stock = entry["minStock"]
        before = stock_status(entry["previousQuantity"], min_stock)
        after = stock_status(entry["quantity"], min_stock)
        if after != AVAILABLE and after != before:
            falling.append({"name": entry["name"], "quantity": entry["quantity"], "status": after})

    if not falling:
        return

    from .tasks import send_restock_alert

    logger.info("Queueing restock alert for %s", ", ".join(i["name"] for i in falling))
    send_restock_alert.delay(falling)


def connect_default_receivers():
    bus.subscribe(
        InventoryEvent.QUANTITY_UPDATED,
        alert_on_low_stock,
        weak=False,
        dispatch_uid="inventory.alert_on_low_stock",
    )
