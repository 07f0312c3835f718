import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List

from .items import normalize_name
from .resolver import NameResolver

logger = logging.getLogger(__name__)


@dataclass
class StockChange:
    changed: bool
    changed_items: List[dict] = field(default_factory=list)

    def __bool__(self):
        return self.changed


def _resolve_all(item_names, items, resolver):
    # one lookup per distinct name, all against the same snapshot
    cache = {}
    resolved = []
    for raw in item_names:
        key = normalize_name(raw)
        if key not in cache:
            cache[key] = resolver.resolve(raw, items)
        resolved.append((raw, cache[key]))
    return resolved


def check_availability(item_names, items, resolver=None):
    """
    Names from an order that cannot be delivered right now.

    A name is reported when it resolves to nothing, to a zero-stock item, or
    when the order asks for more units of an item than are in stock. The
    result is deduplicated in first-seen order; empty means deliverable.
    """
    resolver = resolver or NameResolver()
    items = list(items)
    resolved = _resolve_all(item_names, items, resolver)

    wanted = Counter(item.item_id for _, item in resolved if item is not None)

    unavailable = []
    for raw, item in resolved:
        short = item is None or item.quantity == 0 or wanted[item.item_id] > item.quantity
        if short and raw not in unavailable:
            unavailable.append(raw)

    if unavailable:
        logger.info("Unavailable for delivery: %s", ", ".join(unavailable))
    return unavailable


def reduce_stock(item_names, store, resolver=None):
    """
    Take one unit off the matching inventory item for each entry.

    Quantities clamp at zero. Returns StockChange(changed=False) without
    writing when nothing moved, e.g. every item was already at zero or
    no longer exists.
    """
    resolver = resolver or store.resolver
    items = store.all()
    resolved = _resolve_all(item_names, items, resolver)

    remaining = {item.item_id: item.quantity for item in items}
    for raw, item in resolved:
        if item is None:
            logger.warning("Cannot reduce stock for unknown item %r", raw)
            continue
        if remaining[item.item_id] > 0:
            remaining[item.item_id] -= 1

    changed_items = []
    updated = []
    for item in items:
        new_quantity = remaining[item.item_id]
        if new_quantity != item.quantity:
            changed_items.append({
                "name": item.item_name,
                "original_quantity": item.quantity,
                "new_quantity": new_quantity,
                "is_now_out_of_stock": new_quantity == 0,
            })
            item = item.with_changes(quantity=new_quantity)
        updated.append(item)

    if not changed_items:
        return StockChange(changed=False)

    store.save(updated, change_type="order_delivery")
    return StockChange(changed=True, changed_items=changed_items)
