"""
Map free-text order names ("burger", "  Chicken BURGER ") to inventory items.

Resolution is exact-then-table: a case-insensitive match on item_name, then
a synonym table of generic spoken terms. There is no substring matching.
When a generic term fits several items, the variant policy picks one.
"""
import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .items import normalize_name

logger = logging.getLogger(__name__)

# generic spoken term -> canonical inventory names
DEFAULT_SYNONYMS = {
    "burger": ["Chicken Burger", "BBQ Burger"],
    "pizza": ["Margherita Pizza"],
    "fries": ["Fries", "Loaded Fries"],
    "chips": ["Fries"],
    "garlic bread": ["Garlic Bread"],
    "beverage": ["Coke", "Smoothie", "Milkshake"],
    "drink": ["Coke"],
    "coke": ["Coke"],
    "coca cola": ["Coke"],
    "wrap": ["Veggie Wrap"],
}

DEFAULT_VARIANT_POLICY = "first"


def _first(candidates):
    return candidates[0]


def _cheapest(candidates):
    # min() keeps the first of equal prices, i.e. inventory order
    return min(candidates, key=lambda item: item.price)


def _highest_stock(candidates):
    return max(candidates, key=lambda item: item.quantity)


VARIANT_POLICIES = {
    "first": _first,
    "cheapest": _cheapest,
    "highest_stock": _highest_stock,
}


def get_policy(name):
    try:
        return VARIANT_POLICIES[name]
    except KeyError:
        raise ImproperlyConfigured(
            f"Unknown variant policy {name!r}; expected one of {sorted(VARIANT_POLICIES)}"
        )


class NameResolver:
    def __init__(self, synonyms=None, policy=None):
        if synonyms is None:
            synonyms = getattr(settings, "INVENTORY_SYNONYMS", None) or DEFAULT_SYNONYMS
        if policy is None:
            policy = getattr(settings, "INVENTORY_VARIANT_POLICY", DEFAULT_VARIANT_POLICY)

        self.synonyms = {
            normalize_name(term): [normalize_name(n) for n in names]
            for term, names in synonyms.items()
        }
        self.policy_name = policy
        self._pick = get_policy(policy)

    def phrases(self, items=()):
        """Every phrase the resolver understands: table terms plus item names."""
        known = set(self.synonyms)
        known.update(item.key for item in items)
        return known

    def resolve(self, name, items):
        """Return the matching InventoryItem, or None when nothing fits."""
        key = normalize_name(name)
        if not key:
            return None

        for item in items:
            if item.key == key:
                return item

        targets = self.synonyms.get(key)
        if not targets:
            logger.debug("No inventory match for %r", name)
            return None

        candidates = [item for item in items if item.key in targets]
        if not candidates:
            logger.debug("Synonym %r has no variant in current inventory", name)
            return None
        return self._pick(candidates)
