import pytest

from inventory.items import InventoryItem
from inventory.resolver import NameResolver
from inventory.signals import InventoryEvent, NotificationBus
from inventory.storage import MemoryStorage
from inventory.store import InventoryStore
from orders.services import OrderBook

MENU = [
    {"item_id": "1", "item_name": "Chicken Burger", "price": 80.00, "quantity": 15, "min_stock": 5},
    {"item_id": "2", "item_name": "BBQ Burger", "price": 90.00, "quantity": 12, "min_stock": 5},
    {"item_id": "3", "item_name": "Margherita Pizza", "price": 150.00, "quantity": 25, "min_stock": 5},
    {"item_id": "4", "item_name": "Fries", "price": 50.00, "quantity": 20, "min_stock": 5},
    {"item_id": "5", "item_name": "Coke", "price": 40.00, "quantity": 30, "min_stock": 10},
    {"item_id": "6", "item_name": "Veggie Wrap", "price": 85.00, "quantity": 3, "min_stock": 5},
]


@pytest.fixture
def bus():
    return NotificationBus()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage, bus):
    store = InventoryStore(storage=storage, bus=bus, resolver=NameResolver(policy="first"))
    store.replace_all(InventoryItem.from_dict(record) for record in MENU)
    return store


@pytest.fixture
def items(store):
    return store.all()


@pytest.fixture
def received(bus):
    """Every notification published on the test bus, in order."""
    notifications = []

    def listener(sender, notification, **kwargs):
        notifications.append(notification)

    for event in InventoryEvent:
        bus.subscribe(event, listener, weak=False)
    return notifications


@pytest.fixture
def book(storage, store):
    return OrderBook(storage=storage, inventory=store)


@pytest.fixture
def find_item(store):
    def find(name):
        return next(i for i in store.all() if i.item_name == name)
    return find
