from django.core.management.base import BaseCommand

from inventory.items import InventoryItem
from inventory.store import InventoryStore

DEFAULT_MENU = [
    {"item_id": "1", "item_name": "Margherita Pizza", "price": 150.00, "quantity": 25, "min_stock": 5},
    {"item_id": "2", "item_name": "Chicken Burger", "price": 80.00, "quantity": 15, "min_stock": 5},
    {"item_id": "3", "item_name": "BBQ Burger", "price": 90.00, "quantity": 12, "min_stock": 5},
    {"item_id": "4", "item_name": "Fries", "price": 50.00, "quantity": 20, "min_stock": 5},
    {"item_id": "5", "item_name": "Loaded Fries", "price": 70.00, "quantity": 10, "min_stock": 5},
    {"item_id": "6", "item_name": "Onion Rings", "price": 45.00, "quantity": 18, "min_stock": 5},
    {"item_id": "7", "item_name": "Garlic Bread", "price": 60.00, "quantity": 12, "min_stock": 5},
    {"item_id": "8", "item_name": "Coke", "price": 40.00, "quantity": 30, "min_stock": 10},
    {"item_id": "9", "item_name": "Milkshake", "price": 80.00, "quantity": 15, "min_stock": 5},
    {"item_id": "10", "item_name": "Smoothie", "price": 90.00, "quantity": 12, "min_stock": 5},
    {"item_id": "11", "item_name": "Veggie Wrap", "price": 85.00, "quantity": 8, "min_stock": 5},
    {"item_id": "12", "item_name": "Fish & Chips", "price": 95.00, "quantity": 14, "min_stock": 5},
]


class Command(BaseCommand):
    help = "Load the default restaurant menu into inventory"

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Replace the current menu even if it is not empty",
        )

    def handle(self, *args, **options):
        store = InventoryStore()

        existing = store.all()
        if existing and not options["force"]:
            self.stdout.write(f"Inventory already has {len(existing)} items, use --force to replace")
            return

        store.replace_all(InventoryItem.from_dict(record) for record in DEFAULT_MENU)
        self.stdout.write(self.style.SUCCESS(f"Seeded {len(DEFAULT_MENU)} menu items"))
