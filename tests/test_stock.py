from inventory.signals import InventoryEvent
from inventory.stock import check_availability, reduce_stock


def test_everything_in_stock_is_deliverable(store, items):
    assert check_availability(["burger", "burger", "fries", "coke"], items, store.resolver) == []


def test_zero_stock_item_blocks_delivery(store, find_item):
    store.set_quantity(find_item("Margherita Pizza").item_id, 0)
    unavailable = check_availability(["pizza", "pizza", "fries"], store.all(), store.resolver)
    assert unavailable == ["pizza"]
    assert find_item("Fries").quantity == 20


def test_unknown_and_deleted_items_are_unavailable(store, find_item):
    store.delete(find_item("Coke").item_id)
    unavailable = check_availability(["sushi", "coke", "fries", "sushi"], store.all(), store.resolver)
    assert unavailable == ["sushi", "coke"]


def test_ordering_more_units_than_stock_is_unavailable(store, items):
    # Veggie Wrap has 3 units
    assert check_availability(["wrap"] * 3, items, store.resolver) == []
    assert check_availability(["wrap"] * 4, items, store.resolver) == ["wrap"]


def test_availability_check_has_no_side_effects(store, received):
    snapshot = store.all()
    check_availability(["burger", "sushi"], snapshot, store.resolver)
    assert store.all() == snapshot
    assert received == []


def test_reduce_stock_takes_one_unit_per_entry(store, find_item):
    change = reduce_stock(["burger", "burger", "fries"], store)

    assert change.changed
    assert find_item("Chicken Burger").quantity == 13
    assert find_item("Fries").quantity == 19
    assert find_item("BBQ Burger").quantity == 12
    assert {c["name"]: (c["original_quantity"], c["new_quantity"]) for c in change.changed_items} == {
        "Chicken Burger": (15, 13),
        "Fries": (20, 19),
    }


def test_reduce_stock_clamps_at_zero(store, find_item):
    change = reduce_stock(["wrap"] * 5, store)

    wrap = find_item("Veggie Wrap")
    assert wrap.quantity == 0
    assert change.changed_items == [{
        "name": "Veggie Wrap",
        "original_quantity": 3,
        "new_quantity": 0,
        "is_now_out_of_stock": True,
    }]


def test_repeated_deliveries_never_go_negative(store, find_item):
    for _ in range(10):
        reduce_stock(["wrap", "wrap", "Veggie Wrap"], store)
        assert all(item.quantity >= 0 for item in store.all())
    assert find_item("Veggie Wrap").quantity == 0


def test_nothing_to_reduce_is_a_no_op(store, find_item, received):
    store.set_quantity(find_item("Coke").item_id, 0)
    del received[:]

    change = reduce_stock(["coke", "sushi"], store)

    assert not change
    assert change.changed_items == []
    assert find_item("Coke").quantity == 0
    assert received == []


def test_reduce_stock_publishes_quantity_update(store, received):
    reduce_stock(["pizza"], store)

    events = [n.event for n in received]
    assert events == [InventoryEvent.INVENTORY_UPDATED, InventoryEvent.QUANTITY_UPDATED]
    assert received[0].change_type == "order_delivery"
    assert received[0].updated_items[0]["name"] == "Margherita Pizza"
