from decimal import Decimal

from inventory.pricing import format_inr, price_order


def test_flattened_items_are_grouped(store, items):
    priced = price_order(["burger", "burger", "fries"], items, store.resolver)

    assert [(d.name, d.quantity) for d in priced.item_details] == [("burger", 2), ("fries", 1)]
    assert priced.total == Decimal("210")
    assert priced.item_details[0].item_name == "Chicken Burger"
    assert priced.item_details[0].price == Decimal("80")


def test_same_item_under_different_names_is_one_line(store, items):
    priced = price_order(["Burger", "chicken burger"], items, store.resolver)
    assert len(priced.item_details) == 1
    assert priced.item_details[0].name == "Burger"
    assert priced.item_details[0].quantity == 2


def test_pricing_is_repeatable(store, items):
    order = ["pizza", "coke", "coke", "wrap"]
    assert price_order(order, items, store.resolver) == price_order(order, items, store.resolver)


def test_totals_follow_current_prices(store, find_item):
    order = ["burger", "burger", "fries"]
    before = price_order(order, store.all(), store.resolver)

    store.update(find_item("Chicken Burger").item_id, price=100)
    after = price_order(order, store.all(), store.resolver)

    assert before.total == Decimal("210")
    assert after.total == Decimal("250")


def test_zero_stock_line_is_reported_but_free(store, find_item):
    store.set_quantity(find_item("Margherita Pizza").item_id, 0)
    priced = price_order(["pizza", "fries"], store.all(), store.resolver)

    pizza = priced.item_details[0]
    assert pizza.is_out_of_stock
    assert pizza.price == Decimal("150")
    assert priced.total == Decimal("50")
    assert priced.has_unavailable


def test_deleted_item_is_out_of_stock_not_an_error(store, find_item):
    store.delete(find_item("Fries").item_id)
    priced = price_order(["fries", "fries"], store.all(), store.resolver)

    assert priced.total == 0
    line = priced.item_details[0]
    assert line.item_name is None
    assert line.quantity == 2
    assert line.is_out_of_stock
    assert line.price == 0


def test_low_stock_flag(store, items):
    priced = price_order(["wrap"], items, store.resolver)
    assert priced.item_details[0].is_low_stock
    assert not priced.item_details[0].is_out_of_stock
    assert priced.total == Decimal("85")


def test_empty_order(store, items):
    priced = price_order([], items, store.resolver)
    assert priced.total == 0
    assert priced.item_details == []


def test_to_dict_shape(store, items):
    data = price_order(["coke"], items, store.resolver).to_dict()
    assert data == {
        "total": 40.0,
        "itemDetails": [
            {"name": "coke", "quantity": 1, "price": 40.0, "isOutOfStock": False, "isLowStock": False},
        ],
    }


def test_format_inr():
    assert format_inr(1234.5) == "₹1,234.50"
    assert format_inr(Decimal("40")) == "₹40.00"
