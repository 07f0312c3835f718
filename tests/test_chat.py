import pytest

from orders.chat import NOT_UNDERSTOOD, OrderConversation, clean_text, find_phrases, quantity_before


@pytest.fixture
def chat(store):
    return OrderConversation(inventory=store)


def test_adds_items_with_quantities(chat):
    reply = chat.handle("Two burgers and a coke, please")

    assert reply.text == "2 × burger added. 1 × coke added."
    assert chat.lines() == [("burger", 2), ("coke", 1)]
    assert chat.items() == ["burger", "burger", "coke"]


def test_digits_as_quantities(chat):
    chat.handle("3 fries")
    chat.handle("1 fries")
    assert chat.cart == {"fries": 4}


def test_longest_phrase_wins(chat):
    chat.handle("chicken burger and fries")
    assert chat.cart == {"chicken burger": 1, "fries": 1}


def test_remove_items(chat):
    chat.handle("two burgers")
    reply = chat.handle("remove one burger")
    assert reply.text == "burger is removed."
    assert chat.cart == {"burger": 1}

    chat.handle("cancel burger")
    assert chat.cart == {}


def test_remove_something_not_ordered(chat):
    reply = chat.handle("remove pizza")
    assert reply.text == "You don't have any pizza in your order."


def test_remove_more_than_ordered(chat):
    chat.handle("one burger")
    reply = chat.handle("remove 5 burgers")
    assert reply.text == "You only have 1 × burger in your order."
    assert chat.cart == {"burger": 1}


def test_price_question_uses_live_inventory(chat, store, find_item):
    assert chat.handle("what is the price of pizza?").text == "The price of pizza is ₹150.00."

    store.update(find_item("Margherita Pizza").item_id, price=175)
    assert chat.handle("price of pizza").text == "The price of pizza is ₹175.00."
    assert chat.cart == {}


def test_out_of_stock_items_are_not_added(chat, store, find_item):
    store.set_quantity(find_item("Margherita Pizza").item_id, 0)
    reply = chat.handle("a pizza and fries")
    assert reply.text == "Sorry, pizza is not available right now. 1 × fries added."
    assert chat.cart == {"fries": 1}


def test_unknown_message(chat):
    assert chat.handle("tell me a joke").text == NOT_UNDERSTOOD


def test_end_phrase_places_order(chat):
    chat.handle("two burgers and a coke")
    reply = chat.handle("My order is done")

    assert reply.done
    assert reply.text == "Your order is placed! Total bill is ₹200.00. Thank you!"
    assert chat.handle("one fries").text == "Your order is already placed."
    assert chat.cart == {"burger": 2, "coke": 1}


def test_end_phrase_with_empty_cart(chat):
    reply = chat.handle("place order")
    assert not reply.done
    assert not chat.done


def test_transcript_is_kept(chat):
    chat.handle("one fries")
    assert [m["from"] for m in chat.messages] == ["ai", "user", "ai"]


def test_session_state_survives(chat, store):
    chat.handle("two burgers")
    restored = OrderConversation.from_dict(chat.to_dict(), inventory=store)
    assert restored.cart == {"burger": 2}
    assert restored.quote().total == 160


def test_text_helpers():
    text = clean_text("I'd like 2x... Fish & Chips!")
    assert text == "i d like 2x fish & chips"
    found = find_phrases("two fries and loaded fries", ["fries", "loaded fries"])
    assert found == [(4, "fries"), (14, "loaded fries")]
    assert quantity_before("two fries", 4) == 2
    assert quantity_before("fries", 0) == 1


def test_quantity_is_capped_at_stock(chat, book):
    reply = chat.handle("2000000 burgers")

    assert reply.text == "Sorry, only 15 left. 15 × burger added."
    assert chat.cart == {"burger": 15}
    assert len(chat.items()) == 15

    order = book.create_order("Asha", "1", chat.lines())
    book.set_status(order.id, "ready")
    assert book.deliver(order.id).delivered


def test_stock_cap_counts_every_phrase_for_the_item(chat):
    chat.handle("14 burgers")
    assert chat.handle("two chicken burgers").text == "Sorry, only 1 left. 1 × chicken burger added."
    assert chat.handle("a burger").text == "Sorry, there is no more burger left."
    assert chat.cart == {"burger": 14, "chicken burger": 1}


def test_cart_line_is_capped(chat, store, find_item):
    store.set_quantity(find_item("Margherita Pizza").item_id, 200)
    chat.handle("40 pizzas")
    assert chat.handle("20 pizzas").text == "Sorry, only 10 left. 10 × pizza added."
    assert chat.cart == {"pizza": 50}


@pytest.mark.parametrize("text,expected", [
    ("99999999999999999999 fries", 50),
    ("51 fries", 50),
    ("007 fries", 7),
    ("0 fries", 1),
])
def test_spoken_quantities_are_bounded(text, expected):
    assert quantity_before(text, text.index("fries")) == expected
