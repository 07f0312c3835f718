"""
Chat order taker.

Turns typed (or transcribed) messages like "two burgers and a coke" or
"remove one fries" into a cart, answers price questions from live
inventory, and closes the order on an end phrase.
"""
import logging
import re
from dataclasses import dataclass

from inventory.pricing import format_inr, price_order
from inventory.store import InventoryStore

from .records import MAX_LINE_QUANTITY, flatten_lines

logger = logging.getLogger(__name__)

END_PHRASES = (
    "my order is done",
    "place order",
    "order done",
    "submit order",
    "finish order",
)

REMOVE_WORDS = ("remove", "cancel")

QUANTITY_WORDS = {
    "a": 1, "an": 1,
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
}

GREETING = "Hi, What would you like to order?"
NOT_UNDERSTOOD = "I didn't understand, say again"

_CLEAN_RE = re.compile(r"[^a-z0-9&\s]+")


def clean_text(text):
    text = _CLEAN_RE.sub(" ", (text or "").lower())
    return " ".join(text.split())


def _phrase_pattern(phrase):
    body = r"\s+".join(re.escape(word) for word in phrase.split())
    # allow simple plurals: burgers, fries -> fries, sandwiches
    return re.compile(rf"(?<![a-z0-9]){body}(?:e?s)?(?![a-z0-9])")


def find_phrases(text, phrases):
    """
    Locate known phrases in cleaned text, longest first.

    Returns (start, phrase) pairs in reading order; a span already claimed by
    a longer phrase ("loaded fries") is not matched again ("fries").
    """
    taken = []
    found = []
    for phrase in sorted(phrases, key=len, reverse=True):
        for match in _phrase_pattern(phrase).finditer(text):
            start, end = match.span()
            if any(start < t_end and t_start < end for t_start, t_end in taken):
                continue
            taken.append((start, end))
            found.append((start, phrase))
    return sorted(found)


def quantity_before(text, start):
    words = text[:start].split()
    if not words:
        return 1
    word = words[-1]
    if word.isdigit():
        digits = word.lstrip("0") or "0"
        if len(digits) > len(str(MAX_LINE_QUANTITY)):
            return MAX_LINE_QUANTITY
        return min(max(1, int(digits)), MAX_LINE_QUANTITY)
    return QUANTITY_WORDS.get(word, 1)


@dataclass
class ChatReply:
    text: str
    done: bool = False


class OrderConversation:
    def __init__(self, inventory=None, cart=None, done=False, messages=None):
        self.inventory = inventory or InventoryStore()
        self.cart = dict(cart or {})
        self.done = done
        self.messages = list(messages or [{"from": "ai", "text": GREETING}])

    # ---------------------------
    # Cart views
    # ---------------------------
    def lines(self):
        return list(self.cart.items())

    def items(self):
        return flatten_lines(self.lines())

    def quote(self):
        return price_order(self.items(), self.inventory.all(), self.inventory.resolver)

    # ---------------------------
    # Messages
    # ---------------------------
    def handle(self, message):
        self.messages.append({"from": "user", "text": message})
        reply = self._reply(clean_text(message))
        self.messages.append({"from": "ai", "text": reply.text})
        return reply

    def _reply(self, text):
        if self.done:
            return ChatReply("Your order is already placed.", done=True)

        if any(p in text for p in END_PHRASES):
            return self._finish()

        snapshot = self.inventory.all()
        resolver = self.inventory.resolver
        found = find_phrases(text, resolver.phrases(snapshot))
        if not found:
            return ChatReply(NOT_UNDERSTOOD)

        if "price" in text:
            _, phrase = found[0]
            item = resolver.resolve(phrase, snapshot)
            if item is None:
                return ChatReply(f"Sorry, {phrase} is not on the menu right now.")
            return ChatReply(f"The price of {phrase} is {format_inr(item.price)}.")

        removing = any(w in text.split() for w in REMOVE_WORDS)
        parts = []
        for start, phrase in found:
            qty = quantity_before(text, start)
            if removing:
                parts.append(self._remove(phrase, qty))
            else:
                parts.append(self._add(phrase, qty, resolver, snapshot))
        return ChatReply(" ".join(parts))

    def _in_cart(self, item, resolver, snapshot):
        """Units of `item` already in the cart, under any phrase."""
        total = 0
        for name, qty in self.cart.items():
            match = resolver.resolve(name, snapshot)
            if match is not None and match.item_id == item.item_id:
                total += qty
        return total

    def _add(self, phrase, qty, resolver, snapshot):
        item = resolver.resolve(phrase, snapshot)
        if item is None or item.is_out_of_stock:
            return f"Sorry, {phrase} is not available right now."

        have = self.cart.get(phrase, 0)
        room = min(
            item.quantity - self._in_cart(item, resolver, snapshot),
            MAX_LINE_QUANTITY - have,
        )
        if room <= 0:
            return f"Sorry, there is no more {phrase} left."
        if qty > room:
            self.cart[phrase] = have + room
            return f"Sorry, only {room} left. {room} × {phrase} added."

        self.cart[phrase] = have + qty
        return f"{qty} × {phrase} added."

    def _remove(self, phrase, qty):
        have = self.cart.get(phrase, 0)
        if not have:
            return f"You don't have any {phrase} in your order."
        if qty > have:
            return f"You only have {have} × {phrase} in your order."
        if qty == have:
            del self.cart[phrase]
        else:
            self.cart[phrase] = have - qty
        return f"{phrase} is removed."

    def _finish(self):
        if not self.cart:
            return ChatReply("Your cart is empty. " + GREETING)
        self.done = True
        total = self.quote().total
        logger.info("Chat order closed with %d item(s)", len(self.items()))
        return ChatReply(f"Your order is placed! Total bill is {format_inr(total)}. Thank you!", done=True)

    # ---------------------------
    # Session round-trip
    # ---------------------------
    def to_dict(self):
        return {"cart": self.cart, "done": self.done, "messages": self.messages}

    @classmethod
    def from_dict(cls, data, inventory=None):
        data = data or {}
        return cls(
            inventory=inventory,
            cart=data.get("cart"),
            done=data.get("done", False),
            messages=data.get("messages"),
        )
