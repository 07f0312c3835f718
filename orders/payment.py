"""
Mock QR payment.

A finished chat becomes a pending payment; the QR code only encodes a canned
"payment succeeded" payload. Confirming creates the kitchen order,
cancelling keeps the pending payment so the customer can try again.
"""
import logging
import uuid

from django.conf import settings
from django.utils import timezone

from inventory.pricing import price_order
from inventory.stock import check_availability
from inventory.storage import DatabaseStorage, read_object, write_object

from .records import flatten_lines
from .services import OrderBook

logger = logging.getLogger(__name__)

PENDING_PAYMENT_KEY = "orderData"

PENDING = "pending"
CANCELLED = "cancelled"


class PaymentDesk:
    def __init__(self, storage=None, orders=None):
        self.storage = storage or DatabaseStorage()
        self.orders = orders or OrderBook(storage=self.storage)
        self.key = getattr(settings, "PENDING_PAYMENT_STORAGE_KEY", PENDING_PAYMENT_KEY)

    @property
    def inventory(self):
        return self.orders.inventory

    def pending(self):
        return read_object(self.storage, self.key)

    def start(self, customer_name, phone, items):
        flat = flatten_lines(items)
        if not flat:
            raise ValueError("Cannot start a payment for an empty cart")

        snapshot = self.inventory.all()
        resolver = self.inventory.resolver
        unavailable = check_availability(flat, snapshot, resolver)
        if unavailable:
            raise ValueError(f"Not available right now: {', '.join(unavailable)}")

        priced = price_order(flat, snapshot, resolver)
        if priced.total <= 0:
            raise ValueError("Nothing in this order is available to pay for")

        payment = {
            "orderId": uuid.uuid4().hex[:12],
            "customerName": (customer_name or "").strip(),
            "phone": (phone or "").strip(),
            "items": flat,
            "total": float(priced.total),
            "itemDetails": priced.to_dict()["itemDetails"],
            "status": PENDING,
            "createdAt": timezone.now().isoformat(),
        }
        write_object(self.storage, self.key, payment)
        logger.info("Payment %s started for %s", payment["orderId"], payment["total"])
        return payment

    def qr_payload(self):
        payment = self.pending()
        if payment is None:
            return None
        return {
            "status": "PAYMENT_SUCCESS",
            "message": "Payment Completed Successfully",
            "amount": payment["total"],
            "orderId": payment["orderId"],
            "paymentMethod": "QR_SCAN",
            "timestamp": timezone.now().isoformat(),
        }

    def confirm(self):
        payment = self.pending()
        if payment is None:
            return None

        order = self.orders.create_order(
            payment.get("customerName"),
            payment.get("phone"),
            payment.get("items") or [],
        )
        self.storage.remove_item(self.key)
        logger.info("Payment %s confirmed as order %s", payment["orderId"], order.id)
        return order

    def cancel(self):
        payment = self.pending()
        if payment is None:
            return None
        payment["status"] = CANCELLED
        write_object(self.storage, self.key, payment)
        logger.info("Payment %s cancelled", payment["orderId"])
        return payment
