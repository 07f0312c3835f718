import logging
from datetime import datetime
from decimal import Decimal

from django.utils import timezone

from inventory.pricing import format_inr
from orders.services import OrderBook

logger = logging.getLogger(__name__)

__all__ = ["sales_summary", "today_report", "format_inr"]


def _order_total(order):
    return Decimal(str(order.total or 0))


def _local_date(iso_string):
    try:
        moment = datetime.fromisoformat(iso_string)
    except (TypeError, ValueError):
        return None
    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment)
    return timezone.localtime(moment).date()


def sales_summary(book=None):
    """All delivered orders with their frozen totals."""
    book = book or OrderBook()
    orders = book.delivered_orders()
    income = sum((_order_total(o) for o in orders), Decimal("0"))
    return {
        "total_completed_orders": len(orders),
        "total_income": income,
        "orders": orders,
    }


def today_report(today=None, book=None):
    """Orders delivered on `today` (local date), with revenue and average."""
    book = book or OrderBook()
    today = today or timezone.localdate()

    orders = []
    for order in book.delivered_orders():
        day = _local_date(order.delivered_time)
        if day is None:
            logger.warning("Order %s has no usable deliveredTime", order.id)
            continue
        if day == today:
            orders.append(order)

    revenue = sum((_order_total(o) for o in orders), Decimal("0"))
    average = (revenue / len(orders)).quantize(Decimal("0.01")) if orders else Decimal("0")
    return {
        "date": today,
        "total_orders": len(orders),
        "total_revenue": revenue,
        "avg_order_value": average,
        "orders": orders,
    }
