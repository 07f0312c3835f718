import json
from datetime import date
from decimal import Decimal

import pytest

from dashboard.services import sales_summary, today_report
from inventory.storage import MemoryStorage
from orders.services import OrderBook


@pytest.fixture
def delivered_book(store):
    records = [
        {"id": "ORD-001", "customerName": "A", "items": ["Fries"], "status": "delivered",
         "orderTime": "2025-01-16T10:00:00+05:30", "deliveredTime": "2025-01-16T10:30:00+05:30", "total": 100.0},
        # 01:30 on the 16th in Asia/Kolkata
        {"id": "ORD-002", "customerName": "B", "items": ["Coke"], "status": "delivered",
         "orderTime": "2025-01-15T19:40:00+00:00", "deliveredTime": "2025-01-15T20:00:00+00:00", "total": 50.5},
        {"id": "ORD-003", "customerName": "C", "items": ["Coke"], "status": "delivered",
         "orderTime": "2025-01-15T09:00:00+05:30", "deliveredTime": "2025-01-15T10:00:00+05:30", "total": 40.0},
        {"id": "ORD-004", "customerName": "D", "items": ["Coke"], "status": "delivered",
         "orderTime": "", "deliveredTime": "garbage", "total": 40.0},
    ]
    storage = MemoryStorage({"deliveredOrders": json.dumps(records)})
    return OrderBook(storage=storage, inventory=store)


def test_sales_summary(delivered_book):
    report = sales_summary(delivered_book)
    assert report["total_completed_orders"] == 4
    assert report["total_income"] == Decimal("230.5")


def test_today_report_uses_local_dates(delivered_book):
    report = today_report(today=date(2025, 1, 16), book=delivered_book)

    assert [o.id for o in report["orders"]] == ["ORD-001", "ORD-002"]
    assert report["total_orders"] == 2
    assert report["total_revenue"] == Decimal("150.5")
    assert report["avg_order_value"] == Decimal("75.25")


def test_today_report_with_no_orders(delivered_book):
    report = today_report(today=date(2024, 12, 31), book=delivered_book)
    assert report["total_orders"] == 0
    assert report["avg_order_value"] == 0


def test_report_after_a_real_delivery(book):
    order = book.create_order("Asha", "1", ["pizza", "coke"])
    book.set_status(order.id, "ready")
    book.deliver(order.id)

    report = today_report(book=book)
    assert report["total_orders"] == 1
    assert report["total_revenue"] == Decimal("190.0")
