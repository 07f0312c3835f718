from django.http import JsonResponse
from django.utils.dateparse import parse_date
from django.views.decorators.http import require_http_methods

from inventory.store import InventoryStore
from orders.services import OrderBook

from .services import format_inr, sales_summary, today_report


@require_http_methods(["GET"])
def dashboard_summary(request):
    book = OrderBook()
    store = InventoryStore()

    return JsonResponse({
        "orders": book.summary(),
        "inventory": {
            "total_items": len(store.all()),
            "low_stock": [i.item_name for i in store.low_stock_items()],
            "out_of_stock": [i.item_name for i in store.out_of_stock_items()],
        },
        "menu": store.status_map(),
    }, status=200)


@require_http_methods(["GET"])
def sales_list(request):
    report = sales_summary()
    return JsonResponse({
        "total_completed_orders": report["total_completed_orders"],
        "total_income": float(report["total_income"]),
        "total_income_display": format_inr(report["total_income"]),
        "orders": [o.to_dict() for o in report["orders"]],
    }, status=200)


@require_http_methods(["GET"])
def today_sales(request):
    day = None
    if request.GET.get("date"):
        try:
            day = parse_date(request.GET["date"])
        except ValueError:
            day = None
        if day is None:
            return JsonResponse({"error": "date must be YYYY-MM-DD"}, status=400)

    report = today_report(today=day)
    return JsonResponse({
        "date": report["date"].isoformat(),
        "total_orders": report["total_orders"],
        "total_revenue": float(report["total_revenue"]),
        "total_revenue_display": format_inr(report["total_revenue"]),
        "avg_order_value": float(report["avg_order_value"]),
        "orders": [o.to_dict() for o in report["orders"]],
    }, status=200)
