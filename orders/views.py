import json
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt

from .chat import OrderConversation
from .payment import PaymentDesk
from .services import OrderBook

CHAT_SESSION_KEY = "order_chat"


def load_json(request):
    try:
        return json.loads(request.body or b"{}"), None
    except json.JSONDecodeError:
        return None, JsonResponse({"error": "Invalid JSON"}, status=400)


def order_payload(order, priced=None):
    data = order.to_dict()
    if priced is not None:
        data["total"] = float(priced.total)
        data["itemDetails"] = priced.to_dict()["itemDetails"]
    return data


# chat order taker

@csrf_exempt
def chat(request):
    if request.method != "POST":
        return JsonResponse({"error": "POST method required"}, status=405)

    data, error = load_json(request)
    if error:
        return error

    if data.get("reset"):
        request.session.pop(CHAT_SESSION_KEY, None)

    conversation = OrderConversation.from_dict(request.session.get(CHAT_SESSION_KEY))
    message = (data.get("message") or "").strip()
    if not message:
        return JsonResponse({"error": "message is required"}, status=400)

    reply = conversation.handle(message)
    request.session[CHAT_SESSION_KEY] = conversation.to_dict()

    return JsonResponse({
        "reply": reply.text,
        "done": reply.done,
        "cart": [{"name": n, "quantity": q} for n, q in conversation.lines()],
        "quote": conversation.quote().to_dict(),
    })


# payment

@csrf_exempt
def start_payment(request):
    if request.method != "POST":
        return JsonResponse({"error": "POST method required"}, status=405)

    data, error = load_json(request)
    if error:
        return error

    items = data.get("items")
    if items is None:
        items = OrderConversation.from_dict(request.session.get(CHAT_SESSION_KEY)).items()

    try:
        payment = PaymentDesk().start(data.get("customer_name"), data.get("phone"), items)
    except (TypeError, ValueError) as e:
        return JsonResponse({"error": str(e)}, status=400)

    return JsonResponse(payment, status=201)


def payment_qr(request):
    if request.method != "GET":
        return JsonResponse({"error": "GET method required"}, status=405)

    payload = PaymentDesk().qr_payload()
    if payload is None:
        return JsonResponse({"error": "No pending payment"}, status=404)
    return JsonResponse(payload)


@csrf_exempt
def confirm_payment(request):
    if request.method != "POST":
        return JsonResponse({"error": "POST method required"}, status=405)

    order = PaymentDesk().confirm()
    if order is None:
        return JsonResponse({"error": "No pending payment"}, status=404)

    request.session.pop(CHAT_SESSION_KEY, None)
    return JsonResponse({
        "message": "Payment confirmed, order placed",
        "order": order.to_dict(),
    }, status=201)


@csrf_exempt
def cancel_payment(request):
    if request.method != "POST":
        return JsonResponse({"error": "POST method required"}, status=405)

    payment = PaymentDesk().cancel()
    if payment is None:
        return JsonResponse({"error": "No pending payment"}, status=404)
    return JsonResponse({"message": "Payment cancelled", "payment": payment})


# admin side

def list_orders(request):
    if request.method != "GET":
        return JsonResponse({"error": "GET method required"}, status=405)

    book = OrderBook()
    orders = [order_payload(o, priced) for o, priced in book.active_orders_with_totals()]
    return JsonResponse({"summary": book.summary(), "orders": orders})


@csrf_exempt
def update_order_status(request):
    if request.method != "PUT":
        return JsonResponse({"error": "PUT method required"}, status=405)

    data, error = load_json(request)
    if error:
        return error

    order_id = data.get("order_id")
    new_status = data.get("status")
    if not order_id or not new_status:
        return JsonResponse({"error": "order_id and status are required"}, status=400)

    try:
        order = OrderBook().set_status(order_id, new_status)
    except ValueError as e:
        return JsonResponse({"error": str(e)}, status=400)

    if order is None:
        return JsonResponse({"error": "Order not found"}, status=404)

    return JsonResponse({"message": f"Status updated to '{new_status}'", "order": order.to_dict()})


@csrf_exempt
def deliver_order(request):
    if request.method != "POST":
        return JsonResponse({"error": "POST method required"}, status=405)

    data, error = load_json(request)
    if error:
        return error

    order_id = data.get("order_id")
    if not order_id:
        return JsonResponse({"error": "order_id is required"}, status=400)

    result = OrderBook().deliver(order_id)
    if result.delivered:
        return JsonResponse({"message": "Order delivered", "order": result.order.to_dict()})

    if result.reason == "not_found":
        return JsonResponse({"error": "Order not found"}, status=404)
    if result.reason == "unavailable":
        return JsonResponse({
            "error": "Some items are out of stock",
            "unavailable_items": result.unavailable_items,
        }, status=409)
    if result.reason == "not_ready":
        return JsonResponse({"error": "Order is not ready yet"}, status=400)
    return JsonResponse({"error": "Inventory could not be updated for this order"}, status=409)


def delivered_orders(request):
    if request.method != "GET":
        return JsonResponse({"error": "GET method required"}, status=405)

    orders = [o.to_dict() for o in OrderBook().delivered_orders()]
    return JsonResponse(orders, safe=False)
