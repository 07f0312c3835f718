import json
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt

from .store import InventoryStore


def item_payload(item):
    data = item.to_dict()
    data["status"] = item.status
    return data


# add inventory item

@csrf_exempt
def add_inventory(request):
    if request.method != "POST":
        return JsonResponse({"error": "POST method required"}, status=405)

    try:
        data = json.loads(request.body)
    except json.JSONDecodeError:
        return JsonResponse({"error": "Invalid JSON"}, status=400)

    missing = [f for f in ("item_name", "price", "quantity") if data.get(f) in (None, "")]
    if missing:
        return JsonResponse({"error": f"{', '.join(missing)} required"}, status=400)

    try:
        item = InventoryStore().add(
            item_name=data["item_name"],
            price=data["price"],
            quantity=data["quantity"],
            min_stock=data.get("min_stock"),
        )
    except (TypeError, ValueError) as e:
        return JsonResponse({"error": str(e)}, status=400)

    return JsonResponse({
        "message": "Inventory item added successfully",
        "item": item_payload(item),
    }, status=201)


@csrf_exempt
def update_inventory(request):
    if request.method != "PUT":
        return JsonResponse({"error": "PUT method required"}, status=405)

    try:
        data = json.loads(request.body)
    except json.JSONDecodeError:
        return JsonResponse({"error": "Invalid JSON"}, status=400)

    item_id = data.get("item_id")
    if not item_id:
        return JsonResponse({"error": "item_id is required"}, status=400)

    fields = {
        f: data[f]
        for f in ("item_name", "price", "quantity", "min_stock")
        if f in data
    }
    if not fields:
        return JsonResponse({"error": "Nothing to update"}, status=400)

    try:
        item = InventoryStore().update(item_id, **fields)
    except (TypeError, ValueError) as e:
        return JsonResponse({"error": str(e)}, status=400)

    if item is None:
        return JsonResponse({"error": "Inventory item not found"}, status=404)

    return JsonResponse({
        "message": "Inventory item updated successfully",
        "item": item_payload(item),
    })


@csrf_exempt
def delete_inventory(request):
    if request.method != "DELETE":
        return JsonResponse({"error": "DELETE method required"}, status=405)

    try:
        data = json.loads(request.body)
    except json.JSONDecodeError:
        return JsonResponse({"error": "Invalid JSON"}, status=400)

    item_id = data.get("item_id")
    if not item_id:
        return JsonResponse({"error": "item_id is required"}, status=400)

    if not InventoryStore().delete(item_id):
        return JsonResponse({"error": "Inventory item not found"}, status=404)

    return JsonResponse({"message": "Inventory item deleted successfully"})

# list of inventory

def list_inventory(request):
    if request.method != "GET":
        return JsonResponse({"error": "GET method required"}, status=405)

    items = [item_payload(item) for item in InventoryStore().all()]
    return JsonResponse(items, safe=False)


def inventory_status(request):
    if request.method != "GET":
        return JsonResponse({"error": "GET method required"}, status=405)

    return JsonResponse(InventoryStore().status_map())
