from django.urls import include, path

urlpatterns = [
    path("inventory/", include("inventory.urls")),
    path("orders/", include("orders.urls")),
    path("dashboard/", include("dashboard.urls")),
]
