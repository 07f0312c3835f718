from django.urls import path
from .views import dashboard_summary, sales_list, today_sales

urlpatterns = [
    path("summary/", dashboard_summary),
    path("sales/", sales_list),
    path("today/", today_sales),
]
