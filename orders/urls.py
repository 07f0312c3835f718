from django.urls import path
from . import views

urlpatterns = [
    path('chat/', views.chat, name='order_chat'),
    path('payment/start/', views.start_payment, name='start_payment'),
    path('payment/qr/', views.payment_qr, name='payment_qr'),
    path('payment/confirm/', views.confirm_payment, name='confirm_payment'),
    path('payment/cancel/', views.cancel_payment, name='cancel_payment'),
    path('list/', views.list_orders, name='list_orders'),
    path('update-status/', views.update_order_status, name='update_order_status'),
    path('deliver/', views.deliver_order, name='deliver_order'),
    path('delivered/', views.delivered_orders, name='delivered_orders'),
]
