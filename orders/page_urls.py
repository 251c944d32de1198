from django.urls import path
from . import pages

urlpatterns = [
    path('checkout/', pages.checkout, name='checkout'),
    path('order-success/', pages.order_success, name='order_success'),
    path('admin/orders/', pages.admin_orders, name='admin_orders'),
]
