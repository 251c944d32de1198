from django.urls import path
from . import pages

urlpatterns = [
    path('', pages.cart_detail, name='cart_detail'),
    path('add/<str:product_id>/', pages.cart_add, name='cart_add'),
    path('update/<str:product_id>/', pages.cart_update, name='cart_update'),
    path('remove/<str:product_id>/', pages.cart_remove, name='cart_remove'),
    path('clear/', pages.cart_clear, name='cart_clear'),
]
