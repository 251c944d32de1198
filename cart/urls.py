from django.urls import path
from . import views

urlpatterns = [
    # Cart management
    path('', views.get_cart, name='get_cart'),
    path('add/', views.add_to_cart, name='add_to_cart'),
    path('items/<str:product_id>/', views.update_cart_item, name='update_cart_item'),
    path('items/<str:product_id>/remove/', views.remove_cart_item, name='remove_cart_item'),
    path('clear/', views.clear_cart, name='clear_cart'),

    # Cart utilities
    path('count/', views.get_cart_count, name='get_cart_count'),
    path('details/', views.get_cart_details, name='get_cart_details'),
]
