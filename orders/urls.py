from django.urls import path
from . import views

urlpatterns = [
    path('place/', views.place_order, name='api_place_order'),
]

admin_urlpatterns = [
    path('', views.get_orders, name='api_admin_orders'),
    path('<str:order_id>/', views.update_order_status, name='api_update_order_status'),
]
