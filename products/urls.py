from django.urls import path
from . import views

urlpatterns = [
    # Catalog
    path('', views.get_products, name='get_products'),
    path('categories/', views.get_product_categories, name='get_product_categories'),

    # Admin product management
    path('create/', views.create_product, name='create_product'),
    path('<str:product_id>/update/', views.update_product, name='update_product'),
    path('<str:product_id>/delete/', views.delete_product, name='delete_product'),

    path('<str:product_id>/', views.get_product_detail, name='get_product_detail'),
]
