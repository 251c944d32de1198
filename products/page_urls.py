from django.urls import path
from . import pages

urlpatterns = [
    path('home/', pages.home, name='home'),
    path('products/', pages.product_list, name='product_list'),
    path('products/<str:product_id>/', pages.product_detail, name='product_detail'),

    # Admin
    path('admin/', pages.admin_products, name='admin_products'),
    path('admin/products/<str:product_id>/delete/', pages.admin_delete_product, name='admin_delete_product'),
]
