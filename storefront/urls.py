"""
URL configuration for storefront project.
"""
from django.urls import path, include

from orders.urls import admin_urlpatterns as admin_order_urlpatterns

urlpatterns = [
    # Pages
    path('', include('authentication.page_urls')),
    path('', include('products.page_urls')),
    path('cart/', include('cart.page_urls')),
    path('', include('orders.page_urls')),
    path('', include('accounts.page_urls')),

    # JSON API
    path('api/auth/', include('authentication.urls')),
    path('api/products/', include('products.urls')),
    path('api/cart/', include('cart.urls')),
    path('api/orders/', include('orders.urls')),
    path('api/admin/orders/', include(admin_order_urlpatterns)),
    path('api/admin/users/', include('accounts.urls')),
]
