from django.urls import path
from . import pages

urlpatterns = [
    path('admin/users/', pages.admin_users, name='admin_users'),
    path('admin/users/<str:user_id>/delete/', pages.admin_delete_user, name='admin_delete_user'),
    path('admin/users/<str:user_id>/toggle-status/', pages.admin_toggle_user_status, name='admin_toggle_user_status'),
]
