from django.urls import path
from . import views

urlpatterns = [
    path('', views.users, name='api_admin_users'),
    path('<str:user_id>/', views.user_detail, name='api_admin_user_detail'),
    path('<str:user_id>/toggle-status/', views.toggle_user_status, name='api_toggle_user_status'),
]
