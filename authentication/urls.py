from django.urls import path
from . import views

urlpatterns = [
    path('login/', views.login, name='api_login'),
    path('register/', views.register, name='api_register'),
    path('me/', views.get_profile, name='api_profile'),
    path('logout/', views.logout, name='api_logout'),
]
