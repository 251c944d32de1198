from django.urls import path
from . import pages

urlpatterns = [
    path('', pages.index, name='index'),
    path('login/', pages.login_page, name='login'),
    path('register/', pages.register_page, name='register'),
    path('logout/', pages.logout, name='logout'),
]
