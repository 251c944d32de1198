"""
Production settings: DJANGO_SETTINGS_MODULE=storefront.production
"""
from .settings import *
import os

from django.core.exceptions import ImproperlyConfigured

DEBUG = False

if SECRET_KEY.startswith('django-insecure'):
    raise ImproperlyConfigured('SECRET_KEY must be set in production')

# The store API carries bearer tokens, so it must be reached over TLS
if not STOREFRONT_API_URL.startswith('https://'):
    raise ImproperlyConfigured('STOREFRONT_API_URL must use https in production')

# Behind a TLS terminating proxy
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_SSL_REDIRECT = True
SECURE_HSTS_SECONDS = 31536000  # 1 year
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

# Session cookie holds the API token and the cart
SESSION_COOKIE_SECURE = True
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = 'Lax'
CSRF_COOKIE_SECURE = True

# JSON API clients on other origins
cors_origins_env = os.getenv('CORS_ALLOWED_ORIGINS')
CORS_ALLOWED_ORIGINS = cors_origins_env.split(',') if cors_origins_env else []
CORS_ALLOWED_ORIGIN_REGEXES = []

csrf_trusted_origins_env = os.getenv('CSRF_TRUSTED_ORIGINS')
if csrf_trusted_origins_env:
    CSRF_TRUSTED_ORIGINS = csrf_trusted_origins_env.split(',')
else:
    CSRF_TRUSTED_ORIGINS = CSRF_TRUSTED_ORIGINS + CORS_ALLOWED_ORIGINS

LOGGING['root']['level'] = os.getenv('STOREFRONT_LOG_LEVEL', 'WARNING')
