import logging
from http.cookiejar import DefaultCookiePolicy

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

_http_session = None


class ApiError(Exception):
    """
    Error answered by (or while talking to) the store API
    """
    default_message = 'Store API request failed'
    default_status = 500

    def __init__(self, message=None, status_code=None, payload=None):
        self.message = message or self.default_message
        self.status_code = status_code or self.default_status
        self.payload = payload if isinstance(payload, dict) else {}
        super().__init__(self.message)


class ApiAuthError(ApiError):
    default_message = 'Not authorized'
    default_status = 401


class ApiNotFound(ApiError):
    default_message = 'Not found'
    default_status = 404


class ApiUnavailable(ApiError):
    default_message = 'Store API is unavailable. Please try again.'
    default_status = 503


def get_http_session():
    """
    Process wide requests session so connections to the store API are pooled
    """
    global _http_session
    if _http_session is None:
        _http_session = requests.Session()
        # Shared by every storefront user, so upstream cookies are never kept
        _http_session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
    return _http_session


def extract_error_message(payload):
    """
    Pull a human readable message out of an API error body
    """
    if isinstance(payload, dict):
        for key in ('message', 'error', 'detail'):
            if payload.get(key):
                return str(payload[key])
    return None


class StoreApiClient:
    """
    Thin REST client for the store API.

    JSON bodies by default, multipart/form-data when files are attached,
    and a bearer token header when the client carries a token.
    """

    def __init__(self, base_url=None, token=None, timeout=None, session=None):
        self.base_url = (base_url or settings.STOREFRONT_API_URL).rstrip('/')
        self.token = token
        self.timeout = timeout or settings.STOREFRONT_API_TIMEOUT
        self.session = session or get_http_session()

    @classmethod
    def for_request(cls, request):
        """Client authorized with the token of the signed-in storefront user"""
        from authentication.session import get_user

        user = get_user(request)
        return cls(token=user.token if user else None)

    def build_url(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def get_headers(self):
        headers = {'Accept': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def request(self, method, path, params=None, data=None, files=None):
        url = self.build_url(path)
        kwargs = {
            'headers': self.get_headers(),
            'params': params,
            'timeout': self.timeout,
        }
        if files:
            kwargs['data'] = data or {}
            kwargs['files'] = files
        elif data is not None:
            kwargs['json'] = data

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"Store API {method} {url} failed: {str(e)}")
            raise ApiUnavailable() from e

        try:
            payload = response.json() if response.content else None
        except ValueError:
            payload = None

        if response.ok:
            return payload

        message = extract_error_message(payload)
        logger.warning(f"Store API {method} {url} answered {response.status_code}: {message}")

        if response.status_code in (401, 403):
            raise ApiAuthError(message, response.status_code, payload)
        if response.status_code == 404:
            raise ApiNotFound(message, response.status_code, payload)
        raise ApiError(message, response.status_code, payload)

    def get(self, path, params=None):
        return self.request('GET', path, params=params)

    def post(self, path, data=None, files=None):
        return self.request('POST', path, data=data, files=files)

    def put(self, path, data=None, files=None):
        return self.request('PUT', path, data=data, files=files)

    def delete(self, path):
        return self.request('DELETE', path)
