"""
Signed-in storefront user, kept in the Django session.

The store API issues a bearer token at login; the token and the role
derived from the API's ``isAdmin`` flag are what the session holds.
"""
import logging
import time

import jwt
from django.conf import settings

from common.api_client import ApiAuthError, StoreApiClient

logger = logging.getLogger(__name__)

ROLE_ADMIN = 'admin'
ROLE_USER = 'user'


class StoreUser:
    """
    Session credentials of the signed-in customer or admin
    """
    is_authenticated = True
    is_anonymous = False

    def __init__(self, id, name='', email='', role=ROLE_USER, token=None):
        self.id = str(id)
        self.name = name or ''
        self.email = email or ''
        self.role = role if role in (ROLE_ADMIN, ROLE_USER) else ROLE_USER
        self.token = token

    def __repr__(self):
        return f"<StoreUser {self.email} ({self.role})>"

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    @property
    def initial(self):
        return self.name[0].upper() if self.name else 'U'

    @property
    def first_name(self):
        parts = self.name.split(' ')
        return parts[0] if parts else ''

    @property
    def last_name(self):
        parts = self.name.split(' ')
        return parts[1] if len(parts) > 1 else ''

    def to_session(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'token': self.token,
        }

    @classmethod
    def from_session(cls, data):
        return cls(
            id=data['id'],
            name=data.get('name'),
            email=data.get('email'),
            role=data.get('role'),
            token=data.get('token'),
        )

    @classmethod
    def from_api(cls, data):
        is_admin = bool(data.get('isAdmin')) or data.get('role') == ROLE_ADMIN
        return cls(
            id=data.get('_id') or data.get('id'),
            name=data.get('name'),
            email=data.get('email'),
            role=ROLE_ADMIN if is_admin else ROLE_USER,
            token=data.get('token'),
        )


def token_expired(token):
    """
    Whether a JWT bearer token carries an ``exp`` claim in the past.

    The store API verifies the signature; here the claims are only read
    so a stale session is dropped before it is sent upstream. Opaque
    (non-JWT) tokens never count as expired.
    """
    if not token:
        return False
    try:
        claims = jwt.decode(token, options={'verify_signature': False})
    except jwt.PyJWTError:
        return False
    exp = claims.get('exp')
    return exp is not None and exp < time.time()


def _store(request, user):
    # New session key on privilege change; session data (the cart) is kept.
    request.session.cycle_key()
    request.session[settings.STOREFRONT_SESSION_KEY] = user.to_session()
    request.session.modified = True


def get_user(request):
    """
    Return the signed-in StoreUser, or None
    """
    data = request.session.get(settings.STOREFRONT_SESSION_KEY)
    if not data:
        return None

    try:
        user = StoreUser.from_session(data)
    except (KeyError, TypeError, AttributeError) as e:
        logger.warning(f"Dropping corrupted storefront session: {str(e)}")
        request.session.pop(settings.STOREFRONT_SESSION_KEY, None)
        return None

    if token_expired(user.token):
        logger.info(f"Session token expired for {user.email}")
        request.session.pop(settings.STOREFRONT_SESSION_KEY, None)
        return None

    return user


def login(request, email, password, client=None):
    """
    Validate credentials with the store API and keep the session
    """
    client = client or StoreApiClient()
    data = client.post('/users/login', data={'email': email, 'password': password})
    if not data or not data.get('token'):
        raise ApiAuthError('Invalid email or password')

    user = StoreUser.from_api(data)
    _store(request, user)
    logger.info(f"User logged in: {user.email} ({user.role})")
    return user


def register(request, name, email, password, client=None):
    """
    Create a customer account and sign it in
    """
    client = client or StoreApiClient()
    data = client.post('/users', data={'name': name, 'email': email, 'password': password})
    if not data or not data.get('token'):
        return login(request, email, password, client=client)

    user = StoreUser.from_api(data)
    _store(request, user)
    logger.info(f"New customer registered: {user.email}")
    return user


def logout(request):
    """
    Forget the signed-in user; the cart stays in the session
    """
    data = request.session.pop(settings.STOREFRONT_SESSION_KEY, None)
    if isinstance(data, dict):
        logger.info(f"User logged out: {data.get('email', '')}")
