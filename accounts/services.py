"""
Admin user management against the store API.
"""
import logging

from authentication.session import ROLE_ADMIN, ROLE_USER
from common.utils import api_id, format_api_date

logger = logging.getLogger(__name__)

STATUS_ACTIVE = 'active'
STATUS_INACTIVE = 'inactive'

ROLE_CHOICES = [
    (ROLE_USER, 'User'),
    (ROLE_ADMIN, 'Admin'),
]

STATUS_CHOICES = [
    (STATUS_ACTIVE, 'Active'),
    (STATUS_INACTIVE, 'Inactive'),
]


def format_user(data):
    is_admin = bool(data.get('isAdmin'))
    return {
        'id': api_id(data),
        'name': data.get('name') or '',
        'email': data.get('email') or '',
        'role': ROLE_ADMIN if is_admin else ROLE_USER,
        'status': STATUS_INACTIVE if data.get('isActive') is False else STATUS_ACTIVE,
        'created_at': format_api_date(data.get('createdAt')),
        'is_admin': is_admin,
    }


def user_payload(data):
    """
    API body for a user.

    The password goes along only when one was given; ``isAdmin`` and
    ``isActive`` only when a role or status was given, so an update that
    leaves them out keeps the stored values.
    """
    payload = {
        'name': data['name'],
        'email': data['email'],
    }
    if data.get('role'):
        payload['isAdmin'] = data['role'] == ROLE_ADMIN
    if data.get('status'):
        payload['isActive'] = data['status'] != STATUS_INACTIVE
    if data.get('password'):
        payload['password'] = data['password']
    return payload


def list_users(client):
    data = client.get('/users') or []
    if isinstance(data, dict):
        data = data.get('users') or []
    return [format_user(user) for user in data]


def save_user(client, data, user_id=None):
    """
    Create a user, or update ``user_id`` when given
    """
    if user_id:
        payload = user_payload(data)
        saved = client.put(f'/users/{user_id}', data=payload)
        logger.info(f"User updated: {user_id}")
    else:
        payload = user_payload({'role': ROLE_USER, 'status': STATUS_ACTIVE, **data})
        if not payload.get('password'):
            raise ValueError('Password is required for new users')
        saved = client.post('/users', data=payload)
        logger.info(f"User created: {payload['email']}")
    return format_user(saved) if saved else None


def delete_user(client, user_id):
    client.delete(f'/users/{user_id}')
    logger.info(f"User deleted: {user_id}")


def toggle_user_status(client, user):
    """
    Flip a formatted user between active and inactive
    """
    is_active = user['status'] == STATUS_INACTIVE
    client.put(f"/users/{user['id']}", data={
        'name': user['name'],
        'email': user['email'],
        'isAdmin': user['is_admin'],
        'isActive': is_active,
    })
    new_status = STATUS_ACTIVE if is_active else STATUS_INACTIVE
    logger.info(f"User {user['id']} is now {new_status}")
    return new_status


def find_user(users, user_id):
    for user in users:
        if user['id'] == str(user_id):
            return user
    return None
