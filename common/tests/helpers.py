import copy

from django.conf import settings

from authentication.session import ROLE_ADMIN, ROLE_USER, StoreUser


class FakeStoreApi:
    """
    Stand-in for ``StoreApiClient.request`` answering from a route table.

    Routes map ``(method, path)`` to a payload, or to an exception to raise.
    Unknown routes answer ``None`` (an empty body).
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def __call__(self, method, path, params=None, data=None, files=None):
        self.calls.append({'method': method, 'path': path, 'data': data, 'files': files})
        result = self.routes.get((method, path))
        if isinstance(result, Exception):
            raise result
        return copy.deepcopy(result)

    def calls_to(self, method, path):
        return [call for call in self.calls if call['method'] == method and call['path'] == path]


def make_product(product_id='p1', name='Desk Lamp', price='25.00', stock=10, category='Lighting', **extra):
    product = {
        '_id': product_id,
        'name': name,
        'description': f"{name} description",
        'category': category,
        'price': price,
        'stock': stock,
        'images': [f"https://cdn.example.com/{product_id}.jpg"],
    }
    product.update(extra)
    return product


def login_as(client, role=ROLE_USER, user_id='u1', name='Jane Doe', email='jane@example.com', token='test-token'):
    """
    Put a signed-in storefront user into the test client's session
    """
    user = StoreUser(id=user_id, name=name, email=email, role=role, token=token)
    session = client.session
    session[settings.STOREFRONT_SESSION_KEY] = user.to_session()
    session.save()
    return user


def login_as_admin(client, **kwargs):
    kwargs.setdefault('user_id', 'admin1')
    kwargs.setdefault('name', 'Ada Admin')
    kwargs.setdefault('email', 'admin@example.com')
    return login_as(client, role=ROLE_ADMIN, **kwargs)


def put_in_cart(client, *entries):
    """
    Seed the session cart with ``(product, quantity)`` pairs
    """
    session = client.session
    session[settings.CART_SESSION_ID] = [
        {
            'id': product['_id'],
            'name': product['name'],
            'image': product['images'][0],
            'category': product['category'],
            'price': product['price'],
            'stock': product['stock'],
            'quantity': quantity,
        }
        for product, quantity in entries
    ]
    session.save()
