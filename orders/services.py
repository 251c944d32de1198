"""
Order placement and admin order management against the store API.
"""
import logging
from decimal import Decimal

from common.api_client import ApiError
from common.utils import api_id, format_api_date, format_currency, to_decimal

logger = logging.getLogger(__name__)

ORDER_STATUSES = ['pending', 'processing', 'shipped', 'delivered', 'cancelled']
ALL_STATUSES = 'all'

PAYMENT_METHODS = [
    ('credit', 'Credit Card'),
    ('paypal', 'PayPal'),
]

SHIPPING_PRICE = Decimal('0.00')

LAST_ORDER_SESSION_KEY = 'last_order_id'


def build_order_payload(items, shipping):
    """
    Request body for POST /orders from cart items and the checkout form
    """
    order_items = []
    items_price = Decimal('0.00')
    for item in items:
        price = to_decimal(item['price'])
        items_price += price * item['quantity']
        order_items.append({
            'product': item['id'],
            'name': item.get('name', ''),
            'price': str(price),
            'quantity': item['quantity'],
            'image': item.get('image', ''),
        })

    total_price = items_price + SHIPPING_PRICE
    return {
        'orderItems': order_items,
        'shippingAddress': {
            'fullName': f"{shipping['first_name']} {shipping['last_name']}".strip(),
            'email': shipping['email'],
            'address': shipping['address'],
            'city': shipping['city'],
            'postalCode': shipping['postal_code'],
            'country': shipping['country'],
        },
        'paymentMethod': shipping['payment_method'],
        'itemsPrice': str(items_price),
        'shippingPrice': str(SHIPPING_PRICE),
        'totalPrice': str(total_price),
    }


def place_order(client, cart, shipping, catalog=None):
    """
    Submit the cart as an order. The cart is cleared only once the API
    accepted the order.
    """
    if cart.is_empty:
        raise ValueError('Cart is empty')

    items = cart.with_details(catalog)
    payload = build_order_payload(items, shipping)
    order = client.post('/orders', data=payload) or {}
    cart.clear()

    logger.info(f"Order placed: {api_id(order) or '-'} ({format_currency(payload['totalPrice'])})")
    return order


def format_order(detail):
    """
    Admin view of an order from its full detail
    """
    customer = detail.get('user') or {}
    shipping = detail.get('shippingAddress') or {}
    return {
        'id': api_id(detail),
        'customer': {
            'id': api_id(customer) if isinstance(customer, dict) else str(customer),
            'name': customer.get('name', '') if isinstance(customer, dict) else '',
            'email': customer.get('email', '') if isinstance(customer, dict) else '',
        },
        'date': format_api_date(detail.get('createdAt')),
        'total': to_decimal(detail.get('totalPrice')),
        'status': (detail.get('status') or 'pending').lower(),
        'is_paid': bool(detail.get('isPaid')),
        'is_delivered': bool(detail.get('isDelivered')),
        'paid_at': format_api_date(detail.get('paidAt')),
        'delivered_at': format_api_date(detail.get('deliveredAt')),
        'payment_method': detail.get('paymentMethod') or '',
        'items': [
            {
                'id': str(item.get('product') or ''),
                'name': item.get('name', ''),
                'price': to_decimal(item.get('price')),
                'quantity': item.get('quantity', 0),
                'image': item.get('image', ''),
            }
            for item in detail.get('orderItems') or []
        ],
        'shipping_address': {
            'street': shipping.get('address', ''),
            'city': shipping.get('city', ''),
            'zip': shipping.get('postalCode', ''),
            'country': shipping.get('country', ''),
        },
    }


def format_order_summary(summary):
    """
    Reduced admin view used when the order detail could not be fetched
    """
    order = format_order({
        '_id': api_id(summary),
        'user': summary.get('user') or {},
        'createdAt': summary.get('createdAt'),
        'totalPrice': summary.get('totalPrice'),
        'status': summary.get('status'),
    })
    order['customer']['email'] = ''
    return order


def filter_orders(orders, status=ALL_STATUSES):
    if not status or status == ALL_STATUSES:
        return list(orders)
    return [order for order in orders if order['status'] == status]


def list_orders(client, status=ALL_STATUSES):
    """
    All orders with their details, optionally filtered by status
    """
    summaries = client.get('/orders') or []
    if isinstance(summaries, dict):
        summaries = summaries.get('orders') or []

    orders = []
    for summary in summaries:
        order_id = api_id(summary)
        try:
            detail = client.get(f'/orders/{order_id}')
            orders.append(format_order(detail or summary))
        except ApiError as e:
            logger.warning(f"Error fetching details for order {order_id}: {e.message}")
            orders.append(format_order_summary(summary))

    return filter_orders(orders, status)


def update_order_status(client, order_id, status):
    if status not in ORDER_STATUSES:
        raise ValueError(f"Invalid order status: {status}")

    client.put(f'/orders/{order_id}', data={'status': status})
    logger.info(f"Order status updated: {order_id} to {status}")
    return status
