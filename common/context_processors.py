"""Context processors for the storefront navbar."""
from authentication.session import get_user
from cart.cart import SessionCart


def storefront(request):
    """Add the signed-in user and cart badge to templates."""
    if not hasattr(request, 'session'):
        return {}
    cart = SessionCart(request)
    return {
        'store_user': get_user(request),
        'cart_total_items': cart.total_items,
    }
