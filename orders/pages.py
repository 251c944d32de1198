import logging

from django.contrib import messages
from django.shortcuts import redirect, render

from authentication.session import get_user
from cart.cart import SessionCart
from common.api_client import ApiError, StoreApiClient
from common.decorators import admin_required, login_required
from common.error_utils import format_exception, format_form_errors
from common.utils import api_id
from products.catalog import ProductCatalog
from . import services
from .forms import CheckoutForm, OrderStatusForm

logger = logging.getLogger(__name__)


@login_required
def checkout(request):
    """
    Shipping and payment form; placing the order empties the cart
    """
    cart = SessionCart(request)
    if cart.is_empty:
        messages.info(request, 'Your cart is empty')
        return redirect('cart_detail')

    if request.method == 'POST':
        form = CheckoutForm(request.POST)
        if form.is_valid():
            client = StoreApiClient.for_request(request)
            try:
                order = services.place_order(
                    client, cart, form.cleaned_data, catalog=ProductCatalog(client)
                )
            except ApiError as e:
                logger.error(f"Checkout failed: {e.message}")
                messages.error(request, f"Failed to place order. {format_exception(e)}")
            else:
                request.session[services.LAST_ORDER_SESSION_KEY] = api_id(order)
                messages.success(request, 'Order placed successfully!')
                return redirect('order_success')
    else:
        form = CheckoutForm(initial=CheckoutForm.initial_for(get_user(request)))

    return render(request, 'orders/checkout.html', {
        'form': form,
        'cart': cart,
        'shipping_price': services.SHIPPING_PRICE,
    })


@login_required
def order_success(request):
    order_id = request.session.get(services.LAST_ORDER_SESSION_KEY)
    return render(request, 'orders/order_success.html', {'order_id': order_id})


@admin_required
def admin_orders(request):
    """
    Order table with status filter and inline status change
    """
    client = StoreApiClient.for_request(request)

    if request.method == 'POST':
        form = OrderStatusForm(request.POST)
        order_id = request.POST.get('order_id', '')
        if not form.is_valid() or not order_id:
            messages.error(request, format_form_errors(form) or 'Order not specified')
        else:
            try:
                new_status = services.update_order_status(client, order_id, form.cleaned_data['status'])
                messages.success(request, f"Order status updated to {new_status}")
            except ApiError as e:
                messages.error(request, f"Failed to update order status. {format_exception(e)}")
        return redirect(request.get_full_path())

    status_filter = request.GET.get('status') or services.ALL_STATUSES
    if status_filter != services.ALL_STATUSES and status_filter not in services.ORDER_STATUSES:
        status_filter = services.ALL_STATUSES

    orders, error = [], None
    try:
        orders = services.list_orders(client, status_filter)
    except ApiError as e:
        logger.error(f"Error fetching orders: {e.message}")
        error = format_exception(e)

    return render(request, 'orders/admin_orders.html', {
        'orders': orders,
        'statuses': services.ORDER_STATUSES,
        'status_filter': status_filter,
        'error': error,
    })
