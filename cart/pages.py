import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from common.api_client import ApiError
from common.decorators import login_required
from common.error_utils import format_exception, format_form_errors
from products.catalog import ProductCatalog
from .cart import SessionCart
from .forms import AddToCartForm, UpdateQuantityForm

logger = logging.getLogger(__name__)


@login_required
def cart_detail(request):
    cart = SessionCart(request)
    return render(request, 'cart/cart.html', {'cart': cart})


@login_required
@require_POST
def cart_add(request, product_id):
    form = AddToCartForm(request.POST)
    if not form.is_valid():
        messages.error(request, format_form_errors(form))
        return redirect('product_detail', product_id=product_id)

    try:
        product = ProductCatalog.for_request(request).get(product_id)
    except ApiError as e:
        messages.error(request, format_exception(e))
        return redirect('product_list')

    if product is None:
        messages.error(request, 'Product not found')
        return redirect('product_list')

    cart = SessionCart(request)
    quantity = form.cleaned_data['quantity']
    stock_error = cart.check_stock(product, quantity)
    if stock_error:
        messages.error(request, stock_error)
        return redirect('product_detail', product_id=product_id)

    entry, created = cart.add(product, quantity)
    logger.info(f"Item added to cart: {entry['id']} x {quantity}")
    name = entry['name'] or 'Product'
    if created:
        messages.success(request, f"{name} added to cart")
    else:
        messages.success(request, f"Updated {name} quantity in cart")

    next_url = request.POST.get('next')
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()):
        return redirect(next_url)
    return redirect('cart_detail')


@login_required
@require_POST
def cart_update(request, product_id):
    form = UpdateQuantityForm(request.POST)
    if not form.is_valid():
        messages.error(request, format_form_errors(form))
        return redirect('cart_detail')

    cart = SessionCart(request)
    quantity = form.cleaned_data['quantity']
    entry = cart.find(product_id)
    if entry is None:
        return redirect('cart_detail')

    name = entry['name'] or 'Product'
    if quantity <= 0:
        cart.remove(product_id)
        messages.success(request, f"{name} removed from cart")
        return redirect('cart_detail')

    product = cart.current_product(entry, ProductCatalog.for_request(request))
    stock_error = cart.check_stock(product, quantity, replace=True)
    if stock_error:
        messages.error(request, stock_error)
        return redirect('cart_detail')

    cart.update(product_id, quantity)
    messages.success(request, f"Updated {name} quantity")
    return redirect('cart_detail')


@login_required
@require_POST
def cart_remove(request, product_id):
    removed = SessionCart(request).remove(product_id)
    if removed:
        messages.success(request, f"{removed['name'] or 'Product'} removed from cart")
    return redirect('cart_detail')


@login_required
@require_POST
def cart_clear(request):
    SessionCart(request).clear()
    messages.success(request, 'Cart cleared')
    return redirect('cart_detail')
