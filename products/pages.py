import logging

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from cart.forms import AddToCartForm
from common.api_client import ApiError
from common.decorators import admin_required, login_required
from common.error_utils import format_exception
from .catalog import ALL_CATEGORIES, ProductCatalog
from .forms import ProductForm

logger = logging.getLogger(__name__)


@login_required
def home(request):
    featured, error = [], None
    try:
        featured = ProductCatalog.for_request(request).featured()
    except ApiError as e:
        error = format_exception(e)
    return render(request, 'products/home.html', {'featured_products': featured, 'error': error})


@login_required
def product_list(request):
    selected_category = request.GET.get('category') or ALL_CATEGORIES
    search = request.GET.get('search', '')
    products, categories, error = [], [], None
    try:
        catalog = ProductCatalog.for_request(request)
        products = catalog.filter(category=selected_category, search=search)
        categories = catalog.categories()
    except ApiError as e:
        error = format_exception(e)

    return render(request, 'products/product_list.html', {
        'products': products,
        'categories': categories,
        'selected_category': selected_category,
        'search': search,
        'error': error,
    })


@login_required
def product_detail(request, product_id):
    try:
        product = ProductCatalog.for_request(request).get(product_id)
    except ApiError as e:
        messages.error(request, format_exception(e))
        return redirect('product_list')

    if product is None:
        return render(request, 'products/product_not_found.html', status=404)

    return render(request, 'products/product_detail.html', {
        'product': product,
        'form': AddToCartForm(),
    })


@admin_required
def admin_products(request):
    """
    Product table with the add / edit form
    """
    catalog = ProductCatalog.for_request(request)
    edit_id = request.GET.get('edit') or request.POST.get('product_id')
    current = None
    if edit_id:
        try:
            current = catalog.get(edit_id)
        except ApiError as e:
            messages.error(request, format_exception(e))
            return redirect('admin_products')
        if current is None:
            raise Http404('Product not found')

    if request.method == 'POST':
        form = ProductForm(request.POST, request.FILES, editing=current is not None)
        if form.is_valid():
            data = form.cleaned_data
            try:
                if current is not None:
                    catalog.update(current['id'], data, data['images'])
                    messages.success(request, f"{data['name']} updated")
                else:
                    catalog.create(data, data['images'])
                    messages.success(request, f"{data['name']} added")
                return redirect('admin_products')
            except ApiError as e:
                logger.error(f"Error saving product: {e.message}")
                messages.error(request, f"Failed to save product. {format_exception(e)}")
    elif current is not None:
        form = ProductForm(initial=ProductForm.initial_for(current), editing=True)
    else:
        form = ProductForm()

    products = []
    try:
        products = catalog.all()
    except ApiError as e:
        messages.error(request, format_exception(e))

    return render(request, 'products/admin_products.html', {
        'form': form,
        'products': products,
        'current_product': current,
    })


@admin_required
@require_POST
def admin_delete_product(request, product_id):
    try:
        ProductCatalog.for_request(request).delete(product_id)
        messages.success(request, 'Product deleted')
    except ApiError as e:
        messages.error(request, format_exception(e))
    return redirect('admin_products')
