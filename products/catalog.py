"""
Product catalog backed by the store API.

The product list is fetched once and kept in the Django cache; categories,
search and the featured shelf are computed from that cached list. Writes go
straight to the API and drop the cached list.
"""
import logging

from django.conf import settings
from django.core.cache import cache

from common.api_client import ApiError, ApiNotFound, StoreApiClient
from common.utils import api_id, image_files, to_decimal, to_int

logger = logging.getLogger(__name__)

CATALOG_CACHE_KEY = 'storefront:catalog:products'
ALL_CATEGORIES = 'All'

# Fields sent to the API on create and update
PRODUCT_FIELDS = ('name', 'price', 'description', 'category', 'stock')


def normalize_product(data):
    """
    Product dict with a string ``id``, Decimal ``price`` and an ``images`` list
    """
    images = data.get('images') or []
    if isinstance(images, str):
        images = [images]
    if not images and data.get('image'):
        images = [data['image']]

    category = data.get('category') or ''
    if isinstance(category, dict):
        category = category.get('name') or ''

    stock = data.get('stock', data.get('countInStock'))

    product = dict(data)
    product.pop('_id', None)
    product.update({
        'id': api_id(data),
        'name': data.get('name') or '',
        'description': data.get('description') or '',
        'category': category,
        'price': to_decimal(data.get('price')),
        'stock': to_int(stock) if stock is not None else None,
        'images': list(images),
        'image': images[0] if images else '',
    })
    return product


def product_form_data(data):
    """
    Flatten validated product fields into multipart form values
    """
    form = {
        'name': data['name'],
        'price': str(to_decimal(data['price'])),
        'description': data['description'],
        'category': data['category'],
    }
    if data.get('stock') is not None:
        form['stock'] = str(data['stock'])
    return form


class ProductCatalog:
    """
    Cached view of the store's products
    """

    def __init__(self, client):
        self.client = client

    @classmethod
    def for_request(cls, request):
        return cls(StoreApiClient.for_request(request))

    @staticmethod
    def invalidate():
        cache.delete(CATALOG_CACHE_KEY)

    def all(self):
        products = cache.get(CATALOG_CACHE_KEY)
        if products is None:
            data = self.client.get('/products')
            if isinstance(data, dict):
                data = data.get('products') or []
            products = [normalize_product(p) for p in data or []]
            cache.set(CATALOG_CACHE_KEY, products, settings.STOREFRONT_CATALOG_CACHE_TIMEOUT)
            logger.info(f"Catalog refreshed: {len(products)} products")
        return products

    def categories(self):
        """Unique categories in the order they first appear"""
        categories = []
        for product in self.all():
            category = product['category']
            if category and category not in categories:
                categories.append(category)
        return categories

    def filter(self, category=None, search=''):
        search = (search or '').strip().lower()
        products = []
        for product in self.all():
            if category and category != ALL_CATEGORIES and product['category'] != category:
                continue
            if search and search not in product['name'].lower() and search not in product['description'].lower():
                continue
            products.append(product)
        return products

    def featured(self, limit=3):
        return self.all()[:limit]

    def get(self, product_id):
        """Fresh product detail from the API, None when it does not exist"""
        try:
            data = self.client.get(f'/products/{product_id}')
        except ApiNotFound:
            return None
        if not data:
            return None
        try:
            return normalize_product(data)
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"Unexpected product response for {product_id}: {str(e)}")
            raise ApiError('Unexpected product response from store API', 502)

    def create(self, data, images=None):
        created = self.client.post('/products', data=product_form_data(data), files=image_files(images))
        self.invalidate()
        logger.info(f"Product created: {data['name']}")
        return normalize_product(created) if created else None

    def update(self, product_id, data, images=None):
        # Without new images the existing ones are kept and the body goes as JSON
        updated = self.client.put(f'/products/{product_id}', data=product_form_data(data), files=image_files(images))
        self.invalidate()
        logger.info(f"Product updated: {product_id}")
        return normalize_product(updated) if updated else None

    def delete(self, product_id):
        self.client.delete(f'/products/{product_id}')
        self.invalidate()
        logger.info(f"Product deleted: {product_id}")
