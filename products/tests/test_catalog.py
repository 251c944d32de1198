from decimal import Decimal
from unittest.mock import patch

from django.core.cache import cache
from django.test import TestCase

from common.api_client import ApiError, ApiNotFound, StoreApiClient
from common.tests.helpers import FakeStoreApi, make_product
from products.catalog import ALL_CATEGORIES, ProductCatalog, normalize_product


class NormalizeProductTests(TestCase):
    def test_normalize(self):
        product = normalize_product({
            '_id': 'abc', 'name': 'Chair', 'price': '49.9', 'countInStock': '3',
            'category': {'name': 'Furniture'}, 'image': 'https://cdn/chair.jpg',
        })
        self.assertEqual(product['id'], 'abc')
        self.assertEqual(product['price'], Decimal('49.90'))
        self.assertEqual(product['stock'], 3)
        self.assertEqual(product['category'], 'Furniture')
        self.assertEqual(product['images'], ['https://cdn/chair.jpg'])
        self.assertNotIn('_id', product)

    def test_missing_stock_is_unknown(self):
        self.assertIsNone(normalize_product({'_id': 'x', 'name': 'X'})['stock'])


class ProductCatalogTests(TestCase):
    def setUp(self):
        cache.clear()
        self.api = FakeStoreApi({
            ('GET', '/products'): [
                make_product('p1', 'Desk Lamp', category='Lighting'),
                make_product('p2', 'Floor Lamp', category='Lighting'),
                make_product('p3', 'Oak Table', category='Furniture'),
                make_product('p4', 'Wall Clock', category='Decor'),
            ],
            ('GET', '/products/p1'): make_product('p1', 'Desk Lamp'),
            ('GET', '/products/missing'): ApiNotFound('Product not found'),
            ('GET', '/products/garbled'): ['not', 'a', 'product'],
            ('POST', '/products'): make_product('p5', 'Rug'),
        })
        patcher = patch('common.api_client.StoreApiClient.request', side_effect=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.catalog = ProductCatalog(StoreApiClient(token='t'))

    def test_list_is_cached(self):
        self.catalog.all()
        self.catalog.all()
        self.assertEqual(len(self.api.calls_to('GET', '/products')), 1)

    def test_categories_are_unique_in_order(self):
        self.assertEqual(self.catalog.categories(), ['Lighting', 'Furniture', 'Decor'])

    def test_filter_by_category_and_search(self):
        self.assertEqual(len(self.catalog.filter(category=ALL_CATEGORIES)), 4)
        self.assertEqual([p['id'] for p in self.catalog.filter(category='Lighting')], ['p1', 'p2'])
        self.assertEqual([p['id'] for p in self.catalog.filter(search='lamp')], ['p1', 'p2'])
        self.assertEqual([p['id'] for p in self.catalog.filter(category='Lighting', search='floor')], ['p2'])
        self.assertEqual(self.catalog.filter(search='sofa'), [])

    def test_featured(self):
        self.assertEqual([p['id'] for p in self.catalog.featured()], ['p1', 'p2', 'p3'])

    def test_get_missing_product(self):
        self.assertIsNone(self.catalog.get('missing'))
        self.assertEqual(self.catalog.get('p1')['name'], 'Desk Lamp')

    def test_create_invalidates_cache(self):
        self.catalog.all()
        self.catalog.create({
            'name': 'Rug', 'price': Decimal('80'), 'description': 'Soft', 'category': 'Decor', 'stock': 4,
        })
        self.catalog.all()

        self.assertEqual(len(self.api.calls_to('GET', '/products')), 2)
        post = self.api.calls_to('POST', '/products')[0]
        self.assertEqual(post['data']['price'], '80.00')
        self.assertEqual(post['data']['stock'], '4')

    def test_get_rejects_malformed_product(self):
        with self.assertRaises(ApiError) as ctx:
            self.catalog.get('garbled')
        self.assertEqual(ctx.exception.status_code, 502)

    def test_update_without_known_stock_leaves_it_out(self):
        self.catalog.update('p1', {
            'name': 'Desk Lamp', 'price': Decimal('25'), 'description': 'Bright', 'category': 'Lighting',
            'stock': None,
        })

        put = self.api.calls_to('PUT', '/products/p1')[0]
        self.assertNotIn('stock', put['data'])
        self.assertEqual(put['data']['price'], '25.00')
