from unittest.mock import patch

from django.conf import settings
from django.core.cache import cache
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from common.api_client import ApiNotFound, ApiUnavailable
from common.tests.helpers import FakeStoreApi, login_as, make_product, put_in_cart


class CartPageTests(TestCase):
    def setUp(self):
        cache.clear()
        self.lamp = make_product('p1', 'Desk Lamp', price='25.00', stock=5)
        self.api = FakeStoreApi({
            ('GET', '/products/p1'): self.lamp,
            ('GET', '/products/gone'): ApiNotFound('Product not found'),
        })
        patcher = patch('common.api_client.StoreApiClient.request', side_effect=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)
        login_as(self.client)

    def cart_items(self):
        return self.client.session.get(settings.CART_SESSION_ID, [])

    def test_add_twice_merges(self):
        self.client.post(reverse('cart_add', args=['p1']), {'quantity': 1})
        response = self.client.post(reverse('cart_add', args=['p1']), {'quantity': 2})

        self.assertRedirects(response, reverse('cart_detail'), fetch_redirect_response=False)
        self.assertEqual(len(self.cart_items()), 1)
        self.assertEqual(self.cart_items()[0]['quantity'], 3)

    def test_add_beyond_stock_is_refused(self):
        response = self.client.post(reverse('cart_add', args=['p1']), {'quantity': 6}, follow=True)
        self.assertContains(response, 'Only 5 items available in stock')
        self.assertEqual(self.cart_items(), [])

    def test_add_missing_product(self):
        response = self.client.post(reverse('cart_add', args=['gone']), {'quantity': 1})
        self.assertRedirects(response, reverse('product_list'), fetch_redirect_response=False)
        self.assertEqual(self.cart_items(), [])

    def test_add_requires_post(self):
        response = self.client.get(reverse('cart_add', args=['p1']))
        self.assertEqual(response.status_code, 405)

    def test_update_to_zero_removes(self):
        put_in_cart(self.client, (self.lamp, 2))
        self.client.post(reverse('cart_update', args=['p1']), {'quantity': 0})
        self.assertEqual(self.cart_items(), [])

    def test_remove_absent_is_noop(self):
        put_in_cart(self.client, (self.lamp, 2))
        response = self.client.post(reverse('cart_remove', args=['nope']))
        self.assertRedirects(response, reverse('cart_detail'), fetch_redirect_response=False)
        self.assertEqual(self.cart_items()[0]['quantity'], 2)

    def test_cart_page_totals(self):
        put_in_cart(self.client, (self.lamp, 3))
        response = self.client.get(reverse('cart_detail'))
        self.assertContains(response, '$75.00')
        self.assertEqual(response.context['cart_total_items'], 3)

    def test_clear(self):
        put_in_cart(self.client, (self.lamp, 3))
        self.client.post(reverse('cart_clear'))
        self.assertEqual(self.cart_items(), [])

    def test_update_checks_current_stock(self):
        put_in_cart(self.client, (self.lamp, 1))
        self.api.routes[('GET', '/products/p1')] = make_product('p1', 'Desk Lamp', price='25.00', stock=2)

        response = self.client.post(reverse('cart_update', args=['p1']), {'quantity': 4}, follow=True)

        self.assertContains(response, 'Only 2 items available in stock')
        self.assertEqual(self.cart_items()[0]['quantity'], 1)

    def test_update_after_restock(self):
        put_in_cart(self.client, (self.lamp, 1))
        self.api.routes[('GET', '/products/p1')] = make_product('p1', 'Desk Lamp', price='25.00', stock=20)

        self.client.post(reverse('cart_update', args=['p1']), {'quantity': 9})

        self.assertEqual(self.cart_items()[0]['quantity'], 9)


class CartApiTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.lamp = make_product('p1', 'Desk Lamp', price='25.00', stock=5)
        self.table = make_product('p2', 'Oak Table', price='120.50', stock=None)
        self.api = FakeStoreApi({
            ('GET', '/products/p1'): self.lamp,
            ('GET', '/products/p2'): self.table,
        })
        patcher = patch('common.api_client.StoreApiClient.request', side_effect=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)
        login_as(self.client)

    def test_requires_login(self):
        response = APIClient().get(reverse('get_cart'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_add_and_merge(self):
        response = self.client.post(reverse('add_to_cart'), {'product_id': 'p1', 'quantity': 2}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Desk Lamp added to cart')

        response = self.client.post(reverse('add_to_cart'), {'product_id': 'p1', 'quantity': 1}, format='json')
        self.assertEqual(response.data['message'], 'Updated Desk Lamp quantity in cart')
        self.assertEqual(len(response.data['items']), 1)
        self.assertEqual(response.data['items'][0]['quantity'], 3)
        self.assertEqual(response.data['total_price'], '75.00')

    def test_add_unknown_product(self):
        response = self.client.post(reverse('add_to_cart'), {'product_id': 'zzz'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_add_invalid_quantity(self):
        response = self.client.post(reverse('add_to_cart'), {'product_id': 'p1', 'quantity': 0}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_quantity_and_remove_with_zero(self):
        put_in_cart(self.client, (self.lamp, 1), (self.table, 1))

        response = self.client.put(reverse('update_cart_item', args=['p2']), {'quantity': 4}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_price'], '507.00')

        response = self.client.put(reverse('update_cart_item', args=['p2']), {'quantity': 0}, format='json')
        self.assertEqual([item['id'] for item in response.data['items']], ['p1'])
        self.assertEqual(response.data['total_price'], '25.00')

    def test_update_unknown_item(self):
        response = self.client.put(reverse('update_cart_item', args=['p1']), {'quantity': 2}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_beyond_stock(self):
        put_in_cart(self.client, (self.lamp, 1))
        response = self.client.put(reverse('update_cart_item', args=['p1']), {'quantity': 9}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Only 5 items available in stock')

    def test_remove_absent_item(self):
        put_in_cart(self.client, (self.lamp, 2))
        response = self.client.delete(reverse('remove_cart_item', args=['nope']))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_items'], 2)
        self.assertNotIn('message', response.data)

    def test_count_and_clear(self):
        put_in_cart(self.client, (self.lamp, 2), (self.table, 1))
        response = self.client.get(reverse('get_cart_count'))
        self.assertEqual(response.data, {'total_items': 3, 'total_price': '170.50'})

        response = self.client.post(reverse('clear_cart'))
        self.assertTrue(response.data['is_empty'])
        self.assertEqual(response.data['total_price'], '0.00')

    def test_details_use_fresh_prices(self):
        put_in_cart(self.client, (self.lamp, 2))
        self.api.routes[('GET', '/products/p1')] = make_product('p1', 'Desk Lamp', price='30.00', stock=5)

        response = self.client.get(reverse('get_cart_details'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['items'][0]['total_price'], '60.00')
        self.assertEqual(response.data['total_price'], '60.00')

    def test_update_after_restock(self):
        put_in_cart(self.client, (self.lamp, 1))
        self.api.routes[('GET', '/products/p1')] = make_product('p1', 'Desk Lamp', price='25.00', stock=20)

        response = self.client.put(reverse('update_cart_item', args=['p1']), {'quantity': 9}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['items'][0]['quantity'], 9)

    def test_update_checks_current_stock(self):
        put_in_cart(self.client, (self.lamp, 1))
        self.api.routes[('GET', '/products/p1')] = make_product('p1', 'Desk Lamp', price='25.00', stock=2)

        response = self.client.put(reverse('update_cart_item', args=['p1']), {'quantity': 3}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Only 2 items available in stock')

    def test_update_uses_stored_stock_when_api_is_down(self):
        put_in_cart(self.client, (self.lamp, 1))
        self.api.routes[('GET', '/products/p1')] = ApiUnavailable()

        response = self.client.put(reverse('update_cart_item', args=['p1']), {'quantity': 6}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Only 5 items available in stock')
