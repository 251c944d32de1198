from io import BytesIO
from unittest.mock import patch

from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from django.urls import reverse
from django.utils.datastructures import MultiValueDict
from PIL import Image
from rest_framework import status
from rest_framework.test import APIClient

from common.api_client import ApiNotFound, ApiUnavailable
from common.tests.helpers import FakeStoreApi, login_as, login_as_admin, make_product
from products.forms import ProductForm


def png_upload(name='lamp.png'):
    buffer = BytesIO()
    Image.new('RGB', (8, 8), color='blue').save(buffer, format='PNG')
    return SimpleUploadedFile(name, buffer.getvalue(), content_type='image/png')


PRODUCT_FIELDS = {
    'name': 'Rug',
    'price': '80.00',
    'description': 'Soft wool rug',
    'category': 'Decor',
    'stock': '4',
}


class ProductPageTests(TestCase):
    def setUp(self):
        cache.clear()
        self.api = FakeStoreApi({
            ('GET', '/products'): [
                make_product('p1', 'Desk Lamp', category='Lighting'),
                make_product('p2', 'Oak Table', category='Furniture'),
            ],
            ('GET', '/products/p1'): make_product('p1', 'Desk Lamp'),
            ('GET', '/products/gone'): ApiNotFound('Product not found'),
        })
        patcher = patch('common.api_client.StoreApiClient.request', side_effect=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)
        login_as(self.client)

    def test_home_shows_featured(self):
        response = self.client.get(reverse('home'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.context['featured_products']), 2)

    def test_product_list_filters(self):
        response = self.client.get(reverse('product_list'), {'category': 'Lighting'})
        self.assertEqual([p['id'] for p in response.context['products']], ['p1'])
        self.assertEqual(response.context['categories'], ['Lighting', 'Furniture'])

    def test_product_list_api_down(self):
        self.api.routes[('GET', '/products')] = ApiUnavailable()
        response = self.client.get(reverse('product_list'))
        self.assertEqual(response.status_code, 200)
        self.assertIsNotNone(response.context['error'])

    def test_product_detail(self):
        response = self.client.get(reverse('product_detail', args=['p1']))
        self.assertContains(response, 'Desk Lamp')

    def test_product_not_found(self):
        response = self.client.get(reverse('product_detail', args=['gone']))
        self.assertEqual(response.status_code, 404)
        self.assertTemplateUsed(response, 'products/product_not_found.html')


class ProductFormTests(TestCase):
    def test_new_product_requires_image(self):
        form = ProductForm(PRODUCT_FIELDS)
        self.assertFalse(form.is_valid())
        self.assertIn('images', form.errors)

    def test_editing_without_images(self):
        form = ProductForm(PRODUCT_FIELDS, editing=True)
        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['images'], [])

    def test_rejects_non_image(self):
        upload = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
        form = ProductForm(PRODUCT_FIELDS, MultiValueDict({'images': [upload]}))
        self.assertFalse(form.is_valid())
        self.assertIn('images', form.errors)


class AdminProductPageTests(TestCase):
    def setUp(self):
        cache.clear()
        self.api = FakeStoreApi({
            ('GET', '/products'): [make_product('p1', 'Desk Lamp')],
            ('GET', '/products/p1'): make_product('p1', 'Desk Lamp'),
            ('POST', '/products'): make_product('p9', 'Rug'),
            ('PUT', '/products/p1'): make_product('p1', 'Desk Lamp XL'),
        })
        patcher = patch('common.api_client.StoreApiClient.request', side_effect=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)
        login_as_admin(self.client)

    def test_create_product_with_image(self):
        data = dict(PRODUCT_FIELDS, images=[png_upload()])
        response = self.client.post(reverse('admin_products'), data)

        self.assertRedirects(response, reverse('admin_products'), fetch_redirect_response=False)
        post = self.api.calls_to('POST', '/products')[0]
        self.assertEqual(post['data']['name'], 'Rug')
        self.assertEqual(len(post['files']), 1)

    def test_edit_form_is_prefilled(self):
        response = self.client.get(reverse('admin_products'), {'edit': 'p1'})
        self.assertEqual(response.context['current_product']['id'], 'p1')
        self.assertEqual(response.context['form'].initial['name'], 'Desk Lamp')

    def test_update_without_new_images(self):
        data = dict(PRODUCT_FIELDS, product_id='p1', name='Desk Lamp XL')
        response = self.client.post(reverse('admin_products'), data)

        self.assertRedirects(response, reverse('admin_products'), fetch_redirect_response=False)
        put = self.api.calls_to('PUT', '/products/p1')[0]
        self.assertEqual(put['data']['name'], 'Desk Lamp XL')
        self.assertEqual(put['files'], [])

    def test_delete_product(self):
        response = self.client.post(reverse('admin_delete_product', args=['p1']))
        self.assertRedirects(response, reverse('admin_products'), fetch_redirect_response=False)
        self.assertEqual(len(self.api.calls_to('DELETE', '/products/p1')), 1)


class ProductApiTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.api = FakeStoreApi({
            ('GET', '/products'): [
                make_product('p1', 'Desk Lamp', category='Lighting'),
                make_product('p2', 'Oak Table', category='Furniture'),
            ],
            ('GET', '/products/p1'): make_product('p1', 'Desk Lamp', stock=7),
            ('PUT', '/products/p1'): make_product('p1', 'Desk Lamp', price='30.00', stock=7),
            ('GET', '/products/nope'): ApiNotFound('Product not found'),
            ('GET', '/products/garbled'): '<html>Bad gateway</html>',
            ('POST', '/products'): make_product('p9', 'Rug'),
        })
        patcher = patch('common.api_client.StoreApiClient.request', side_effect=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_requires_login(self):
        response = self.client.get(reverse('get_products'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_with_search(self):
        login_as(self.client)
        response = self.client.get(reverse('get_products'), {'search': 'oak'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['id'] for p in response.data], ['p2'])

    def test_detail_not_found(self):
        login_as(self.client)
        response = self.client.get(reverse('get_product_detail', args=['nope']))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_create_requires_admin(self):
        login_as(self.client)
        response = self.client.post(reverse('create_product'), PRODUCT_FIELDS, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_create(self):
        login_as_admin(self.client)
        data = dict(PRODUCT_FIELDS, images=[png_upload()])
        response = self.client.post(reverse('create_product'), data, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['id'], 'p9')

    def test_admin_create_without_images(self):
        login_as_admin(self.client)
        response = self.client.post(reverse('create_product'), PRODUCT_FIELDS, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('images', response.data)

    def test_admin_patch_keeps_other_fields(self):
        login_as_admin(self.client)
        response = self.client.patch(reverse('update_product', args=['p1']), {'price': '30.00'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        sent = self.api.calls_to('PUT', '/products/p1')[0]['data']
        self.assertEqual(sent['price'], '30.00')
        self.assertEqual(sent['name'], 'Desk Lamp')
        self.assertEqual(sent['category'], 'Lighting')
        self.assertEqual(sent['description'], 'Desk Lamp description')
        self.assertEqual(sent['stock'], '7')

    def test_admin_patch_missing_product(self):
        login_as_admin(self.client)
        response = self.client.patch(reverse('update_product', args=['nope']), {'price': '30.00'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.api.calls_to('PUT', '/products/nope'), [])

    def test_admin_put_requires_every_field(self):
        login_as_admin(self.client)
        response = self.client.put(reverse('update_product', args=['p1']), {'price': '30.00'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('name', response.data)

    def test_malformed_product_detail(self):
        login_as(self.client)
        response = self.client.get(reverse('get_product_detail', args=['garbled']))
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
