"""
Shopping cart kept in the session.

Entries are merged by product id, a quantity of zero or less removes the
entry, and the totals are always computed from the entries. The cart
survives reloads and logout until it is cleared or emptied.
"""
import logging
from decimal import Decimal, InvalidOperation

from django.conf import settings

from common.api_client import ApiError
from common.utils import api_id, to_decimal, to_int

logger = logging.getLogger(__name__)

ENTRY_FIELDS = ('name', 'image', 'category')


class SessionCart:
    """
    Cart entries stored under ``settings.CART_SESSION_ID``
    """

    def __init__(self, request):
        self.session = request.session
        self.session_key = settings.CART_SESSION_ID
        self.items = self._load()

    def _load(self):
        stored = self.session.get(self.session_key)
        if not stored:
            return []
        try:
            return [entry for entry in (self._clean(e) for e in stored) if entry['quantity'] > 0]
        except (TypeError, ValueError, KeyError, InvalidOperation) as e:
            logger.warning(f"Discarding corrupted cart: {str(e)}")
            self.session[self.session_key] = []
            self.session.modified = True
            return []

    @staticmethod
    def _clean(entry):
        if not isinstance(entry, dict):
            raise TypeError(f"cart entry is {type(entry).__name__}, not dict")
        product_id = str(entry['id'])
        if not product_id:
            raise ValueError('cart entry without product id')
        stock = entry.get('stock')
        return {
            'id': product_id,
            'name': str(entry.get('name') or ''),
            'image': str(entry.get('image') or ''),
            'category': str(entry.get('category') or ''),
            'price': str(Decimal(str(entry.get('price') or '0'))),
            'stock': int(stock) if stock is not None else None,
            'quantity': int(entry['quantity']),
        }

    @staticmethod
    def _entry_from_product(product):
        product_id = api_id(product)
        if not product_id:
            raise ValueError('Product has no id')
        entry = {field: str(product.get(field) or '') for field in ENTRY_FIELDS}
        stock = product.get('stock')
        entry.update({
            'id': product_id,
            'price': str(to_decimal(product.get('price'))),
            'stock': to_int(stock) if stock is not None else None,
        })
        return entry

    def save(self):
        self.session[self.session_key] = self.items
        self.session.modified = True

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        for entry in self.items:
            item = dict(entry)
            item['price'] = Decimal(entry['price'])
            item['total_price'] = item['price'] * entry['quantity']
            yield item

    def __contains__(self, product_id):
        return self.find(product_id) is not None

    def find(self, product_id):
        product_id = str(product_id)
        for entry in self.items:
            if entry['id'] == product_id:
                return entry
        return None

    @property
    def is_empty(self):
        return not self.items

    @property
    def total_items(self):
        """Total number of units in the cart"""
        return sum(entry['quantity'] for entry in self.items)

    @property
    def total_price(self):
        """Sum of price x quantity over all entries"""
        return sum((Decimal(entry['price']) * entry['quantity'] for entry in self.items), Decimal('0.00'))

    def check_stock(self, product, quantity, replace=False):
        """
        Error message when the entry for ``product`` would exceed its stock.

        ``quantity`` is added to the current entry, or replaces it with
        ``replace``. Products without a known stock are never limited.
        """
        stock = product.get('stock')
        if stock is None:
            return None
        wanted = int(quantity)
        existing = self.find(api_id(product))
        if existing is not None and not replace:
            wanted += existing['quantity']
        if wanted > stock:
            return f"Only {stock} items available in stock"
        return None

    def add(self, product, quantity=1):
        """
        Add a product or raise the quantity of its existing entry.

        Returns ``(entry, created)``.
        """
        quantity = int(quantity)
        if quantity <= 0:
            raise ValueError('Quantity must be greater than 0')

        entry = self._entry_from_product(product)
        existing = self.find(entry['id'])
        if existing is not None:
            existing['quantity'] += quantity
            self.save()
            return existing, False

        entry['quantity'] = quantity
        self.items.append(entry)
        self.save()
        return entry, True

    def remove(self, product_id):
        """Remove an entry; unknown ids are ignored. Returns the removed entry or None"""
        entry = self.find(product_id)
        if entry is None:
            return None
        self.items.remove(entry)
        self.save()
        return entry

    def update(self, product_id, quantity):
        """
        Set the quantity of an entry; zero or less removes it.

        Returns the updated entry, or None when nothing is left for that id.
        """
        quantity = int(quantity)
        if quantity <= 0:
            self.remove(product_id)
            return None

        entry = self.find(product_id)
        if entry is None:
            return None
        entry['quantity'] = quantity
        self.save()
        return entry

    def clear(self):
        self.items = []
        self.session.pop(self.session_key, None)
        self.session.modified = True

    def current_product(self, entry, catalog):
        """Fresh product for a cart entry, the stored entry when it cannot be fetched"""
        try:
            product = catalog.get(entry['id'])
        except ApiError as e:
            logger.warning(f"Using stored cart entry for {entry['id']}: {e.message}")
            product = None
        return product or entry

    def with_details(self, catalog=None):
        """
        Cart items merged with fresh product details from the API.

        An item whose product cannot be fetched is returned as stored.
        """
        items = list(self)
        if catalog is None:
            return items

        detailed = []
        for item in items:
            try:
                product = catalog.get(item['id'])
            except ApiError as e:
                logger.warning(f"Using stored cart entry for {item['id']}: {e.message}")
                product = None

            if product is None:
                detailed.append(item)
                continue

            merged = dict(product)
            merged['quantity'] = item['quantity']
            merged['total_price'] = product['price'] * item['quantity']
            detailed.append(merged)
        return detailed

    def to_dict(self):
        return {
            'items': list(self),
            'total_items': self.total_items,
            'total_price': self.total_price,
            'is_empty': self.is_empty,
        }
