from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from decimal import Decimal
import logging

from common.api_client import ApiError
from common.error_utils import api_error_response
from products.catalog import ProductCatalog
from .cart import SessionCart
from .serializers import (
    CartSerializer, CartItemSerializer, AddToCartSerializer, UpdateCartItemSerializer
)

logger = logging.getLogger(__name__)


def cart_response(cart, status_code=status.HTTP_200_OK, message=None):
    data = dict(CartSerializer(cart.to_dict()).data)
    if message:
        data['message'] = message
    return Response(data, status=status_code)


@api_view(['GET'])
def get_cart(request):
    """
    Get the current session cart with totals
    """
    try:
        return cart_response(SessionCart(request))

    except Exception as e:
        logger.error(f"Error getting cart: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['POST'])
def add_to_cart(request):
    """
    Add item to cart; an existing entry for the product gets the extra quantity
    """
    try:
        serializer = AddToCartSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        product_id = serializer.validated_data['product_id']
        quantity = serializer.validated_data['quantity']

        product = ProductCatalog.for_request(request).get(product_id)
        if product is None:
            return Response(
                {'error': 'Product not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        cart = SessionCart(request)
        stock_error = cart.check_stock(product, quantity)
        if stock_error:
            return Response({'error': stock_error}, status=status.HTTP_400_BAD_REQUEST)

        entry, created = cart.add(product, quantity)
        if created:
            message = f"{entry['name'] or 'Product'} added to cart"
        else:
            message = f"Updated {entry['name'] or 'Product'} quantity in cart"

        logger.info(f"Item added to cart: {entry['id']} x {quantity}")
        return cart_response(cart, status.HTTP_201_CREATED, message)

    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error adding to cart: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['PUT', 'PATCH'])
def update_cart_item(request, product_id):
    """
    Update cart item quantity; zero or less removes the item
    """
    try:
        serializer = UpdateCartItemSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        quantity = serializer.validated_data['quantity']
        cart = SessionCart(request)

        if quantity <= 0:
            removed = cart.remove(product_id)
            message = f"{removed['name'] or 'Product'} removed from cart" if removed else None
            return cart_response(cart, message=message)

        entry = cart.find(product_id)
        if entry is None:
            return Response(
                {'error': 'Item not in cart'},
                status=status.HTTP_404_NOT_FOUND
            )

        product = cart.current_product(entry, ProductCatalog.for_request(request))
        stock_error = cart.check_stock(product, quantity, replace=True)
        if stock_error:
            return Response({'error': stock_error}, status=status.HTTP_400_BAD_REQUEST)

        cart.update(product_id, quantity)
        logger.info(f"Cart item updated: {product_id} -> {quantity}")
        return cart_response(cart, message=f"Updated {entry['name'] or 'Product'} quantity")

    except Exception as e:
        logger.error(f"Error updating cart item: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['DELETE'])
def remove_cart_item(request, product_id):
    """
    Remove item from cart; removing an item that is not there changes nothing
    """
    try:
        cart = SessionCart(request)
        removed = cart.remove(product_id)
        message = None
        if removed:
            message = f"{removed['name'] or 'Product'} removed from cart"
            logger.info(f"Item removed from cart: {product_id}")
        return cart_response(cart, message=message)

    except Exception as e:
        logger.error(f"Error removing cart item: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['POST'])
def clear_cart(request):
    """
    Clear entire cart
    """
    try:
        cart = SessionCart(request)
        cart.clear()
        return cart_response(cart, message='Cart cleared')

    except Exception as e:
        logger.error(f"Error clearing cart: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['GET'])
def get_cart_count(request):
    """
    Cart badge numbers
    """
    cart = SessionCart(request)
    return Response({
        'total_items': cart.total_items,
        'total_price': str(cart.total_price),
    }, status=status.HTTP_200_OK)


@api_view(['GET'])
def get_cart_details(request):
    """
    Cart items merged with fresh product details from the store API
    """
    try:
        cart = SessionCart(request)
        items = cart.with_details(ProductCatalog.for_request(request))
        serializer = CartItemSerializer(items, many=True)
        return Response({
            'items': serializer.data,
            'total_items': cart.total_items,
            'total_price': str(sum((item['total_price'] for item in items), Decimal('0.00'))),
        }, status=status.HTTP_200_OK)

    except Exception as e:
        logger.error(f"Error getting cart details: {str(e)}")
        return Response(
            {'error': 'Failed to fetch cart details'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
