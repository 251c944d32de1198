from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
import logging

from cart.cart import SessionCart
from common.api_client import ApiError, StoreApiClient
from common.error_utils import api_error_response
from common.permissions import IsStoreAdmin, IsStoreAuthenticated
from common.utils import api_id
from products.catalog import ProductCatalog
from . import services
from .serializers import OrderSerializer, OrderStatusUpdateSerializer, ShippingSerializer

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([IsStoreAuthenticated])
def place_order(request):
    """
    Place a new order from the session cart
    """
    try:
        cart = SessionCart(request)
        if cart.is_empty:
            return Response(
                {'error': 'Cart is empty'},
                status=status.HTTP_400_BAD_REQUEST
            )

        serializer = ShippingSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        client = StoreApiClient.for_request(request)
        order = services.place_order(
            client, cart, serializer.validated_data, catalog=ProductCatalog(client)
        )
        request.session[services.LAST_ORDER_SESSION_KEY] = api_id(order)

        return Response({
            'order_id': api_id(order),
            'message': 'Order placed successfully',
        }, status=status.HTTP_201_CREATED)

    except ApiError as e:
        logger.error(f"Error placing order: {e.message}")
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error placing order: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['GET'])
@permission_classes([IsStoreAdmin])
def get_orders(request):
    """
    All orders for the admin table, filtered by ?status=
    """
    try:
        status_filter = request.GET.get('status', services.ALL_STATUSES)
        if status_filter != services.ALL_STATUSES and status_filter not in services.ORDER_STATUSES:
            return Response(
                {'error': f"Invalid status filter: {status_filter}"},
                status=status.HTTP_400_BAD_REQUEST
            )

        orders = services.list_orders(StoreApiClient.for_request(request), status_filter)
        serializer = OrderSerializer(orders, many=True)
        return Response({
            'orders': serializer.data,
            'count': len(orders),
            'statuses': services.ORDER_STATUSES,
        }, status=status.HTTP_200_OK)

    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error getting orders: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['PATCH', 'PUT'])
@permission_classes([IsStoreAdmin])
def update_order_status(request, order_id):
    """
    Change an order's status
    """
    try:
        serializer = OrderStatusUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        new_status = services.update_order_status(
            StoreApiClient.for_request(request), order_id, serializer.validated_data['status']
        )
        return Response({
            'id': order_id,
            'status': new_status,
            'message': f"Order status updated to {new_status}",
        }, status=status.HTTP_200_OK)

    except ApiError as e:
        logger.error(f"Error updating order status: {e.message}")
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error updating order status: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
