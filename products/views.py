from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
import logging

from common.api_client import ApiError
from common.error_utils import api_error_response
from common.permissions import IsStoreAdmin, IsStoreAuthenticated
from .catalog import PRODUCT_FIELDS, ProductCatalog
from .serializers import ProductSerializer, ProductWriteSerializer

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([IsStoreAuthenticated])
def get_products(request):
    """
    List catalog products, filtered by category and search term
    """
    try:
        catalog = ProductCatalog.for_request(request)
        products = catalog.filter(
            category=request.query_params.get('category'),
            search=request.query_params.get('search', ''),
        )
        serializer = ProductSerializer(products, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error getting products: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['GET'])
@permission_classes([IsStoreAuthenticated])
def get_product_detail(request, product_id):
    """
    Get product detail
    """
    try:
        product = ProductCatalog.for_request(request).get(product_id)
        if product is None:
            return Response(
                {'error': 'Product not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        serializer = ProductSerializer(product)
        return Response(serializer.data, status=status.HTTP_200_OK)

    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error getting product detail: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['GET'])
@permission_classes([IsStoreAuthenticated])
def get_product_categories(request):
    """
    Get the categories present in the catalog
    """
    try:
        categories = ProductCatalog.for_request(request).categories()
        return Response(categories, status=status.HTTP_200_OK)

    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error getting product categories: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['POST'])
@permission_classes([IsStoreAdmin])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def create_product(request):
    """
    Create a new product - admin only
    """
    try:
        serializer = ProductWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        product = ProductCatalog.for_request(request).create(data, data.get('images'))
        return Response(ProductSerializer(product).data if product else {}, status=status.HTTP_201_CREATED)

    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error creating product: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['PUT', 'PATCH'])
@permission_classes([IsStoreAdmin])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def update_product(request, product_id):
    """
    Update a product - admin only; images are optional
    """
    try:
        catalog = ProductCatalog.for_request(request)
        partial = request.method == 'PATCH'
        serializer = ProductWriteSerializer(data=request.data, partial=partial, context={'editing': True})
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = dict(serializer.validated_data)
        if partial:
            # Fields left out of a PATCH keep their stored values
            current = catalog.get(product_id)
            if current is None:
                return Response(
                    {'error': 'Product not found'},
                    status=status.HTTP_404_NOT_FOUND
                )
            for field in PRODUCT_FIELDS:
                data.setdefault(field, current[field])

        product = catalog.update(product_id, data, data.get('images'))
        return Response(ProductSerializer(product).data if product else {}, status=status.HTTP_200_OK)

    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error updating product: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['DELETE'])
@permission_classes([IsStoreAdmin])
def delete_product(request, product_id):
    """
    Delete a product - admin only
    """
    try:
        ProductCatalog.for_request(request).delete(product_id)
        return Response({'message': 'Product deleted successfully'}, status=status.HTTP_200_OK)

    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error deleting product: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
