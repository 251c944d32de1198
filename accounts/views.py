from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
import logging

from common.api_client import ApiError, StoreApiClient
from common.error_utils import api_error_response
from common.permissions import IsStoreAdmin
from . import services
from .serializers import UserSerializer, UserWriteSerializer

logger = logging.getLogger(__name__)


@api_view(['GET', 'POST'])
@permission_classes([IsStoreAdmin])
def users(request):
    """
    List users, or create one
    """
    try:
        client = StoreApiClient.for_request(request)

        if request.method == 'GET':
            serializer = UserSerializer(services.list_users(client), many=True)
            return Response(serializer.data, status=status.HTTP_200_OK)

        serializer = UserWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = services.save_user(client, serializer.validated_data)
        return Response({
            'user': UserSerializer(user).data if user else None,
            'message': 'User created successfully',
        }, status=status.HTTP_201_CREATED)

    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error managing users: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['PUT', 'PATCH', 'DELETE'])
@permission_classes([IsStoreAdmin])
def user_detail(request, user_id):
    """
    Update or delete a user
    """
    try:
        client = StoreApiClient.for_request(request)

        if request.method == 'DELETE':
            if str(user_id) == str(request.user.id):
                return Response(
                    {'error': 'You cannot delete your own account'},
                    status=status.HTTP_400_BAD_REQUEST
                )
            services.delete_user(client, user_id)
            return Response({'message': 'User deleted successfully'}, status=status.HTTP_200_OK)

        partial = request.method == 'PATCH'
        serializer = UserWriteSerializer(data=request.data, partial=partial, context={'editing': True})
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = dict(serializer.validated_data)
        if partial:
            # Fields left out of a PATCH keep their stored values
            current = services.find_user(services.list_users(client), user_id)
            if current is None:
                return Response(
                    {'error': 'User not found'},
                    status=status.HTTP_404_NOT_FOUND
                )
            data.setdefault('name', current['name'])
            data.setdefault('email', current['email'])

        user = services.save_user(client, data, user_id=user_id)
        return Response({
            'user': UserSerializer(user).data if user else None,
            'message': 'User updated successfully',
        }, status=status.HTTP_200_OK)

    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error updating user {user_id}: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['POST'])
@permission_classes([IsStoreAdmin])
def toggle_user_status(request, user_id):
    """
    Switch a user between active and inactive
    """
    try:
        client = StoreApiClient.for_request(request)
        user = services.find_user(services.list_users(client), user_id)
        if user is None:
            return Response(
                {'error': 'User not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        new_status = services.toggle_user_status(client, user)
        return Response({
            'id': user['id'],
            'status': new_status,
            'message': f"User is now {new_status}",
        }, status=status.HTTP_200_OK)

    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error toggling user status: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
