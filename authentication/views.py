from rest_framework import status, permissions
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
import logging

from common.api_client import ApiAuthError, ApiError, StoreApiClient
from common.error_utils import api_error_response
from . import session
from .serializers import UserLoginSerializer, UserProfileSerializer, UserRegistrationSerializer

logger = logging.getLogger(__name__)


class LoginThrottle(AnonRateThrottle):
    scope = 'login'


@api_view(['POST'])
@permission_classes([permissions.AllowAny])
@throttle_classes([LoginThrottle])
def login(request):
    """
    Sign in with the store API and keep the credentials in the session
    """
    try:
        serializer = UserLoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = session.login(
            request._request,
            serializer.validated_data['email'],
            serializer.validated_data['password'],
            client=StoreApiClient(),
        )
        return Response({
            'message': 'Login successful',
            'user': UserProfileSerializer(user).data,
        }, status=status.HTTP_200_OK)

    except ApiAuthError:
        return Response(
            {'error': 'Invalid email or password'},
            status=status.HTTP_401_UNAUTHORIZED
        )
    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error in login: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['POST'])
@permission_classes([permissions.AllowAny])
@throttle_classes([LoginThrottle])
def register(request):
    """
    Register a new customer and sign them in
    """
    try:
        serializer = UserRegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = session.register(
            request._request,
            serializer.validated_data['name'],
            serializer.validated_data['email'],
            serializer.validated_data['password'],
            client=StoreApiClient(),
        )
        return Response({
            'message': 'Registration successful',
            'user': UserProfileSerializer(user).data,
        }, status=status.HTTP_201_CREATED)

    except ApiError as e:
        return api_error_response(e)
    except Exception as e:
        logger.error(f"Error in registration: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['GET'])
def get_profile(request):
    """
    Get the signed-in user
    """
    serializer = UserProfileSerializer(request.user)
    return Response(serializer.data, status=status.HTTP_200_OK)


@api_view(['POST'])
def logout(request):
    """
    Forget the signed-in user; the cart is kept
    """
    try:
        session.logout(request._request)
        return Response(
            {'message': 'Logout successful'},
            status=status.HTTP_200_OK
        )

    except Exception as e:
        logger.error(f"Error in logout: {str(e)}")
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
