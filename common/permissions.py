from rest_framework import permissions


class IsStoreAuthenticated(permissions.BasePermission):
    """
    Custom permission to only allow signed-in storefront users
    """
    message = 'Please log in to continue'

    def has_permission(self, request, view):
        return bool(
            request.user and
            request.user.is_authenticated
        )


class IsStoreAdmin(permissions.BasePermission):
    """
    Custom permission to only allow storefront admins
    """
    message = 'Admin access required'

    def has_permission(self, request, view):
        return bool(
            request.user and
            request.user.is_authenticated and
            getattr(request.user, 'is_admin', False)
        )
