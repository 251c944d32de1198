from rest_framework.authentication import SessionAuthentication

from .session import get_user


class StoreSessionAuthentication(SessionAuthentication):
    """
    Authenticate JSON requests with the storefront session.

    Same CSRF rules as DRF session authentication; the user comes from the
    store API credentials kept in the session instead of django.contrib.auth.
    """

    def authenticate(self, request):
        user = get_user(request._request)
        if user is None:
            return None

        self.enforce_csrf(request)
        return (user, user.token)
