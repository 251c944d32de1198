from functools import wraps

from django.contrib import messages
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect

from authentication.session import get_user


def login_required(view_func):
    """
    Send anonymous visitors to the login page, then back here
    """
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if get_user(request) is None:
            return redirect_to_login(request.get_full_path())
        return view_func(request, *args, **kwargs)
    return _wrapped


def admin_required(view_func):
    """
    Only admins get through; other signed-in users go back home
    """
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        user = get_user(request)
        if user is None:
            return redirect_to_login(request.get_full_path())
        if not user.is_admin:
            messages.error(request, 'Admin access required')
            return redirect('home')
        return view_func(request, *args, **kwargs)
    return _wrapped
