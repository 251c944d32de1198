import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from common.api_client import ApiAuthError, ApiError
from common.error_utils import format_exception
from . import session
from .forms import LoginForm, RegisterForm

logger = logging.getLogger(__name__)


def _next_url(request):
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return next_url
    return None


def index(request):
    if session.get_user(request) is not None:
        return redirect('home')
    return redirect('login')


def login_page(request):
    if session.get_user(request) is not None:
        return redirect('home')

    if request.method == 'POST':
        form = LoginForm(request.POST)
        if form.is_valid():
            try:
                user = session.login(request, form.cleaned_data['email'], form.cleaned_data['password'])
            except ApiAuthError:
                messages.error(request, 'Invalid email or password')
            except ApiError as e:
                messages.error(request, format_exception(e))
            else:
                messages.success(request, f"Welcome back, {user.name or user.email}!")
                return redirect(_next_url(request) or 'home')
    else:
        form = LoginForm()

    return render(request, 'authentication/login.html', {
        'form': form,
        'next': _next_url(request) or '',
    })


def register_page(request):
    if session.get_user(request) is not None:
        return redirect('home')

    if request.method == 'POST':
        form = RegisterForm(request.POST)
        if form.is_valid():
            try:
                user = session.register(
                    request,
                    form.cleaned_data['name'],
                    form.cleaned_data['email'],
                    form.cleaned_data['password'],
                )
            except ApiError as e:
                messages.error(request, format_exception(e))
            else:
                messages.success(request, f"Welcome, {user.name}!")
                return redirect('home')
    else:
        form = RegisterForm()

    return render(request, 'authentication/register.html', {'form': form})


@require_POST
def logout(request):
    session.logout(request)
    messages.info(request, 'You have been logged out')
    return redirect('login')
