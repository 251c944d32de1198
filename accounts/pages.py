import logging

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from authentication.session import get_user
from common.api_client import ApiError, StoreApiClient
from common.decorators import admin_required
from common.error_utils import format_exception
from . import services
from .forms import UserForm

logger = logging.getLogger(__name__)


@admin_required
def admin_users(request):
    """
    User table with the add / edit form
    """
    client = StoreApiClient.for_request(request)
    users, error = [], None
    try:
        users = services.list_users(client)
    except ApiError as e:
        logger.error(f"Error fetching users: {e.message}")
        error = format_exception(e)

    edit_id = request.GET.get('edit') or request.POST.get('user_id')
    current = None
    if edit_id:
        current = services.find_user(users, edit_id)
        if current is None and error is None:
            raise Http404('User not found')

    if request.method == 'POST':
        form = UserForm(request.POST, editing=current is not None)
        if form.is_valid():
            try:
                services.save_user(client, form.cleaned_data, user_id=current['id'] if current else None)
                verb = 'updated' if current else 'created'
                messages.success(request, f"User {verb} successfully")
                return redirect('admin_users')
            except ApiError as e:
                messages.error(request, f"Failed to save user. {format_exception(e)}")
    elif current is not None:
        form = UserForm(initial=UserForm.initial_for(current), editing=True)
    else:
        form = UserForm()

    return render(request, 'accounts/admin_users.html', {
        'form': form,
        'users': users,
        'current_user': current,
        'error': error,
    })


@admin_required
@require_POST
def admin_delete_user(request, user_id):
    if str(user_id) == get_user(request).id:
        messages.error(request, 'You cannot delete your own account')
        return redirect('admin_users')
    try:
        services.delete_user(StoreApiClient.for_request(request), user_id)
        messages.success(request, 'User deleted successfully')
    except ApiError as e:
        messages.error(request, f"Failed to delete user. {format_exception(e)}")
    return redirect('admin_users')


@admin_required
@require_POST
def admin_toggle_user_status(request, user_id):
    client = StoreApiClient.for_request(request)
    try:
        user = services.find_user(services.list_users(client), user_id)
        if user is None:
            messages.error(request, 'User not found')
        else:
            new_status = services.toggle_user_status(client, user)
            messages.success(request, f"{user['name']} is now {new_status}")
    except ApiError as e:
        messages.error(request, f"Failed to update user status. {format_exception(e)}")
    return redirect('admin_users')
