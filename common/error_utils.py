from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from django.core.exceptions import ValidationError as DjangoValidationError

from .api_client import ApiError


def _flatten(values):
    msgs = []
    for v in values:
        if isinstance(v, list):
            msgs.extend([str(item) for item in v])
        else:
            msgs.append(str(v))
    return msgs


def format_exception(e):
    if isinstance(e, ApiError):
        return e.message
    if isinstance(e, DRFValidationError):
        if isinstance(e.detail, dict):
            return " ".join(_flatten(e.detail.values()))
        elif isinstance(e.detail, list):
            return " ".join([str(item) for item in e.detail])
        return str(e.detail)
    elif isinstance(e, DjangoValidationError):
        if hasattr(e, 'message_dict') and e.message_dict:
            return " ".join(_flatten(e.message_dict.values()))
        elif hasattr(e, 'messages'):
            return " ".join([str(m) for m in e.messages])
    return str(e)


def format_form_errors(form):
    """
    Join the errors of a bound Django form into one line
    """
    return " ".join(_flatten(form.errors.values()))


def api_error_response(e):
    """
    Relay a store API error to a JSON client with the upstream status
    """
    status_code = e.status_code if 400 <= e.status_code < 600 else status.HTTP_502_BAD_GATEWAY
    return Response({'error': format_exception(e)}, status=status_code)
