from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.utils.dateparse import parse_date, parse_datetime
from PIL import Image, UnidentifiedImageError
import logging

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = ['jpg', 'jpeg', 'png', 'gif', 'webp']
MAX_IMAGE_SIZE = 5 * 1024 * 1024

TWO_PLACES = Decimal('0.01')


def validate_image_file(file):
    """
    Validate uploaded image file
    """
    # Check file size (5MB limit)
    if file.size > MAX_IMAGE_SIZE:
        return False, "File size cannot exceed 5MB"

    # Check file extension
    ext = file.name.split('.')[-1].lower()

    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        return False, f"File type not supported. Allowed: {', '.join(ALLOWED_IMAGE_EXTENSIONS)}"

    # Check the content really is an image
    try:
        with Image.open(file) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        logger.warning(f"Rejected image upload {file.name}: {str(e)}")
        return False, "File is not a valid image"
    finally:
        file.seek(0)

    return True, "File is valid"


def image_files(images, field_name='images'):
    """
    Multipart file tuples for requests, one per uploaded image
    """
    return [
        (field_name, (image.name, image, getattr(image, 'content_type', None) or 'application/octet-stream'))
        for image in images or []
    ]


def to_decimal(value, default=Decimal('0.00')):
    """
    Parse a price into a two-place Decimal
    """
    if value is None or value == '':
        return default
    try:
        return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return default


def to_int(value, default=0):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def format_currency(amount):
    """
    Format amount as currency
    """
    return f"${to_decimal(amount):,.2f}"


def format_api_date(value):
    """
    Reduce an API timestamp to YYYY-MM-DD, or None
    """
    if not value:
        return None
    try:
        parsed = parse_datetime(str(value))
        if parsed:
            return parsed.date().isoformat()
        parsed = parse_date(str(value))
    except ValueError:
        return None
    return parsed.isoformat() if parsed else None


def api_id(data):
    """
    Identifier of an API document, which may use ``_id`` or ``id``
    """
    value = data.get('_id') or data.get('id')
    return str(value) if value not in (None, '') else ''
