"""
Input validation helpers.
Errors are collected per field and raised together as a ValidationError.
"""
import os
import re
from decimal import Decimal

from flask import current_app

from models import HotelStatus, Currency
from services.exceptions import ValidationError
from utils.decimal_utils import parse_decimal_input

EMAIL_REGEX = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
MAX_PRICE = Decimal('99999999.99')  # Numeric(10, 2)


def file_size(file):
    """Size in bytes of an uploaded FileStorage, stream rewound afterwards"""
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


class FormValidator:
    """
    Collects field errors.

    Usage:
        validator = FormValidator(data)
        name = validator.string('name', required=True, max_length=255)
        validator.raise_if_errors()
    """

    def __init__(self, data):
        self.data = data or {}
        self.errors = {}

    def add_error(self, field, message):
        self.errors.setdefault(field, []).append(message)

    def present(self, field):
        return field in self.data

    def _raw(self, field, required):
        value = self.data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            if required:
                self.add_error(field, f'The {field} field is required.')
            return None
        return value

    def string(self, field, required=False, max_length=None):
        value = self._raw(field, required)
        if value is None:
            return None
        if not isinstance(value, str):
            self.add_error(field, f'The {field} field must be a string.')
            return None
        value = value.strip()
        if max_length and len(value) > max_length:
            self.add_error(field, f'The {field} field must not be greater than {max_length} characters.')
            return None
        return value

    def email(self, field, required=False, max_length=255):
        value = self.string(field, required=required, max_length=max_length)
        if value is not None and not EMAIL_REGEX.match(value):
            self.add_error(field, f'The {field} field must be a valid email address.')
            return None
        return value

    def decimal(self, field, required=False, min_value=None, max_value=None):
        value = self._raw(field, required)
        if value is None:
            return None
        try:
            amount = parse_decimal_input(value, allow_negative=True, quantize='0.01', error_label=field)
        except ValueError:
            self.add_error(field, f'The {field} field must be a number.')
            return None
        if min_value is not None and amount < min_value:
            self.add_error(field, f'The {field} field must be at least {min_value}.')
            return None
        if max_value is not None and amount > max_value:
            self.add_error(field, f'The {field} field must not be greater than {max_value}.')
            return None
        return amount

    def choice(self, field, enum_class, required=False):
        value = self._raw(field, required)
        if value is None:
            return None
        if value not in enum_class.values():
            self.add_error(field, f'The selected {field} is invalid.')
            return None
        return enum_class(value)

    def image(self, field, file, max_size_mb, required=False):
        if file is None or not getattr(file, 'filename', None):
            if required:
                self.add_error(field, f'The {field} field is required.')
            return None
        allowed = current_app.config['ALLOWED_IMAGE_EXTENSIONS']
        extension = file.filename.rsplit('.', 1)[-1].lower() if '.' in file.filename else ''
        if extension not in allowed:
            self.add_error(field, f'The {field} field must be a file of type: {", ".join(sorted(allowed))}.')
            return None
        if file.mimetype and not file.mimetype.startswith('image/'):
            self.add_error(field, f'The {field} field must be an image.')
            return None
        if file_size(file) > max_size_mb * 1024 * 1024:
            self.add_error(field, f'The {field} field must not be greater than {max_size_mb * 1024} kilobytes.')
            return None
        return file

    def confirmed(self, field, value):
        if value is not None and self.data.get(f'{field}_confirmation') != value:
            self.add_error(field, f'The {field} field confirmation does not match.')

    def min_length(self, field, value, length):
        if value is not None and len(value) < length:
            self.add_error(field, f'The {field} field must be at least {length} characters.')
            return False
        return True

    def raise_if_errors(self):
        if self.errors:
            raise ValidationError(errors=self.errors)


def validate_hotel_payload(data, photo=None, partial=False, photo_max_size_mb=10):
    """
    Validate hotel fields.

    Args:
        data: submitted fields
        photo: optional uploaded image
        partial: True for updates, only submitted fields are checked

    Returns:
        dict of clean values for the submitted writable fields
    """
    validator = FormValidator(data)
    required = not partial
    clean = {}

    def wanted(field):
        return not partial or validator.present(field)

    if wanted('name'):
        clean['name'] = validator.string('name', required=True, max_length=255)
    if wanted('address'):
        clean['address'] = validator.string('address', required=True)
    if wanted('email'):
        clean['email'] = validator.email('email', required=True)
    if wanted('phone'):
        clean['phone'] = validator.string('phone', required=True, max_length=50)
    if wanted('price'):
        clean['price'] = validator.decimal('price', required=True, min_value=0, max_value=MAX_PRICE)
    if wanted('currency'):
        clean['currency'] = validator.choice('currency', Currency, required=True)
    if validator.present('status'):
        clean['status'] = validator.choice('status', HotelStatus, required=True)

    validator.image('photo', photo, photo_max_size_mb)
    validator.raise_if_errors()

    if not required:
        clean = {key: value for key, value in clean.items() if value is not None}
    return clean
