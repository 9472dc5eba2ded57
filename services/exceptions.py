"""
Application error taxonomy.

Every error carries the HTTP status it maps to and a client-safe message.
The JSON error handler registered in create_app() renders them.
"""


class HotelAppError(Exception):
    status_code = 500
    default_message = 'An unexpected error occurred'

    def __init__(self, message=None, errors=None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    def to_dict(self):
        payload = {
            'success': False,
            'message': self.message,
        }
        if self.errors:
            payload['errors'] = self.errors
        return payload


class ValidationError(HotelAppError):
    """Malformed or out-of-range input, reported per field"""
    status_code = 422
    default_message = 'The given data was invalid'


class BadRequestError(HotelAppError):
    status_code = 400
    default_message = 'Bad request'


class AuthenticationError(HotelAppError):
    status_code = 401
    default_message = 'Unauthenticated'


class AuthorizationError(HotelAppError):
    status_code = 403
    default_message = 'You are not allowed to modify this hotel'


class NotFoundError(HotelAppError):
    status_code = 404
    default_message = 'Hotel not found'


class UpstreamError(HotelAppError):
    """Media store failure; aborts the enclosing write"""
    status_code = 502
    default_message = 'Upload to the media host failed'


class UnexpectedError(HotelAppError):
    """Datastore or infrastructure failure; the message never carries internals"""
    status_code = 500
