"""
Library errors
Recoverable failures reported back to the caller with an HTTP status.
"""


class LibraryError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(LibraryError):
    """Malformed or missing request fields."""
    status_code = 400

    def __init__(self, errors, message='Validation failed'):
        super().__init__(message)
        self.errors = errors

    def to_dict(self):
        return {'errors': self.errors}


class NotFoundError(LibraryError):
    status_code = 404


class ConflictError(LibraryError):
    """An invariant would be violated (double borrow, duplicate name, ...)."""
    status_code = 400
