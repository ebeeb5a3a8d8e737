class BookstoreError(Exception):
    """Base class for errors raised by the bookstore domain."""

    status_code = 400
    reason = 'Bad Request'

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidArgument(BookstoreError, ValueError):
    """A None, duplicate, unknown or malformed value was passed in."""


class NotFound(BookstoreError, LookupError):
    status_code = 404
    reason = 'Not Found'


class ConstraintViolation(BookstoreError):
    """A write was rejected because it would break referential integrity."""
