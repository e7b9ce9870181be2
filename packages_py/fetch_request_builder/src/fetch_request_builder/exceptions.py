"""
Exceptions raised by fetch_request_builder.
"""


class RequestBuilderError(Exception):
    """Base exception for request builder errors."""
    pass


class InvalidFormatError(RequestBuilderError, ValueError):
    """Raised when a textual argument cannot be parsed into its header value type."""
    pass


class InvalidUriError(InvalidFormatError):
    """Raised when a URI string is not well-formed."""
    pass


class OutOfRangeError(RequestBuilderError, ValueError):
    """Raised when a numeric argument is outside its valid domain."""
    pass


class MissingArgumentError(RequestBuilderError, TypeError):
    """Raised when a required argument is None or empty."""
    pass
