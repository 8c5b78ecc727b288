from enum import Enum


class ErrorKind(Enum):
    """Discriminant for the failures an :class:`ApiError` can describe."""

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    TRANSPORT = "transport"
    HTTP = "http"
    API = "api"


class ApiError(Exception):
    """Base exception for all Melody Scope client errors.

    Callers can catch this one type for every failure the client raises,
    and branch on ``kind`` or ``status_code`` when they need to.

    Attributes:
        message (str): Human readable message, safe to show to a user.
        status_code (int | None): HTTP status code, when the failure came from one.
        original_error (BaseException | None): The low-level exception that was wrapped.
        kind (ErrorKind): Which family of failure this is.
    """

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.original_error = original_error


class ConfigurationError(ApiError):
    """Raised when the client is missing required configuration.

    The only required setting is the API key. No request is attempted
    while it is absent.
    """

    kind = ErrorKind.CONFIGURATION


class ValidationError(ApiError):
    """Raised when a required argument is blank.

    This is raised before any network call is made.
    """

    kind = ErrorKind.VALIDATION


class TransportError(ApiError):
    """Raised for timeouts, connection failures and undecodable responses."""

    kind = ErrorKind.TRANSPORT


class HttpStatusError(ApiError):
    """Raised when the server answers with a non-2xx status.

    The status is always available on ``status_code``.
    """

    kind = ErrorKind.HTTP

    def __init__(self, message: str, status_code: int, original_error: BaseException | None = None) -> None:
        super().__init__(message, status_code=status_code, original_error=original_error)


class EnvelopeError(ApiError):
    """Raised when a successful HTTP response carries an API-level error.

    Last.fm reports failures such as an invalid API key inside a 200 body
    of the form ``{"error": 10, "message": "..."}``.
    """

    kind = ErrorKind.API

    def __init__(self, message: str, api_error_code: int | None = None) -> None:
        super().__init__(message)
        self.api_error_code = api_error_code


def handle_api_error(error: object) -> str:
    """Return the message a user should see for ``error``."""
    if isinstance(error, ApiError):
        return error.message
    if isinstance(error, Exception) and str(error):
        return str(error)
    return "An unexpected error occurred. Please try again later."
