"""
Error taxonomy for the SDK.

Every failure the SDK reports to a caller is reduced to an
``(error_code, error_message)`` pair. The code is the HTTP status for
server errors and 0 for everything else.
"""

from __future__ import annotations


HTTP_ERROR_MESSAGES: dict[int, str] = {
    0: "Network error or connection failed",
    400: "Bad request - invalid parameters",
    401: "Unauthorized - invalid API key",
    403: "Permission denied - API key lacks required permissions",
    404: "Not found - endpoint or resource not found",
    500: "Internal server error",
    503: "Service unavailable",
}


def http_error_message(status_code: int) -> str:
    """Human-readable message for an HTTP status code."""
    return HTTP_ERROR_MESSAGES.get(status_code, f"HTTP error {status_code}")


class GetTranslatedError(Exception):
    """Base class for all SDK errors."""
    
    code: int = 0
    
    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class NetworkError(GetTranslatedError):
    """Connectivity or transport failure."""
    pass


class HttpError(GetTranslatedError):
    """Server answered with a non-2xx status."""
    
    def __init__(self, status_code: int):
        super().__init__(http_error_message(status_code), code=status_code)
        self.status_code = status_code
    
    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.message}"


class ParseError(GetTranslatedError):
    """Response body was not the JSON we expected."""
    pass


class ValidationError(GetTranslatedError):
    """Rejected locally before any network request."""
    pass


def error_info(error: BaseException) -> tuple[int, str]:
    """Reduce any exception to the ``(code, message)`` pair given to callbacks."""
    if isinstance(error, HttpError):
        return error.status_code, error.message
    if isinstance(error, GetTranslatedError):
        return error.code, error.message or http_error_message(error.code)
    message = str(error) or http_error_message(0)
    return 0, message
