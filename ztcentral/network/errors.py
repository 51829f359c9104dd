"""
Error hierarchy for the ZeroTier Central client.

Every failure surfaced by the transport layer is an ``APIError``. The
``kind`` and ``retryable`` attributes let the retry policy classify an
error without inspecting status codes itself.
"""
from enum import Enum
from typing import Optional

import httpx


class ErrorKind(str, Enum):
    """Broad classification of an API failure."""
    CLIENT = "client_error"
    SERVER = "server_error"
    NETWORK = "network"
    DECODE = "decode_error"
    CANCELLED = "cancelled"


class APIError(Exception):
    """Generic error in the API."""

    kind: ErrorKind = ErrorKind.CLIENT
    retryable: bool = False

    def __init__(self, message: str, status_code: Optional[int] = None,
                 detail: Optional[str] = None, response: Optional[httpx.Response] = None):
        self.message = message
        self.status_code = status_code
        self.detail = detail
        self.response = response
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code!r}, message={self.message!r})"


class ClientError(APIError):
    """The request was rejected by the API (4xx)."""
    kind = ErrorKind.CLIENT


class AuthError(ClientError):
    """Authentication error in the API (401/403)."""


class NotFoundError(ClientError):
    """The requested resource does not exist (404)."""


class ServerError(APIError):
    """The API failed to process a valid request (5xx)."""
    kind = ErrorKind.SERVER
    retryable = True

    def __init__(self, message: str, status_code: Optional[int] = None,
                 detail: Optional[str] = None, response: Optional[httpx.Response] = None,
                 retry_after: Optional[float] = None):
        super().__init__(message, status_code, detail, response)
        self.retry_after = retry_after


class NetworkError(APIError):
    """Connection error to the API, raised before any response was received."""
    kind = ErrorKind.NETWORK
    retryable = True


class NetworkTimeoutError(NetworkError):
    """Timeout error in the API."""


class DecodeError(APIError):
    """The response body does not have the expected shape."""
    kind = ErrorKind.DECODE


class CancelledError(APIError):
    """The caller cancelled the operation or its deadline passed."""
    kind = ErrorKind.CANCELLED
