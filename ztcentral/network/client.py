"""
HTTP transport for communication with the ZeroTier Central API.
"""
import logging
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

import httpx

from ztcentral.core.common import DEFAULT_API_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ztcentral.network import codec
from ztcentral.network.cancel import CancellationToken
from ztcentral.network.errors import (
    CancelledError,
    ClientError,
    DecodeError,
    NetworkError,
    NetworkTimeoutError,
)
from ztcentral.network.ratelimit import DEFAULT_PER_UNIT_INTERVAL, RateLimit, RateLimitState

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})


@dataclass(frozen=True)
class RequestSpec:
    """Everything needed to perform one HTTP exchange."""

    method: str
    path: str
    body: Optional[bytes] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    idempotent: Optional[bool] = None

    def __post_init__(self):
        method = self.method.upper()
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        if self.idempotent is None:
            object.__setattr__(self, "idempotent", method in IDEMPOTENT_METHODS)


class Transport:
    """
    Executes ``RequestSpec`` objects against the API.

    Every request gets the authorization, content negotiation and user agent
    headers. Every response refreshes the rate limit state. The transport
    never retries; wrap it in a ``RetryPolicy`` for that.
    """

    def __init__(self, token: str, base_url: str = DEFAULT_API_URL, *,
                 timeout: float = DEFAULT_TIMEOUT,
                 pacing: bool = False,
                 per_unit_interval: float = DEFAULT_PER_UNIT_INTERVAL,
                 http_client: Optional[httpx.Client] = None):
        """
        Initializes the transport.

        Args:
            token: API token sent as bearer credentials
            base_url: Base URL for all requests
            timeout: Default timeout in seconds
            pacing: Whether to slow down requests as the reported quota drains
            per_unit_interval: Seconds of delay per unit of used quota when pacing
            http_client: Preconfigured client to send requests with; the
                transport creates and owns one when omitted
        """
        self._token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.pacing = pacing
        self.per_unit_interval = per_unit_interval
        self.user_agent = DEFAULT_USER_AGENT
        self.limits = RateLimitState()

        self._owns_session = http_client is None
        self.session = http_client or httpx.Client(
            timeout=httpx.Timeout(timeout=timeout),
            limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
        )

        logger.debug(f"Transport initialized with base_url={self.base_url}, timeout={timeout}s, pacing={pacing}")

    def close(self) -> None:
        """Closes the HTTP session if the transport created it."""
        if self._owns_session:
            self.session.close()
            logger.debug("HTTP session closed")

    def set_user_agent(self, suffix: str) -> None:
        """
        Appends a product identifier to the user agent, as ``base (suffix)``.

        Each call appends again, so calling it twice yields
        ``base (first) (second)``. The value only identifies the caller; it
        does not change client behavior.
        """
        self.user_agent = f"{self.user_agent} ({suffix})"

    @property
    def rate_limit(self) -> RateLimit:
        return self.limits.snapshot()

    def get_full_url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def prepare_headers(self, headers: Optional[Mapping[str, str]] = None) -> httpx.Headers:
        """Combines caller headers with the required ones, which always win."""
        final_headers = httpx.Headers(headers or {})
        final_headers["User-Agent"] = self.user_agent
        final_headers["Content-Type"] = JSON_CONTENT_TYPE
        final_headers["Accept"] = JSON_CONTENT_TYPE
        final_headers["Authorization"] = f"bearer {self._token}"
        return final_headers

    def build_request(self, spec: RequestSpec, cancel: Optional[CancellationToken] = None) -> httpx.Request:
        timeout = self.timeout
        remaining = cancel.remaining() if cancel is not None else None
        if remaining is not None:
            timeout = min(timeout, remaining)
        return self.session.build_request(
            spec.method,
            self.get_full_url(spec.path),
            content=spec.body or None,
            headers=self.prepare_headers(spec.headers),
            timeout=timeout,
        )

    def pacing_delay(self) -> float:
        if not self.pacing:
            return 0.0
        return self.limits.pacing_delay(self.per_unit_interval)

    def send(self, spec: RequestSpec, target: Any = None,
             cancel: Optional[CancellationToken] = None) -> Any:
        """
        Performs one exchange and decodes the response.

        Args:
            spec: The request to send
            target: Type the response body is decoded into (None to discard it)
            cancel: Cancellation token bounding the request

        Returns:
            The decoded body, or None for empty bodies

        Raises:
            CancelledError: If ``cancel`` fired before or during the request
            NetworkError: If no response could be obtained
            ClientError: If the URL is unusable or redirects loop
            DecodeError: If the body cannot be decompressed or decoded
            APIError: For non-2xx responses
        """
        cancel = cancel or CancellationToken()
        cancel.raise_if_cancelled(f"{spec.method} {spec.path} cancelled before dispatch")

        delay = self.pacing_delay()
        if delay > 0:
            logger.debug(f"Pacing {spec.method} {spec.path} for {delay:.3f}s")
            if cancel.wait(delay):
                raise CancelledError(f"{spec.method} {spec.path} cancelled while pacing")

        request = self.build_request(spec, cancel)
        logger.debug(f"Sending {request.method} request to {request.url}")
        start_time = time.monotonic()
        try:
            response = self.session.send(request)
        except httpx.TimeoutException as e:
            if cancel.cancelled:
                raise CancelledError(f"{spec.method} {spec.path} cancelled: deadline exceeded") from e
            raise NetworkTimeoutError(f"Request to {spec.path} exceeded the timeout: {e}") from e
        except httpx.UnsupportedProtocol as e:
            # Base URL without an http(s) scheme
            raise ClientError(f"Invalid request URL {request.url}: {e}", detail=str(e)) from e
        except httpx.TransportError as e:
            if cancel.cancelled:
                raise CancelledError(f"{spec.method} {spec.path} cancelled") from e
            raise NetworkError(f"Connection error to {spec.path}: {e}") from e
        except httpx.DecodingError as e:
            raise DecodeError(f"Could not decode response body of {spec.path}", detail=str(e)) from e
        except httpx.RequestError as e:
            raise ClientError(f"Request to {spec.path} failed: {e}", detail=str(e)) from e

        elapsed = time.monotonic() - start_time
        self.limits.update(response.headers)
        logger.debug(f"{request.method} {request.url} completed in {elapsed:.3f}s with status {response.status_code}")

        return codec.decode_response(response, target)
