"""
Network components for the ztcentral client.

This package provides the HTTP transport, retry policy, rate limit tracking
and JSON codec used by every API operation.
"""
from ztcentral.network.cancel import CancellationToken
from ztcentral.network.client import RequestSpec, Transport
from ztcentral.network.errors import (
    APIError,
    AuthError,
    CancelledError,
    ClientError,
    DecodeError,
    ErrorKind,
    NetworkError,
    NetworkTimeoutError,
    NotFoundError,
    ServerError,
)
from ztcentral.network.ratelimit import RateLimit, RateLimitState
from ztcentral.network.retry import RetryPolicy, exponential_backoff, linear_backoff

# Explicit export of public components
__all__ = [
    'APIError',
    'AuthError',
    'CancellationToken',
    'CancelledError',
    'ClientError',
    'DecodeError',
    'ErrorKind',
    'NetworkError',
    'NetworkTimeoutError',
    'NotFoundError',
    'RateLimit',
    'RateLimitState',
    'RequestSpec',
    'RetryPolicy',
    'ServerError',
    'Transport',
    'exponential_backoff',
    'linear_backoff',
]
