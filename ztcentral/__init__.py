"""
Python client for the ZeroTier Central API (https://my.zerotier.com).

Usage example:
    from ztcentral import Client
    client = Client.from_env()
    networks = client.get_networks()
"""
from ztcentral.client import Client
from ztcentral.config import ClientConfig, ConfigError, load_config
from ztcentral.core.common import __version__, DEFAULT_API_URL
from ztcentral.models import Member, MemberConfig, Network, NetworkConfig, Status, User
from ztcentral.network import (
    APIError,
    AuthError,
    CancellationToken,
    CancelledError,
    ClientError,
    DecodeError,
    ErrorKind,
    NetworkError,
    NetworkTimeoutError,
    NotFoundError,
    RateLimit,
    RequestSpec,
    RetryPolicy,
    ServerError,
    Transport,
    exponential_backoff,
    linear_backoff,
)

__all__ = [
    '__version__',
    'APIError',
    'AuthError',
    'CancellationToken',
    'CancelledError',
    'Client',
    'ClientConfig',
    'ClientError',
    'ConfigError',
    'DEFAULT_API_URL',
    'DecodeError',
    'ErrorKind',
    'Member',
    'MemberConfig',
    'Network',
    'NetworkConfig',
    'NetworkError',
    'NetworkTimeoutError',
    'NotFoundError',
    'RateLimit',
    'RequestSpec',
    'RetryPolicy',
    'ServerError',
    'Status',
    'Transport',
    'User',
    'exponential_backoff',
    'linear_backoff',
    'load_config',
]
