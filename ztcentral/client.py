"""
Client for the ZeroTier Central API.
"""
import logging
from typing import Any, Optional

import httpx

from ztcentral.api import MemberOperations, NetworkOperations, UserOperations
from ztcentral.config.manager import ClientConfig, load_config
from ztcentral.core.common import DEFAULT_API_URL, DEFAULT_TIMEOUT
from ztcentral.network import codec
from ztcentral.network.cancel import CancellationToken
from ztcentral.network.client import RequestSpec, Transport
from ztcentral.network.ratelimit import RateLimit
from ztcentral.network.retry import DEFAULT_MAX_ATTEMPTS, Backoff, RetryPolicy, exponential_backoff

logger = logging.getLogger(__name__)


class Client(NetworkOperations, MemberOperations, UserOperations):
    """
    ZeroTier Central client.

    Requests go through a ``RetryPolicy`` wrapping a ``Transport``; the
    transport adds credentials and tracks the rate limit, the policy retries
    transient failures. A client can be shared between threads.

    Example:
        with Client(token) as client:
            for network in client.get_networks():
                print(network.id, network.config.name)
    """

    def __init__(self, token: str, base_url: str = DEFAULT_API_URL, *,
                 user_agent: Optional[str] = None,
                 timeout: float = DEFAULT_TIMEOUT,
                 max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                 backoff: Optional[Backoff] = None,
                 pacing: bool = False,
                 http_client: Optional[httpx.Client] = None):
        """
        Initializes the client.

        Args:
            token: API token generated in Central
            base_url: API base URL
            user_agent: Product identifier appended to the user agent
            timeout: Per-request timeout in seconds
            max_attempts: Total attempts for idempotent requests
            backoff: Delay function between attempts (exponential by default)
            pacing: Whether to slow down as the reported quota drains
            http_client: Preconfigured ``httpx.Client`` to send requests with
        """
        self.transport = Transport(token, base_url, timeout=timeout, pacing=pacing, http_client=http_client)
        if user_agent:
            self.transport.set_user_agent(user_agent)
        self.retry_policy = RetryPolicy(self.transport, max_attempts=max_attempts, backoff=backoff)

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs) -> "Client":
        """
        Builds a client from ``config``.

        The backoff is exponential between ``config.backoff_base`` and
        ``config.backoff_cap`` unless a ``backoff`` keyword is given.
        """
        kwargs.setdefault("backoff", exponential_backoff(config.backoff_base, config.backoff_cap))
        return cls(
            config.token,
            config.base_url,
            user_agent=config.user_agent,
            timeout=config.timeout,
            max_attempts=config.max_attempts,
            pacing=config.pacing,
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "Client":
        """Builds a client from ``ZEROTIER_CENTRAL_*`` environment variables."""
        return cls.from_config(load_config(), **kwargs)

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.transport.close()

    def set_user_agent(self, suffix: str) -> None:
        """
        Appends ``suffix`` to the user agent, as ``base (suffix)``.

        Calling this twice appends twice.
        """
        self.transport.set_user_agent(suffix)

    @property
    def user_agent(self) -> str:
        return self.transport.user_agent

    @property
    def rate_limit(self) -> RateLimit:
        """Quota reported by the most recent response."""
        return self.transport.rate_limit

    def send(self, spec: RequestSpec, target: Any = None,
             cancel: Optional[CancellationToken] = None) -> Any:
        """Sends an arbitrary request through the retry policy."""
        return self.retry_policy.send(spec, target, cancel)

    def _call(self, method: str, path: str, target: Any = None, body: Any = None, *,
              idempotent: Optional[bool] = None,
              cancel: Optional[CancellationToken] = None) -> Any:
        spec = RequestSpec(method, path, body=codec.encode(body) or None, idempotent=idempotent)
        return self.send(spec, target, cancel)
