"""
Shared plumbing for resource operations.
"""
from typing import Any, Optional
from urllib.parse import quote

from ztcentral.network.cancel import CancellationToken


def path_segment(value: str) -> str:
    """Escapes a single path component."""
    return quote(str(value), safe="")


class ResourceOperations:
    """Base for the operation mixins combined into ``Client``."""

    def _call(self, method: str, path: str, target: Any = None, body: Any = None, *,
              idempotent: Optional[bool] = None,
              cancel: Optional[CancellationToken] = None) -> Any:
        raise NotImplementedError
