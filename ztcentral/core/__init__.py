"""
Core definitions shared by the ztcentral components.
"""
from ztcentral.core.common import (
    __version__,
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    PRODUCT_NAME,
)

__all__ = [
    '__version__',
    'DEFAULT_API_URL',
    'DEFAULT_TIMEOUT',
    'DEFAULT_USER_AGENT',
    'PRODUCT_NAME',
]
