"""
General utilities for the ztcentral client.
"""
from ztcentral.utils.logging import ColoredFormatter, get_logger, set_log_level, setup_logger

# Explicit export of public components
__all__ = [
    'ColoredFormatter',
    'get_logger',
    'set_log_level',
    'setup_logger',
]
