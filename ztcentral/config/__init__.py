"""
Configuration management for the ztcentral client.

This package builds client settings from arguments, environment variables
and token files.
"""
from .manager import ClientConfig, ConfigError, load_config, read_token_file

# Explicit export of public components
__all__ = ['ClientConfig', 'ConfigError', 'load_config', 'read_token_file']
