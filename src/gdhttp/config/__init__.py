"""
Configuration management for gdhttp

This module provides loading of the per-host credentials file.
"""

from .auth_config import (
    AuthConfig,
    HostCredentials,
    DEFAULT_CONFIG_PATH,
    expand_config_path,
    load_auth_config,
    resolve_credentials,
    url_host,
)

__all__ = [
    'AuthConfig',
    'HostCredentials',
    'DEFAULT_CONFIG_PATH',
    'expand_config_path',
    'load_auth_config',
    'resolve_credentials',
    'url_host',
]
