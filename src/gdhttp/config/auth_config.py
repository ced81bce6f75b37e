"""
Credentials configuration

Access keys are looked up per host in a JSON file::

    {
        "auths": {
            "localhost:8000": {
                "accessKeyID": "id",
                "accessKeySecret": "secret"
            }
        }
    }

The lookup key is the request URL's host, including the port when present.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
from urllib.parse import SplitResult

from ..exceptions import ConfigReadError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "$HOME/.gdhttp.json"


@dataclass(frozen=True)
class HostCredentials:
    """Access key pair for one host"""
    access_key_id: str = ""
    access_key_secret: str = ""


@dataclass
class AuthConfig:
    """Parsed credentials file"""
    auths: Dict[str, HostCredentials] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> 'AuthConfig':
        """
        Build configuration from decoded JSON.

        Raises:
            ConfigReadError: If the document does not have the expected shape
        """
        if not isinstance(data, dict):
            raise ConfigReadError("config must be a JSON object")

        auths = data.get("auths") or {}
        if not isinstance(auths, dict):
            raise ConfigReadError("'auths' must be a JSON object")

        parsed = {}
        for host, entry in auths.items():
            if not isinstance(entry, dict):
                raise ConfigReadError(f"auth entry for {host!r} must be a JSON object")
            key_id = entry.get("accessKeyID", "")
            key_secret = entry.get("accessKeySecret", "")
            if not isinstance(key_id, str) or not isinstance(key_secret, str):
                raise ConfigReadError(f"credentials for {host!r} must be strings")
            parsed[host] = HostCredentials(access_key_id=key_id, access_key_secret=key_secret)

        return cls(auths=parsed)

    def credentials_for(self, host: str) -> Optional[HostCredentials]:
        """Get credentials configured for a host, if any."""
        return self.auths.get(host)


def expand_config_path(path: Union[str, Path]) -> Path:
    """
    Expand ``$HOME``, ``$VAR`` and ``~`` prefixes and make the path absolute.

    Args:
        path: Configuration path as given on the command line

    Returns:
        Path: Absolute, normalized path
    """
    path = str(path)
    if path.startswith("$HOME"):
        path = str(Path.home()) + path[len("$HOME"):]
    elif path.startswith("$"):
        name, sep, rest = path[1:].partition(os.sep)
        path = os.environ.get(name, "") + sep + rest
    else:
        path = os.path.expanduser(path)

    return Path(os.path.abspath(path))


def load_auth_config(path: Union[str, Path, None] = None) -> AuthConfig:
    """
    Load the credentials file.

    A missing file yields an empty configuration.

    Args:
        path: Configuration path (defaults to ``$HOME/.gdhttp.json``)

    Returns:
        AuthConfig: Parsed configuration

    Raises:
        ConfigReadError: If the file cannot be read or is not valid
    """
    config_path = expand_config_path(path or DEFAULT_CONFIG_PATH)

    if not config_path.exists():
        logger.debug(f"Config file not found: {config_path}")
        return AuthConfig()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigReadError(f"parse config file {config_path} error {e}", path=str(config_path))

    try:
        config = AuthConfig.from_dict(data)
    except ConfigReadError as e:
        raise ConfigReadError(f"parse config file {config_path} error {e}", path=str(config_path))

    logger.debug(f"Loaded credentials for {len(config.auths)} host(s) from {config_path}")
    return config


def url_host(url: SplitResult) -> str:
    """Host of a URL including the port, without user info."""
    return url.netloc.rpartition('@')[2]


def resolve_credentials(
    url: SplitResult,
    config: AuthConfig,
    access_key_id: str = "",
    access_key_secret: str = ""
) -> Tuple[str, str]:
    """
    Resolve the credentials for a request.

    Credentials configured for the URL's host take precedence over the ones
    given on the command line.

    Args:
        url: Request URL
        config: Credentials configuration
        access_key_id: Access key id from the command line
        access_key_secret: Access key secret from the command line

    Returns:
        tuple: (access_key_id, access_key_secret)
    """
    credentials = config.credentials_for(url_host(url))
    if credentials is not None:
        logger.debug(f"Using configured credentials for host: {url_host(url)}")
        return credentials.access_key_id, credentials.access_key_secret
    return access_key_id, access_key_secret
