"""
HTTP client for sending signed requests

This module sends one request built from the normalized URL, the request body
and the signing handler, and hands the prepared request and the response to a
hook for display.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Union
from urllib.parse import SplitResult

import requests
from requests.auth import AuthBase
from requests.utils import get_environ_proxies

from .exceptions import NetworkError, ValidationError
from .hooks import NullHook, RequestHook
from .version import __version__

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"gdhttp/{__version__}"

# The body is not sent with these methods
BODYLESS_METHODS = frozenset(["GET", "HEAD", "OPTIONS"])


def default_headers() -> Dict[str, str]:
    return {
        'Content-Type': 'application/json',
        'User-Agent': USER_AGENT,
        'Accept': 'application/json',
        'Accept-Encoding': 'application/json',
        'Connection': 'keep-alive',
    }


def environ_ca_bundle() -> Optional[str]:
    """CA bundle named by REQUESTS_CA_BUNDLE or CURL_CA_BUNDLE, if any."""
    return os.environ.get('REQUESTS_CA_BUNDLE') or os.environ.get('CURL_CA_BUNDLE')


@dataclass
class ClientConfig:
    """Configuration for the request client."""
    timeout: float = DEFAULT_TIMEOUT
    headers: Dict[str, str] = field(default_factory=default_headers)

    def __post_init__(self):
        """Validate client configuration."""
        if self.timeout <= 0:
            raise ValidationError("Timeout must be positive")


class GdHttpClient:
    """
    Sends a single request per call with ``requests``.

    The request is prepared first so that the signing handler sees the final
    URL, headers and body, then passed to the hook, then sent.
    """

    def __init__(self, config: Optional[ClientConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            config: Client configuration
            session: Optional existing session
        """
        self.config = config or ClientConfig()
        self.session = session or requests.Session()
        # Credentials come only from the signing handler, never from .netrc
        self.session.trust_env = False

    def prepare(
        self,
        method: str,
        url: Union[str, SplitResult],
        body: Optional[bytes] = None,
        auth: Optional[AuthBase] = None
    ) -> requests.PreparedRequest:
        """
        Prepare (and sign, when ``auth`` is given) a request.

        Args:
            method: HTTP method
            url: Request URL
            body: Request body; dropped for GET, HEAD and OPTIONS
            auth: Optional signing handler

        Returns:
            requests.PreparedRequest: Request ready to be sent
        """
        if isinstance(url, SplitResult):
            url = url.geturl()

        method = method.upper()
        data = None
        if body and method not in BODYLESS_METHODS:
            data = body
        elif body:
            logger.debug(f"Dropping request body for {method} request")

        request = requests.Request(
            method=method,
            url=url,
            headers=dict(self.config.headers),
            data=data,
            auth=auth
        )
        return self.session.prepare_request(request)

    def request(
        self,
        method: str,
        url: Union[str, SplitResult],
        body: Optional[bytes] = None,
        auth: Optional[AuthBase] = None,
        hook: Optional[RequestHook] = None
    ) -> requests.Response:
        """
        Send a request.

        Args:
            method: HTTP method
            url: Request URL
            body: Optional request body
            auth: Optional signing handler; None sends the request unsigned
            hook: Optional hook receiving the request and the response

        Returns:
            requests.Response: HTTP response

        Raises:
            NetworkError: If the request cannot be sent or the response read
        """
        hook = hook or NullHook()
        prepared = self.prepare(method, url, body, auth)
        hook.on_request(prepared)

        settings = self.session.merge_environment_settings(
            prepared.url, get_environ_proxies(prepared.url), None, environ_ca_bundle(), None
        )

        try:
            logger.debug(f"Making {prepared.method} request to {prepared.url}")
            response = self.session.send(prepared, timeout=self.config.timeout, **settings)
        except requests.exceptions.Timeout:
            raise NetworkError(f"Request timeout after {self.config.timeout} seconds", {"url": prepared.url})
        except requests.exceptions.ConnectionError as e:
            raise NetworkError(f"Connection error: {e}", {"url": prepared.url})
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Request failed: {e}", {"url": prepared.url})

        logger.debug(f"Received HTTP {response.status_code} from {prepared.url}")
        hook.on_response(response)
        return response

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
