"""
gdhttp
A cURL-like HTTP client sending GeneDock-signed requests
"""

from .version import __version__
from .exceptions import (
    GdHttpError,
    ValidationError,
    UsageError,
    ConfigReadError,
    MalformedURL,
    NetworkError,
    UnsupportedAlgorithm,
)
from .signing import (
    # Core signing functionality
    Authenticator,
    GeneDockAuth,
    SignatureResult,
    authenticate,
    sign,
    # Types
    CanonicalRequest,
    SignatureAlgorithm,
    SignatureContext,
    # Canonical string
    build_canonical_string,
    extract_custom_headers,
    format_http_date,
)
from .url_builder import (
    PositionalArguments,
    build_url,
    fill_url,
    is_valid_method,
    parse_positional_arguments,
)
from .templating import substitute
from .config import (
    AuthConfig,
    HostCredentials,
    load_auth_config,
    resolve_credentials,
)
from .http_client import (
    ClientConfig,
    GdHttpClient,
)
from .hooks import (
    RequestHook,
    DumpHook,
    NullHook,
)


# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'GdHttpError',
    'ValidationError',
    'UsageError',
    'ConfigReadError',
    'MalformedURL',
    'NetworkError',
    'UnsupportedAlgorithm',
    # Request Signing
    'Authenticator',
    'GeneDockAuth',
    'SignatureResult',
    'authenticate',
    'sign',
    'CanonicalRequest',
    'SignatureAlgorithm',
    'SignatureContext',
    'build_canonical_string',
    'extract_custom_headers',
    'format_http_date',
    # URL construction
    'PositionalArguments',
    'build_url',
    'fill_url',
    'is_valid_method',
    'parse_positional_arguments',
    'substitute',
    # Configuration
    'AuthConfig',
    'HostCredentials',
    'load_auth_config',
    'resolve_credentials',
    # HTTP Client
    'ClientConfig',
    'GdHttpClient',
    # Hooks
    'RequestHook',
    'DumpHook',
    'NullHook',
]
