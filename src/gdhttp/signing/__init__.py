"""
gdhttp - Request Signing Module

GeneDock HMAC request signatures: canonical string construction, HMAC-SHA1
signing and the authenticator that writes the Date and Authorization headers.
"""

from .types import (
    CanonicalRequest,
    SignatureAlgorithm,
    SignatureContext,
    AUTH_SCHEME,
    CUSTOM_HEADER_PREFIX,
)

from .canonical_message import (
    CanonicalMessageBuilder,
    build_canonical_string,
    extract_custom_headers,
)

from .hmac_signer import sign

from .authenticator import (
    Authenticator,
    GeneDockAuth,
    SignatureResult,
    authenticate,
)

from .utils import (
    canonical_header_key,
    encode_sorted_query,
    format_http_date,
    normalize_header_name,
)

# Public API exports
__all__ = [
    # Types
    'CanonicalRequest',
    'SignatureAlgorithm',
    'SignatureContext',
    'AUTH_SCHEME',
    'CUSTOM_HEADER_PREFIX',
    # Canonical string
    'CanonicalMessageBuilder',
    'build_canonical_string',
    'extract_custom_headers',
    # Signing
    'sign',
    'Authenticator',
    'GeneDockAuth',
    'SignatureResult',
    'authenticate',
    # Utilities
    'canonical_header_key',
    'encode_sorted_query',
    'format_http_date',
    'normalize_header_name',
]
