"""
Type definitions for request signing

This module provides the data classes shared by the canonical string builder,
the HMAC signer and the authenticator.
"""

from typing import List, Mapping, Optional, Sequence, Tuple, Union
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlsplit, parse_qsl, unquote

from .utils import normalize_header_name


# Header names starting with this prefix (case-insensitive) are signed
CUSTOM_HEADER_PREFIX = "x-gd-"

# Scheme token of the Authorization header
AUTH_SCHEME = "GeneDock"


class SignatureAlgorithm(str, Enum):
    """Signature algorithm tags"""
    HMAC_SHA1_V1 = "hmac-sha1-v1"


@dataclass(frozen=True)
class SignatureContext:
    """
    Credentials and algorithm used to sign one request

    Attributes:
        key_id: Access key id placed in the Authorization header
        key_secret: Shared secret keying the HMAC
        algorithm: Signature algorithm tag
    """
    key_id: str
    key_secret: bytes
    algorithm: SignatureAlgorithm = SignatureAlgorithm.HMAC_SHA1_V1

    @classmethod
    def from_credentials(
        cls,
        access_key_id: str,
        access_key_secret: Union[str, bytes],
        algorithm: SignatureAlgorithm = SignatureAlgorithm.HMAC_SHA1_V1
    ) -> 'SignatureContext':
        """Build a context from the string credentials of the CLI or config file."""
        if isinstance(access_key_secret, str):
            access_key_secret = access_key_secret.encode('utf-8')
        return cls(key_id=access_key_id, key_secret=access_key_secret, algorithm=algorithm)


HeaderValue = Union[str, Sequence[str]]
QueryPairs = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class CanonicalRequest:
    """
    Read-only view of the parts of an outgoing request that are signed

    Attributes:
        method: HTTP method
        path: Decoded URL path
        query: Query parameters as (key, value) pairs in request order
        headers: Full header set; a value may be a list for repeated headers
        content_type: Content-Type header value, if any
        content_md5: Content-MD5 header value, if any
    """
    method: str
    path: str
    query: QueryPairs = ()
    headers: Mapping[str, HeaderValue] = field(default_factory=dict)
    content_type: Optional[str] = None
    content_md5: Optional[str] = None

    @classmethod
    def from_parts(cls, method: str, url: str, headers: Mapping[str, HeaderValue]) -> 'CanonicalRequest':
        """Project a method, URL and header mapping into a signing view."""
        parts = urlsplit(url)
        return cls(
            method=method.upper(),
            path=unquote(parts.path, errors='surrogateescape'),
            query=tuple(parse_qsl(parts.query, keep_blank_values=True, errors='surrogateescape')),
            headers=dict(headers),
            content_type=_get_header(headers, 'Content-Type'),
            content_md5=_get_header(headers, 'Content-MD5'),
        )

    @classmethod
    def from_prepared(cls, prepared) -> 'CanonicalRequest':
        """Project a ``requests.PreparedRequest`` into a signing view."""
        return cls.from_parts(prepared.method, prepared.url, prepared.headers or {})


def _get_header(headers: Mapping[str, HeaderValue], name: str) -> Optional[str]:
    lowered = normalize_header_name(name)
    for key, value in headers.items():
        if normalize_header_name(key) == lowered:
            if isinstance(value, str):
                return value
            return value[0] if value else ""
    return None


HeaderItems = List[Tuple[str, str]]
