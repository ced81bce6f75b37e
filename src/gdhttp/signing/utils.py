"""
Utility functions for request signing

This module provides the HTTP date formatting, header name canonicalization
and query re-encoding used when building the canonical string.
"""

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Iterable, Optional, Tuple
from urllib.parse import urlencode


def format_http_date(now: Optional[datetime] = None) -> str:
    """
    Format a timestamp as an RFC 1123 HTTP date in UTC.

    Args:
        now: Timestamp to format (uses current time if None). Naive
            datetimes are taken to be UTC.

    Returns:
        str: Date such as ``Mon, 02 Jan 2006 15:04:05 GMT``
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)

    return format_datetime(now, usegmt=True)


def canonical_header_key(name: str) -> str:
    """
    Canonical MIME form of a header name.

    The first letter and every letter following a hyphen are upper-cased,
    the rest lower-cased: ``x-GD-request-id`` becomes ``X-Gd-Request-Id``.

    Args:
        name: Header name

    Returns:
        str: Canonical header name
    """
    return '-'.join(part[:1].upper() + part[1:].lower() for part in name.strip().split('-'))


def normalize_header_name(name: str) -> str:
    """Lowercase header name for case-insensitive comparisons."""
    return name.lower().strip()


def encode_sorted_query(pairs: Iterable[Tuple[str, str]]) -> str:
    """
    Form-encode query parameters sorted by key, then by value.

    Args:
        pairs: Query (key, value) pairs in any order

    Returns:
        str: Encoded query string without the leading ``?``
    """
    return urlencode(sorted(pairs), errors='surrogateescape')
