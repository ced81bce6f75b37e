"""
Canonical string construction for GeneDock request signatures

The canonical string is the newline-joined sequence::

    METHOD
    Content-MD5
    Content-Type
    Date
    X-Gd-Custom-Header:value    (only when custom headers are present)
    /path?sorted=query

A verifier recomputes it from the received request, so every segment must be
derived deterministically from the request alone.
"""

from typing import Dict, List, Mapping

from .types import CanonicalRequest, CUSTOM_HEADER_PREFIX, HeaderItems, HeaderValue
from .utils import canonical_header_key, encode_sorted_query


class CanonicalMessageBuilder:
    """
    Canonical string builder for one request
    """

    def __init__(self, request: CanonicalRequest, date: str):
        """
        Initialize canonical message builder.

        Args:
            request: Signing view of the outgoing request
            date: RFC 1123 formatted Date header value
        """
        self.request = request
        self.date = date

    def build(self) -> str:
        """
        Build the canonical string.

        Returns:
            str: Canonical string; 5 lines without custom headers, 6 with
        """
        segments = [
            self.request.method,
            self.request.content_md5 or "",
            self.request.content_type or "",
            self.date,
        ]

        headers_block = self.build_headers_block()
        if headers_block:
            segments.append(headers_block)

        segments.append(self.build_resource())
        return '\n'.join(segments)

    def build_resource(self) -> str:
        """
        Build the signed resource: path plus sorted query.

        Returns:
            str: Resource string, e.g. ``/v1/jobs?a=1&b=2``
        """
        resource = self.request.path
        if self.request.query:
            resource = f"{resource}?{encode_sorted_query(self.request.query)}"
        return resource

    def build_headers_block(self) -> str:
        """
        Build the custom header block.

        Returns:
            str: ``Name:value`` lines sorted by name, or ``""`` when the
            request carries no custom headers
        """
        return '\n'.join(f"{name}:{value}" for name, value in extract_custom_headers(self.request.headers))


def extract_custom_headers(headers: Mapping[str, HeaderValue]) -> HeaderItems:
    """
    Extract the custom headers that take part in the signature.

    Names are canonicalized so case variants of one header are grouped;
    repeated values are joined with commas.

    Args:
        headers: Request headers

    Returns:
        list: (name, value) pairs sorted by name
    """
    grouped: Dict[str, List[str]] = {}
    for name, value in headers.items():
        if not name.lower().startswith(CUSTOM_HEADER_PREFIX):
            continue
        values = [value] if isinstance(value, str) else list(value)
        grouped.setdefault(canonical_header_key(name), []).extend(values)

    return [(name, ','.join(grouped[name])) for name in sorted(grouped)]


def build_canonical_string(request: CanonicalRequest, date: str) -> str:
    """
    Build the canonical string for a request.

    Args:
        request: Signing view of the request
        date: RFC 1123 formatted Date header value

    Returns:
        str: Canonical string
    """
    return CanonicalMessageBuilder(request, date).build()
