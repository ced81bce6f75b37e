"""
URL construction from command-line tokens

This module resolves the ``[METHOD] URL [REQUEST_ITEM ...]`` positional
arguments into an HTTP method and a fully normalized URL:

- ``:3000/foo`` and ``:/foo`` are shorthands for ``localhost``;
- ``http://`` is prepended when the URL carries no scheme;
- ``<name>`` tokens are filled from ``name==value`` request items;
- ``key=value`` request items are added to the query string.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
from urllib.parse import SplitResult, parse_qsl, urlencode, urlsplit

from .exceptions import MalformedURL, UsageError
from .templating import substitute

logger = logging.getLogger(__name__)

DEFAULT_SCHEME = "http"
DEFAULT_HOST = "localhost"
DEFAULT_METHOD = "GET"

HTTP_METHODS = frozenset([
    "GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "CONNECT", "TRACE",
])

QUERY_ITEM_PATTERN = re.compile(r'([^=]+)=(|[^=].*)', re.DOTALL)
FORMAT_ITEM_PATTERN = re.compile(r'([^=]+)==(.*)', re.DOTALL)
ONLY_PORT_PATTERN = re.compile(r'^:\d+')
HAS_SCHEME_PATTERN = re.compile(r'^https?://')


@dataclass
class PositionalArguments:
    """
    Resolved positional arguments

    Attributes:
        http_method: Upper-cased HTTP method
        url: Normalized request URL
        request_items: Tokens following the URL
    """
    http_method: str
    url: SplitResult
    request_items: List[str] = field(default_factory=list)


def is_valid_method(method: str) -> bool:
    """Check whether a token names a known HTTP method (case-insensitive)."""
    return method.upper() in HTTP_METHODS


def parse_query_item(item: str) -> Optional[Tuple[str, str]]:
    """
    Parse a ``key=value`` query item.

    Returns:
        tuple: (key, value), or None if the token is not a query item
    """
    match = QUERY_ITEM_PATTERN.fullmatch(item)
    if match is None:
        return None
    return match.group(1), match.group(2)


def parse_format_item(item: str) -> Optional[Tuple[str, str]]:
    """
    Parse a ``key==value`` template item.

    Returns:
        tuple: (key, value), or None if the token is not a template item
    """
    match = FORMAT_ITEM_PATTERN.fullmatch(item)
    if match is None:
        return None
    return match.group(1), match.group(2)


def expand_shorthand(uri: str) -> str:
    """
    Expand localhost shorthands and add the default scheme.

    ``:8000/foo`` -> ``http://localhost:8000/foo``,
    ``:/foo`` -> ``http://localhost/foo``,
    ``example.com`` -> ``http://example.com``.
    """
    if ONLY_PORT_PATTERN.match(uri):
        uri = f"{DEFAULT_HOST}{uri}"
    elif uri.startswith(":"):
        uri = f"{DEFAULT_HOST}{uri.lstrip(':')}"

    if not HAS_SCHEME_PATTERN.match(uri):
        uri = f"{DEFAULT_SCHEME}://{uri}"
    return uri


def fill_url(uri: str, request_items: Sequence[str]) -> str:
    """
    Expand shorthands and substitute ``<name>`` tokens.

    Args:
        uri: URL as typed on the command line
        request_items: Request item tokens

    Returns:
        str: URL text ready to be parsed
    """
    uri = expand_shorthand(uri)

    mapping = {}
    for item in request_items:
        parsed = parse_format_item(item)
        if parsed is not None:
            mapping[parsed[0]] = parsed[1]
    return substitute(uri, mapping)


def build_url(uri: str, request_items: Sequence[str] = ()) -> SplitResult:
    """
    Build the request URL from the URL argument and request items.

    Args:
        uri: URL as typed on the command line
        request_items: ``key=value`` and ``key==value`` tokens; tokens of any
            other form are ignored

    Returns:
        SplitResult: Parsed URL

    Raises:
        MalformedURL: If the expanded URL does not parse
    """
    for item in request_items:
        if parse_query_item(item) is None and parse_format_item(item) is None:
            logger.debug(f"Ignoring request item: {item!r}")

    filled = fill_url(uri, request_items)
    parts = _parse_url(filled)

    query_items = [parsed for parsed in map(parse_query_item, request_items) if parsed is not None]
    if query_items:
        pairs = parse_qsl(parts.query, keep_blank_values=True, errors='surrogateescape') + query_items
        pairs.sort(key=lambda pair: pair[0])
        # Undecodable argv bytes arrive as surrogate escapes and are sent as-is
        parts = parts._replace(query=urlencode(pairs, errors='surrogateescape'))

    logger.debug(f"Resolved URL: {parts.geturl()}")
    return parts


def _parse_url(uri: str) -> SplitResult:
    try:
        parts = urlsplit(uri)
        # Accessing the port validates it
        parts.port
    except ValueError as e:
        raise MalformedURL(uri, str(e))

    if not parts.hostname:
        raise MalformedURL(uri, "missing host")

    if any(char.isspace() or not char.isprintable() for char in parts.netloc):
        raise MalformedURL(uri, "invalid character in host")

    try:
        parts.path.encode('utf-8')
        parts.query.encode('utf-8')
        parts.fragment.encode('utf-8')
    except UnicodeEncodeError as e:
        raise MalformedURL(uri, f"invalid UTF-8: {e.reason}")

    return parts


def parse_positional_arguments(args: Sequence[str]) -> PositionalArguments:
    """
    Resolve ``[METHOD] URL [REQUEST_ITEM ...]``.

    The first token is the method only when it names a known HTTP method;
    otherwise it is the URL, the method defaults to GET and every following
    token is a request item.

    Args:
        args: Positional command-line tokens

    Returns:
        PositionalArguments: Method, URL and request items

    Raises:
        UsageError: If no URL is given
        MalformedURL: If the URL does not parse
    """
    if len(args) < 1:
        raise UsageError("too few arguments")

    http_method = DEFAULT_METHOD
    request_items: List[str] = []

    if len(args) == 1:
        uri = args[0]
    elif is_valid_method(args[0]):
        http_method = args[0].upper()
        uri = args[1]
        request_items = list(args[2:])
    else:
        uri = args[0]
        request_items = list(args[1:])

    return PositionalArguments(
        http_method=http_method,
        url=build_url(uri, request_items),
        request_items=request_items
    )
