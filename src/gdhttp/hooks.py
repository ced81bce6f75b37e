"""
Request/response hooks

A hook inspects the prepared request just before it is sent and the response
once it arrives. ``DumpHook`` prints them to the terminal.
"""

import json
import sys
from typing import Any, Optional, Protocol, TextIO, runtime_checkable
from urllib.parse import urlsplit


@runtime_checkable
class RequestHook(Protocol):
    """Protocol for request/response inspection"""

    def on_request(self, request: Any) -> None:
        """Inspect the prepared request before it is sent"""
        ...

    def on_response(self, response: Any) -> None:
        """Inspect the response after it is received"""
        ...


class NullHook:
    """Hook that does nothing"""

    def on_request(self, request: Any) -> None:
        pass

    def on_response(self, response: Any) -> None:
        pass


class DumpHook:
    """
    Prints requests and responses.

    With ``verbose`` the whole request is printed before it is sent. Unless
    ``only_body`` is set, the response status line and headers are printed
    before the body. JSON bodies are pretty-printed.
    """

    def __init__(self, verbose: bool = False, only_body: bool = False, stream: Optional[TextIO] = None):
        self.verbose = verbose
        self.only_body = only_body
        self.stream = stream

    @property
    def out(self) -> TextIO:
        return self.stream or sys.stdout

    def on_request(self, request: Any) -> None:
        if self.verbose:
            print(format_request(request), file=self.out)
            print("", file=self.out)

    def on_response(self, response: Any) -> None:
        if not self.only_body:
            print(format_response_head(response), file=self.out)
        print(pretty_body(response.content), file=self.out)


def format_request(request: Any) -> str:
    """
    Render a prepared request as HTTP/1.1 text.

    Args:
        request: ``requests.PreparedRequest``

    Returns:
        str: Request line, headers and body
    """
    parts = urlsplit(request.url)
    target = parts.path or "/"
    if parts.query:
        target = f"{target}?{parts.query}"

    lines = [f"{request.method} {target} HTTP/1.1", f"Host: {parts.netloc}"]
    lines.extend(f"{name}: {value}" for name, value in request.headers.items())
    text = "\r\n".join(lines) + "\r\n\r\n"

    body = request.body
    if body:
        if isinstance(body, bytes):
            body = body.decode('utf-8', errors='replace')
        text += body
    return text


def format_response_head(response: Any) -> str:
    """
    Render the status line and headers of a response.

    Args:
        response: ``requests.Response``

    Returns:
        str: Status line and headers
    """
    version = {10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2"}.get(
        getattr(response.raw, 'version', 11), "HTTP/1.1"
    )
    lines = [f"{version} {response.status_code} {response.reason}"]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    return "\r\n".join(lines) + "\r\n"


def pretty_body(body: bytes) -> str:
    """
    Pretty-print a JSON body with two-space indentation.

    Non-ASCII characters are shown as-is rather than as ``\\uXXXX`` escapes.
    Bodies that are not JSON are returned as text.

    Args:
        body: Raw response body

    Returns:
        str: Text to display
    """
    text = body.decode('utf-8', errors='replace') if isinstance(body, bytes) else body
    try:
        data = json.loads(text)
    except ValueError:
        return text
    return json.dumps(data, indent=2, ensure_ascii=False)
