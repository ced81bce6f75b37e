"""
Command-line interface for gdhttp
A cURL-like tool sending GeneDock-signed HTTP requests
"""

import argparse
import logging
import sys
from typing import IO, Optional

from . import __version__
from .config import DEFAULT_CONFIG_PATH, load_auth_config, resolve_credentials
from .exceptions import GdHttpError, MalformedURL, UsageError
from .hooks import DumpHook
from .http_client import ClientConfig, DEFAULT_TIMEOUT, GdHttpClient
from .signing import GeneDockAuth, SignatureContext
from .url_builder import parse_positional_arguments

logger = logging.getLogger(__name__)

USAGE_SHORT = """usage: gdhttp [-h | --help] [-V | --version]
              [--access-key-id ACCESSKEYID] [--access-key-secret ACCESSKEYSECRET]
              [--config CONFIG] [--timeout TIMEOUT] [--body] [--no-auth] [--verbose]
              [METHOD] URL [REQUEST_ITEM [REQUEST_ITEM ...]]"""

USAGE_DETAIL = USAGE_SHORT + """

gdhttp - a CLI, cURL-like tool for you.

Positional Arguments:
    METHOD
      The HTTP method to be used for the request (GET, POST, PUT, DELETE, ...) (default: GET).

    URL
      The scheme defaults to 'http://' if the URL does not include one.

      You can also use a shorthand for localhost

          $ gdhttp :3000                    # => http://localhost:3000
          $ gdhttp :/foo                    # => http://localhost/foo

    REQUEST_ITEM
      Optional key-value pairs to be included in the request. The separator used
      determines the type:

      '=' URL parameters to be appended to the request URI:

          search=httpie

      '==' Values substituted for <name> tokens in the URL:

          $ gdhttp example.com/jobs/<id> id==42   # => http://example.com/jobs/42

Optional Arguments:
    --help, -h
        Show this help message and exit.
    --version, -V
        Show version and exit.
    --access-key-id ACCESSKEYID
        Access key id.
    --access-key-secret ACCESSKEYSECRET
        Access key secret.
    --config CONFIG, -c
        Configuration file (default: $HOME/.gdhttp.json).
    --timeout TIMEOUT, -t
        The connection timeout of the request in seconds. Must be positive;
        0 does not disable the timeout (default: 30).
    --body, -b
        Print only the response body.
    --verbose, -v
        Verbose output. Print the whole request as well as the response.
    --no-auth
        Don't add Authorization header.
    --debug
        Log debugging information, including the signed canonical string.

Sample configuration file:

{
    "auths": {
        "localhost": {
            "accessKeyID" : "id",
            "accessKeySecret": "secret"
        }
    }
}"""


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='gdhttp',
        usage=USAGE_SHORT[len('usage: '):],
        description='gdhttp - a CLI, cURL-like tool sending signed requests'
    )

    parser.add_argument(
        '-V', '--version',
        action='version',
        version=__version__
    )
    parser.add_argument(
        '-c', '--config',
        default=DEFAULT_CONFIG_PATH,
        help='Configuration file (default: $HOME/.gdhttp.json)'
    )
    parser.add_argument('--access-key-id', default='', help='Access key ID')
    parser.add_argument('--access-key-secret', default='', help='Access key secret')
    parser.add_argument(
        '-b', '--body',
        action='store_true',
        help='Print only the response body'
    )
    parser.add_argument(
        '--no-auth',
        action='store_true',
        help="Don't add Authorization header"
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output. Print the whole request as well as the response'
    )
    parser.add_argument(
        '-t', '--timeout',
        type=float,
        default=DEFAULT_TIMEOUT,
        help='The connection timeout of the request in seconds; must be positive (default: 30)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Log debugging information to stderr'
    )
    parser.add_argument(
        'arguments',
        nargs='*',
        metavar='ARG',
        help='Request method, URL and request items'
    )

    return parser


def configure_logging(debug: bool = False) -> None:
    """Send log records to stderr; DEBUG when requested, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
        stream=sys.stderr
    )


def read_body(stream: IO) -> Optional[bytes]:
    """
    Read the request body from stdin when it is not a terminal.

    Args:
        stream: Input stream (normally ``sys.stdin``)

    Returns:
        bytes: Body, or None when reading from a terminal
    """
    if stream is None or stream.isatty():
        return None
    source = getattr(stream, 'buffer', stream)
    data = source.read()
    if isinstance(data, str):
        data = data.encode('utf-8')
    return data


def error_string(error: Exception) -> str:
    return f"gdhttp: error: {error}"


def build_auth(args, url) -> Optional[GeneDockAuth]:
    """
    Build the signing handler for a request.

    Returns:
        GeneDockAuth: Handler, or None with ``--no-auth``

    Raises:
        ConfigReadError: If the configuration file cannot be read
    """
    if args.no_auth:
        return None

    config = load_auth_config(args.config)
    access_key_id, access_key_secret = resolve_credentials(
        url, config, args.access_key_id, args.access_key_secret
    )
    return GeneDockAuth(SignatureContext.from_credentials(access_key_id, access_key_secret))


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    if args.arguments and args.arguments[0] == 'help':
        print(USAGE_DETAIL)
        return 1

    try:
        positional = parse_positional_arguments(args.arguments)
    except (UsageError, MalformedURL) as e:
        print(USAGE_SHORT)
        print(error_string(e), file=sys.stderr)
        return 1

    try:
        body = read_body(sys.stdin)
        auth = build_auth(args, positional.url)
        hook = DumpHook(verbose=args.verbose, only_body=args.body)

        with GdHttpClient(ClientConfig(timeout=args.timeout)) as client:
            client.request(positional.http_method, positional.url, body, auth, hook)
        return 0

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except GdHttpError as e:
        logger.debug(f"Request failed with {e.error_code}: {e.details}")
        print(error_string(e), file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
