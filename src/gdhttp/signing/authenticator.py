"""
Request authenticator

This module ties the canonical string builder and the HMAC signer together
and writes the ``Date`` and ``Authorization`` headers onto outgoing
requests. ``GeneDockAuth`` plugs the authenticator into ``requests``.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional

from requests.auth import AuthBase

from .canonical_message import build_canonical_string
from .hmac_signer import sign
from .types import AUTH_SCHEME, CanonicalRequest, SignatureContext
from .utils import format_http_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignatureResult:
    """
    Signature computed for one request

    Attributes:
        date: Date header value the signature covers
        signature: Base64 HMAC of the canonical string
        authorization: Complete Authorization header value
        canonical_string: The string that was signed
    """
    date: str
    signature: str
    authorization: str
    canonical_string: str

    @property
    def headers(self) -> Dict[str, str]:
        """Headers to set on the request."""
        return {'Date': self.date, 'Authorization': self.authorization}


class Authenticator:
    """
    Signs outgoing requests with a signature context.

    ``authenticate`` must run once per request, after every other header and
    the body are final, since Content-Type, Content-MD5 and the custom
    headers are covered by the signature.
    """

    def __init__(self, context: SignatureContext, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize the authenticator.

        Args:
            context: Credentials and algorithm
            clock: Optional callable returning the signing time
        """
        self.context = context
        self.clock = clock

    def sign(self, request: CanonicalRequest, now: Optional[datetime] = None) -> SignatureResult:
        """
        Compute the signature for a request view.

        Args:
            request: Signing view of the request
            now: Signing time (defaults to the clock, then current UTC time)

        Returns:
            SignatureResult: Date, signature and Authorization value

        Raises:
            UnsupportedAlgorithm: If the context carries an unknown algorithm
        """
        if now is None and self.clock is not None:
            now = self.clock()
        date = format_http_date(now)

        canonical_string = build_canonical_string(request, date)
        logger.debug(f"Canonical string:\n{canonical_string}")

        signature = sign(canonical_string.encode('utf-8', 'surrogateescape'), self.context.key_secret, self.context.algorithm)
        authorization = f"{AUTH_SCHEME} {self.context.key_id}:{signature}"

        return SignatureResult(
            date=date,
            signature=signature,
            authorization=authorization,
            canonical_string=canonical_string
        )

    def authenticate(self, request, now: Optional[datetime] = None):
        """
        Set the Date and Authorization headers on a prepared request.

        Args:
            request: ``requests.PreparedRequest`` to sign in place
            now: Optional signing time

        Returns:
            The same request, signed
        """
        result = self.sign(CanonicalRequest.from_prepared(request), now)
        request.headers.update(result.headers)
        logger.debug(f"Signed {request.method} request to {request.url} with key ID: {self.context.key_id}")
        return request


class GeneDockAuth(AuthBase):
    """
    ``requests`` authentication handler for GeneDock signatures.

    Usage::

        session.get(url, auth=GeneDockAuth(SignatureContext.from_credentials(key_id, secret)))
    """

    def __init__(self, context: SignatureContext, clock: Optional[Callable[[], datetime]] = None):
        self.authenticator = Authenticator(context, clock)

    def __call__(self, request):
        return self.authenticator.authenticate(request)


def authenticate(request, context: SignatureContext, now: Optional[datetime] = None):
    """
    Sign a prepared request in place.

    Args:
        request: ``requests.PreparedRequest``
        context: Credentials and algorithm
        now: Optional signing time

    Returns:
        The signed request
    """
    return Authenticator(context).authenticate(request, now)
