"""
HMAC signing of canonical strings
"""

import base64
import hashlib
import hmac
from typing import Union

from ..exceptions import UnsupportedAlgorithm
from .types import SignatureAlgorithm


_DIGESTS = {
    SignatureAlgorithm.HMAC_SHA1_V1: hashlib.sha1,
}


def sign(
    message: bytes,
    secret: bytes,
    algorithm: Union[SignatureAlgorithm, str] = SignatureAlgorithm.HMAC_SHA1_V1
) -> str:
    """
    Compute the base64-encoded HMAC of a message.

    Args:
        message: Canonical string bytes
        secret: Shared secret
        algorithm: Signature algorithm tag

    Returns:
        str: Base64 (standard alphabet, padded) HMAC digest

    Raises:
        UnsupportedAlgorithm: If the algorithm tag is unknown
    """
    try:
        digestmod = _DIGESTS[SignatureAlgorithm(algorithm)]
    except (ValueError, KeyError):
        raise UnsupportedAlgorithm(algorithm)

    digest = hmac.new(secret, message, digestmod).digest()
    return base64.b64encode(digest).decode('ascii')
