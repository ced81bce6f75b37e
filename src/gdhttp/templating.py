"""
URL template substitution
"""

import re
from typing import Mapping

TOKEN_PATTERN = re.compile(r'<([^<>]+)>')


def substitute(template: str, mapping: Mapping[str, str]) -> str:
    """
    Replace ``<name>`` tokens with values from a mapping.

    Unknown names are replaced with the empty string. Substitution is a
    single pass, so values containing ``<...>`` are not expanded again.

    Example::

        substitute("/api/v1/jobs/<id>", {"id": "123"})  # "/api/v1/jobs/123"

    Args:
        template: String containing ``<name>`` tokens
        mapping: Token values

    Returns:
        str: Template with every token replaced
    """
    return TOKEN_PATTERN.sub(lambda match: str(mapping.get(match.group(1), "")), template)
