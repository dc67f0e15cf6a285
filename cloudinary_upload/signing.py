"""Request signing for the Cloudinary upload API.

Every upload and destroy request carries a SHA-1 signature proving the
caller knows the API secret. Only a fixed set of parameters takes part
in the signature.
"""

import hashlib
import logging
from typing import Any, Mapping
from urllib.parse import quote


logger = logging.getLogger(__name__)

# Must stay in lexical order
SIGNATURE_KEYS = (
    'callback',
    'eager',
    'format',
    'public_id',
    'tags',
    'timestamp',
    'transformation',
    'type',
)


def escape_value(value: Any) -> str:
    """Percent-encode a parameter value for signing.

    Everything outside ``A-Za-z0-9-._~`` is encoded, so a space becomes
    ``%20`` rather than ``+``.

    Args:
        value: Parameter value, stringified with str()

    Returns:
        Escaped string
    """
    return quote(str(value), safe='')


def signable_params(params: Mapping[str, Any]) -> list[tuple[str, Any]]:
    """Select the parameters that take part in the signature.

    Args:
        params: Request parameters

    Returns:
        (key, value) pairs in signature order, skipping absent and None values
    """
    return [
        (key, params[key])
        for key in SIGNATURE_KEYS
        if params.get(key) is not None
    ]


def sign_request(params: Mapping[str, Any], secret: str) -> str:
    """Compute the signature for a set of request parameters.

    The secret is appended to the last ``key=value`` record without a
    separator, matching what the API expects.

    Args:
        params: Request parameters (extra keys such as ``file`` are ignored)
        secret: API secret

    Returns:
        Lowercase hex SHA-1 digest
    """
    records = [f"{key}={escape_value(value)}" for key, value in signable_params(params)]
    logger.debug("Signing request with %s", records)

    to_sign = '&'.join(records) + secret
    return hashlib.sha1(to_sign.encode('utf-8')).hexdigest()
