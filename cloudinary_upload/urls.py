"""Delivery and API URL construction.

Delivery URLs have the form
``{cdn}/{cloud_name}/{resource_type}/{type}/{transformation}/{id}.{format}``
where the transformation segment is optional.
"""

import re
from typing import Any, Mapping, Optional

from .errors import ConfigError, UsageError
from .models import API_BASE, PUBLIC_CDN
from .options import OPTION_NAMES, OptionNames


FORMAT_PATTERN = re.compile(r'(.*)\.(\w+)', re.DOTALL)
DEFAULT_FORMAT = 'jpg'

# Options that select the path rather than the transformation
PATH_OPTIONS = {'secure', 'resource_type', 'type'}


def split_format(public_id: str) -> tuple[str, str]:
    """Split a trailing extension off a public id.

    Args:
        public_id: Public id, optionally ending in ``.<format>``

    Returns:
        Tuple of (identifier, format); format defaults to jpg
    """
    match = FORMAT_PATTERN.fullmatch(public_id)
    if match and match.group(1):
        return match.group(1), match.group(2)
    return public_id, DEFAULT_FORMAT


def format_value(value: Any) -> Any:
    """Render booleans the way the delivery API and jQuery plugin expect."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return value


def build_transformation(
    options: Mapping[str, Any],
    names: OptionNames = OPTION_NAMES,
) -> str:
    """Build the comma-joined transformation segment.

    Keys are sorted by their original spelling and rendered with their
    short name, e.g. ``{"w": 100, "h": 140}`` becomes ``h_140,w_100``.

    Args:
        options: Transformation options (path options are ignored)
        names: Option name resolver

    Returns:
        Transformation segment, empty if there is nothing to transform
    """
    return ','.join(
        f"{names.resolve_short(key)}_{format_value(options[key])}"
        for key in sorted(options)
        if key not in PATH_OPTIONS and options[key] is not None
    )


def build_url(
    public_id: str,
    options: Optional[Mapping[str, Any]],
    cloud_name: str,
    public_cdn: str = PUBLIC_CDN,
    private_cdn: Optional[str] = None,
    names: OptionNames = OPTION_NAMES,
) -> str:
    """Construct the delivery URL for an asset.

    Args:
        public_id: Public id, with or without a format extension
        options: Display options; ``secure``, ``resource_type`` and ``type``
            select the CDN and path, everything else is a transformation
        cloud_name: Cloudinary cloud name
        public_cdn: Base URL of the shared CDN
        private_cdn: Base URL of the private CDN, required when secure
        names: Option name resolver

    Returns:
        Complete delivery URL

    Raises:
        UsageError: If public_id is empty
        ConfigError: If a secure URL is requested without a private CDN
    """
    if not public_id:
        raise UsageError("public_id is required to build a URL")

    options = dict(options or {})
    identifier, fmt = split_format(str(public_id))

    if options.pop('secure', None):
        if not private_cdn:
            raise ConfigError("private_cdn is required for secure URLs")
        base = private_cdn
    else:
        base = public_cdn

    segments = [
        cloud_name,
        options.get('resource_type') or 'image',
        options.get('type') or 'upload',
        build_transformation(options, names),
        f"{identifier}.{fmt}",
    ]

    path = '/'.join(str(s) for s in segments if s)
    return f"{base.rstrip('/')}/{path}"


def api_url(
    cloud_name: str,
    resource_type: str,
    action: str,
    api_base: str = API_BASE,
) -> str:
    """Build the endpoint URL for an upload API action.

    Args:
        cloud_name: Cloudinary cloud name
        resource_type: image or raw
        action: upload or destroy

    Returns:
        Endpoint URL
    """
    return f"{api_base.rstrip('/')}/{cloud_name}/{resource_type}/{action}"
