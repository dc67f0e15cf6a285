"""HTML image tags for Cloudinary assets.

Framework-neutral versions of the usual template helpers: a plain
``<img>`` pointing at the delivery URL, and a placeholder ``<img>`` for
the Cloudinary jQuery plugin.
"""

from html import escape
from typing import Any, Mapping, Optional

from .models import CloudinaryConfig
from .options import OPTION_NAMES, OptionNames
from .urls import build_url, format_value


def should_use_secure(options: Mapping[str, Any], scheme: Optional[str]) -> dict[str, Any]:
    """Default ``secure`` from the scheme of the current request.

    Args:
        options: URL options
        scheme: Scheme of the page being rendered (http or https)

    Returns:
        Copy of options, with secure set when the page is served over https
        and the caller did not choose
    """
    options = dict(options or {})
    if options.get('secure') is None and (scheme or '').lower() == 'https':
        options['secure'] = True
    return options


def render_attrs(attrs: Mapping[str, Any]) -> str:
    return ' '.join(
        f'{name}="{escape(str(value), quote=True)}"'
        for name, value in attrs.items()
        if value is not None
    )


def url_for(
    public_id: str,
    options: Optional[Mapping[str, Any]],
    config: CloudinaryConfig,
    scheme: Optional[str] = None,
    names: OptionNames = OPTION_NAMES,
) -> str:
    """Delivery URL for an asset, secure when the page is."""
    return build_url(
        public_id,
        should_use_secure(options or {}, scheme),
        config.cloud_name,
        public_cdn=config.public_cdn,
        private_cdn=config.private_cdn,
        names=names,
    )


def image_tag(
    public_id: str,
    options: Optional[Mapping[str, Any]],
    config: CloudinaryConfig,
    attrs: Optional[Mapping[str, Any]] = None,
    scheme: Optional[str] = None,
    names: OptionNames = OPTION_NAMES,
) -> str:
    """Build an ``<img>`` tag whose src is the delivery URL.

    Args:
        public_id: Public id of the asset
        options: URL options passed on to build_url
        config: Cloudinary configuration
        attrs: Extra tag attributes (may override alt)
        scheme: Scheme of the current request
        names: Option name resolver

    Returns:
        HTML img tag
    """
    tag_attrs = {
        'src': url_for(public_id, options, config, scheme, names=names),
        'alt': public_id,
        **(attrs or {}),
    }
    return f"<img {render_attrs(tag_attrs)}>"


def js_image_tag(
    public_id: str,
    options: Optional[Mapping[str, Any]],
    config: CloudinaryConfig,
    scheme: Optional[str] = None,
    names: OptionNames = OPTION_NAMES,
) -> str:
    """Build a placeholder ``<img>`` for the Cloudinary jQuery plugin.

    Options become ``data-*`` attributes with their long names, e.g.
    ``{"w": 115}`` renders as ``data-width="115"``. The class and alt
    attributes are fixed.

    Example:
        <img src="/image/blank.png" alt="1234567890" class="cloudinary-js-image"
            data-src="1234567890" data-crop="thumb" data-width="115">
    """
    options = should_use_secure(options or {}, scheme)
    tag_attrs = {
        'src': config.js_image,
        'alt': public_id,
        'class': 'cloudinary-js-image',
        'data-src': public_id,
    }
    for key in sorted(options, key=names.resolve_long):
        tag_attrs[f"data-{names.resolve_long(key)}"] = format_value(options[key])

    return f"<img {render_attrs(tag_attrs)}>"
