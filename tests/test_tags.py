"""Tests for tags.py module.

Tests secure URL selection and image tag rendering.
"""

from cloudinary_upload.options import OptionNames
from cloudinary_upload.tags import (
    image_tag,
    js_image_tag,
    render_attrs,
    should_use_secure,
    url_for,
)


class TestShouldUseSecure:
    """Tests for should_use_secure function."""

    def test_https_page_defaults_to_secure(self):
        assert should_use_secure({}, "https") == {"secure": True}

    def test_http_page_left_alone(self):
        assert should_use_secure({"w": 1}, "http") == {"w": 1}

    def test_explicit_choice_wins(self):
        assert should_use_secure({"secure": False}, "https") == {"secure": False}


class TestUrlFor:
    """Tests for url_for function."""

    def test_public_url(self, config):
        assert url_for("sample", {"w": 10}, config) == \
            "http://res.cloudinary.com/demo/image/upload/w_10/sample.jpg"

    def test_https_scheme_uses_private_cdn(self, config):
        assert url_for("sample", None, config, scheme="https") == \
            "https://demo-res.cloudinary.com/demo/image/upload/sample.jpg"


class TestImageTag:
    """Tests for image_tag function."""

    def test_renders_img(self, config):
        tag = image_tag("sample", {"w": 100}, config)

        assert tag == (
            '<img src="http://res.cloudinary.com/demo/image/upload/w_100/sample.jpg" '
            'alt="sample">'
        )

    def test_extra_attributes(self, config):
        tag = image_tag("sample.png", {}, config, attrs={"class": "thumb", "alt": "Sample"})

        assert tag == (
            '<img src="http://res.cloudinary.com/demo/image/upload/sample.png" '
            'alt="Sample" class="thumb">'
        )

    def test_secure_on_https(self, config):
        tag = image_tag("sample", {}, config, scheme="https")

        assert 'src="https://demo-res.cloudinary.com/demo/image/upload/sample.jpg"' in tag

    def test_custom_option_names(self, config):
        """Should shorten options with the injected resolver."""
        tag = image_tag("sample", {"zoom": 2}, config, names=OptionNames({"z": "zoom"}))

        assert 'src="http://res.cloudinary.com/demo/image/upload/z_2/sample.jpg"' in tag


class TestJsImageTag:
    """Tests for js_image_tag function."""

    def test_expands_options_to_data_attributes(self, config):
        tag = js_image_tag("1234567890", {
            "width": 115,
            "height": 115,
            "crop": "thumb",
            "gravity": "faces",
            "radius": "20",
        }, config)

        assert tag == (
            '<img src="/image/blank.png" alt="1234567890" class="cloudinary-js-image" '
            'data-src="1234567890" data-crop="thumb" data-gravity="faces" '
            'data-height="115" data-radius="20" data-width="115">'
        )

    def test_short_options_use_long_names(self, config):
        tag = js_image_tag("sample", {"w": 50, "c": "fill"}, config)

        assert 'data-crop="fill" data-width="50"' in tag

    def test_https_adds_secure(self, config):
        tag = js_image_tag("sample", {}, config, scheme="https")

        assert 'data-secure="true"' in tag

    def test_false_renders_lowercase(self, config):
        tag = js_image_tag("sample", {"secure": False}, config)

        assert 'data-secure="false"' in tag


class TestRenderAttrs:
    """Tests for render_attrs function."""

    def test_escapes_values(self):
        assert render_attrs({"alt": 'a "quoted" <b>'}) == 'alt="a &quot;quoted&quot; &lt;b&gt;"'

    def test_skips_none(self):
        assert render_attrs({"alt": None, "id": "x"}) == 'id="x"'
