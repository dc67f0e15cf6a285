"""Tests for config.py module.

Tests secrets loading, environment overrides and validation.
"""

import json

import pytest

from cloudinary_upload.config import (
    ConfigError,
    SecretsNotFoundError,
    apply_env_overrides,
    get_cloudinary_config,
    load_config,
    load_secrets,
    validate_config,
)
from cloudinary_upload.models import DEFAULT_JS_IMAGE, PUBLIC_CDN, CloudinaryConfig


SECRETS = {
    "cloudinary": {
        "cloud_name": "demo",
        "api_key": 1234,
        "api_secret": "abcd",
    }
}


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point the home and working directory at an empty tmp dir."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestLoadSecrets:
    """Tests for load_secrets function."""

    def test_loads_explicit_path(self, tmp_path):
        path = tmp_path / "secrets.json"
        path.write_text(json.dumps(SECRETS))

        assert load_secrets(path) == SECRETS

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(SecretsNotFoundError):
            load_secrets(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "secrets.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_secrets(path)

    def test_searches_current_directory(self, isolated_home):
        (isolated_home / "secrets.json").write_text(json.dumps(SECRETS))

        assert load_secrets() == SECRETS

    def test_nothing_found(self, isolated_home):
        with pytest.raises(SecretsNotFoundError):
            load_secrets()


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_accepts_complete_config(self):
        validate_config(SECRETS)

    def test_missing_section(self):
        with pytest.raises(ConfigError, match="cloudinary"):
            validate_config({})

    @pytest.mark.parametrize("field", ["cloud_name", "api_key", "api_secret"])
    def test_missing_field(self, field):
        section = {k: v for k, v in SECRETS["cloudinary"].items() if k != field}

        with pytest.raises(ConfigError, match=field):
            validate_config({"cloudinary": section})


class TestEnvOverrides:
    """Tests for apply_env_overrides function."""

    def test_env_fills_and_overrides(self):
        secrets = apply_env_overrides(SECRETS, {
            "CLOUDINARY_API_SECRET": "from-env",
            "CLOUDINARY_PRIVATE_CDN": "https://private.example.com",
        })

        assert secrets["cloudinary"]["api_secret"] == "from-env"
        assert secrets["cloudinary"]["private_cdn"] == "https://private.example.com"
        assert secrets["cloudinary"]["cloud_name"] == "demo"

    def test_does_not_mutate_input(self):
        apply_env_overrides(SECRETS, {"CLOUDINARY_CLOUD_NAME": "other"})

        assert SECRETS["cloudinary"]["cloud_name"] == "demo"


class TestGetCloudinaryConfig:
    """Tests for get_cloudinary_config and load_config."""

    def test_defaults(self):
        config = get_cloudinary_config(SECRETS)

        assert config.cloud_name == "demo"
        assert config.api_key == "1234"
        assert config.private_cdn is None
        assert config.js_image == DEFAULT_JS_IMAGE
        assert config.public_cdn == PUBLIC_CDN

    def test_optional_fields(self):
        secrets = {"cloudinary": {**SECRETS["cloudinary"], "js_image": "/blank.gif"}}

        assert get_cloudinary_config(secrets).js_image == "/blank.gif"

    def test_load_config_from_env_only(self, isolated_home):
        config = load_config(environ={
            "CLOUDINARY_CLOUD_NAME": "demo",
            "CLOUDINARY_API_KEY": "1234",
            "CLOUDINARY_API_SECRET": "abcd",
        })

        assert config.cloud_name == "demo"
        assert config.api_secret == "abcd"

    def test_load_config_without_credentials(self, isolated_home):
        with pytest.raises(ConfigError, match="cloud_name is required"):
            load_config(environ={})

    def test_load_config_explicit_missing_path(self, tmp_path):
        with pytest.raises(SecretsNotFoundError):
            load_config(tmp_path / "missing.json", environ={})


class TestCloudinaryConfig:
    """Tests for CloudinaryConfig construction."""

    @pytest.mark.parametrize("field", ["cloud_name", "api_key", "api_secret"])
    def test_empty_credential_is_fatal(self, field):
        values = {"cloud_name": "demo", "api_key": "1234", "api_secret": "abcd", field: ""}

        with pytest.raises(ConfigError, match=f"{field} is required"):
            CloudinaryConfig(**values)
