"""Configuration and secrets management for the Cloudinary client.

Handles loading secrets.json, overlaying environment variables,
validating configuration, and building CloudinaryConfig.
"""

import json
import os
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigError
from .models import CloudinaryConfig


REQUIRED_FIELDS = ('cloud_name', 'api_key', 'api_secret')

ENV_OVERRIDES = {
    'CLOUDINARY_CLOUD_NAME': 'cloud_name',
    'CLOUDINARY_API_KEY': 'api_key',
    'CLOUDINARY_API_SECRET': 'api_secret',
    'CLOUDINARY_PRIVATE_CDN': 'private_cdn',
}

__all__ = [
    'ConfigError',
    'SecretsNotFoundError',
    'get_config_dir',
    'load_secrets',
    'apply_env_overrides',
    'validate_config',
    'get_cloudinary_config',
    'load_config',
]


class SecretsNotFoundError(ConfigError):
    """Raised when no secrets.json can be found."""
    pass


def get_config_dir() -> Path:
    """Get or create the config directory.

    Returns:
        Path to config directory (~/.config/cloudinary-upload/)
    """
    config_dir = Path.home() / ".config" / "cloudinary-upload"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def load_secrets(secrets_path: Path | None = None) -> dict[str, Any]:
    """Load secrets.json.

    Searches for secrets.json in the following order:
    1. Explicit path if provided
    2. ~/.config/cloudinary-upload/secrets.json (recommended)
    3. ./secrets.json (current directory)

    Args:
        secrets_path: Optional explicit path to secrets.json

    Returns:
        Dictionary containing all secrets

    Raises:
        ConfigError: If secrets.json is missing or invalid
    """
    if secrets_path is not None:
        if not secrets_path.exists():
            raise SecretsNotFoundError(f"secrets.json not found at {secrets_path}.")
        found_path = secrets_path
    else:
        config_path = get_config_dir() / "secrets.json"
        local_path = Path("secrets.json")

        if config_path.exists():
            found_path = config_path
        elif local_path.exists():
            found_path = local_path
        else:
            raise SecretsNotFoundError(
                f"secrets.json not found at {config_path}. "
                "Create it or set the CLOUDINARY_* environment variables."
            )

    try:
        with open(found_path) as f:
            secrets = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {found_path}: {e}")

    if not isinstance(secrets, dict):
        raise ConfigError(f"Expected a JSON object in {found_path}")

    return secrets


def apply_env_overrides(
    secrets: dict[str, Any],
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Overlay CLOUDINARY_* environment variables on the cloudinary section.

    Args:
        secrets: Dictionary loaded from secrets.json (may be empty)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        New secrets dictionary with overrides applied
    """
    environ = os.environ if environ is None else environ
    section = dict(secrets.get("cloudinary", {}))

    for var, field in ENV_OVERRIDES.items():
        if environ.get(var):
            section[field] = environ[var]

    return {**secrets, "cloudinary": section}


def validate_config(secrets: dict[str, Any]) -> None:
    """Validate that all required credentials are present.

    Args:
        secrets: Secrets dictionary

    Raises:
        ConfigError: If required fields are missing
    """
    if "cloudinary" not in secrets:
        raise ConfigError("Missing required section: cloudinary")

    for field in REQUIRED_FIELDS:
        if not secrets["cloudinary"].get(field):
            raise ConfigError(f"{field} is required")


def get_cloudinary_config(secrets: dict[str, Any]) -> CloudinaryConfig:
    """Extract Cloudinary configuration from secrets.

    Args:
        secrets: Validated secrets dictionary

    Returns:
        CloudinaryConfig with credentials
    """
    section = secrets["cloudinary"]
    optional = {
        key: section[key]
        for key in ('private_cdn', 'js_image', 'api_base', 'public_cdn')
        if section.get(key)
    }
    return CloudinaryConfig(
        cloud_name=section["cloud_name"],
        api_key=str(section["api_key"]),
        api_secret=section["api_secret"],
        **optional,
    )


def load_config(
    secrets_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> CloudinaryConfig:
    """Load, validate and build the configuration in one step.

    A missing secrets.json is tolerated when the environment supplies
    every credential.

    Raises:
        ConfigError: If credentials cannot be found
    """
    try:
        secrets = load_secrets(secrets_path)
    except SecretsNotFoundError:
        if secrets_path is not None:
            raise
        secrets = {}

    secrets = apply_env_overrides(secrets, environ)
    validate_config(secrets)
    return get_cloudinary_config(secrets)
