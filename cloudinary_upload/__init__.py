"""Cloudinary Upload - sign, upload, delete and build URLs for Cloudinary assets.

A small client for the Cloudinary upload API with deterministic
delivery URL construction and a CLI on top.
"""

__version__ = "0.1.0"
__author__ = "Cloudinary Upload"

from .errors import CloudinaryError, ConfigError, UsageError
from .models import (
    ApiResult,
    CloudinaryConfig,
    FileInput,
    InMemoryBytes,
    LocalPath,
    RemoteUrl,
    UploadResult,
)
from .options import OPTION_NAMES, OptionNames
from .signing import SIGNATURE_KEYS, sign_request
from .urls import build_url

__all__ = [
    "__version__",
    "CloudinaryError",
    "ConfigError",
    "UsageError",
    "ApiResult",
    "CloudinaryConfig",
    "FileInput",
    "InMemoryBytes",
    "LocalPath",
    "RemoteUrl",
    "UploadResult",
    "OPTION_NAMES",
    "OptionNames",
    "SIGNATURE_KEYS",
    "sign_request",
    "build_url",
]
