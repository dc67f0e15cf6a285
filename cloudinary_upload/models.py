"""Data models for the Cloudinary client.

Contains data classes for credentials, file inputs, API results and
upload results.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from .errors import ConfigError


API_BASE = "http://api.cloudinary.com/v1_1"
PUBLIC_CDN = "http://res.cloudinary.com"
DEFAULT_JS_IMAGE = "/image/blank.png"


@dataclass(frozen=True)
class CloudinaryConfig:
    """Cloudinary account configuration.

    Attributes:
        cloud_name: Cloud name from the Cloudinary console
        api_key: API key from the Cloudinary console
        api_secret: API secret, only used for signing, never transmitted
        private_cdn: Private CDN base URL, required for secure URLs
        js_image: Placeholder src for images handled by the jQuery plugin
        api_base: Base URL of the upload API
        public_cdn: Base URL of the shared delivery CDN
    """
    cloud_name: str
    api_key: str
    api_secret: str
    private_cdn: Optional[str] = None
    js_image: str = DEFAULT_JS_IMAGE
    api_base: str = API_BASE
    public_cdn: str = PUBLIC_CDN

    def __post_init__(self) -> None:
        for name in ('cloud_name', 'api_key', 'api_secret'):
            if not getattr(self, name):
                raise ConfigError(f"{name} is required")


@dataclass(frozen=True)
class LocalPath:
    """A file on the local filesystem."""
    path: Path
    filename: Optional[str] = None

    @property
    def name(self) -> str:
        return self.filename or Path(self.path).name


@dataclass(frozen=True)
class InMemoryBytes:
    """File content already held in memory."""
    data: bytes
    filename: str = "file"

    @property
    def name(self) -> str:
        return self.filename


@dataclass(frozen=True)
class RemoteUrl:
    """A URL Cloudinary fetches the file from."""
    url: str


FileInput = Union[LocalPath, InMemoryBytes, RemoteUrl]


@dataclass
class ApiResult:
    """Outcome of a single call to the upload API.

    Attributes:
        ok: True when the API answered with a 2xx status
        status_code: HTTP status, None if the service was never reached
        body: Parsed JSON body, None if no (valid) body was returned
        error: Transport error text when the request could not be sent
    """
    ok: bool
    status_code: Optional[int] = None
    body: Optional[dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def reached_remote(self) -> bool:
        """True if the service answered with a body."""
        return self.body is not None

    @property
    def error_message(self) -> Optional[str]:
        """Best available description of a failure."""
        if self.ok:
            return None
        if self.body is not None:
            error = self.body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if error:
                return str(error)
        if self.error:
            return self.error
        if self.status_code is not None:
            return f"HTTP {self.status_code}"
        return "Unknown error"


@dataclass
class UploadResult:
    """Result of a successful upload.

    Attributes:
        url: Delivery URL of the uploaded asset
        secure_url: HTTPS delivery URL
        public_id: Identifier assigned to the asset
        version: Asset version
        width: Width in pixels (images only)
        height: Height in pixels (images only)
    """
    url: str
    public_id: str
    secure_url: Optional[str] = None
    version: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> "UploadResult":
        version = body.get("version")
        return cls(
            url=body["url"],
            public_id=body["public_id"],
            secure_url=body.get("secure_url"),
            version=str(version) if version is not None else None,
            width=body.get("width"),
            height=body.get("height"),
        )
