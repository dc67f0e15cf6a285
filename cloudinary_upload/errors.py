"""Exceptions raised by the Cloudinary client.

Remote failures are not exceptions: the upload layer returns them as
failed ApiResult values so callers can tell a rejected request apart
from an unreachable service.
"""


class CloudinaryError(Exception):
    """Base class for all errors raised by cloudinary_upload."""
    pass


class ConfigError(CloudinaryError):
    """Raised when a required credential or setting is missing."""
    pass


class UsageError(CloudinaryError, ValueError):
    """Raised when a call is missing a required argument."""
    pass
