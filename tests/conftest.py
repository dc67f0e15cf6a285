"""Shared fixtures for the test suite."""

import pytest

from cloudinary_upload.models import CloudinaryConfig


@pytest.fixture
def config():
    """Configuration for the demo cloud used in the API docs."""
    return CloudinaryConfig(
        cloud_name="demo",
        api_key="1234",
        api_secret="abcd",
        private_cdn="https://demo-res.cloudinary.com",
    )

