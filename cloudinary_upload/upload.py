"""Upload API transport.

Builds signed upload and destroy requests, posts them with httpx,
and turns the responses into ApiResult values. Batches are dispatched
in parallel with a thread pool.
"""

import logging
import mimetypes
import time
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable

import httpx

from .errors import UsageError
from .models import (
    ApiResult,
    CloudinaryConfig,
    FileInput,
    InMemoryBytes,
    LocalPath,
    RemoteUrl,
)
from .signing import SIGNATURE_KEYS, sign_request
from .urls import api_url


logger = logging.getLogger(__name__)

REMOTE_PREFIXES = ('http://', 'https://', 'ftp://', 's3://', 'data:')

DEFAULT_TIMEOUT = 60.0


def init_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.Client:
    """Create an HTTP client for the upload API.

    Args:
        timeout: Request timeout in seconds

    Returns:
        Configured httpx client
    """
    return httpx.Client(
        timeout=timeout,
        headers={"Accept": "application/json"},
    )


def resolve_file_input(value: Any, filename: str | None = None) -> FileInput:
    """Turn whatever the caller passed as ``file`` into a FileInput.

    Args:
        value: Path, bytes, URL string, local path string or FileInput
        filename: Filename to send for in-memory data

    Returns:
        LocalPath, InMemoryBytes or RemoteUrl

    Raises:
        UsageError: If the value cannot be uploaded
    """
    if isinstance(value, (LocalPath, InMemoryBytes, RemoteUrl)):
        return value
    if isinstance(value, Path):
        return LocalPath(value, filename)
    if isinstance(value, (bytes, bytearray)):
        return InMemoryBytes(bytes(value), filename or "file")
    if isinstance(value, str):
        if not value:
            raise UsageError("file must not be empty")
        if value.startswith(REMOTE_PREFIXES):
            return RemoteUrl(value)
        return LocalPath(Path(value), filename)
    raise UsageError(f"Cannot upload object of type {type(value).__name__}")


def _checked_source(file: Any, filename: str | None) -> FileInput:
    if file is None:
        raise UsageError("file is required to upload")
    source = resolve_file_input(file, filename)
    if isinstance(source, LocalPath) and not Path(source.path).is_file():
        raise UsageError(f"File not found: {source.path}")
    return source


def part_content_type(filename: str) -> str:
    """Content type for a multipart file part.

    The upload API rejects parts labelled text/plain, so those are sent
    as application/octet-stream instead.

    Args:
        filename: Name of the uploaded file

    Returns:
        Content type to send
    """
    content_type, _ = mimetypes.guess_type(filename)
    if not content_type or content_type == 'text/plain':
        return 'application/octet-stream'
    return content_type


def build_upload_params(**params: Any) -> dict[str, Any]:
    """Assemble the signable parameters of an upload request.

    Defaults ``timestamp`` to now and joins list ``tags`` with commas.
    Keys that are not sent to the API (such as ``resource_type``) are
    dropped.

    Returns:
        Parameters to post, without file, api_key and signature
    """
    tags = params.get('tags')
    if isinstance(tags, (list, tuple, set)):
        params['tags'] = ','.join(str(tag) for tag in tags)

    post = {'timestamp': params.get('timestamp') or int(time.time())}
    for key in SIGNATURE_KEYS:
        if key != 'timestamp' and params.get(key) is not None:
            post[key] = params[key]

    return post


def build_destroy_params(public_id: str, **params: Any) -> dict[str, Any]:
    """Assemble the signable parameters of a destroy request.

    Raises:
        UsageError: If public_id is empty
    """
    if not public_id:
        raise UsageError("public_id is required to destroy an asset")

    return {
        'public_id': public_id,
        'timestamp': params.get('timestamp') or int(time.time()),
        'type': params.get('type') or 'upload',
    }


def sign_params(config: CloudinaryConfig, post: dict[str, Any]) -> dict[str, Any]:
    """Attach api_key and signature to a parameter mapping."""
    signed = dict(post)
    signed['api_key'] = config.api_key
    signed['signature'] = sign_request(signed, config.api_secret)
    return signed


def interpret_response(response: httpx.Response) -> ApiResult:
    """Convert an HTTP response into an ApiResult.

    Args:
        response: Response from the upload API

    Returns:
        Successful result for 2xx answers, failed result otherwise; the
        body is None when the response carried no JSON object
    """
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = None

    if not response.is_success:
        logger.warning("Cloudinary answered HTTP %s", response.status_code)
    return ApiResult(ok=response.is_success, status_code=response.status_code, body=body)


def _post(
    client: httpx.Client,
    url: str,
    data: dict[str, Any],
    files: dict[str, tuple[str, bytes, str]] | None = None,
) -> ApiResult:
    form = {key: str(value) for key, value in data.items()}

    logger.info("POST %s", url)
    try:
        response = client.post(url, data=form, files=files)
    except httpx.TransportError as e:
        logger.warning("Could not reach %s: %s", url, e)
        return ApiResult(ok=False, error=str(e))

    return interpret_response(response)


def upload_file(
    client: httpx.Client,
    config: CloudinaryConfig,
    file: Any,
    resource_type: str = 'image',
    filename: str | None = None,
    **params: Any,
) -> ApiResult:
    """Upload a single file.

    Args:
        client: httpx client
        config: Cloudinary configuration
        file: Path, bytes, URL or FileInput to upload
        resource_type: image or raw
        filename: Filename to send for in-memory data
        **params: timestamp, public_id, format, tags, callback, eager,
            transformation, type

    Returns:
        ApiResult whose body holds url, secure_url, public_id, version
        and, for images, width and height

    Raises:
        UsageError: If no file was given
    """
    source = _checked_source(file, filename)

    post = sign_params(config, build_upload_params(**params))
    url = api_url(config.cloud_name, resource_type or 'image', 'upload', config.api_base)

    if isinstance(source, RemoteUrl):
        return _post(client, url, {**post, 'file': source.url})

    if isinstance(source, LocalPath):
        data = Path(source.path).read_bytes()
    else:
        data = source.data

    files = {'file': (source.name, data, part_content_type(source.name))}
    return _post(client, url, post, files)


def destroy_file(
    client: httpx.Client,
    config: CloudinaryConfig,
    public_id: str,
    resource_type: str = 'image',
    **params: Any,
) -> ApiResult:
    """Delete an asset identified by its public id.

    Args:
        client: httpx client
        config: Cloudinary configuration
        public_id: Public id of the asset
        resource_type: image or raw
        **params: timestamp, type

    Returns:
        ApiResult of the destroy call

    Raises:
        UsageError: If public_id is empty
    """
    post = sign_params(config, build_destroy_params(public_id, **params))
    url = api_url(config.cloud_name, resource_type or 'image', 'destroy', config.api_base)
    return _post(client, url, post)


def submit_upload(
    executor: ThreadPoolExecutor,
    client: httpx.Client,
    config: CloudinaryConfig,
    file: Any,
    **params: Any,
) -> "Future[ApiResult]":
    """Dispatch an upload on an executor and return its future.

    Usage errors are raised here, before anything is submitted.
    """
    _checked_source(file, params.get('filename'))
    return executor.submit(upload_file, client, config, file, **params)


def submit_destroy(
    executor: ThreadPoolExecutor,
    client: httpx.Client,
    config: CloudinaryConfig,
    public_id: str,
    **params: Any,
) -> "Future[ApiResult]":
    """Dispatch a destroy on an executor and return its future."""
    if not public_id:
        raise UsageError("public_id is required to destroy an asset")
    return executor.submit(destroy_file, client, config, public_id, **params)


def batch_upload(
    client: httpx.Client,
    config: CloudinaryConfig,
    files: Iterable[Any],
    max_workers: int = 4,
    **params: Any,
) -> list[ApiResult]:
    """Upload multiple files in parallel.

    Args:
        client: httpx client
        config: Cloudinary configuration
        files: Files to upload
        max_workers: Maximum number of parallel uploads
        **params: Parameters shared by every upload

    Returns:
        ApiResults in the same order as the input

    Raises:
        UsageError: If any file is missing or invalid; nothing is sent
    """
    sources = [_checked_source(file, params.get('filename')) for file in files]
    if not sources:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(upload_file, client, config, source, **params)
            for source in sources
        ]
        return [future.result() for future in futures]


def batch_destroy(
    client: httpx.Client,
    config: CloudinaryConfig,
    public_ids: Iterable[str],
    max_workers: int = 4,
    **params: Any,
) -> tuple[int, int]:
    """Delete multiple assets in parallel.

    Args:
        client: httpx client
        config: Cloudinary configuration
        public_ids: Public ids to delete
        max_workers: Maximum number of parallel requests

    Returns:
        Tuple of (deleted_count, failed_count)
    """
    public_ids = list(public_ids)
    if not public_ids:
        return (0, 0)
    if not all(public_ids):
        raise UsageError("public_id is required to destroy an asset")

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            submit_destroy(executor, client, config, public_id, **params)
            for public_id in public_ids
        ]
        results = [future.result() for future in futures]

    deleted = sum(1 for r in results if r.ok)
    return (deleted, len(results) - deleted)
