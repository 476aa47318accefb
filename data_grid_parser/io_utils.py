from __future__ import annotations

import codecs
import logging
import os
from typing import Optional
from urllib.parse import urlparse

import httpx

from . import config
from .errors import FetchError

logger = logging.getLogger(__name__)


def _decode(content) -> str:
    if isinstance(content, bytes):
        try:
            return content.decode('utf-8-sig')
        except UnicodeDecodeError as exc:
            raise FetchError("File is not valid UTF-8 text", detail=str(exc)) from exc
    return content


def read_text_content(file_obj) -> str:
    """Read text from an uploaded file, a file-like object or a path."""
    if file_obj is None:
        raise FetchError("No file uploaded.")

    try:
        if hasattr(file_obj, 'read'):
            if hasattr(file_obj, 'seek'):
                file_obj.seek(0)
            return _decode(file_obj.read())

        if isinstance(file_obj, (str, os.PathLike)):
            path = file_obj
        else:
            path = file_obj.name
        with open(path, 'rb') as f:
            return _decode(f.read())
    except OSError as exc:
        raise FetchError("Failed to read file", detail=str(exc)) from exc


def _fetch_with_client(client: httpx.Client, url: str, max_bytes: int) -> str:
    response = client.get(url)
    if response.is_error:
        raise FetchError(
            f"Failed to fetch data from URL: HTTP error! status: {response.status_code}",
            detail=f"HTTP {response.status_code}",
        )
    content = response.content
    if len(content) > max_bytes:
        raise FetchError(
            "Failed to fetch data from URL: response too large",
            detail=f"{len(content)} bytes exceeds limit of {max_bytes}",
        )
    logger.debug("Fetched %d bytes from %s (%s)", len(content), url, response.headers.get('content-type'))
    if content.startswith(codecs.BOM_UTF8):
        return content.decode("utf-8-sig", errors="replace")
    return response.text


def fetch_text(
    url: str,
    *,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
    max_bytes: Optional[int] = None,
) -> str:
    """GET ``url`` and return the body as text."""
    text = (url or '').strip()
    if not text:
        raise FetchError("Please provide a URL to fetch data from")
    if urlparse(text).scheme.lower() not in ('http', 'https'):
        raise FetchError("Failed to fetch data from URL: only http and https URLs are supported", detail=text)

    max_bytes = config.MAX_FETCH_BYTES if max_bytes is None else max_bytes
    try:
        if client is not None:
            return _fetch_with_client(client, text, max_bytes)
        with httpx.Client(follow_redirects=True, timeout=timeout or config.FETCH_TIMEOUT) as local_client:
            return _fetch_with_client(local_client, text, max_bytes)
    except httpx.HTTPError as exc:
        logger.warning("Fetching %s failed: %s", text, exc)
        raise FetchError(f"Failed to fetch data from URL: {exc}", detail=str(exc)) from exc
