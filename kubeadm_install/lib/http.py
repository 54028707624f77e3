from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import requests

from ..errors import DownloadError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
CHUNK_SIZE = 1024 * 1024


def _get(url: str, **kwargs: Any) -> requests.Response:
    try:
        r = requests.get(url, timeout=DEFAULT_TIMEOUT, allow_redirects=True, **kwargs)
    except requests.RequestException as e:
        raise DownloadError(f"GET {url} failed: {e}") from e
    try:
        r.raise_for_status()
    except requests.RequestException as e:
        r.close()
        raise DownloadError(f"GET {url} failed: {e}") from e
    return r


def get_text(url: str) -> str:
    logger.debug("GET %s", url)
    return _get(url).text


def get_json(url: str) -> Any:
    logger.debug("GET %s", url)
    r = _get(url, headers={"Accept": "application/vnd.github+json"})
    try:
        return r.json()
    except ValueError as e:
        raise DownloadError(f"GET {url} returned invalid JSON") from e


def download(url: str, dest: Path) -> Path:
    """Stream url into dest and return dest."""

    logger.info("Downloading %s", url)
    r = _get(url, stream=True)
    dest.parent.mkdir(parents=True, exist_ok=True)
    try:
        with dest.open("wb") as f:
            for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
    except requests.RequestException as e:
        raise DownloadError(f"GET {url} failed: {e}") from e
    finally:
        r.close()
    return dest
