"""File URL and path helpers."""

import os
import urllib.parse
import urllib.request
from pathlib import Path


def is_file_url(url: str) -> bool:
    """True when *url* uses the ``file:`` scheme."""
    return url[:5].lower() == "file:"


def path_to_file_url(path: str | os.PathLike) -> str:
    """Return the ``file://`` URL for *path* (made absolute first)."""
    return Path(os.path.abspath(path)).as_uri()


def file_url_to_path(url: str) -> str | None:
    """
    Convert a ``file:`` URL to a local filesystem path.

    Returns None when *url* is not a local file URL (other scheme, or a
    non-local host).
    """
    if not is_file_url(url):
        return None

    parsed = urllib.parse.urlparse(url)
    if parsed.netloc not in ("", "localhost"):
        return None
    if not parsed.path:
        return None

    # url2pathname percent-decodes and handles Windows drive letters
    return urllib.request.url2pathname(parsed.path)


def to_posix_path(path: str) -> str:
    """Normalise directory separators to forward slashes."""
    return path.replace("\\", "/")
