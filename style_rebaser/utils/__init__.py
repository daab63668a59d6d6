"""Utility helpers for logging, file URLs and source maps."""

from style_rebaser.utils.log import setup_logging, log
from style_rebaser.utils.path import (
    file_url_to_path,
    is_file_url,
    path_to_file_url,
    to_posix_path,
)
from style_rebaser.utils.sourcemap import EditBuffer, encode_vlq

__all__ = [
    "setup_logging",
    "log",
    "file_url_to_path",
    "is_file_url",
    "path_to_file_url",
    "to_posix_path",
    "EditBuffer",
    "encode_vlq",
]
