"""
Output helpers – mapping canonical stylesheet URLs to output paths and
saving rebased contents.
"""

import json
import logging
import os
from pathlib import Path

from style_rebaser.config import EXTERNAL_DIR, SOURCE_MAP_SUFFIX
from style_rebaser.utils.path import file_url_to_path

log = logging.getLogger("style-rebaser")


def save_file(local_path: Path, content: str) -> None:
    """Write *content* to *local_path* as UTF-8, creating parent directories."""
    local_path.parent.mkdir(parents=True, exist_ok=True)
    with local_path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(content)
    log.debug("[SAVE] %s (%d chars)", local_path, len(content))


def output_path_for(canonical_url: str, entry_directory: str, output_dir: Path) -> Path:
    """
    Map a canonical stylesheet URL to its location inside *output_dir*,
    mirroring its position relative to *entry_directory*.

    src/app.scss           → <output>/app.scss
    src/shared/_b.scss     → <output>/shared/_b.scss
    node_modules/x/_y.scss → <output>/_external/node_modules/x/_y.scss
    """
    path = file_url_to_path(canonical_url)
    if path is None:
        raise ValueError(f"Not a local file URL: {canonical_url}")

    relative = os.path.relpath(path, entry_directory)
    parts = Path(relative).parts
    if parts and parts[0] == os.pardir:
        # Outside the entry directory: keep the path below the drive/root
        drive_less = Path(os.path.splitdrive(os.path.abspath(path))[1])
        return output_dir / EXTERNAL_DIR / Path(*drive_less.parts[1:])
    return output_dir / relative


def save_source_map(stylesheet_output: Path, source_map: dict) -> Path:
    """Write *source_map* as JSON next to *stylesheet_output*."""
    map_path = stylesheet_output.with_name(stylesheet_output.name + SOURCE_MAP_SUFFIX)
    save_file(map_path, json.dumps(source_map, indent=2))
    return map_path
