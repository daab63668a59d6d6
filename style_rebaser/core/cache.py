"""
Run-scoped state shared by every importer of one compilation.

* ``DirectoryEntryCache`` – memoised directory listings (files vs. directories)
* ``RebaseContext``       – entry directory, directory cache and the optional
                            table of intermediate rebase source maps

A context is created once per compilation run and passed to each importer;
nothing here is global, and nothing is ever invalidated during a run.
"""

import logging
import os
from dataclasses import dataclass, field

log = logging.getLogger("style-rebaser")


@dataclass(frozen=True)
class DirectoryEntry:
    """Snapshot of one directory's listing."""

    files: frozenset[str] = frozenset()
    directories: frozenset[str] = frozenset()


class DirectoryEntryCache:
    """Per-directory listing cache keyed by directory path."""

    def __init__(self) -> None:
        self._entries: dict[str, DirectoryEntry] = {}

    def __contains__(self, directory: str) -> bool:
        return directory in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, directory: str) -> DirectoryEntry:
        """
        Return the listing of *directory*, reading it from disk on first use.

        Repeated calls for the same path return the same object.  A listing
        that fails (missing directory, permission denied, …) yields an empty
        entry that is not cached.
        """
        cached = self._entries.get(directory)
        if cached is not None:
            return cached

        files: set[str] = set()
        directories: set[str] = set()
        try:
            with os.scandir(directory) as it:
                for entry in it:
                    # is_dir()/is_file() follow symlinks, so links are
                    # classified by their target; broken links are neither
                    if entry.is_dir():
                        directories.add(entry.name)
                    elif entry.is_file():
                        files.add(entry.name)
        except FileNotFoundError:
            log.debug("[LISTDIR] %s does not exist", directory)
            return DirectoryEntry()
        except OSError as exc:
            log.warning("[LISTDIR] Cannot read directory %s: %s", directory, exc)
            return DirectoryEntry()

        entry = DirectoryEntry(frozenset(files), frozenset(directories))
        self._entries[directory] = entry
        log.debug(
            "[LISTDIR] %s: %d file(s), %d dir(s)",
            directory, len(entry.files), len(entry.directories),
        )
        return entry


@dataclass
class RebaseContext:
    """State owned by one compilation run.

    Attributes
    ----------
    entry_directory : str
        Absolute directory every rebased ``url()`` is made relative to.
    directory_cache : DirectoryEntryCache
        Listing cache shared by all importers of the run.
    source_maps : dict[str, dict] | None
        Canonical file URL → intermediate source map for each rewritten
        file.  ``None`` disables source-map tracking.
    """

    entry_directory: str
    directory_cache: DirectoryEntryCache = field(default_factory=DirectoryEntryCache)
    source_maps: dict[str, dict] | None = None

    def __post_init__(self) -> None:
        self.entry_directory = os.path.abspath(self.entry_directory)
