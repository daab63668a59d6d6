"""
Stylesheet module resolution.

Resolves a ``file:`` URL written without (or with) a style extension to
exactly one stylesheet on disk, following the Sass file lookup rules:

* ``foo``        → ``foo.scss``, ``foo.sass``, ``foo.css`` and the partial
                   forms ``_foo.scss``, ``_foo.sass``, ``_foo.css``
* ``foo.scss``   → ``foo.scss`` or ``_foo.scss``
* import-only    → ``foo.import.<ext>`` / ``_foo.import.<ext>`` take
                   priority, but only for ``@import`` rules
* directory      → ``foo/index.<ext>`` / ``foo/_index.<ext>`` when no file
                   named ``foo`` matched

Two or more matches are an error, except that a single Sass/SCSS file wins
over same-named CSS files.
"""

import logging
import os

from style_rebaser.config import (
    CSS_EXTENSION,
    IMPORT_ONLY_MARKER,
    INDEX_NAME,
    PARTIAL_PREFIX,
    STYLE_EXTENSIONS,
)
from style_rebaser.core.cache import DirectoryEntryCache
from style_rebaser.utils.path import file_url_to_path, path_to_file_url

log = logging.getLogger("style-rebaser")


class AmbiguousImportError(Exception):
    """Raised when a specifier matches several equally valid stylesheets."""

    def __init__(self, directory: str, candidates: list[str]) -> None:
        self.directory = directory
        self.candidates = list(candidates)
        super().__init__(
            "Ambiguous import detected: "
            f"{', '.join(self.candidates)} in {directory}"
        )


def candidate_names(
    filename: str,
    extension: str | None,
    from_import: bool,
) -> tuple[list[str], list[str]]:
    """
    Return ``(import_candidates, default_candidates)`` for a base name.

    *extension* is the style extension already present on the specifier, or
    None when the specifier has none.  Import-only candidates are only
    produced when *from_import* is true.
    """
    extensions = (extension,) if extension else STYLE_EXTENSIONS
    import_candidates: list[str] = []
    default_candidates: list[str] = []

    for prefix in ("", PARTIAL_PREFIX):
        for ext in extensions:
            if from_import:
                import_candidates.append(f"{prefix}{filename}{IMPORT_ONLY_MARKER}{ext}")
            default_candidates.append(f"{prefix}{filename}{ext}")

    return import_candidates, default_candidates


def check_found(found: list[str], directory: str = "") -> str | None:
    """
    Pick the single stylesheet among *found* file names.

    Returns None when nothing was found.  When several were found, CSS files
    are discarded; exactly one remaining file wins, anything else raises
    ``AmbiguousImportError``.
    """
    if not found:
        return None
    if len(found) == 1:
        return found[0]

    # Presence of CSS files alongside one Sass file is not ambiguous
    without_css = [name for name in found if os.path.splitext(name)[1] != CSS_EXTENSION]
    if len(without_css) != 1:
        log.debug("[AMBIGUOUS] %s: %s", directory, ", ".join(found))
        raise AmbiguousImportError(directory, found)
    return without_css[0]


class ModuleResolver:
    """Resolves ``file:`` URLs to stylesheet files using a shared
    ``DirectoryEntryCache``."""

    def __init__(self, directory_cache: DirectoryEntryCache | None = None) -> None:
        self.directory_cache = directory_cache if directory_cache is not None else DirectoryEntryCache()

    def resolve(self, url: str, from_import: bool, check_directory: bool = True) -> str | None:
        """
        Resolve *url* to the canonical ``file:`` URL of one stylesheet.

        Parameters
        ----------
        url : str
            ``file:`` URL of the requested stylesheet, with or without
            extension.  Any other URL returns None.
        from_import : bool
            True when the reference comes from an ``@import`` rule, which
            enables import-only files.
        check_directory : bool
            Also try ``<url>/index`` when a directory of that name exists.

        Returns
        -------
        str | None
            The resolved URL, or None when no stylesheet matches.

        Raises
        ------
        AmbiguousImportError
            When more than one stylesheet matches.
        """
        stylesheet_path = file_url_to_path(url)
        if stylesheet_path is None:
            return None

        directory, basename = os.path.split(stylesheet_path)
        if not basename:
            return None

        stem, extension = os.path.splitext(basename)
        has_style_extension = extension in STYLE_EXTENSIONS
        # The extension is stripped so ".import" can be inserted before it
        filename = stem if has_style_extension else basename

        import_candidates, default_candidates = candidate_names(
            filename, extension if has_style_extension else None, from_import,
        )

        entry = self.directory_cache.get(directory)
        found_imports = [name for name in import_candidates if name in entry.files]
        found_defaults = [name for name in default_candidates if name in entry.files]
        has_potential_index = (
            check_directory and not has_style_extension and filename in entry.directories
        )

        # found_imports can only be non-empty for @import rules
        result = check_found(found_imports, directory)
        if result is None:
            result = check_found(found_defaults, directory)
        if result is not None:
            resolved = path_to_file_url(os.path.join(directory, result))
            log.debug("[RESOLVE] %s → %s", url, resolved)
            return resolved

        if has_potential_index:
            log.debug("[INDEX] %s is a directory, trying %s/%s", url, url, INDEX_NAME)
            return self.resolve(f"{url}/{INDEX_NAME}", from_import, check_directory=False)

        return None
