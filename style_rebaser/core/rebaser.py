"""
``url()`` rebasing for loaded stylesheets.

Every relative ``url()`` value in a stylesheet is rewritten relative to the
entry directory, so that it still points at the same asset once the
compiled output (which inlines all imported files) is written next to the
entry stylesheet.
"""

import logging
import os
from dataclasses import dataclass, field

from style_rebaser.config import (
    ABSOLUTE_URL_RE,
    BUNDLER_PREFIXES,
    CSS_ESCAPE_RE,
    DEFAULT_SYNTAX,
    NAMESPACED_VARIABLE_RE,
    REBASE_PREFIX,
    SYNTAX_BY_EXTENSION,
    VARIABLE_SIGIL,
)
from style_rebaser.core.cache import RebaseContext
from style_rebaser.extraction.urls import find_urls
from style_rebaser.utils.path import file_url_to_path, to_posix_path
from style_rebaser.utils.sourcemap import EditBuffer

log = logging.getLogger("style-rebaser")


def should_rebase(value: str) -> bool:
    """
    False for values that relocation cannot affect or that are not paths:

    * empty values
    * module variables (``$var``, ``ns.$var``)
    * bundler prefixes (``~pkg/x``, ``^x``)
    * absolute, protocol-relative, root-relative, ``data:``/``chrome:`` and
      fragment-only references
    """
    if not value:
        return False
    if value[0] == VARIABLE_SIGIL or NAMESPACED_VARIABLE_RE.match(value):
        return False
    if value.startswith(BUNDLER_PREFIXES):
        return False
    return not ABSOLUTE_URL_RE.match(value)


def rebase_url(value: str, stylesheet_directory: str, entry_directory: str) -> str | None:
    """
    Return *value* rewritten relative to *entry_directory*, or None when the
    value must be left untouched.

    The result uses forward slashes, escapes characters that are not allowed
    in an unquoted ``url()`` and always starts with ``./``::

        >>> rebase_url("images/a.png", "src/app/styles", "src")
        './app/styles/images/a.png'
    """
    if not should_rebase(value):
        return None

    rebased_path = os.path.relpath(os.path.join(stylesheet_directory, value), entry_directory)
    # https://developer.mozilla.org/en-US/docs/Web/CSS/url#syntax
    escaped = CSS_ESCAPE_RE.sub(lambda m: "\\" + m.group(0), to_posix_path(rebased_path))
    return REBASE_PREFIX + escaped


def syntax_for_path(path: str) -> str:
    """Stylesheet syntax implied by the extension of *path*."""
    return SYNTAX_BY_EXTENSION.get(os.path.splitext(path)[1].lower(), DEFAULT_SYNTAX)


@dataclass
class ImporterResult:
    """Contents handed back to the compiler for one canonical URL."""

    contents: str = field(repr=False)
    syntax: str
    source_map_url: str


class PathRebaser:
    """Implements the ``load`` half of the importer protocol."""

    def __init__(self, context: RebaseContext) -> None:
        self.context = context

    def rebase(self, contents: str, stylesheet_path: str, canonical_url: str) -> str:
        """
        Rewrite every relative ``url()`` in *contents*.

        All replacements are applied in one pass.  When nothing needs
        rewriting *contents* is returned as is.  Otherwise, if the context
        tracks source maps, an intermediate map for the edits is stored
        under *canonical_url*.
        """
        stylesheet_directory = os.path.dirname(stylesheet_path)
        edits = EditBuffer(contents)

        for token in find_urls(contents):
            rebased = rebase_url(token.value, stylesheet_directory, self.context.entry_directory)
            if rebased is None:
                log.debug("[SKIP] url(%s) in %s", token.value, stylesheet_path)
                continue
            edits.update(token.start, token.end, rebased)
            log.debug("[REBASE] %s → %s in %s", token.value, rebased, stylesheet_path)

        if not edits:
            return contents

        if self.context.source_maps is not None:
            self.context.source_maps[canonical_url] = edits.generate_map(
                source=canonical_url, include_content=True,
            )
        return str(edits)

    def load(self, canonical_url: str) -> ImporterResult:
        """
        Read, rebase and describe the stylesheet at *canonical_url*.

        Read errors propagate: a canonical URL always names an existing file.
        """
        stylesheet_path = file_url_to_path(canonical_url)
        if stylesheet_path is None:
            raise ValueError(f"Not a local file URL: {canonical_url}")

        with open(stylesheet_path, encoding="utf-8", newline="") as fh:
            contents = fh.read()

        return ImporterResult(
            contents=self.rebase(contents, stylesheet_path, canonical_url),
            syntax=syntax_for_path(stylesheet_path),
            source_map_url=canonical_url,
        )
