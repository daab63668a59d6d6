"""
Importer facade for a stylesheet compiler.

An importer answers two calls from the compiler:

* ``canonicalize(url, options)`` – resolve a specifier to a canonical
  ``file:`` URL, or None so the compiler can try its next importer
* ``load(canonical_url)``        – return the stylesheet with its ``url()``
  values rebased to the entry directory

All importers of one run share a ``RebaseContext``.  They differ only in
how a specifier becomes a ``file:`` URL before the common resolution step:

* relative   – ``file:`` URLs, or specifiers relative to the containing file
* module     – package specifiers located by an external finder callback
* load paths – specifiers joined with each configured search directory in turn
"""

from __future__ import annotations

import logging
import os
import posixpath
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, Sequence

from style_rebaser.config import SCHEME_RE
from style_rebaser.core.cache import RebaseContext
from style_rebaser.core.rebaser import ImporterResult, PathRebaser
from style_rebaser.core.resolver import ModuleResolver
from style_rebaser.utils.path import file_url_to_path, is_file_url, path_to_file_url

log = logging.getLogger("style-rebaser")


@dataclass(frozen=True)
class CanonicalizeOptions:
    """Per-call options passed by the compiler.

    ``from_import`` is true for ``@import`` rules and false for ``@use`` /
    ``@forward``.  ``containing_url`` is the canonical URL of the
    stylesheet that contains the rule, when known.
    """

    from_import: bool = False
    containing_url: str | None = None


# (specifier, options) -> file URL (or path) of a candidate, or None
Finder = Callable[[str, CanonicalizeOptions], "str | os.PathLike | None"]


class CanonicalizeStrategy(Protocol):
    def canonicalize(
        self, url: str, options: CanonicalizeOptions, resolver: ModuleResolver,
    ) -> str | None: ...


# ── Strategies ─────────────────────────────────────────────────────

class RelativeStrategy:
    """``file:`` URLs, and specifiers relative to the containing stylesheet."""

    def canonicalize(
        self, url: str, options: CanonicalizeOptions, resolver: ModuleResolver,
    ) -> str | None:
        if is_file_url(url):
            return resolver.resolve(url, options.from_import)

        if not options.containing_url or SCHEME_RE.match(url) or url.startswith("/"):
            return None
        containing_path = file_url_to_path(options.containing_url)
        if containing_path is None:
            return None

        candidate = os.path.join(os.path.dirname(containing_path), *url.split("/"))
        return resolver.resolve(path_to_file_url(candidate), options.from_import)


class ModuleStrategy:
    """Package specifiers located by *finder*, then resolved like files."""

    def __init__(self, finder: Finder) -> None:
        self.finder = finder

    def canonicalize(
        self, url: str, options: CanonicalizeOptions, resolver: ModuleResolver,
    ) -> str | None:
        if is_file_url(url):
            return resolver.resolve(url, options.from_import)

        found = self.finder(url, options)
        if not found:
            return None
        found_url = os.fspath(found)
        if not is_file_url(found_url):
            found_url = path_to_file_url(found_url)
        log.debug("[RESOLVE] finder located %s at %s", url, found_url)
        return resolver.resolve(found_url, options.from_import)


class LoadPathsStrategy:
    """Specifiers searched for in each load path, in configured order."""

    def __init__(self, load_paths: Iterable[str | os.PathLike]) -> None:
        self.load_paths = [os.path.abspath(p) for p in load_paths]

    def canonicalize(
        self, url: str, options: CanonicalizeOptions, resolver: ModuleResolver,
    ) -> str | None:
        if is_file_url(url):
            return resolver.resolve(url, options.from_import)

        relative = posixpath.normpath(url)
        for load_path in self.load_paths:
            candidate = path_to_file_url(os.path.join(load_path, *relative.split("/")))
            result = resolver.resolve(candidate, options.from_import)
            if result is not None:
                return result
        return None


# ── Importer ───────────────────────────────────────────────────────

class RebasingImporter:
    """A resolution strategy plus the shared rebasing ``load`` step."""

    def __init__(self, context: RebaseContext, strategy: CanonicalizeStrategy) -> None:
        self.context = context
        self.strategy = strategy
        self.resolver = ModuleResolver(context.directory_cache)
        self.rebaser = PathRebaser(context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self.strategy).__name__}, entry={self.context.entry_directory!r})"

    def canonicalize(self, url: str, options: CanonicalizeOptions | None = None) -> str | None:
        """Canonical ``file:`` URL for *url*, or None when not resolvable here.

        Raises ``AmbiguousImportError`` when several stylesheets match.
        """
        return self.strategy.canonicalize(url, options or CanonicalizeOptions(), self.resolver)

    def load(self, canonical_url: str) -> ImporterResult:
        return self.rebaser.load(canonical_url)


def relative_importer(context: RebaseContext) -> RebasingImporter:
    return RebasingImporter(context, RelativeStrategy())


def module_importer(context: RebaseContext, finder: Finder) -> RebasingImporter:
    return RebasingImporter(context, ModuleStrategy(finder))


def load_paths_importer(
    context: RebaseContext, load_paths: Iterable[str | os.PathLike],
) -> RebasingImporter:
    return RebasingImporter(context, LoadPathsStrategy(load_paths))


def create_importers(
    entry_directory: str | os.PathLike,
    load_paths: Sequence[str | os.PathLike] = (),
    finder: Finder | None = None,
    source_maps: dict[str, dict] | None = None,
) -> list[RebasingImporter]:
    """
    Build the importer chain for one compilation run.

    All importers share one ``RebaseContext``.  The chain is ordered the way
    a compiler consults it: relative loads first, then the module importer
    (when *finder* is given), then the load paths importer (when
    *load_paths* is non-empty).
    """
    context = RebaseContext(os.fspath(entry_directory), source_maps=source_maps)
    importers = [relative_importer(context)]
    if finder is not None:
        importers.append(module_importer(context, finder))
    if load_paths:
        importers.append(load_paths_importer(context, load_paths))
    return importers


def canonicalize_first(
    importers: Iterable[RebasingImporter],
    url: str,
    options: CanonicalizeOptions | None = None,
) -> tuple[RebasingImporter | None, str | None]:
    """Try each importer in order; the first non-None result wins."""
    for importer in importers:
        canonical = importer.canonicalize(url, options)
        if canonical is not None:
            return importer, canonical
    return None, None
