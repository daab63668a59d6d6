"""
Breadth-first stylesheet graph walker.

Stands in for a stylesheet compiler when the importers are driven from the
command line: starting at an entry stylesheet it loads each file through
the importer chain, extracts the ``@import``/``@use``/``@forward``
specifiers of the rebased contents and canonicalizes them the way a
compiler would, loading every canonical URL exactly once.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Sequence

try:
    from tqdm import tqdm as _tqdm
    _TQDM_AVAILABLE = True
except ImportError:
    _TQDM_AVAILABLE = False

from style_rebaser.config import BUILTIN_MODULE_PREFIX, CSS_EXTENSION, SCHEME_RE
from style_rebaser.core.importers import (
    CanonicalizeOptions,
    RebasingImporter,
    canonicalize_first,
)
from style_rebaser.core.rebaser import ImporterResult
from style_rebaser.extraction.imports import ImportReference, extract_imports
from style_rebaser.utils.path import is_file_url, path_to_file_url

log = logging.getLogger("style-rebaser")


@dataclass
class WalkResult:
    """Outcome of one walk.

    ``loaded`` maps canonical URL → loaded stylesheet in load order;
    ``missing`` lists ``(containing_url, specifier)`` pairs no importer
    could resolve.
    """

    entry_url: str
    loaded: dict[str, ImporterResult] = field(default_factory=dict)
    missing: list[tuple[str, str]] = field(default_factory=list)


def is_compiler_handled(ref: ImportReference) -> bool:
    """
    True for references the compiler resolves itself: built-in modules,
    remote URLs and plain-CSS ``@import`` of ``.css`` files.
    """
    spec = ref.specifier
    if spec.startswith(BUILTIN_MODULE_PREFIX) or spec.startswith("//"):
        return True
    if SCHEME_RE.match(spec) and not is_file_url(spec):
        return True
    return ref.from_import and spec.lower().endswith(CSS_EXTENSION)


class StylesheetWalker:
    """Loads an entry stylesheet and everything it references."""

    def __init__(self, importers: Sequence[RebasingImporter], progress: bool = False) -> None:
        if not importers:
            raise ValueError("At least one importer is required")
        self.importers = list(importers)
        self.progress = progress and _TQDM_AVAILABLE
        self._stats = {"loaded": 0, "skip": 0, "missing": 0}

    def walk(self, entry_path: str) -> WalkResult:
        """Walk the import graph rooted at *entry_path*."""
        entry_url = path_to_file_url(entry_path)
        result = WalkResult(entry_url=entry_url)
        queue: deque[str] = deque([entry_url])
        seen: set[str] = {entry_url}
        self._stats = {"loaded": 0, "skip": 0, "missing": 0}

        bar = _tqdm(desc="Rebasing", unit="file", total=1) if self.progress else None
        while queue:
            url = queue.popleft()
            loaded = self._load(url)
            result.loaded[url] = loaded
            self._stats["loaded"] += 1

            for canonical in self._follow(url, loaded, result):
                if canonical in seen:
                    continue
                seen.add(canonical)
                queue.append(canonical)
                if bar is not None:
                    bar.total += 1
            if bar is not None:
                bar.update(1)
        if bar is not None:
            bar.close()

        log.info(
            "Walk complete. loaded=%d  skip=%d  missing=%d",
            self._stats["loaded"], self._stats["skip"], self._stats["missing"],
        )
        return result

    def _load(self, canonical_url: str) -> ImporterResult:
        # Rebasing does not depend on which importer resolved the URL
        return self.importers[0].load(canonical_url)

    def _follow(self, containing_url: str, loaded: ImporterResult, result: WalkResult):
        """Yield the canonical URL of every stylesheet *loaded* references."""
        for ref in extract_imports(loaded.contents, loaded.syntax):
            if is_compiler_handled(ref):
                log.debug("[SKIP] %s %r (handled by the compiler)", ref.rule, ref.specifier)
                self._stats["skip"] += 1
                continue

            options = CanonicalizeOptions(
                from_import=ref.from_import, containing_url=containing_url,
            )
            importer, canonical = canonicalize_first(self.importers, ref.specifier, options)
            if canonical is None:
                log.warning("[MISSING] %r in %s", ref.specifier, containing_url)
                result.missing.append((containing_url, ref.specifier))
                self._stats["missing"] += 1
                continue

            log.debug("[RESOLVE] %r → %s via %r", ref.specifier, canonical, importer)
            yield canonical
