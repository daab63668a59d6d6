"""
style_rebaser
=============
Stylesheet import resolver and ``url()`` rebaser for Sass-style module
languages.

Resolves ``@import``/``@use`` specifiers to files on disk with the Sass
lookup rules (partials, import-only files, index files, load paths) and
rewrites every relative ``url()`` of each loaded file so it stays correct
once the compiled output sits in the entry stylesheet's directory.

Package structure
-----------------
style_rebaser/
├── __init__.py        – package init and public API
├── __main__.py        – ``python -m style_rebaser``
├── config.py          – configuration constants
├── cli.py             – argparse CLI
├── extraction/        – sub-package: text extraction
│   ├── urls.py        – url() value lexer (find_urls)
│   └── imports.py     – @import / @use / @forward specifiers
├── core/              – sub-package: resolution and rebasing
│   ├── cache.py       – DirectoryEntryCache and run-scoped RebaseContext
│   ├── resolver.py    – ModuleResolver (file lookup rules)
│   ├── rebaser.py     – PathRebaser (the importer ``load`` step)
│   ├── importers.py   – relative / module / load-path importers
│   ├── walker.py      – breadth-first import graph walker
│   └── storage.py     – output paths and file saving
└── utils/             – sub-package: logging, file URLs, source maps

Quick start
-----------
    from style_rebaser import CanonicalizeOptions, create_importers

    source_maps = {}
    importers = create_importers("src", load_paths=["node_modules"],
                                 source_maps=source_maps)
    relative = importers[0]

    url = relative.canonicalize("file:///project/src/shared/b",
                                CanonicalizeOptions(from_import=True))
    result = relative.load(url)
    print(result.syntax, result.contents)
"""

from .core import (
    AmbiguousImportError,
    CanonicalizeOptions,
    DirectoryEntry,
    DirectoryEntryCache,
    ImporterResult,
    ModuleResolver,
    PathRebaser,
    RebaseContext,
    RebasingImporter,
    StylesheetWalker,
    WalkResult,
    canonicalize_first,
    create_importers,
    load_paths_importer,
    module_importer,
    rebase_url,
    relative_importer,
)
from .extraction import UrlToken, find_urls

__all__ = [
    "AmbiguousImportError",
    "CanonicalizeOptions",
    "DirectoryEntry",
    "DirectoryEntryCache",
    "ImporterResult",
    "ModuleResolver",
    "PathRebaser",
    "RebaseContext",
    "RebasingImporter",
    "StylesheetWalker",
    "WalkResult",
    "canonicalize_first",
    "create_importers",
    "load_paths_importer",
    "module_importer",
    "rebase_url",
    "relative_importer",
    "UrlToken",
    "find_urls",
]
