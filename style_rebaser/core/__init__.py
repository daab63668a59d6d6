"""Core resolution and rebasing logic – directory cache, resolver, rebaser, importers."""

from style_rebaser.core.cache import DirectoryEntry, DirectoryEntryCache, RebaseContext
from style_rebaser.core.resolver import AmbiguousImportError, ModuleResolver, check_found
from style_rebaser.core.rebaser import (
    ImporterResult,
    PathRebaser,
    rebase_url,
    should_rebase,
    syntax_for_path,
)
from style_rebaser.core.importers import (
    CanonicalizeOptions,
    RebasingImporter,
    canonicalize_first,
    create_importers,
    load_paths_importer,
    module_importer,
    relative_importer,
)
from style_rebaser.core.walker import StylesheetWalker, WalkResult

__all__ = [
    "DirectoryEntry",
    "DirectoryEntryCache",
    "RebaseContext",
    "AmbiguousImportError",
    "ModuleResolver",
    "check_found",
    "ImporterResult",
    "PathRebaser",
    "rebase_url",
    "should_rebase",
    "syntax_for_path",
    "CanonicalizeOptions",
    "RebasingImporter",
    "canonicalize_first",
    "create_importers",
    "load_paths_importer",
    "module_importer",
    "relative_importer",
    "StylesheetWalker",
    "WalkResult",
]
