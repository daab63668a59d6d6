"""
Configuration constants for the stylesheet import resolver and URL rebaser.
"""

import os
import re

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_OUTPUT = "rebased"

# Extra search directories can be supplied via the STYLE_REBASER_LOAD_PATHS
# env var, separated by os.pathsep (":" on POSIX, ";" on Windows)
DEFAULT_LOAD_PATHS: list[str] = [
    p for p in os.environ.get("STYLE_REBASER_LOAD_PATHS", "").split(os.pathsep) if p
]

# ---------------------------------------------------------------------------
# Module resolution
# ---------------------------------------------------------------------------
CSS_EXTENSION = ".css"

# Order matters: candidates are generated (and reported) in this order
STYLE_EXTENSIONS: tuple[str, ...] = (".scss", ".sass", CSS_EXTENSION)

PARTIAL_PREFIX = "_"
IMPORT_ONLY_MARKER = ".import"
INDEX_NAME = "index"

# Indented syntax ends a statement at the line break instead of ";"
INDENTED_SYNTAX = "indented"

# Syntax reported to the compiler, keyed by lower-cased extension.
# Anything not listed here is treated as SCSS.
SYNTAX_BY_EXTENSION: dict[str, str] = {
    ".css":  "css",
    ".sass": INDENTED_SYNTAX,
}
DEFAULT_SYNTAX = "scss"

# ---------------------------------------------------------------------------
# url() rebasing
# ---------------------------------------------------------------------------

# Root-relative, absolute, protocol-relative and special-scheme references.
# Relocating the output never changes what these point at.
ABSOLUTE_URL_RE = re.compile(r"^(?:(?:\w+:)?//|data:|chrome:|#|/)")

# Module variables: ``$var`` or a namespaced ``ns.$var``
VARIABLE_SIGIL = "$"
NAMESPACED_VARIABLE_RE = re.compile(r"^\w[\w-]*\.\$")

# Bundler-specific prefixes (``~package/...``, ``^path``) are left to the bundler
BUNDLER_PREFIXES: tuple[str, ...] = ("~", "^")

# Characters that must be escaped inside an unquoted url() value
CSS_ESCAPE_RE = re.compile(r"""[()\s'"]""")

# Prefix that marks a rebased value as relative to the entry directory
REBASE_PREFIX = "./"

# ---------------------------------------------------------------------------
# Stylesheet walking
# ---------------------------------------------------------------------------

# Specifiers the compiler handles itself (built-in modules, remote imports)
BUILTIN_MODULE_PREFIX = "sass:"
SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")

SOURCE_MAP_SUFFIX = ".rebase.map"
EXTERNAL_DIR = "_external"
