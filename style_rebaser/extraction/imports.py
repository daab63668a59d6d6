"""Module specifier extraction from ``@import``, ``@use`` and ``@forward`` rules."""

import re
from typing import NamedTuple

from style_rebaser.config import DEFAULT_SYNTAX, INDENTED_SYNTAX

# Strings and url() are kept whole so a "//" or "/*" inside them survives
_COMMENT_SCAN_RE = re.compile(
    r"""
      (?P<keep>"(?:\\.|[^"\\\n])*"
             | '(?:\\.|[^'\\\n])*'
             | url\([^)]*\))
    | (?P<block>/\*.*?(?:\*/|\Z))
    | (?P<line>//[^\n]*)
    """,
    re.S | re.I | re.X,
)
# The prelude runs to ";" or "{"; indented syntax also ends it at a line break
_RULE_RE = re.compile(r"@(import|use|forward)\b([^;{}]*)", re.I)
_INDENTED_RULE_RE = re.compile(r"@(import|use|forward)\b([^;{}\n]*)", re.I)
_URL_FUNCTION_RE = re.compile(r"url\([^)]*\)", re.I)
_STRING_RE = re.compile(r"""(["'])((?:\\.|(?!\1)[^\\\n])*)\1""")


class ImportReference(NamedTuple):
    rule: str
    specifier: str

    @property
    def from_import(self) -> bool:
        return self.rule == "import"


def _unescape(raw: str) -> str:
    return re.sub(r"\\(.)", r"\1", raw)


def _drop_comment(m: re.Match) -> str:
    if m.group("keep") is not None:
        return m.group("keep")
    if m.group("block") is not None:
        # Keep the line structure for indented syntax
        return "\n" * m.group("block").count("\n")
    return ""


def strip_comments(contents: str) -> str:
    """Remove ``/* */`` and ``//`` comments outside strings and ``url()``."""
    return _COMMENT_SCAN_RE.sub(_drop_comment, contents)


def extract_imports(contents: str, syntax: str = DEFAULT_SYNTAX) -> list[ImportReference]:
    """
    Return every module specifier referenced by *contents*, in source order.

    ``@import`` may list several comma-separated strings, across lines
    unless *syntax* is ``"indented"``.  ``@use`` and ``@forward`` take only
    their first string (the rest is ``as``/``with`` configuration).
    ``url(...)`` imports are plain CSS and are not returned.
    """
    rule_re = _INDENTED_RULE_RE if syntax == INDENTED_SYNTAX else _RULE_RE
    found: list[ImportReference] = []

    for m in rule_re.finditer(strip_comments(contents)):
        rule = m.group(1).lower()
        prelude = _URL_FUNCTION_RE.sub("", m.group(2))
        strings = [_unescape(s.group(2)) for s in _STRING_RE.finditer(prelude)]
        if not strings:
            continue
        if rule != "import":
            strings = strings[:1]
        found.extend(ImportReference(rule, s) for s in strings if s)

    return found
