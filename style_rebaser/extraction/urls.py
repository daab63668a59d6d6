"""
Lexer for CSS ``url()`` function values.

Finds every syntactically valid ``url(...)`` in a stylesheet and yields the
decoded value together with the span of the original value text.  This is
not a general CSS tokenizer: only the ``url()`` production is recognised,
malformed occurrences are skipped silently.

Example::

    >>> [t.value for t in find_urls("a{background:url( 'img/a\\\\(1\\\\).png' )}")]
    ['img/a(1).png']
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator

_URL_FUNCTION = "url("

_WHITESPACE = frozenset(" \t\n\f\r")
_NEWLINES = frozenset("\n\f\r")
_QUOTES = frozenset("\"'")
_ESCAPE = "\\"


@dataclass(frozen=True)
class UrlToken:
    """A ``url()`` value found in a stylesheet.

    ``start``/``end`` cover the full replaceable value text (quotes
    included for string values, surrounding whitespace excluded), so a
    caller can substitute the value with a single span edit.  ``value`` is
    the unescaped content.
    """

    start: int
    end: int
    value: str


class _State(enum.Enum):
    LEADING = enum.auto()           # whitespace after "url("
    STRING = enum.auto()            # inside a quoted value
    STRING_ESCAPE = enum.auto()     # after a backslash in a quoted value
    UNQUOTED = enum.auto()          # inside an unquoted value
    UNQUOTED_ESCAPE = enum.auto()   # after a backslash in an unquoted value
    TRAILING = enum.auto()          # whitespace after an unquoted value


def _scan_value(text: str, pos: int) -> UrlToken | None:
    """Scan one ``url()`` value starting right after ``url(`` at *pos*.

    Returns None when the value is malformed (unterminated string, raw
    line break in a string, stray quote or parenthesis, EOF).
    """
    state = _State.LEADING
    quote = ""
    start = end = pos
    value: list[str] = []

    for index in range(pos, len(text)):
        ch = text[index]

        if state is _State.LEADING:
            if ch in _WHITESPACE:
                continue
            start = index
            if ch in _QUOTES:
                quote = ch
                state = _State.STRING
                continue
            state = _State.UNQUOTED
            # first value character is handled below as unquoted input

        if state is _State.STRING:
            if ch == quote:
                return UrlToken(start, index + 1, "".join(value))
            if ch in _NEWLINES:
                return None
            if ch == _ESCAPE:
                state = _State.STRING_ESCAPE
            else:
                value.append(ch)

        elif state is _State.STRING_ESCAPE:
            # An escaped line break is a line continuation and is dropped
            if ch not in _NEWLINES:
                value.append(ch)
            state = _State.STRING

        elif state is _State.UNQUOTED:
            if ch == ")":
                return UrlToken(start, index, "".join(value))
            if ch in _WHITESPACE:
                end = index
                state = _State.TRAILING
            elif ch in _QUOTES or ch == "(":
                return None
            elif ch == _ESCAPE:
                state = _State.UNQUOTED_ESCAPE
            else:
                value.append(ch)

        elif state is _State.UNQUOTED_ESCAPE:
            if ch not in _NEWLINES:
                value.append(ch)
            state = _State.UNQUOTED

        elif state is _State.TRAILING:
            if ch == ")":
                return UrlToken(start, end, "".join(value))
            if ch not in _WHITESPACE:
                return None

    return None


def find_urls(text: str) -> Iterator[UrlToken]:
    """
    Lazily yield a ``UrlToken`` for every valid ``url()`` value in *text*.

    Calling again on the same text yields the same tokens.  Scanning resumes
    after the end of each valid value, or right after ``url(`` when the
    value is malformed.
    """
    pos = text.find(_URL_FUNCTION)
    while pos != -1:
        value_start = pos + len(_URL_FUNCTION)
        token = _scan_value(text, value_start)
        if token is None:
            pos = text.find(_URL_FUNCTION, value_start)
            continue
        yield token
        pos = text.find(_URL_FUNCTION, token.end)
