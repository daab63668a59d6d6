"""
Batched span edits over a text buffer with Source Map v3 output.

``EditBuffer`` collects non-overlapping ``(start, end, replacement)`` edits
against an original string, renders them in a single pass and can describe
the result with a high-resolution source map: every unchanged character is
mapped back to its original position, and each replacement is mapped to the
start of the span it replaced.

Columns are counted in code points (Python ``str`` indices).
"""

from __future__ import annotations

import bisect

_BASE64_DIGITS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_VLQ_SHIFT = 5
_VLQ_CONTINUATION = 1 << _VLQ_SHIFT
_VLQ_MASK = _VLQ_CONTINUATION - 1


def encode_vlq(value: int) -> str:
    """Encode one signed integer as a base64 VLQ string."""
    vlq = (-value << 1) | 1 if value < 0 else value << 1
    out = []
    while True:
        digit = vlq & _VLQ_MASK
        vlq >>= _VLQ_SHIFT
        if vlq:
            digit |= _VLQ_CONTINUATION
        out.append(_BASE64_DIGITS[digit])
        if not vlq:
            return "".join(out)


class EditBuffer:
    """Accumulates span replacements against *original*."""

    def __init__(self, original: str) -> None:
        self.original = original
        self._edits: list[tuple[int, int, str]] = []

    def __bool__(self) -> bool:
        return bool(self._edits)

    def __len__(self) -> int:
        return len(self._edits)

    def update(self, start: int, end: int, replacement: str) -> None:
        """Replace ``original[start:end]`` with *replacement*.

        Raises ``ValueError`` for spans outside the text or overlapping an
        earlier edit.
        """
        if not 0 <= start <= end <= len(self.original):
            raise ValueError(f"Edit span {start}:{end} is outside the text")

        starts = [s for s, _, _ in self._edits]
        i = bisect.bisect_left(starts, start)
        if i > 0 and self._edits[i - 1][1] > start:
            raise ValueError(f"Edit span {start}:{end} overlaps an earlier edit")
        if i < len(self._edits) and self._edits[i][0] < end:
            raise ValueError(f"Edit span {start}:{end} overlaps an earlier edit")
        self._edits.insert(i, (start, end, replacement))

    def _chunks(self):
        """Yield ``(original_start, text, edited)`` in output order."""
        pos = 0
        for start, end, replacement in self._edits:
            if pos < start:
                yield pos, self.original[pos:start], False
            yield start, replacement, True
            pos = end
        if pos < len(self.original):
            yield pos, self.original[pos:], False

    def __str__(self) -> str:
        return "".join(text for _, text, _ in self._chunks())

    def generate_map(
        self,
        source: str,
        include_content: bool = True,
        file: str | None = None,
    ) -> dict:
        """Return a Source Map v3 dictionary for the edited text.

        Parameters
        ----------
        source : str
            The single entry of ``sources`` (usually the canonical file URL).
        include_content : bool
            Embed the original text as ``sourcesContent``.
        file : str | None
            Optional ``file`` property of the map.
        """
        line_starts = [0]
        for idx, ch in enumerate(self.original):
            if ch == "\n":
                line_starts.append(idx + 1)

        def _position(offset: int) -> tuple[int, int]:
            line = bisect.bisect_right(line_starts, offset) - 1
            return line, offset - line_starts[line]

        lines: list[list[str]] = [[]]
        gen_col = 0
        prev_gen_col = 0
        prev_orig_line = 0
        prev_orig_col = 0

        def _segment(orig_offset: int) -> None:
            nonlocal prev_gen_col, prev_orig_line, prev_orig_col
            orig_line, orig_col = _position(orig_offset)
            lines[-1].append(
                encode_vlq(gen_col - prev_gen_col)
                + encode_vlq(0)
                + encode_vlq(orig_line - prev_orig_line)
                + encode_vlq(orig_col - prev_orig_col)
            )
            prev_gen_col = gen_col
            prev_orig_line = orig_line
            prev_orig_col = orig_col

        def _newline() -> None:
            nonlocal gen_col, prev_gen_col
            lines.append([])
            gen_col = 0
            prev_gen_col = 0

        for orig_start, text, edited in self._chunks():
            if edited:
                if text:
                    _segment(orig_start)
                for ch in text:
                    if ch == "\n":
                        _newline()
                    else:
                        gen_col += 1
                continue

            for i, ch in enumerate(text):
                if ch == "\n":
                    _newline()
                    continue
                _segment(orig_start + i)
                gen_col += 1

        source_map = {
            "version": 3,
            "sources": [source],
            "names": [],
            "mappings": ";".join(",".join(segments) for segments in lines),
        }
        if include_content:
            source_map["sourcesContent"] = [self.original]
        if file is not None:
            source_map["file"] = file
        return source_map
