"""Immutable line view over an assembly listing."""

from __future__ import annotations

import re

# \r\n must be tried before the bare terminators
_LINE_BREAK_RE = re.compile(r"(\r\n|\r|\n)")


class AssemblySource:
    """Ordered, zero-indexed lines of one text buffer.

    Each line keeps the terminator that followed it in the input, so any
    inclusive range can be handed back as the exact substring it came from.
    """

    __slots__ = ("_text", "_lines", "_breaks", "_stripped")

    def __init__(self, lines: list[str], breaks: list[str]):
        self._lines = tuple(lines)
        self._breaks = tuple(breaks)
        self._stripped = tuple(line.strip() for line in self._lines)
        self._text = "".join(line + brk for line, brk in zip(self._lines, self._breaks))

    @classmethod
    def from_text(cls, text: str) -> AssemblySource:
        parts = _LINE_BREAK_RE.split(text)
        # split() with a capture group alternates content / terminator
        lines = parts[0::2]
        breaks = parts[1::2] + [""]
        return cls(lines, breaks)

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> str:
        return self._lines[index]

    def __iter__(self):
        return iter(self._lines)

    def stripped(self, index: int) -> str:
        return self._stripped[index]

    def block(self, start: int, end: int) -> str:
        """Verbatim text of lines ``start..end`` (inclusive).

        The terminator after ``end`` is not included.
        """
        if start < 0 or end >= len(self._lines) or start > end:
            raise IndexError(f"invalid line range {start}..{end} for {len(self._lines)} lines")
        pieces = [self._lines[i] + self._breaks[i] for i in range(start, end)]
        pieces.append(self._lines[end])
        return "".join(pieces)


def as_source(text_or_source) -> AssemblySource:
    """Accept either raw text or an already-scanned source."""
    if isinstance(text_or_source, AssemblySource):
        return text_or_source
    return AssemblySource.from_text(text_or_source)
