"""Line classification for glabel-style assembly listings (regex-only)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from asmsplit.asm.source import as_source

# ── Marker vocabulary ─────────────────────────────────────────────────

_START_RE = re.compile(r"\bglabel\s+(\w+)")
_SIZE_RE = re.compile(r"\.size\s+(\w+)")
_LABEL_RE = re.compile(r"^(\w+):")

ALIGN_DIRECTIVE = ".align 3"
RETURN_PREFIX = "jr "


class MarkerKind(str, Enum):
    START = "start"
    SIZE = "size"
    ALIGN = "align"
    RETURN = "return"
    LABEL = "label"
    PLAIN = "plain"


@dataclass(frozen=True)
class Marker:
    kind: MarkerKind
    name: str | None = None

    @property
    def is_terminator(self) -> bool:
        """True for lines that may close a function during heuristic search."""
        return self.kind in (MarkerKind.SIZE, MarkerKind.ALIGN, MarkerKind.RETURN)


PLAIN = Marker(MarkerKind.PLAIN)


# ── Per-category predicates ───────────────────────────────────────────
# All of them take the trimmed line text.


def start_name(line: str) -> str | None:
    """Name declared by a ``glabel NAME`` line, else None."""
    m = _START_RE.search(line)
    return m.group(1) if m else None


def size_name(line: str) -> str | None:
    """Name closed by a ``.size NAME`` line, else None."""
    m = _SIZE_RE.search(line)
    return m.group(1) if m else None


def label_name(line: str) -> str | None:
    """Name of a plain ``NAME:`` label at the start of the line, else None."""
    m = _LABEL_RE.match(line)
    return m.group(1) if m else None


def is_align(line: str) -> bool:
    return line == ALIGN_DIRECTIVE


def is_return(line: str) -> bool:
    return line.startswith(RETURN_PREFIX)


def classify_line(line: str) -> Marker:
    """Classify one line into a :class:`Marker`.

    Leading and trailing whitespace is ignored.  When a line could match
    several categories the priority is start, size, align, return, label.
    """
    text = line.strip()
    name = start_name(text)
    if name:
        return Marker(MarkerKind.START, name)
    name = size_name(text)
    if name:
        return Marker(MarkerKind.SIZE, name)
    if is_align(text):
        return Marker(MarkerKind.ALIGN)
    if is_return(text):
        return Marker(MarkerKind.RETURN)
    name = label_name(text)
    if name:
        return Marker(MarkerKind.LABEL, name)
    return PLAIN


def scan(text_or_source) -> list[Marker]:
    """Classify every line of a buffer, one :class:`Marker` per line."""
    return [classify_line(line) for line in as_source(text_or_source)]


def function_name(asm_code: str) -> str | None:
    """Return the name of the first ``glabel`` in a block of assembly."""
    for marker in scan(asm_code):
        if marker.kind is MarkerKind.START:
            return marker.name
    return None
