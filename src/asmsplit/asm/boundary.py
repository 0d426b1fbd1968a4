"""Locate the exact line range of one named function.

The precise resolver trusts an explicit ``.size NAME`` close when it sees
one.  When the next ``glabel`` arrives first, the end of the current
function is found by walking backwards over an ordered list of terminator
strategies.  Once a start line is found the resolver always settles on an
end line when a following ``glabel`` exists; it never reports an
ambiguous boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, NamedTuple

from asmsplit.asm.markers import Marker, MarkerKind, scan
from asmsplit.asm.source import AssemblySource, as_source

log = logging.getLogger(__name__)


class LineRange(NamedTuple):
    """Inclusive, zero-based line range."""

    start: int
    end: int

    @property
    def line_count(self) -> int:
        return self.end - self.start + 1


# ── Start search ──────────────────────────────────────────────────────


def find_start(source: AssemblySource, name: str, markers: list[Marker] | None = None) -> int | None:
    """Index of the ``glabel NAME`` line, falling back to a ``NAME:`` label.

    The label fallback only applies when no start marker for *name* exists
    anywhere in the buffer.
    """
    if markers is None:
        markers = scan(source)
    for kind in (MarkerKind.START, MarkerKind.LABEL):
        for i, marker in enumerate(markers):
            if marker.kind is kind and marker.name == name:
                if kind is MarkerKind.LABEL:
                    log.debug("no glabel for %s, using bare label at line %d", name, i)
                return i
    return None


# ── Backward terminator search ────────────────────────────────────────

_DATA_KINDS = (MarkerKind.SIZE, MarkerKind.ALIGN)


@dataclass(frozen=True)
class TerminatorStrategy:
    """One tier of the backward search: a marker predicate and how to settle."""

    name: str
    matches: Callable[[Marker], bool]
    settle: Callable[[AssemblySource, list[Marker], int, int], int]


def _is_data_boundary(marker: Marker) -> bool:
    return marker.kind in _DATA_KINDS


def _is_return(marker: Marker) -> bool:
    return marker.kind is MarkerKind.RETURN


def _settle_here(source: AssemblySource, markers: list[Marker], index: int, next_start: int) -> int:
    return index


def _settle_after_return(source: AssemblySource, markers: list[Marker], index: int, next_start: int) -> int:
    """Extend past a return over trailing alignment up to function data.

    Lines after the return were already rejected by the backward scan, so
    in practice this settles on the return line itself.
    """
    end = index
    for k in range(index + 1, next_start):
        line = source.stripped(k)
        if _is_data_boundary(markers[k]):
            end = k
        elif line and not line.startswith(".align"):
            break
    return end


TERMINATOR_STRATEGIES: tuple[TerminatorStrategy, ...] = (
    TerminatorStrategy("data", _is_data_boundary, _settle_here),
    TerminatorStrategy("return", _is_return, _settle_after_return),
)


def find_terminator(
    source: AssemblySource,
    start: int,
    next_start: int,
    strategies: tuple[TerminatorStrategy, ...] = TERMINATOR_STRATEGIES,
    markers: list[Marker] | None = None,
) -> int:
    """End line for the function opened at *start*, given the next ``glabel``.

    Walks from ``next_start - 1`` down to *start*; the first line accepted
    by any strategy (tried in order) decides.  With no candidate the
    function ends right before *next_start*.
    """
    if markers is None:
        markers = scan(source)
    for j in range(next_start - 1, start - 1, -1):
        marker = markers[j]
        if not marker.is_terminator:
            continue
        for strategy in strategies:
            if strategy.matches(marker):
                end = strategy.settle(source, markers, j, next_start)
                log.debug("terminator %s at line %d -> end %d", strategy.name, j, end)
                return end
    return next_start - 1


# ── Public API ────────────────────────────────────────────────────────


def resolve_function_range(text_or_source, name: str) -> LineRange | None:
    """Inclusive line range of function *name*, or None when not found."""
    source = as_source(text_or_source)
    markers = scan(source)
    start = find_start(source, name, markers)
    if start is None:
        return None

    for i in range(start + 1, len(markers)):
        marker = markers[i]
        if marker.kind is MarkerKind.SIZE and marker.name == name:
            return LineRange(start, i)
        if marker.kind is MarkerKind.START:
            return LineRange(start, find_terminator(source, start, i, markers=markers))

    log.debug("%s opened at line %d but never closed", name, start)
    return None


def extract_function(text_or_source, name: str) -> str | None:
    """Verbatim code of function *name*, or None when it cannot be located."""
    source = as_source(text_or_source)
    rng = resolve_function_range(source, name)
    if rng is None:
        return None
    return source.block(rng.start, rng.end)
