"""Whole-module function catalog built in one linear pass."""

from __future__ import annotations

from dataclasses import dataclass

from asmsplit.asm.markers import MarkerKind, scan
from asmsplit.asm.source import as_source


@dataclass(frozen=True)
class FunctionRecord:
    name: str
    start_line: int
    end_line: int
    code: str

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def to_dict(self, include_code: bool = True) -> dict:
        d = {
            "name": self.name,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "line_count": self.line_count,
        }
        if include_code:
            d["code"] = self.code
        return d


def list_functions(text_or_source) -> list[FunctionRecord]:
    """Partition a module into functions, in file order.

    A function opens at each ``glabel`` and closes at its own ``.size``
    (inclusive), at the line before the next ``glabel``, or at the end of
    the buffer.  Repeated names produce repeated records.
    """
    source = as_source(text_or_source)
    functions: list[FunctionRecord] = []
    current: tuple[str, int] | None = None

    def close(end: int) -> None:
        name, begin = current
        functions.append(FunctionRecord(name, begin, end, source.block(begin, end)))

    for i, marker in enumerate(scan(source)):
        if marker.kind is MarkerKind.START:
            if current is not None:
                close(i - 1)
            current = (marker.name, i)
        elif current is not None and marker.kind is MarkerKind.SIZE and marker.name == current[0]:
            close(i)
            current = None

    if current is not None:
        close(len(source) - 1)

    return functions


def function_names(text_or_source) -> list[str]:
    """Names of all cataloged functions, in file order (may repeat)."""
    return [fn.name for fn in list_functions(text_or_source)]
