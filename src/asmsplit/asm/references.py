"""Symbol references (calls, loads, data pointers) inside assembly text."""

from __future__ import annotations

import re

from asmsplit.asm.catalog import list_functions
from asmsplit.asm.source import as_source

# jal func_80001234
_JAL_RE = re.compile(r"\bjal\s+(\w+)")
# .word 0 @ =gSomeTable
_DATA_REF_RE = re.compile(r"@\s*=(\w+)")
# la $a0, =sym / addiu ..., =sym / move ..., =sym  (mnemonic first, last =sym wins)
_ADDR_REF_RE = re.compile(r"^(?:la|add|move)\w*\s.*=(\w+)")

REFERENCE_PATTERNS = (_JAL_RE, _DATA_REF_RE, _ADDR_REF_RE)


def line_references(line: str) -> list[str]:
    """Names referenced by one line, one per matching pattern."""
    text = line.strip()
    names = []
    for pattern in REFERENCE_PATTERNS:
        m = pattern.search(text)
        if m:
            names.append(m.group(1))
    return names


def extract_calls(assembly: str) -> list[str]:
    """Return the distinct symbols referenced anywhere in *assembly*.

    Every line is matched against the call, data-reference and address
    forms independently, so a name found several times appears once.
    The result is sorted.
    """
    found: set[str] = set()
    for line in as_source(assembly):
        found.update(line_references(line))
    return sorted(found)


def extract_module_calls(module_text: str) -> dict[str, list[str]]:
    """Map every cataloged function of a module to the symbols it references.

    Duplicate function names are merged.
    """
    calls: dict[str, set[str]] = {}
    for fn in list_functions(module_text):
        calls.setdefault(fn.name, set()).update(extract_calls(fn.code))
    return {name: sorted(refs) for name, refs in calls.items()}
