"""Function removal: splice one function out of a module and tidy the gap."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace

from asmsplit.asm.boundary import resolve_function_range
from asmsplit.asm.source import AssemblySource
from asmsplit.exit_codes import FunctionNotFoundError
from asmsplit.workspace.store import BufferRegistry, ContentProvider, NullBufferRegistry

log = logging.getLogger(__name__)

_BLANK_RUN_RE = re.compile(r"(?:\r\n|\r|\n){3,}")
_FIRST_BREAK_RE = re.compile(r"\r\n|\r|\n")


def collapse_blank_lines(text: str) -> str:
    """Collapse every run of three or more line breaks to exactly two.

    The run keeps the terminator style of its first line break.
    """
    return _BLANK_RUN_RE.sub(lambda m: _FIRST_BREAK_RE.match(m.group(0)).group(0) * 2, text)


@dataclass(frozen=True)
class RemovalResult:
    module: str | None
    name: str
    start_line: int
    end_line: int
    removed_code: str
    text: str
    written: bool = False
    buffer_saved: bool = False

    @property
    def removed_lines(self) -> int:
        return self.end_line - self.start_line + 1

    def to_dict(self) -> dict:
        return {
            "module": self.module,
            "name": self.name,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "removed_lines": self.removed_lines,
            "written": self.written,
            "buffer_saved": self.buffer_saved,
        }


def plan_removal(text: str, name: str, module: str | None = None, collapse: bool = True) -> RemovalResult:
    """Compute the module text with function *name* removed.

    The function's verbatim block is located with the precise resolver and
    its first textual occurrence is deleted.  When two functions share an
    identical block the earlier one goes.
    """
    source = AssemblySource.from_text(text)
    rng = resolve_function_range(source, name)
    if rng is None:
        raise FunctionNotFoundError(name, module)
    block = source.block(rng.start, rng.end)
    updated = text.replace(block, "", 1)
    if collapse:
        updated = collapse_blank_lines(updated)
    return RemovalResult(module, name, rng.start, rng.end, block, updated)


def remove_function_text(text: str, name: str) -> str:
    """Return *text* without function *name*, blank-line runs collapsed.

    Raises :class:`FunctionNotFoundError` when the function cannot be located.
    """
    return plan_removal(text, name).text


def remove_function(
    module_path: str,
    name: str,
    provider: ContentProvider,
    buffers: BufferRegistry | None = None,
    *,
    dry_run: bool = False,
    collapse: bool = True,
) -> RemovalResult:
    """Remove function *name* from the module stored at *module_path*.

    Reads the current content, computes the new text, writes it back and
    finally saves the module's editor buffer when it is open with unsaved
    changes.  No locking is done here: callers editing the same module
    concurrently must serialize their calls.
    """
    if buffers is None:
        buffers = NullBufferRegistry()

    text = provider.read_text(module_path)
    result = plan_removal(text, name, module=module_path, collapse=collapse)
    if dry_run:
        return result

    provider.write_text(module_path, result.text)
    log.info("removed %s from %s (lines %d-%d)", name, module_path, result.start_line, result.end_line)

    saved = False
    if buffers.is_dirty(module_path):
        buffers.save(module_path)
        saved = True
        log.info("saved open buffer for %s", module_path)

    return replace(result, written=True, buffer_saved=saved)
