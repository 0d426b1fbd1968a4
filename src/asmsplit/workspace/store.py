"""Module content providers and the open-buffer registry.

The segmentation engine never touches storage itself.  Callers hand it a
:class:`ContentProvider` to read and write module text and, optionally, a
:class:`BufferRegistry` that knows which modules are open in an editor with
unsaved changes.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from asmsplit.exit_codes import ModuleIOError

log = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


def _decode_source(data: bytes) -> tuple[str, str]:
    """Decode listing bytes, returning ``(text, encoding)``.

    UTF-8 is tried first (``utf-8-sig`` when a BOM is present, which strips
    it from the text); anything else is read as latin-1.  Encoding the text
    again with the returned codec reproduces *data* byte for byte.
    """
    encoding = "utf-8-sig" if data.startswith(_UTF8_BOM) else "utf-8"
    try:
        return data.decode(encoding), encoding
    except UnicodeDecodeError:
        log.debug("listing is not UTF-8, decoding as latin-1")
        return data.decode("latin-1"), "latin-1"


class ContentProvider(ABC):
    """Reads and writes the text of assembly modules."""

    @abstractmethod
    def read_text(self, module_path: str) -> str: ...

    @abstractmethod
    def write_text(self, module_path: str, text: str) -> None: ...


class FileContentProvider(ContentProvider):
    """Modules stored on disk, addressed relative to a workspace root.

    The encoding detected when a module is read (UTF-8 with or without BOM,
    or latin-1) is reused when it is written back, so untouched bytes keep
    their on-disk form.  Modules never read through this provider are
    written as plain UTF-8.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self._encodings: dict[Path, str] = {}

    def resolve(self, module_path: str) -> Path:
        path = Path(module_path)
        if not path.is_absolute():
            path = self.root / path
        return path

    def read_text(self, module_path: str) -> str:
        path = self.resolve(module_path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ModuleIOError(f"Cannot read assembly file \"{module_path}\": {exc}") from exc
        text, encoding = _decode_source(data)
        self._encodings[path] = encoding
        return text

    def encoding_of(self, module_path: str) -> str:
        return self._encodings.get(self.resolve(module_path), "utf-8")

    def write_text(self, module_path: str, text: str) -> None:
        """Replace the module contents in one step (temp file + rename)."""
        path = self.resolve(module_path)
        encoding = self.encoding_of(module_path)
        try:
            data = text.encode(encoding)
        except UnicodeEncodeError as exc:
            raise ModuleIOError(f"Cannot write assembly file \"{module_path}\" as {encoding}: {exc}") from exc
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            if path.exists():
                shutil.copymode(path, tmp_name)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            raise ModuleIOError(f"Cannot write assembly file \"{module_path}\": {exc}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        log.info("wrote %s (%d bytes, %s)", path, len(data), encoding)


class BufferRegistry(ABC):
    """Editor buffers that may hold unsaved copies of modules."""

    @abstractmethod
    def is_dirty(self, module_path: str) -> bool:
        """True when *module_path* is open and has unsaved changes."""
        ...

    @abstractmethod
    def save(self, module_path: str) -> None: ...


class NullBufferRegistry(BufferRegistry):
    """No editor: nothing is ever open."""

    def is_dirty(self, module_path: str) -> bool:
        return False

    def save(self, module_path: str) -> None:
        pass


class InMemoryBufferRegistry(BufferRegistry):
    """Open buffers kept in memory, saved through a content provider."""

    def __init__(self, provider: ContentProvider):
        self.provider = provider
        self._buffers: dict[str, str] = {}
        self._dirty: set[str] = set()

    def open(self, module_path: str) -> str:
        text = self.provider.read_text(module_path)
        self._buffers[module_path] = text
        self._dirty.discard(module_path)
        return text

    def is_open(self, module_path: str) -> bool:
        return module_path in self._buffers

    def text(self, module_path: str) -> str:
        return self._buffers[module_path]

    def edit(self, module_path: str, text: str) -> None:
        if module_path not in self._buffers:
            raise KeyError(f"{module_path} is not open")
        self._buffers[module_path] = text
        self._dirty.add(module_path)

    def is_dirty(self, module_path: str) -> bool:
        return module_path in self._dirty

    def save(self, module_path: str) -> None:
        self.provider.write_text(module_path, self._buffers[module_path])
        self._dirty.discard(module_path)
