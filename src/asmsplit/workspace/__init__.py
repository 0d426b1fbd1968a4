"""Module storage collaborators and module discovery."""

from asmsplit.workspace.discovery import discover_modules
from asmsplit.workspace.store import (
    BufferRegistry,
    ContentProvider,
    FileContentProvider,
    InMemoryBufferRegistry,
    NullBufferRegistry,
)

__all__ = [
    "BufferRegistry",
    "ContentProvider",
    "FileContentProvider",
    "InMemoryBufferRegistry",
    "NullBufferRegistry",
    "discover_modules",
]
