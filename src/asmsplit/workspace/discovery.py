"""Find assembly modules below a directory.

git is asked first, so ignored build output never shows up; outside a
repository the directory is walked instead.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import subprocess
from pathlib import Path

log = logging.getLogger(__name__)

# Never descended into by the directory walk (dot-directories are skipped too)
SKIP_DIRS = frozenset({"build", "dist", "node_modules", "__pycache__", "venv"})

MAX_FILE_SIZE = 8_000_000  # split-out listings of whole ROMs get large


def _git_listings(directory: Path, extensions: list[str]) -> list[str] | None:
    """Listings git tracks or would track under *directory*, or None without git."""
    pathspecs = [f"*{ext}" for ext in extensions]
    try:
        proc = subprocess.run(
            ["git", "ls-files", "-z", "--cached", "--others", "--exclude-standard", "--", *pathspecs],
            cwd=str(directory),
            capture_output=True,
            timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None
    if proc.returncode != 0:
        return None
    return [p for p in proc.stdout.decode("utf-8", "surrogateescape").split("\0") if p]


def _walked_listings(directory: Path, extensions: list[str]) -> list[str]:
    found = []
    for dirpath, dirnames, filenames in os.walk(directory):
        dirnames[:] = [d for d in dirnames if d not in SKIP_DIRS and not d.startswith(".")]
        rel_dir = Path(dirpath).relative_to(directory)
        found.extend((rel_dir / f).as_posix() for f in filenames if os.path.splitext(f)[1] in extensions)
    return found


def _pattern_path(path: Path, base: Path) -> str:
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return path.as_posix()


def discover_modules(
    root: Path,
    extensions: list[str],
    exclude: list[str] | None = None,
    exclude_base: Path | None = None,
) -> list[str]:
    """Discover assembly modules under *root*.

    Keeps files whose suffix is in *extensions* (case-sensitive, so ``.S``
    and ``.s`` can be told apart) and that match none of the *exclude*
    globs.  Globs are matched against paths relative to *exclude_base*
    (default: *root*), so workspace-level patterns such as ``asm/lib*``
    still apply when only ``asm/`` is scanned.  Returns a sorted list of
    paths relative to *root*, using forward slashes.
    """
    root = Path(root).resolve()
    base = Path(exclude_base).resolve() if exclude_base is not None else root
    listings = _git_listings(root, extensions)
    if listings is None:
        listings = _walked_listings(root, extensions)

    kept = []
    for rel_path in listings:
        if os.path.splitext(rel_path)[1] not in extensions:
            continue
        full = root / rel_path
        if exclude and any(fnmatch.fnmatch(_pattern_path(full, base), pat) for pat in exclude):
            continue
        try:
            size = full.stat().st_size
        except OSError:
            continue
        if size > MAX_FILE_SIZE:
            log.warning("skipping %s: larger than %d bytes", rel_path, MAX_FILE_SIZE)
            continue
        kept.append(rel_path)
    return sorted(kept)
