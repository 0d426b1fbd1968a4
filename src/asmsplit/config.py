"""Project root discovery and per-project configuration (.asmsplit/config.json)."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from asmsplit.exit_codes import ConfigError

CONFIG_DIR = ".asmsplit"
CONFIG_NAME = "config.json"
ROOT_ENV_VAR = "ASMSPLIT_ROOT"

DEFAULTS: dict[str, Any] = {
    "extensions": [".s", ".asm", ".S", ".inc"],
    "exclude": [],
    "collapse_blank_lines": True,
}


def find_project_root(start: str = ".") -> Path:
    """Find the workspace root.

    Resolution order:

    1. ``ASMSPLIT_ROOT`` environment variable.
    2. Nearest parent of *start* holding a ``.asmsplit/`` or ``.git/`` directory.
    3. *start* itself.
    """
    override = os.environ.get(ROOT_ENV_VAR)
    if override:
        return Path(override).resolve()
    current = Path(start).resolve()
    while current != current.parent:
        if (current / CONFIG_DIR).is_dir() or (current / ".git").exists():
            return current
        current = current.parent
    return Path(start).resolve()


def config_path(project_root: Path) -> Path:
    return project_root / CONFIG_DIR / CONFIG_NAME


def _load_raw_config(project_root: Path) -> dict:
    path = config_path(project_root)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return data


def _validate_config(cfg: dict) -> None:
    exts = cfg.get("extensions")
    if not isinstance(exts, list) or not all(isinstance(e, str) for e in exts):
        raise ConfigError("'extensions' must be a list of strings")
    excl = cfg.get("exclude")
    if not isinstance(excl, list) or not all(isinstance(e, str) for e in excl):
        raise ConfigError("'exclude' must be a list of strings")
    if not isinstance(cfg.get("collapse_blank_lines"), bool):
        raise ConfigError("'collapse_blank_lines' must be true or false")


def load_project_config(project_root: Path | None = None) -> dict[str, Any]:
    """Return the project config merged over :data:`DEFAULTS`.

    A missing file yields the defaults.  Malformed JSON or wrongly typed
    values raise :class:`ConfigError`.
    """
    if project_root is None:
        project_root = find_project_root()
    cfg = {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULTS.items()}
    cfg.update(_load_raw_config(project_root))
    _validate_config(cfg)
    return cfg


def write_project_config(config: dict, project_root: Path | None = None) -> Path:
    """Write (or update) .asmsplit/config.json.

    Merges *config* into the existing config so existing keys are preserved.
    Returns the path of the written file.
    """
    if project_root is None:
        project_root = find_project_root()
    (project_root / CONFIG_DIR).mkdir(exist_ok=True)
    path = config_path(project_root)
    existing = _load_raw_config(project_root)
    existing.update(config)
    merged = dict(DEFAULTS)
    merged.update(existing)
    _validate_config(merged)
    path.write_text(json.dumps(existing, indent=2) + "\n", encoding="utf-8")
    return path
