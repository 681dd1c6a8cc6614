"""Config file discovery.

Lookup order for logrange.toml:
  1. ``LOGRANGE_CONFIG`` env var (explicit file; missing file means none)
  2. Walk up from the start directory, similar to how git finds .git/
  3. Per-user file under ``$XDG_CONFIG_HOME/logrange/`` (``~/.config``)
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "logrange.toml"
CONFIG_ENV_VAR = "LOGRANGE_CONFIG"


def user_config_path() -> Path:
    """Per-user config location (not required to exist)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "logrange" / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Locate logrange.toml, or return None if there is none.

    Checks LOGRANGE_CONFIG first, then walks up from *start* (default: cwd),
    then falls back to the per-user config file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            break
        current = current.parent

    user_path = user_config_path()
    return user_path if user_path.is_file() else None
