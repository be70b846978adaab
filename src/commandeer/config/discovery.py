"""Config file discovery and loading.

Walk-up finder locates ``commandeer.toml``, or a ``pyproject.toml`` that
carries a ``[tool.commandeer]`` table, similar to how git finds .git/.
Supports the COMMANDEER_CONFIG env var and the --config CLI flag.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "commandeer.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "COMMANDEER_CONFIG"


def _pyproject_section(path: Path) -> dict[str, Any] | None:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError:
        return None
    section = data.get("tool", {}).get("commandeer")
    return section if isinstance(section, dict) else None


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a config file.

    In each directory ``commandeer.toml`` wins over ``pyproject.toml``;
    the latter only counts when it has a ``[tool.commandeer]`` table.
    Returns the path, or None if not found. Checks COMMANDEER_CONFIG first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _pyproject_section(pyproject) is not None:
            return pyproject
    return None


def read_config(path: Path) -> dict[str, Any]:
    """Parse *path* into the raw settings mapping.

    For ``pyproject.toml`` only the ``[tool.commandeer]`` table is returned.

    Raises:
        ValueError: The file is not valid TOML.
    """
    raw = path.read_text(encoding="utf-8")
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ValueError(msg) from exc
    if path.name == PYPROJECT_FILENAME:
        section = data.get("tool", {}).get("commandeer", {})
        return section if isinstance(section, dict) else {}
    return data
