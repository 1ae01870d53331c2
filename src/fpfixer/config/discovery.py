"""Locating fpfixer.toml and the registry files it names.

The config file is found by walking up from the working directory, the
way git finds ``.git/``. ``FPFIXER_CONFIG`` and ``--config`` override the
walk.
"""

from __future__ import annotations

import os
from pathlib import Path

from fpfixer.config.models import RegistryConfig

CONFIG_FILENAME = "fpfixer.toml"
CONFIG_ENV_VAR = "FPFIXER_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the fpfixer.toml in effect for *start* (default: cwd), or None.

    A set ``FPFIXER_CONFIG`` wins outright: it names the file to use, and
    a missing file means no config rather than falling back to the walk.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path).expanduser()
        return p if p.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def registry_paths(registry: RegistryConfig, config_path: Path | None) -> list[Path]:
    """Resolve ``[registry] paths`` against the config file's directory.

    Absolute entries are kept as-is. Without a config file, entries are
    relative to the current directory.
    """
    base = config_path.parent if config_path else Path.cwd()
    resolved: list[Path] = []
    for entry in registry.paths:
        p = Path(entry).expanduser()
        resolved.append(p if p.is_absolute() else base / p)
    return resolved
