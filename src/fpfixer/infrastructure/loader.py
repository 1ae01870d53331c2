"""Registry and payload file loading.

Registry files are JSON or TOML documents mapping entity names to rule
lists. TOML spells rule lists as arrays of inline tables::

    PRDSPC = [
      { scale = 2, names = ["packageSize"] },
      { scale = 3, names = ["unitHeight", "unitWidth"] },
    ]
    casePackMetadata = [
      { entityRef = "productObj" },
      { entityRef = "currencyObj", names = ["currency"] },
    ]
"""

from __future__ import annotations

import json
import logging
import sys
import tomllib
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from fpfixer.domain.errors import RegistryLoadError
from fpfixer.domain.registry import Registry

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


def _read_document(path: Path) -> Any:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RegistryLoadError(f"Cannot read registry file {path}: {exc}") from exc
    try:
        if path.suffix.lower() == ".toml":
            return tomllib.loads(raw)
        return json.loads(raw)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise RegistryLoadError(f"Invalid registry file {path}: {exc}") from exc


def registry_from_data(data: Any, *, source: str = "<inline>") -> Registry:
    """Validate already-parsed registry data."""
    if not isinstance(data, Mapping):
        raise RegistryLoadError(f"Registry {source} must be a mapping of entity name to rules")
    try:
        return Registry.from_mapping(data)
    except ValidationError as exc:
        raise RegistryLoadError(f"Invalid rules in registry {source}: {exc}") from exc


def load_registry_file(path: Path) -> Registry:
    """Load one ``.json`` or ``.toml`` registry file."""
    registry = registry_from_data(_read_document(path), source=str(path))
    logger.debug("Loaded %d entities from %s", len(registry), path)
    return registry


def load_registries(
    paths: Iterable[Path],
    *,
    inline: Mapping[str, Any] | None = None,
) -> Registry:
    """Load and merge registry files in order, then *inline* entities.

    Later sources override earlier ones entity by entity.
    """
    registry = Registry({})
    for path in paths:
        registry = registry.merge(load_registry_file(path))
    if inline:
        registry = registry.merge(registry_from_data(inline, source="[entities]"))
    return registry


def load_payload(source: str | Path) -> Any:
    """Read a JSON payload from a file path, or stdin for ``-``."""
    if str(source) == STDIN_MARKER:
        return json.loads(sys.stdin.read())
    return json.loads(Path(source).read_text(encoding="utf-8"))


def dump_payload(data: Any, *, indent: int | None = 2) -> str:
    """Serialize a fixed payload. Rounded floats print in shortest form."""
    return json.dumps(data, indent=indent, ensure_ascii=False)


def write_payload(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_payload(data) + "\n", encoding="utf-8")
