"""Shared pytest fixtures and test helpers for fpfixer tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from fpfixer.domain.registry import Registry

# Entity registry in the shape a data modeler would ship with an API client.
SAMPLE_ENTITIES: dict[str, list[dict[str, Any]]] = {
    "PRDSPC": [
        {"scale": 2, "names": ["packageSize"]},
        {"scale": 3, "names": ["unitHeight", "unitWidth", "unitDepth"]},
    ],
    "productObj": [{"scale": 3, "names": ["targetGm", "shrinkRate"]}],
    "currencyObj": [{"scale": 3, "names": ["curr999"]}],
    "casepackObj": [{"scale": 3, "names": ["caseWidth", "caseHeight", "caseCube"]}],
    "costObj": [{"scale": 3, "names": ["prdCost"]}],
    "getSpaceManagement": [{"entityRef": "PRDSPC"}],
    "casePackMetadata": [
        {"entityRef": "productObj"},
        {"entityRef": "currencyObj", "names": ["currency"]},
    ],
    "casePackDetail": [
        {"entityRef": "casepackObj"},
        {"entityRef": "productObj", "names": ["product"]},
        {"entityRef": "costObj", "names": ["cost"]},
    ],
}


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler and level changes made by configure_logging()."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    fp = logging.getLogger("fpfixer")
    fp_level = fp.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    fp.setLevel(fp_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> Registry:
    """The sample registry, parsed."""
    return Registry.from_mapping(SAMPLE_ENTITIES)


@pytest.fixture
def registry_file(tmp_path: Path) -> Path:
    """The sample registry written as JSON."""
    path = tmp_path / "entities.json"
    path.write_text(json.dumps(SAMPLE_ENTITIES), encoding="utf-8")
    return path


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory so no stray fpfixer.toml is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``.
    """
    monkeypatch.delenv("FPFIXER_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


def case_pack_detail() -> dict[str, Any]:
    """A casePackDetail response as it arrives over the wire."""
    return {
        "caseWidth": 4.7250000000000005,
        "caseHeight": 4.728000000000001,
        "caseCube": 105.46600000000001,
        "description": "12 x 330ml",
        "product": {"targetGm": 0.30000000000000004, "shrinkRate": 1.0010000000000001},
        "cost": [{"prdCost": 9.9700002}, {"prdCost": 0}],
    }
