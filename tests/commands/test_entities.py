"""Tests for the entities and resolve commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from fpfixer.cli import cli
from tests.conftest import SAMPLE_ENTITIES


@pytest.mark.usefixtures("_isolated_project")
class TestEntitiesCommand:
    def test_table(self, cli_runner: CliRunner, registry_file: Path) -> None:
        result = cli_runner.invoke(cli, ["entities", "-r", str(registry_file)])
        assert result.exit_code == 0, result.output
        assert "casePackDetail" in result.stdout
        assert f"{len(SAMPLE_ENTITIES)} entities" in result.stdout

    def test_quiet_lists_names(self, cli_runner: CliRunner, registry_file: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "entities", "-r", str(registry_file)])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == sorted(SAMPLE_ENTITIES)

    def test_empty_registry(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["entities"])
        assert result.exit_code == 0
        assert "No entities registered." in result.stdout

    def test_json(self, cli_runner: CliRunner, registry_file: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "entities", "-r", str(registry_file)])
        data = json.loads(result.stdout)
        assert data["data"]["count"] == len(SAMPLE_ENTITIES)


@pytest.mark.usefixtures("_isolated_project")
class TestResolveCommand:
    def test_case_insensitive(self, cli_runner: CliRunner, registry_file: Path) -> None:
        result = cli_runner.invoke(cli, ["resolve", "prdspc", "-r", str(registry_file)])
        assert result.exit_code == 0, result.output
        assert "resolved_as: PRDSPC" in result.stdout
        assert "scale 2: packageSize" in result.stdout

    def test_json_keeps_wire_names(self, cli_runner: CliRunner, registry_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "resolve", "getSpaceManagement", "-r", str(registry_file)]
        )
        data = json.loads(result.stdout)
        assert data["data"]["rules"] == [{"entityRef": "PRDSPC"}]

    def test_missing(self, cli_runner: CliRunner, registry_file: Path) -> None:
        result = cli_runner.invoke(cli, ["resolve", "nope", "-r", str(registry_file)])
        assert result.exit_code == 1
        assert "Entity not found: nope" in result.stderr
