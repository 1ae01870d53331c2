"""Tests for the fix command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from fpfixer.cli import cli
from tests.conftest import case_pack_detail


@pytest.fixture
def payload_file(tmp_path: Path) -> Path:
    path = tmp_path / "response.json"
    path.write_text(json.dumps(case_pack_detail()), encoding="utf-8")
    return path


@pytest.mark.usefixtures("_isolated_project")
class TestFixCommand:
    def test_fix_by_entity(
        self, cli_runner: CliRunner, payload_file: Path, registry_file: Path
    ) -> None:
        result = cli_runner.invoke(
            cli, ["fix", str(payload_file), "-e", "casePackDetail", "-r", str(registry_file)]
        )
        assert result.exit_code == 0, result.output
        fixed = json.loads(result.stdout)
        assert fixed["caseWidth"] == 4.725
        assert fixed["product"]["targetGm"] == 0.3
        assert fixed["cost"] == [{"prdCost": 9.97}, {"prdCost": 0}]
        assert result.stderr == ""

    def test_fix_from_stdin(self, cli_runner: CliRunner, registry_file: Path) -> None:
        result = cli_runner.invoke(
            cli,
            ["fix", "-", "-e", "getSpaceManagement", "-r", str(registry_file)],
            input='[{"packageSize": 0.7500000001}]',
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == [{"packageSize": 0.75}]

    def test_inline_rules(self, cli_runner: CliRunner, payload_file: Path) -> None:
        rules = '[{"scale": 1, "names": ["caseWidth"]}]'
        result = cli_runner.invoke(cli, ["fix", str(payload_file), "--rules", rules])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["caseWidth"] == 4.7

    def test_rules_from_file(
        self, cli_runner: CliRunner, payload_file: Path, tmp_path: Path
    ) -> None:
        rules = tmp_path / "rules.json"
        rules.write_text('[{"scale": 0, "names": ["caseCube"]}]', encoding="utf-8")
        result = cli_runner.invoke(cli, ["fix", str(payload_file), "--rules", f"@{rules}"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["caseCube"] == 105.0

    def test_bad_rules_json(self, cli_runner: CliRunner, payload_file: Path) -> None:
        result = cli_runner.invoke(cli, ["fix", str(payload_file), "--rules", "[oops"])
        assert result.exit_code == 2
        assert "--rules" in result.stderr

    def test_unknown_entity_warns_on_stderr(
        self, cli_runner: CliRunner, payload_file: Path, registry_file: Path
    ) -> None:
        result = cli_runner.invoke(
            cli, ["fix", str(payload_file), "-e", "nope", "-r", str(registry_file)]
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == case_pack_detail()
        assert "WARNING: [nope] entity is not found" in result.stderr
        assert "WARNING: FpFixer[nope/lvl=0]: no definitions!" in result.stderr

    def test_json_mode(
        self, cli_runner: CliRunner, payload_file: Path, registry_file: Path
    ) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "fix", str(payload_file), "-e", "nope", "-r", str(registry_file)],
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "fix"
        assert data["data"]["payload"]["caseWidth"] == 4.7250000000000005
        assert [d["code"] for d in data["diagnostics"]] == ["entity_not_found", "no_definitions"]
        assert "WARNING" not in result.stderr

    def test_output_file(
        self, cli_runner: CliRunner, payload_file: Path, registry_file: Path, tmp_path: Path
    ) -> None:
        out = tmp_path / "out" / "fixed.json"
        result = cli_runner.invoke(
            cli,
            ["fix", str(payload_file), "-e", "casePackDetail", "-r", str(registry_file), "-o", str(out)],
        )
        assert result.exit_code == 0, result.output
        assert "fields_fixed: 6" in result.stdout
        assert json.loads(out.read_text(encoding="utf-8"))["caseCube"] == 105.466

    def test_recursion_overflow_fails(
        self, cli_runner: CliRunner, payload_file: Path, tmp_path: Path
    ) -> None:
        loop = tmp_path / "loop.json"
        loop.write_text('{"A": [{"entityRef": "A"}]}', encoding="utf-8")
        result = cli_runner.invoke(
            cli, ["fix", str(payload_file), "-e", "A", "-r", str(loop), "--max-recursion", "3"]
        )
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "recursion overflow (4 > 3)" in result.stderr

    def test_max_recursion_bounds(self, cli_runner: CliRunner, payload_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["fix", str(payload_file), "-e", "x", "--max-recursion", "1000"]
        )
        assert result.exit_code == 2

    def test_requires_entity_or_rules(self, cli_runner: CliRunner, payload_file: Path) -> None:
        result = cli_runner.invoke(cli, ["fix", str(payload_file)])
        assert result.exit_code == 1
        assert "Either an entity name or inline rules are required" in result.stderr

    def test_missing_payload(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["fix", str(tmp_path / "gone.json"), "-e", "x"])
        assert result.exit_code == 1
        assert "Cannot read payload" in result.stderr

    def test_invalid_registry_file(
        self, cli_runner: CliRunner, payload_file: Path, tmp_path: Path
    ) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{", encoding="utf-8")
        result = cli_runner.invoke(cli, ["fix", str(payload_file), "-e", "x", "-r", str(bad)])
        assert result.exit_code == 1
        assert "Invalid registry file" in result.stderr

    def test_config_registry_and_rounding(
        self, cli_runner: CliRunner, payload_file: Path, tmp_path: Path
    ) -> None:
        (tmp_path / "fpfixer.toml").write_text(
            '[fixer]\nrounding = "ceil"\n'
            '[entities]\ncostObj = [{ scale = 2, names = ["prdCost"] }]\n'
            'wrap = [{ entityRef = "costObj", names = ["cost"] }]\n',
            encoding="utf-8",
        )
        result = cli_runner.invoke(cli, ["fix", str(payload_file), "-e", "wrap"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["cost"] == [{"prdCost": 9.98}, {"prdCost": 0}]
