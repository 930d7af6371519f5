"""End-to-end tests for ``docs2skill config`` and the root callback."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docs2skill import __version__
from docs2skill.app import app
from docs2skill.config import load_global_config
from docs2skill.models import DEFAULT_SERVICE_URL, GlobalConfig


class TestRootCallback:
    def test_version(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"docs2skill {__version__}" in result.output

    def test_help_lists_commands(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for name in ("generate", "key", "config"):
            assert name in result.output


class TestConfigShow:
    def test_defaults_plain(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--no-color", "config", "show"])
        assert result.exit_code == 0, result.output
        assert f"service_url\t{DEFAULT_SERVICE_URL}" in result.output
        assert "gated\tFalse" in result.output

    def test_json(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--json", "--quiet", "config", "show"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == GlobalConfig().model_dump(mode="json")

    def test_effective_includes_env(
        self, cli_runner, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DOCS2SKILL_APP_MODE", "PRODUCTION")
        result = cli_runner.invoke(
            app, ["--json", "--quiet", "config", "show", "--effective"]
        )
        assert json.loads(result.stdout)["gated"] is True

        stored = cli_runner.invoke(app, ["--json", "--quiet", "config", "show"])
        assert json.loads(stored.stdout)["gated"] is False

    def test_corrupt_config(self, cli_runner, isolated_config: Path) -> None:
        path = isolated_config / "config" / "docs2skill" / "config.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{oops", encoding="utf-8")

        result = cli_runner.invoke(app, ["--no-color", "config", "show"])
        assert result.exit_code == 1
        assert "Invalid global config" in result.output


class TestConfigSet:
    def test_bool(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--no-color", "config", "set", "gated", "true"])
        assert result.exit_code == 0, result.output
        assert load_global_config().gated is True

    def test_nested_int(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["config", "set", "request.timeout", "300"])
        assert result.exit_code == 0, result.output
        assert load_global_config().request.timeout == 300

    def test_string(self, cli_runner, isolated_config: Path) -> None:
        url = "https://skills.example.com/api/generate-skills"
        cli_runner.invoke(app, ["config", "set", "service_url", url])
        assert load_global_config().service_url == url

    def test_bad_int(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--no-color", "config", "set", "request.timeout", "soon"])
        assert result.exit_code == 2
        assert "Expected integer" in result.output

    @pytest.mark.parametrize("key", ["nope", "request", "request.nope", "nope.timeout"])
    def test_unknown_key(self, cli_runner, isolated_config: Path, key: str) -> None:
        result = cli_runner.invoke(app, ["--no-color", "config", "set", key, "1"])
        assert result.exit_code == 2


class TestConfigReset:
    def test_force(self, cli_runner, isolated_config: Path) -> None:
        cli_runner.invoke(app, ["config", "set", "gated", "true"])
        result = cli_runner.invoke(app, ["--force", "config", "reset"])
        assert result.exit_code == 0, result.output
        assert load_global_config() == GlobalConfig()

    def test_declined(self, cli_runner, isolated_config: Path) -> None:
        cli_runner.invoke(app, ["config", "set", "gated", "true"])
        result = cli_runner.invoke(app, ["--no-color", "config", "reset"], input="n\n")
        assert "Cancelled." in result.output
        assert load_global_config().gated is True
