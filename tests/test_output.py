"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- format_response, print_block and print_table per format
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from docs2skill import output as output_module
from docs2skill.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture(autouse=True)
def _reset_global_output():
    reset_output()
    yield
    reset_output()


@pytest.fixture()
def non_tty(monkeypatch):
    monkeypatch.setattr("docs2skill.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    monkeypatch.setattr("docs2skill.output._is_tty", lambda: True)


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.RICH

    def test_auto_resolves_to_plain_with_no_color(self, tty):
        mgr = OutputManager(format=OutputFormat.AUTO, no_color=True)
        assert mgr.format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_neither(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


class TestStreamDiscipline:
    def test_diagnostics_go_to_stderr(self, capsys, non_tty):
        mgr = OutputManager(no_color=True)
        mgr.info("info msg")
        mgr.success("done")
        mgr.warning("careful")
        mgr.error("broken")
        mgr.suggest("try this")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "info msg" in captured.err
        assert "done" in captured.err
        assert "Warning: careful" in captured.err
        assert "Error: broken" in captured.err
        assert "→ try this" in captured.err

    def test_data_goes_to_stdout(self, capsys, non_tty):
        OutputManager(no_color=True).print_data("payload")
        captured = capsys.readouterr()
        assert captured.out == "payload\n"
        assert captured.err == ""


class TestQuietVerbose:
    def test_quiet_suppresses_info_not_errors(self, capsys, non_tty):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.success("hidden too")
        mgr.suggest("hidden as well")
        mgr.warning("shown")
        mgr.error("shown too")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err
        assert "shown too" in err

    def test_debug_only_when_verbose(self, capsys, non_tty):
        OutputManager(no_color=True).debug("quiet debug")
        OutputManager(no_color=True, verbose=True).debug("loud debug")
        err = capsys.readouterr().err
        assert "quiet debug" not in err
        assert "[debug] loud debug" in err

    def test_progress_suppressed_off_tty(self, capsys, non_tty):
        OutputManager(no_color=True).progress("Generating...")
        assert capsys.readouterr().err == ""

    def test_progress_on_tty(self, capsys, tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).progress("Generating...")
        assert "Generating..." in capsys.readouterr().err


class TestFormatResponse:
    def test_json(self, capsys, non_tty):
        OutputManager(format=OutputFormat.JSON).format_response({"a": 1, "b": [1, 2]})
        assert json.loads(capsys.readouterr().out) == {"a": 1, "b": [1, 2]}

    def test_plain_dict(self, capsys, non_tty):
        OutputManager(format=OutputFormat.PLAIN).format_response({"gated": False, "x": "y"})
        assert capsys.readouterr().out == "gated\tFalse\nx\ty\n"

    def test_plain_list_of_dicts(self, capsys, non_tty):
        OutputManager(format=OutputFormat.PLAIN).format_response([{"a": 1, "b": 2}])
        assert capsys.readouterr().out == "1\t2\n"


class TestPrintBlockAndTable:
    def test_block_plain_with_title(self, capsys, non_tty):
        OutputManager(format=OutputFormat.PLAIN).print_block("line1\nline2", title="SKILL.md")
        assert capsys.readouterr().out == "SKILL.md\nline1\nline2\n"

    def test_table_plain(self, capsys, non_tty):
        OutputManager(format=OutputFormat.PLAIN).print_table(
            ["Method", "Path"], [["GET", "/a"], ["POST", "/b"]]
        )
        assert capsys.readouterr().out == "Method\tPath\nGET\t/a\nPOST\t/b\n"

    def test_table_json(self, capsys, non_tty):
        OutputManager(format=OutputFormat.JSON).print_table(["Method", "Path"], [["GET", "/a"]])
        assert json.loads(capsys.readouterr().out) == [{"Method": "GET", "Path": "/a"}]


class TestGlobalInstance:
    def test_lazy_default(self):
        assert isinstance(get_output(), OutputManager)

    def test_set_and_reset(self):
        mgr = OutputManager(quiet=True)
        set_output(mgr)
        assert get_output() is mgr
        reset_output()
        assert get_output() is not mgr

    def test_convenience_functions_delegate(self, capsys, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.print_data("data")
        output_module.info("note")
        output_module.error("bad")
        captured = capsys.readouterr()
        assert captured.out == "data\n"
        assert "note" in captured.err
        assert "Error: bad" in captured.err
