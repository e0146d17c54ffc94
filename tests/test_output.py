"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- print_document passthrough
- print_table and print_tree in JSON and plain modes
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from yang2swagger.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("yang2swagger.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("yang2swagger.output._is_tty", lambda: True)


# ------------------------------------------------------------------ #
# Format resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.RICH

    def test_no_color_forces_plain_on_tty(self, tty, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        mgr = OutputManager(format=OutputFormat.AUTO)
        assert mgr.no_color
        assert mgr.format == OutputFormat.PLAIN

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color()


# ------------------------------------------------------------------ #
# Diagnostics
# ------------------------------------------------------------------ #


class TestDiagnostics:
    def test_messages_go_to_stderr(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.info("loading")
        mgr.success("done")
        mgr.warning("careful")
        mgr.error("broken")
        mgr.suggest("try again")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "loading" in captured.err
        assert "Warning: careful" in captured.err
        assert "Error: broken" in captured.err
        assert "→ try again" in captured.err

    def test_quiet_suppresses_info_not_errors(self, capsys):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.info("loading")
        mgr.success("done")
        mgr.error("broken")
        err = capsys.readouterr().err
        assert "loading" not in err
        assert "done" not in err
        assert "Error: broken" in err

    def test_debug_only_when_verbose(self, capsys):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).debug("hidden")
        OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True).debug("shown")
        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "[debug] shown" in err


# ------------------------------------------------------------------ #
# Data output
# ------------------------------------------------------------------ #


class TestDataOutput:
    def test_print_document_plain_is_verbatim(self, capsys):
        text = "swagger: '2.0'\npaths: {}\n"
        OutputManager(format=OutputFormat.PLAIN).print_document(text)
        assert capsys.readouterr().out == text

    def test_print_table_plain(self, capsys):
        OutputManager(format=OutputFormat.PLAIN).print_table(["A", "B"], [["1", "2"]])
        assert capsys.readouterr().out == "A\tB\n1\t2\n"

    def test_print_table_json(self, capsys):
        OutputManager(format=OutputFormat.JSON).print_table(["A", "B"], [["1", "2"]])
        assert json.loads(capsys.readouterr().out) == [{"A": "1", "B": "2"}]

    def test_print_tree_plain(self, capsys):
        tree = {"label": "m", "children": [{"label": "a", "children": [{"label": "b"}]}]}
        OutputManager(format=OutputFormat.PLAIN).print_tree(tree)
        assert capsys.readouterr().out == "m\n  a\n    b\n"

    def test_print_tree_json(self, capsys):
        tree = {"label": "m", "children": []}
        OutputManager(format=OutputFormat.JSON).print_tree(tree)
        assert json.loads(capsys.readouterr().out) == tree


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_set_and_reset(self):
        mgr = OutputManager(format=OutputFormat.JSON)
        set_output(mgr)
        assert get_output() is mgr
        reset_output()
        assert get_output() is not mgr

    def test_lazy_default(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)
