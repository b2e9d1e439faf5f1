"""Tests for byteexec.logging_setup."""

from __future__ import annotations

import tests._path_setup  # noqa: F401

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from byteexec.logging_setup import _PACKAGE, configure, configure_from


@pytest.fixture(autouse=True)
def _clean_logger():
    """Reset the package logger between tests."""
    pkg = logging.getLogger(_PACKAGE)
    pkg.handlers.clear()
    pkg.setLevel(logging.WARNING)
    yield
    pkg.handlers.clear()
    pkg.setLevel(logging.WARNING)
    pkg.propagate = True


class TestConfigure:
    def test_attaches_file_and_stderr_handlers(self, tmp_path: Path):
        configure(tmp_path / "test.log", debug=True)
        pkg = logging.getLogger(_PACKAGE)
        handler_types = {type(h).__name__ for h in pkg.handlers}
        assert handler_types == {"RotatingFileHandler", "StreamHandler"}

    def test_without_log_file_only_stderr(self):
        configure(None)
        pkg = logging.getLogger(_PACKAGE)
        assert [type(h).__name__ for h in pkg.handlers] == ["StreamHandler"]

    def test_idempotent_without_reconfigure(self, tmp_path: Path):
        configure(tmp_path / "test.log")
        configure(tmp_path / "test.log")
        assert len(logging.getLogger(_PACKAGE).handlers) == 2

    def test_reconfigure_replaces_handlers(self, tmp_path: Path):
        configure(tmp_path / "first.log")
        configure(tmp_path / "second.log", reconfigure=True)
        assert len(logging.getLogger(_PACKAGE).handlers) == 2

    def test_debug_levels(self, tmp_path: Path):
        configure(tmp_path / "test.log", debug=False)
        assert logging.getLogger(_PACKAGE).level == logging.INFO
        configure(tmp_path / "test.log", debug=True, reconfigure=True)
        assert logging.getLogger(_PACKAGE).level == logging.DEBUG

    def test_file_handler_failure_prints_to_stderr(self, capsys):
        with patch("byteexec.logging_setup.Path.mkdir", side_effect=OSError("permission denied")):
            configure(Path("/nonexistent/dir/test.log"))
        captured = capsys.readouterr()
        assert "WARNING" in captured.err
        assert "permission denied" in captured.err
        assert len(logging.getLogger(_PACKAGE).handlers) == 1

    def test_materializer_debug_lines_reach_log_file(self, tmp_path: Path):
        from byteexec import Materializer
        from tests._stubs import StubPlatform

        log_file = tmp_path / "byteexec.log"
        configure(log_file, debug=True)
        Materializer(StubPlatform(tmp_path)).materialize(tmp_path / "tool", b"x")
        for h in logging.getLogger(_PACKAGE).handlers:
            h.flush()
        content = log_file.read_text()
        assert "Creating new file at" in content
        assert "byteexec.materializer" in content

    def test_propagate_is_false(self, tmp_path: Path):
        configure(tmp_path / "test.log")
        assert logging.getLogger(_PACKAGE).propagate is False


class TestConfigureFrom:
    def test_uses_config_values(self, tmp_path: Path):
        configure_from({"log_file": str(tmp_path / "cfg.log"), "debug": True})
        pkg = logging.getLogger(_PACKAGE)
        assert pkg.level == logging.DEBUG
        assert (tmp_path / "cfg.log").exists()

    def test_empty_config(self):
        configure_from({})
        pkg = logging.getLogger(_PACKAGE)
        assert pkg.level == logging.INFO
        assert len(pkg.handlers) == 1
