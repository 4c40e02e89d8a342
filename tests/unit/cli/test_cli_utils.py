"""Unit tests for CLI utilities."""

import logging

import pytest

from pinsgen import cli_utils
from pinsgen.cli_utils import BoardDetector, ErrorFormatter, PathValidator, setup_logging
from pinsgen.config import BoardNotFoundError


class TestBoardDetector:
    """Tests for BoardDetector class."""

    def test_explicit_board_wins(self):
        """Test that an explicit board ignores the environment."""
        assert BoardDetector.detect_board("devkit", {"BOARD": "proto2"}) == "devkit"

    def test_board_from_environment(self):
        """Test fallback to $BOARD."""
        assert BoardDetector.detect_board(None, {"BOARD": "proto2"}) == "proto2"

    def test_explicit_board_stripped(self):
        """Test that whitespace around --board is ignored like $BOARD."""
        assert BoardDetector.detect_board("  devkit ", {}) == "devkit"

    def test_blank_explicit_board_falls_back(self):
        """Test that a blank --board defers to $BOARD."""
        assert BoardDetector.detect_board("  ", {"BOARD": "proto2"}) == "proto2"

    def test_environment_value_stripped(self):
        """Test that surrounding whitespace in $BOARD is ignored."""
        assert BoardDetector.detect_board(None, {"BOARD": "  proto2\n"}) == "proto2"

    def test_no_board(self):
        """Test that no source yields None."""
        assert BoardDetector.detect_board(None, {}) is None

    def test_blank_environment_is_no_board(self):
        """Test that an empty $BOARD counts as unset."""
        assert BoardDetector.detect_board(None, {"BOARD": "  "}) is None

    def test_defaults_to_os_environ(self, monkeypatch):
        """Test that os.environ is consulted by default."""
        monkeypatch.setenv("BOARD", "devkit")
        assert BoardDetector.detect_board() == "devkit"


class TestErrorFormatter:
    """Tests for ErrorFormatter class."""

    def test_print_error(self, capsys):
        """Test error title and message are printed."""
        ErrorFormatter.print_error("Error: Unknown board", "details here")
        out = capsys.readouterr().out
        assert "✗ Error: Unknown board" in out
        assert "details here" in out

    def test_board_not_found_exits_1(self, capsys):
        """Test that an unknown board exits with status 1 and a hint."""
        with pytest.raises(SystemExit) as exc_info:
            ErrorFormatter.handle_board_not_found(BoardNotFoundError("x", ["devkit"]))

        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "Available boards: devkit" in out
        assert "--board" in out

    def test_keyboard_interrupt_exits_130(self):
        """Test SIGINT exit code."""
        with pytest.raises(SystemExit) as exc_info:
            ErrorFormatter.handle_keyboard_interrupt()
        assert exc_info.value.code == 130

    def test_unexpected_error(self, capsys):
        """Test that unexpected errors show their type."""
        with pytest.raises(SystemExit) as exc_info:
            ErrorFormatter.handle_unexpected_error(RuntimeError("boom"))
        assert exc_info.value.code == 1
        assert "RuntimeError: boom" in capsys.readouterr().out


class TestPathValidator:
    """Tests for PathValidator class."""

    def test_existing_file(self, tmp_path):
        """Test that an existing file passes."""
        config = tmp_path / "pins.toml"
        config.write_text("")
        PathValidator.validate_config_file(config)

    def test_missing_file(self, tmp_path):
        """Test that a missing file exits with status 2."""
        with pytest.raises(SystemExit) as exc_info:
            PathValidator.validate_config_file(tmp_path / "pins.toml")
        assert exc_info.value.code == 2

    def test_directory(self, tmp_path):
        """Test that a directory exits with status 2."""
        with pytest.raises(SystemExit) as exc_info:
            PathValidator.validate_config_file(tmp_path)
        assert exc_info.value.code == 2


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        level = root.level
        yield
        if cli_utils._console_handler is not None:
            root.removeHandler(cli_utils._console_handler)
            cli_utils._console_handler = None
        root.setLevel(level)

    def test_levels(self):
        """Test WARNING by default and DEBUG when verbose."""
        setup_logging(verbose=False)
        assert logging.getLogger().level == logging.WARNING
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_single_handler(self):
        """Test that repeated setup keeps one CLI handler."""
        setup_logging()
        setup_logging()
        handlers = [h for h in logging.getLogger().handlers if h is cli_utils._console_handler]
        assert len(handlers) == 1
        assert handlers[0].formatter._fmt == cli_utils.LOG_FORMAT
