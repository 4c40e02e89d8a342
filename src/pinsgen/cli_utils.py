"""CLI utility functions for pinsgen.

This module provides common utilities used across CLI commands including:
- Board selection from arguments or the build environment
- Logging setup
- Error handling and formatting
"""

import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from pinsgen.config import BoardNotFoundError, ConfigParseError
from pinsgen.emit import ArtifactWriteError, InvalidGenerationTarget

BOARD_ENV_VAR = "BOARD"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_console_handler: Optional[logging.Handler] = None


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger for CLI runs (stderr, WARNING or DEBUG)."""
    global _console_handler

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # main() may run several times in one process; keep a single handler
    if _console_handler is not None:
        logger.removeHandler(_console_handler)
    _console_handler = logging.StreamHandler(sys.stderr)
    _console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_console_handler)


class BoardDetector:
    """Handles board selection for a generation pass."""

    @staticmethod
    def detect_board(
        board: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
    ) -> Optional[str]:
        """Pick the board to generate for.

        Args:
            board: Board given on the command line (wins if set)
            environ: Environment to consult (default: os.environ)

        Returns:
            Board identifier, or None if neither source provides one
        """
        if board and board.strip():
            return board.strip()

        if environ is None:
            environ = os.environ
        env_board = environ.get(BOARD_ENV_VAR, "").strip()
        return env_board or None


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message.

        Args:
            title: Error title (e.g., "Unknown board")
            message: Error message details
        """
        print()
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}")
        print()
        print(message)
        print()

    @staticmethod
    def print_success(message: str) -> None:
        """Print formatted success message."""
        print()
        print(f"{ErrorFormatter.GREEN}✓ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def print_warning(message: str) -> None:
        """Print formatted warning message."""
        print()
        print(f"{ErrorFormatter.YELLOW}✗ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def handle_config_error(error: ConfigParseError) -> None:
        """Handle ConfigParseError with standard formatting."""
        ErrorFormatter.print_error("Error: Invalid pin configuration", str(error))
        sys.exit(1)

    @staticmethod
    def handle_board_not_found(error: BoardNotFoundError) -> None:
        """Handle BoardNotFoundError with standard formatting."""
        ErrorFormatter.print_error("Error: Unknown board", str(error))
        print(f"Pass one of the available boards with --board or ${BOARD_ENV_VAR}.")
        sys.exit(1)

    @staticmethod
    def handle_invalid_target(error: InvalidGenerationTarget) -> None:
        """Handle InvalidGenerationTarget with standard formatting."""
        ErrorFormatter.print_error("Error: No output path", str(error))
        sys.exit(1)

    @staticmethod
    def handle_write_error(error: ArtifactWriteError) -> None:
        """Handle ArtifactWriteError with standard formatting."""
        ErrorFormatter.print_error("Error: Could not write artifact", str(error))
        sys.exit(1)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle KeyboardInterrupt with standard formatting."""
        ErrorFormatter.print_warning("Generation interrupted")
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
            verbose: Whether to print traceback
        """
        message = f"{type(error).__name__}: {error}"
        ErrorFormatter.print_error("Unexpected error", message)

        if verbose:
            import traceback

            print("Traceback:")
            print(traceback.format_exc())

        sys.exit(1)


class PathValidator:
    """Validates paths given on the command line."""

    @staticmethod
    def validate_config_file(config_path: Path) -> None:
        """Validate that the configuration file exists and is a file.

        Args:
            config_path: Path to validate

        Raises:
            SystemExit: If path doesn't exist or isn't a file
        """
        if not config_path.exists():
            print(
                f"{ErrorFormatter.RED}✗ Error: Configuration file does not exist: {config_path}{ErrorFormatter.RESET}"
            )
            sys.exit(2)
        if not config_path.is_file():
            print(
                f"{ErrorFormatter.RED}✗ Error: Configuration path is not a file: {config_path}{ErrorFormatter.RESET}"
            )
            sys.exit(2)
