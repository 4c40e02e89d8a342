"""
Command-line interface for pinsgen.

This module provides the `pinsgen` CLI tool, run by firmware builds to
generate the 'pins!' fragment for the board being built.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pinsgen import __version__
from pinsgen.cli_utils import (
    BOARD_ENV_VAR,
    BoardDetector,
    ErrorFormatter,
    PathValidator,
    setup_logging,
)
from pinsgen.config import BoardNotFoundError, ConfigParseError
from pinsgen.emit import ArtifactWriteError, InvalidGenerationTarget
from pinsgen.generator import PinsGenerator

DEFAULT_CONFIG = "pins.toml"


@dataclass
class GenerateArgs:
    """Arguments for the generate command."""

    config: Path
    board: Optional[str] = None
    strict: bool = False
    verbose: bool = False


@dataclass
class BoardsArgs:
    """Arguments for the boards command."""

    config: Path
    verbose: bool = False


def generate_command(args: GenerateArgs) -> None:
    """Generate the pins fragment for one board.

    Examples:
        pinsgen generate -b devkit             # Use ./pins.toml
        pinsgen generate examples/pins.toml    # Board from $BOARD
        pinsgen generate --strict -b proto2    # Fail on shared pins
    """
    board_id = BoardDetector.detect_board(args.board)
    if not board_id:
        ErrorFormatter.print_error(
            "Error: No board selected",
            f"Pass --board <id> or set ${BOARD_ENV_VAR} to choose a board from {args.config}.",
        )
        sys.exit(2)

    try:
        generator = PinsGenerator(strict=args.strict, verbose=args.verbose)

        if args.verbose:
            print(f"Configuration: {args.config}")
            print(f"Board: {board_id}")
            print()

        result = generator.generate(args.config, board_id)

        ErrorFormatter.print_success(f"Generated pins for board '{result.board_id}'")
        print(f"Output: {result.output_path} ({result.bytes_written} bytes)")
        sys.exit(0)

    except ConfigParseError as e:
        ErrorFormatter.handle_config_error(e)
    except BoardNotFoundError as e:
        ErrorFormatter.handle_board_not_found(e)
    except InvalidGenerationTarget as e:
        ErrorFormatter.handle_invalid_target(e)
    except ArtifactWriteError as e:
        ErrorFormatter.handle_write_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def boards_command(args: BoardsArgs) -> None:
    """List the boards declared in pins.toml.

    Examples:
        pinsgen boards
        pinsgen boards examples/pins.toml
    """
    try:
        boards = PinsGenerator(verbose=args.verbose).list_boards(args.config)

        if not boards:
            print(f"No boards declared in {args.config}")
            sys.exit(0)

        print(f"Boards in {args.config}:")
        for board_id, board in boards.items():
            pins = ", ".join(f"{role}={pin}" for role, pin in board.pin_roles())
            print(f"  {board_id}: {pins}")
        sys.exit(0)

    except ConfigParseError as e:
        ErrorFormatter.handle_config_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def main() -> None:
    """pinsgen - board pin mapping generator for esp-hal firmware."""
    parser = argparse.ArgumentParser(
        prog="pinsgen",
        description="Generate a board's pins! macro from pins.toml",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"pinsgen {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate the pins fragment for one board",
    )
    generate_parser.add_argument(
        "config",
        nargs="?",
        type=Path,
        default=Path(DEFAULT_CONFIG),
        help=f"Pin configuration file (default: {DEFAULT_CONFIG})",
    )
    generate_parser.add_argument(
        "-b",
        "--board",
        default=None,
        help=f"Board to generate for (default: ${BOARD_ENV_VAR})",
    )
    generate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail if a board assigns one pin to several roles",
    )
    generate_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    # Boards command
    boards_parser = subparsers.add_parser(
        "boards",
        help="List boards declared in the pin configuration",
    )
    boards_parser.add_argument(
        "config",
        nargs="?",
        type=Path,
        default=Path(DEFAULT_CONFIG),
        help=f"Pin configuration file (default: {DEFAULT_CONFIG})",
    )
    boards_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )

    # Parse arguments
    parsed_args = parser.parse_args()

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging(parsed_args.verbose)

    # Validate configuration file exists
    PathValidator.validate_config_file(parsed_args.config)

    # Execute command
    if parsed_args.command == "generate":
        generate_args = GenerateArgs(
            config=parsed_args.config,
            board=parsed_args.board,
            strict=parsed_args.strict,
            verbose=parsed_args.verbose,
        )
        generate_command(generate_args)
    elif parsed_args.command == "boards":
        boards_args = BoardsArgs(
            config=parsed_args.config,
            verbose=parsed_args.verbose,
        )
        boards_command(boards_args)


if __name__ == "__main__":
    main()
