"""
Pin fragment generation for pinsgen.

This module runs one generation pass for a single board:
- Parse pins.toml
- Resolve the requested board
- Check the board for pins assigned to more than one role
- Render the 'pins!' fragment
- Write it to the path named by 'generate'

Any failure aborts the pass; no partial artifact is written.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from .config import BoardDef, BoardResolver, ConfigParseError, PinConfigLoader
from .emit import ArtifactWriter, CodeEmitter


@dataclass
class GenerationResult:
    """Result of a completed generation pass."""

    board_id: str
    config_path: Path
    output_path: Path
    board: BoardDef
    fragment: str
    bytes_written: int


class PinsGenerator:
    """
    Generates the pin-mapping fragment for one board.

    Example usage:
        generator = PinsGenerator()
        result = generator.generate(Path("pins.toml"), "devkit")
        print(f"Wrote {result.output_path}")
    """

    def __init__(self, strict: bool = False, verbose: bool = False):
        """
        Initialize the generator.

        Args:
            strict: Treat a pin shared by two roles of one board as an error
            verbose: Print each pipeline phase
        """
        self.strict = strict
        self.verbose = verbose

    def generate(self, config_path: Path, board_id: str) -> GenerationResult:
        """
        Run a generation pass.

        Args:
            config_path: Path to pins.toml
            board_id: Board to generate for (e.g., 'devkit')

        Returns:
            GenerationResult describing the written artifact

        Raises:
            ConfigParseError: If pins.toml is malformed, or a pin is shared in strict mode
            BoardNotFoundError: If the board is not declared
            InvalidGenerationTarget: If 'generate' is empty
            ArtifactWriteError: If the artifact cannot be written
        """
        config_path = Path(config_path)

        if self.verbose:
            print(f"[1/4] Parsing {config_path.name}...")
        document = PinConfigLoader.from_file(config_path)
        logging.debug(f"Loaded {len(document.boards)} boards from {config_path}")

        if self.verbose:
            print(f"[2/4] Resolving board '{board_id}'...")
        board = BoardResolver.resolve(document, board_id)
        logging.debug(f"Board '{board_id}': {board}")
        self._check_shared_pins(board_id, board)

        if self.verbose:
            print("[3/4] Rendering pins! macro...")
        emitter = CodeEmitter(source_name=config_path.name)
        fragment = emitter.render(board_id, board, document.generate)

        output_path = document.output_path()
        if self.verbose:
            print(f"[4/4] Writing {output_path}...")
        bytes_written = ArtifactWriter.write(output_path, fragment.encode("utf-8"))
        logging.info(f"Wrote {bytes_written} bytes to {output_path} for board '{board_id}'")

        return GenerationResult(
            board_id=board_id,
            config_path=config_path,
            output_path=output_path,
            board=board,
            fragment=fragment,
            bytes_written=bytes_written,
        )

    def list_boards(self, config_path: Path) -> Dict[str, BoardDef]:
        """
        Get all boards declared in pins.toml.

        Args:
            config_path: Path to pins.toml

        Returns:
            Mapping of board identifier to BoardDef, sorted by identifier

        Raises:
            ConfigParseError: If pins.toml is malformed
        """
        document = PinConfigLoader.from_file(Path(config_path))
        return {board_id: document.boards[board_id] for board_id in document.board_ids()}

    def _check_shared_pins(self, board_id: str, board: BoardDef) -> None:
        shared = board.shared_pins()
        if not shared:
            return

        details = "; ".join(
            f"GPIO{pin} used by {', '.join(roles)}" for pin, roles in shared.items()
        )
        if self.strict:
            raise ConfigParseError(f"Board '{board_id}' assigns a pin to more than one role: {details}")
        logging.warning(f"Board '{board_id}' assigns a pin to more than one role: {details}")
