"""Board lookup within a parsed pins.toml document."""

from typing import List

from .pin_config import BoardDef, PinConfigDocument


class BoardNotFoundError(Exception):
    """Exception raised when a board identifier is not declared in pins.toml."""

    def __init__(self, board_id: str, known_ids: List[str]):
        self.board_id = board_id
        self.known_ids = list(known_ids)
        available = ", ".join(self.known_ids)
        super().__init__(
            f"Board '{board_id}' not found. "
            + f"Available boards: {available or 'none'}"
        )


class BoardResolver:
    """Utility class for selecting one board's pin assignment."""

    @staticmethod
    def resolve(document: PinConfigDocument, board_id: str) -> BoardDef:
        """
        Look up the pin assignment of a board.

        Args:
            document: Parsed pins.toml document
            board_id: Board identifier (e.g., 'devkit')

        Returns:
            The BoardDef stored under that identifier

        Raises:
            BoardNotFoundError: If no such board is declared
        """
        if board_id not in document.boards:
            raise BoardNotFoundError(board_id, document.board_ids())
        return document.boards[board_id]
