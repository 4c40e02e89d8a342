"""
pins.toml configuration parser.

This module parses the pin-mapping document that ties each board revision
to its GPIO wiring, and validates its shape before anything is generated.

Example pins.toml:
    generate = "examples/pins_gen.in"

    [boards.devkit]
    sda = 4
    scl = 5

    [boards.proto2]
    sda = 18
    scl = 19
    pwr_en = 2
    int = 3
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


class ConfigParseError(Exception):
    """Exception raised for malformed or incomplete pins.toml documents."""

    pass


@dataclass(frozen=True)
class BoardDef:
    """
    Pin assignment of one board.

    Optional pins are None when the board does not wire them. None is never
    the same as pin 0.
    """

    sda: int
    scl: int
    power_enable: Optional[int] = None
    interrupt: Optional[int] = None
    lpns: Optional[Tuple[int, ...]] = None

    def pin_roles(self) -> List[Tuple[str, int]]:
        """
        Get (role, pin) pairs for every configured pin.

        Returns:
            List of pairs in declaration order, e.g. [('sda', 4), ('scl', 5)]
        """
        roles = [("sda", self.sda), ("scl", self.scl)]
        if self.power_enable is not None:
            roles.append(("pwr_en", self.power_enable))
        if self.interrupt is not None:
            roles.append(("int", self.interrupt))
        for i, pin in enumerate(self.lpns or ()):
            roles.append((f"lpns[{i}]", pin))
        return roles

    def shared_pins(self) -> Dict[int, List[str]]:
        """
        Find pins that are assigned to more than one role on this board.

        Returns:
            Mapping of pin number to the roles sharing it (empty if none)
        """
        by_pin: Dict[int, List[str]] = {}
        for role, pin in self.pin_roles():
            by_pin.setdefault(pin, []).append(role)
        return {pin: roles for pin, roles in sorted(by_pin.items()) if len(roles) > 1}


@dataclass(frozen=True)
class PinConfigDocument:
    """A parsed pins.toml document."""

    generate: str
    boards: Dict[str, BoardDef]
    source_dir: Path

    def board_ids(self) -> List[str]:
        """Get board identifiers in sorted order."""
        return sorted(self.boards)

    def output_path(self) -> Path:
        """
        Resolve the 'generate' path.

        Relative paths are taken relative to the directory of the
        configuration file, so a build can run from any working directory.
        """
        target = Path(self.generate)
        if target.is_absolute():
            return target
        return self.source_dir / target


class PinConfigLoader:
    """
    Loader for pins.toml documents.

    Every structural problem (missing field, wrong type, unknown key,
    invalid TOML) is reported as ConfigParseError before any board is
    resolved.

    Usage:
        document = PinConfigLoader.from_file(Path("pins.toml"))
        print(document.board_ids())
    """

    TOP_LEVEL_KEYS = {"generate", "boards"}
    REQUIRED_PINS = ("sda", "scl")
    OPTIONAL_PINS = ("pwr_en", "int")
    BOARD_KEYS = set(REQUIRED_PINS) | set(OPTIONAL_PINS) | {"lpns"}

    @classmethod
    def from_file(cls, path: Path) -> PinConfigDocument:
        """
        Load a pins.toml file.

        Args:
            path: Path to the configuration file

        Returns:
            Parsed document, with relative paths anchored at the file's directory

        Raises:
            ConfigParseError: If the file cannot be read or is not valid
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigParseError(f"Configuration file not found: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigParseError(f"Failed to read {path}: {e}") from e

        try:
            return cls.from_text(text, base_dir=path.parent)
        except ConfigParseError as e:
            raise ConfigParseError(f"{path}: {e}") from e

    @classmethod
    def from_text(cls, text: str, base_dir: Optional[Path] = None) -> PinConfigDocument:
        """
        Parse a pins.toml document from text.

        Args:
            text: Raw TOML text
            base_dir: Directory relative 'generate' paths refer to
                (default: current directory)

        Returns:
            Parsed document

        Raises:
            ConfigParseError: If the document is malformed or incomplete
        """
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ConfigParseError(f"Malformed TOML: {e}") from e

        unknown = set(data) - cls.TOP_LEVEL_KEYS
        if unknown:
            raise ConfigParseError(
                f"Unknown top-level keys: {', '.join(sorted(unknown))}. "
                + f"Allowed keys: {', '.join(sorted(cls.TOP_LEVEL_KEYS))}"
            )

        if "generate" not in data:
            raise ConfigParseError("Missing required key 'generate'")
        generate = data["generate"]
        if not isinstance(generate, str):
            raise ConfigParseError(
                f"'generate' must be a string path, got {type(generate).__name__}"
            )

        if "boards" not in data:
            raise ConfigParseError("Missing required table 'boards'")
        raw_boards = data["boards"]
        if not isinstance(raw_boards, dict):
            raise ConfigParseError(
                f"'boards' must be a table, got {type(raw_boards).__name__}"
            )

        boards = {
            board_id: cls._parse_board(board_id, entry)
            for board_id, entry in raw_boards.items()
        }

        return PinConfigDocument(
            generate=generate,
            boards=boards,
            source_dir=Path(base_dir) if base_dir is not None else Path.cwd(),
        )

    @classmethod
    def _parse_board(cls, board_id: str, entry: Any) -> BoardDef:
        """
        Validate one [boards.<id>] table.

        Args:
            board_id: Board identifier (for diagnostics)
            entry: Raw value parsed from TOML

        Returns:
            BoardDef instance

        Raises:
            ConfigParseError: If the entry is not a table, lacks sda/scl,
                has unknown keys or non-pin values
        """
        if not isinstance(entry, dict):
            raise ConfigParseError(
                f"Board '{board_id}' must be a table, got {type(entry).__name__}"
            )

        unknown = set(entry) - cls.BOARD_KEYS
        if unknown:
            raise ConfigParseError(
                f"Board '{board_id}' has unknown keys: {', '.join(sorted(unknown))}. "
                + f"Allowed keys: {', '.join(sorted(cls.BOARD_KEYS))}"
            )

        missing = [key for key in cls.REQUIRED_PINS if key not in entry]
        if missing:
            raise ConfigParseError(
                f"Board '{board_id}' is missing required fields: {', '.join(missing)}"
            )

        lpns = None
        if "lpns" in entry:
            raw_lpns = entry["lpns"]
            if not isinstance(raw_lpns, list):
                raise ConfigParseError(
                    f"Board '{board_id}': 'lpns' must be an array of pins, "
                    + f"got {type(raw_lpns).__name__}"
                )
            lpns = tuple(
                cls._parse_pin(board_id, f"lpns[{i}]", value)
                for i, value in enumerate(raw_lpns)
            )

        def optional_pin(key: str) -> Optional[int]:
            if key not in entry:
                return None
            return cls._parse_pin(board_id, key, entry[key])

        return BoardDef(
            sda=cls._parse_pin(board_id, "sda", entry["sda"]),
            scl=cls._parse_pin(board_id, "scl", entry["scl"]),
            power_enable=optional_pin("pwr_en"),
            interrupt=optional_pin("int"),
            lpns=lpns,
        )

    @staticmethod
    def _parse_pin(board_id: str, key: str, value: Any) -> int:
        # bool is a subclass of int; 'sda = true' is not a pin
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigParseError(
                f"Board '{board_id}': '{key}' must be an integer pin number, "
                + f"got {type(value).__name__}"
            )
        if value < 0:
            raise ConfigParseError(
                f"Board '{board_id}': '{key}' must be a non-negative pin number, got {value}"
            )
        return value
