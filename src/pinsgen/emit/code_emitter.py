"""
Rust source generation for esp-hal firmware.

The generated fragment is meant to be spliced into an example or binary with
'include!' and defines a 'pins!' macro that moves the configured pins out of
the 'Io' handle:

    include!("./pins_gen.in");
    let (SDA, SCL, PWR_EN, INT) = pins!(io);

Optional pins come out as Option values, so firmware code can tell a board
without a power-enable line from one that wires it to GPIO0.
"""

from typing import List, Optional, Tuple

from ..config.pin_config import BoardDef


class InvalidGenerationTarget(Exception):
    """Exception raised when pins.toml does not name a usable output path."""

    pass


class CodeEmitter:
    """
    Renders a board's pin assignment as a 'pins!' macro.

    The output depends only on the board identifier, the BoardDef and the
    configuration file name given at construction, so repeated builds
    produce byte-identical artifacts.

    The usage hint in the header reads 'include!("./<file name>")', which
    holds when the including source sits in the same directory as the
    generated file (as the examples do). Other layouts need the path to the
    'generate' target relative to the including file.

    Usage:
        emitter = CodeEmitter(source_name="pins.toml")
        text = emitter.render("devkit", BoardDef(sda=4, scl=5), "pins_gen.in")
    """

    MACRO_NAME = "pins"

    OUTPUT_TYPE = "esp_hal::gpio::Output<'_>"
    INPUT_TYPE = "esp_hal::gpio::Input<'_>"

    def __init__(self, source_name: str = "pins.toml"):
        """
        Initialize the emitter.

        Args:
            source_name: Configuration file name quoted in the header comment.
                Pass a basename; absolute paths would make output
                checkout-dependent.
        """
        self.source_name = source_name

    def render(self, board_id: str, board: BoardDef, generate: str) -> str:
        """
        Render the source fragment for one board.

        Args:
            board_id: Board identifier, recorded in the header comment
            board: Resolved pin assignment
            generate: The document's 'generate' path

        Returns:
            Fragment text with '\\n' line endings and a trailing newline

        Raises:
            InvalidGenerationTarget: If 'generate' is empty
        """
        if not generate or not generate.strip():
            raise InvalidGenerationTarget(
                f"'generate' in {self.source_name} is empty; "
                + "set it to the path of the file to write"
            )

        names = ["SDA", "SCL", "PWR_EN", "INT"]
        if board.lpns is not None:
            names.append("LPns")

        source = _comment_text(self.source_name)
        lines = [
            f"// Generated by pinsgen from '{source}' for board '{_comment_text(board_id)}'.",
            "//",
            "// DO NOT EDIT. Changes made here will be lost on the next build.",
            f"// Edit '{source}' instead, and rebuild.",
            "//",
            "// Usage:",
            f'//   include!("./{_comment_text(_basename(generate))}");',
            f"//   let ({', '.join(names)}) = {self.MACRO_NAME}!(io);",
            "//",
            f"macro_rules! {self.MACRO_NAME} {{",
            "    ($io:ident) => {{",
            "        (",
        ]
        for expr in self.pin_expressions(board):
            lines.append(f"            {expr},")
        lines.extend([
            "        )",
            "    }};",
            "}",
            "",
        ])
        return "\n".join(lines)

    def pin_expressions(self, board: BoardDef) -> List[str]:
        """
        Build the tuple element expressions in order.

        Args:
            board: Resolved pin assignment

        Returns:
            [sda, scl, pwr_en, int] expressions, plus the lpns array when the
            board configures one
        """
        exprs = [
            self._pin(board.sda),
            self._pin(board.scl),
            self._optional_output(board.power_enable),
            self._optional_input(board.interrupt),
        ]
        if board.lpns is not None:
            exprs.append(self._output_array(board.lpns))
        return exprs

    @staticmethod
    def _pin(pin: int) -> str:
        return f"$io.pins.gpio{pin}"

    def _output(self, pin: int, level: str) -> str:
        return f"esp_hal::gpio::Output::new({self._pin(pin)}, esp_hal::gpio::Level::{level})"

    def _optional_output(self, pin: Optional[int]) -> str:
        # Sensor stays powered until the firmware cycles it
        if pin is None:
            return f"None::<{self.OUTPUT_TYPE}>"
        return f"Some({self._output(pin, 'High')})"

    def _optional_input(self, pin: Optional[int]) -> str:
        if pin is None:
            return f"None::<{self.INPUT_TYPE}>"
        return f"Some(esp_hal::gpio::Input::new({self._pin(pin)}, esp_hal::gpio::Pull::None))"

    def _output_array(self, pins: Tuple[int, ...]) -> str:
        # All LPn lines start low: every sensor off the bus until selected
        if not pins:
            return f"[] as [{self.OUTPUT_TYPE}; 0]"
        return "[" + ", ".join(self._output(pin, "Low") for pin in pins) + "]"


def _basename(path: str) -> str:
    return path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]


def _comment_text(text: str) -> str:
    """Escape control characters so a value cannot break out of a '//' comment."""
    return "".join(ch if ch.isprintable() else repr(ch)[1:-1] for ch in text)
