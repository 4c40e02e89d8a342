"""Configuration parsing modules for pinsgen."""

from .board_resolver import BoardNotFoundError, BoardResolver
from .pin_config import BoardDef, ConfigParseError, PinConfigDocument, PinConfigLoader

__all__ = [
    "BoardDef",
    "PinConfigDocument",
    "PinConfigLoader",
    "ConfigParseError",
    "BoardResolver",
    "BoardNotFoundError",
]
