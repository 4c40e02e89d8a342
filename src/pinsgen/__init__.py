"""pinsgen - build-time board pin mapping generator for esp-hal firmware."""

__version__ = "0.1.0"

from .config import (  # noqa: E402
    BoardDef,
    BoardNotFoundError,
    BoardResolver,
    ConfigParseError,
    PinConfigDocument,
    PinConfigLoader,
)
from .emit import (  # noqa: E402
    ArtifactWriteError,
    ArtifactWriter,
    CodeEmitter,
    InvalidGenerationTarget,
)
from .generator import GenerationResult, PinsGenerator  # noqa: E402

__all__ = [
    "BoardDef",
    "PinConfigDocument",
    "PinConfigLoader",
    "ConfigParseError",
    "BoardResolver",
    "BoardNotFoundError",
    "CodeEmitter",
    "InvalidGenerationTarget",
    "ArtifactWriter",
    "ArtifactWriteError",
    "PinsGenerator",
    "GenerationResult",
]
