"""
Code generation for pinsgen.

This module provides:
- Rendering of a board's pin assignment as a Rust 'pins!' macro
- Writing the rendered fragment to disk
"""

from .artifact_writer import ArtifactWriteError, ArtifactWriter
from .code_emitter import CodeEmitter, InvalidGenerationTarget

__all__ = [
    "CodeEmitter",
    "InvalidGenerationTarget",
    "ArtifactWriter",
    "ArtifactWriteError",
]
