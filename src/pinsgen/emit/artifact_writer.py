"""Writing generated fragments to disk."""

import contextlib
from pathlib import Path


class ArtifactWriteError(Exception):
    """Exception raised when a generated artifact cannot be written."""

    def __init__(self, path: Path, message: str):
        self.path = Path(path)
        super().__init__(f"Failed to write {self.path}: {message}")


class ArtifactWriter:
    """Utility class for persisting generated source fragments."""

    @staticmethod
    def write(path: Path, data: bytes) -> int:
        """
        Write an artifact atomically, replacing any existing file.

        The fragment goes to '<name>.tmp' beside the destination first and is
        then renamed over it, so a failed write leaves the previous artifact
        (or no file) in place, never a truncated one. Parent directories are
        created as needed. Data is written in binary mode so line endings
        are exactly those of the fragment.

        Args:
            path: Destination file path
            data: Encoded fragment

        Returns:
            Number of bytes written

        Raises:
            ArtifactWriteError: If the directory or file cannot be written
        """
        path = Path(path)
        temp_file = path.with_name(path.name + ".tmp")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, "wb") as f:
                written = f.write(data)

            # Atomic rename
            temp_file.replace(path)
            return written

        except KeyboardInterrupt:
            with contextlib.suppress(OSError):
                temp_file.unlink(missing_ok=True)
            raise
        except OSError as e:
            # The parent may not exist or be a file; nothing to clean up then
            with contextlib.suppress(OSError):
                temp_file.unlink(missing_ok=True)
            raise ArtifactWriteError(path, e.strerror or str(e)) from e
