"""Exceptions raised while fixing Matroska files.

Every error carries a human-readable message. Apart from
``MissingToolError``, they all concern a single file: the pipeline turns
them into a failed ``ProcessResult`` and moves on to the next file.
"""

from pathlib import Path
from typing import Optional


class MKVFixError(Exception):
    """Base exception for mkvfix errors."""

    def __init__(self, message: str, file_path: Optional[Path] = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error description.
            file_path: File being processed when the error occurred.
        """
        self.message = message
        self.file_path = file_path
        super().__init__(message)


class MissingToolError(MKVFixError):
    """Raised when a required external program is not installed."""

    def __init__(self, tool: str, package: str) -> None:
        self.tool = tool
        self.package = package
        super().__init__(f"{tool} not found. Please install the {package} package")


class InputFileError(MKVFixError):
    """Raised when the input file is missing or is not a Matroska file."""


class TempFileExistsError(MKVFixError):
    """Raised when the temporary output file already exists.

    This usually means another instance is working on the same file, or a
    previous run crashed and left its output behind.
    """

    def __init__(self, temp_path: Path, file_path: Optional[Path] = None) -> None:
        self.temp_path = temp_path
        super().__init__(
            f"Output file '{temp_path}' already exists. Skipping", file_path
        )


class ProbeError(MKVFixError):
    """Raised when mkvmerge fails or its output cannot be parsed."""


class PruneSafetyError(MKVFixError):
    """Raised when pruning would remove every track of one type."""

    def __init__(self, track_type: str, file_path: Optional[Path] = None) -> None:
        self.track_type = track_type
        super().__init__(f"pruning would remove all {track_type} tracks", file_path)


class TranscodeError(MKVFixError):
    """Raised when ffmpeg exits with a non-zero status."""

    def __init__(self, returncode: int, file_path: Optional[Path] = None) -> None:
        self.returncode = returncode
        super().__init__(
            f"ffmpeg conversion failed for {file_path} (exit status {returncode})",
            file_path,
        )


class ReplaceError(MKVFixError):
    """Raised when the transcoded file cannot replace the original."""
