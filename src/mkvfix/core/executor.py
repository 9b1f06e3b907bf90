"""Execution of the ffmpeg transcode and replacement of the original file."""

import shutil
import subprocess
import sys
from pathlib import Path

from mkvfix.exceptions import MissingToolError, ReplaceError, TranscodeError
from mkvfix.utils.logger import get_logger

logger = get_logger(__name__)


def check_requirements(mkvmerge: str = "mkvmerge", ffmpeg: str = "ffmpeg") -> None:
    """Make sure the external programs we need are installed.

    Raises:
        MissingToolError: If mkvmerge or ffmpeg can't be found
    """
    if not shutil.which(mkvmerge):
        raise MissingToolError(mkvmerge, "mkvtoolnix")
    if not shutil.which(ffmpeg):
        raise MissingToolError(ffmpeg, "ffmpeg")


class Transcoder:
    """Run ffmpeg commands and swap the result in place of the original."""

    def __init__(self, ffmpeg: str = "ffmpeg"):
        """Initialize the transcoder.

        Args:
            ffmpeg: ffmpeg executable name or path, replaces argv[0]
        """
        self.ffmpeg = ffmpeg

    def _cleanup(self, file_path: Path) -> None:
        try:
            file_path.unlink(missing_ok=True)
            logger.debug("Cleaned up file", file=str(file_path))
        except OSError as e:
            logger.warning("Failed to cleanup file", file=str(file_path), error=str(e))

    def transcode(self, command: list[str], input_file: Path, output_file: Path) -> None:
        """Run ffmpeg and move its output over the input file.

        ffmpeg's stdout and stderr are forwarded to our stderr. There is no
        timeout: large files can take a long time.

        Args:
            command: Full ffmpeg argument list (as built by the command builder)
            input_file: Original file, replaced on success
            output_file: Temporary file ffmpeg writes to

        Raises:
            TranscodeError: If ffmpeg exits with a non-zero status
            ReplaceError: If the original file can't be replaced
        """
        cmd = [self.ffmpeg, *command[1:]]

        logger.info("Executing ffmpeg", file=str(input_file), command=cmd)

        result = subprocess.run(cmd, stdout=sys.stderr, stderr=sys.stderr)

        if result.returncode != 0:
            logger.error(
                "ffmpeg failed",
                file=str(input_file),
                returncode=result.returncode,
            )
            self._cleanup(output_file)
            raise TranscodeError(result.returncode, input_file)

        self.replace(output_file, input_file)

    def replace(self, output_file: Path, input_file: Path) -> None:
        """Atomically replace the original file with the transcoded one.

        Raises:
            ReplaceError: If the original is gone or the rename fails
        """
        if not input_file.exists():
            raise ReplaceError(
                f"original file ({input_file}) no longer exists after transcoding",
                input_file,
            )

        try:
            output_file.replace(input_file)
        except OSError as e:
            raise ReplaceError(
                f"failed to move '{output_file}' to '{input_file}': {e}", input_file
            ) from e

        logger.debug("Replaced original with transcoded file", file=str(input_file))
