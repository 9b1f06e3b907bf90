"""File scanner for discovering Matroska files."""

from pathlib import Path
from typing import List

from mkvfix.utils.logger import get_logger

logger = get_logger(__name__)


class FileScanner:
    """Scan directories for Matroska files."""

    SUPPORTED_EXTENSIONS = {".mkv"}

    def scan(self, path: Path, recursive: bool = True) -> List[Path]:
        """Scan a path for Matroska files.

        Args:
            path: Path to scan (file or directory)
            recursive: If True, scan subdirectories recursively

        Returns:
            List of Matroska file paths, sorted by path

        Raises:
            FileNotFoundError: If path doesn't exist
            ValueError: If path is not a file or directory
        """
        if not path.exists():
            raise FileNotFoundError(f"Path not found: {path}")

        if path.is_file():
            if path.suffix.lower() in self.SUPPORTED_EXTENSIONS:
                logger.debug("Single file matched", file=str(path))
                return [path]
            logger.warning(
                "File extension not supported",
                file=str(path),
                extension=path.suffix,
            )
            return []

        if path.is_dir():
            candidates = path.rglob("*") if recursive else path.glob("*")
            # Match extensions case-insensitively (".MKV" is common)
            files = sorted(
                p
                for p in candidates
                if p.is_file() and p.suffix.lower() in self.SUPPORTED_EXTENSIONS
            )

            logger.info(
                "Directory scan complete",
                directory=str(path),
                recursive=recursive,
                total_files=len(files),
            )
            return files

        raise ValueError(f"Path is neither a file nor a directory: {path}")
