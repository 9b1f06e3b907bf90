"""Track analysis using mkvmerge."""

import json
import subprocess
from pathlib import Path

from mkvfix.exceptions import ProbeError
from mkvfix.models.track import SUBTITLE, Track
from mkvfix.utils.logger import get_logger

logger = get_logger(__name__)

# mkvmerge calls subtitle tracks "subtitles"
_TYPE_ALIASES = {"subtitles": SUBTITLE}


class TrackAnalyzer:
    """Read the track list of a Matroska file with mkvmerge --identify."""

    def __init__(self, mkvmerge: str = "mkvmerge"):
        """Initialize the analyzer.

        Args:
            mkvmerge: mkvmerge executable name or path
        """
        self.mkvmerge = mkvmerge

    def analyze(self, file_path: Path) -> list[Track]:
        """Extract track information from a Matroska file.

        Args:
            file_path: Path to the Matroska file

        Returns:
            List of Track objects in mkvmerge order

        Raises:
            ProbeError: If mkvmerge fails or its output can't be parsed
        """
        logger.debug("Analyzing tracks", file=str(file_path))

        cmd = [self.mkvmerge, "--identify", "-F", "json", str(file_path)]

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
        except subprocess.CalledProcessError as e:
            logger.error(
                "mkvmerge failed",
                file=str(file_path),
                returncode=e.returncode,
                stderr=e.stderr,
            )
            raise ProbeError(f"error running mkvmerge: exit status {e.returncode}", file_path) from e

        try:
            tracks = self.parse(result.stdout)
        except (ValueError, KeyError, TypeError) as e:
            logger.error(
                "Failed to parse mkvmerge output", file=str(file_path), error=str(e)
            )
            raise ProbeError(f"error parsing mkvmerge JSON output: {e}", file_path) from e

        logger.info(
            "Tracks analyzed",
            file=str(file_path),
            track_count=len(tracks),
        )
        return tracks

    @staticmethod
    def parse(output: str) -> list[Track]:
        """Parse the JSON document produced by mkvmerge --identify -F json.

        Raises:
            ValueError: If the output is not valid JSON
            KeyError: If a track lacks its ID, type or codec
        """
        data = json.loads(output)

        tracks = []
        for entry in data.get("tracks", []):
            properties = entry.get("properties") or {}
            track_type = entry["type"]
            tracks.append(
                Track(
                    id=int(entry["id"]),
                    type=_TYPE_ALIASES.get(track_type, track_type),
                    codec=entry["codec"],
                    language=properties.get("language") or "",
                )
            )
        return tracks
