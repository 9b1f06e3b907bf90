"""Track data models."""

from dataclasses import dataclass

UNDETERMINED_LANGUAGE = "und"

VIDEO = "video"
AUDIO = "audio"
SUBTITLE = "subtitle"


@dataclass(frozen=True)
class Track:
    """Represents a single track inside a Matroska file."""

    id: int  # mkvmerge track ID, used verbatim in ffmpeg mappings
    type: str  # "video", "audio", "subtitle" or anything mkvmerge reports
    codec: str  # Codec name as reported by mkvmerge (e.g., "E-AC-3", "AAC")
    language: str = ""  # Language code, empty when unspecified

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"Track {self.id} ({self.type}): {self.codec} [{self.language or '-'}]"


def resolve_language(track: Track) -> str:
    """Return the track language, or "und" if the track has none."""
    return track.language or UNDETERMINED_LANGUAGE


def language_and_disposition(track: Track, default_language: str) -> tuple[str, str]:
    """Resolve the language and ffmpeg disposition of a track.

    Args:
        track: Track to inspect
        default_language: Language that should be flagged as default

    Returns:
        Tuple of (language, disposition), where disposition is "default"
        for tracks in the default language and "-default" otherwise
    """
    language = resolve_language(track)
    disposition = "default" if language == default_language else "-default"
    return language, disposition
