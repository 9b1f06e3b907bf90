"""Track filtering and prune safety checks."""

from typing import Iterable

from mkvfix.exceptions import PruneSafetyError
from mkvfix.models.track import UNDETERMINED_LANGUAGE, Track, resolve_language
from mkvfix.utils.logger import get_logger

logger = get_logger(__name__)


def filter_tracks(
    tracks: Iterable[Track], track_type: str = "", codec: str = "", language: str = ""
) -> list[Track]:
    """Return the tracks matching every given criterion.

    Empty criteria match anything. The relative order of the input is kept.

    Args:
        tracks: Tracks to filter
        track_type: Track type to match (e.g., "audio")
        codec: Codec to match (e.g., "E-AC-3")
        language: Language to match against the raw track language

    Returns:
        List of matching tracks (possibly empty)
    """
    return [
        track
        for track in tracks
        if (not track_type or track.type == track_type)
        and (not codec or track.codec == codec)
        and (not language or track.language == language)
    ]


def check_prune_safety(tracks: list[Track], default_language: str) -> None:
    """Make sure pruning keeps at least one track of every type.

    A track survives pruning when its resolved language is the default
    language or "und".

    Args:
        tracks: All tracks in the file
        default_language: Language to keep

    Raises:
        PruneSafetyError: If every track of some type would be removed
    """
    kept_languages = {default_language, UNDETERMINED_LANGUAGE}
    surviving_types = {
        track.type for track in tracks if resolve_language(track) in kept_languages
    }

    # dict.fromkeys keeps the order in which types first appear
    for track_type in dict.fromkeys(track.type for track in tracks):
        if track_type not in surviving_types:
            logger.warning(
                "Pruning would remove all tracks of a type",
                track_type=track_type,
                language=default_language,
            )
            raise PruneSafetyError(track_type)
