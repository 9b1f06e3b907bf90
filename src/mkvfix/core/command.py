"""ffmpeg command construction.

The command copies every video stream, converts E-AC-3 audio to AAC,
copies everything else and sets the default flag on tracks in the
default language. ffmpeg numbers output streams per type in the order
they are mapped, so the phases below must stay in this order: video,
then audio, then subtitles.
"""

from mkvfix.core.tracks import filter_tracks
from mkvfix.models.track import (
    AUDIO,
    SUBTITLE,
    UNDETERMINED_LANGUAGE,
    Track,
    language_and_disposition,
)
from mkvfix.utils.logger import get_logger

logger = get_logger(__name__)

EAC3_CODEC = "E-AC-3"
AAC_CODEC = "AAC"
AAC_BITRATE = "256k"
OUTPUT_FORMAT = "matroska"


def _pruned(language: str, prune: bool, default_language: str) -> bool:
    """Check whether a track in this language is removed by pruning."""
    return prune and language not in (default_language, UNDETERMINED_LANGUAGE)


def _preamble(input_path: str) -> list[str]:
    return [
        "ffmpeg",
        "-loglevel", "error",
        "-stats",
        "-i", input_path,
        "-c:v", "copy",  # Video is always copied
        "-map", "0:v",  # All video streams come first
        "-map_chapters", "0",
        "-map_metadata", "0",
    ]


def _audio_args(
    tracks: list[Track], prune: bool, default_language: str
) -> list[str]:
    """Build the mapping and codec arguments for all audio tracks."""
    args: list[str] = []
    slot = 0

    for track in tracks:
        if track.type != AUDIO:
            continue

        language, disposition = language_and_disposition(track, default_language)

        if _pruned(language, prune, default_language):
            logger.info("Pruning audio track", track_id=track.id, language=language)
            continue

        if track.codec == EAC3_CODEC:
            # The lookup uses the full track list, not the pruned one
            if language != UNDETERMINED_LANGUAGE and filter_tracks(
                tracks, AUDIO, AAC_CODEC, language
            ):
                logger.info(
                    "Skipping E-AC-3 track, AAC track in same language exists",
                    track_id=track.id,
                    language=language,
                )
                continue

            logger.info("Transcoding E-AC-3 track to AAC", track_id=track.id, slot=slot)
            args += [
                f"-c:a:{slot}", "aac",
                f"-b:a:{slot}", AAC_BITRATE,
                f"-metadata:s:a:{slot}", f"title=AAC Audio ({language})",
            ]
        else:
            logger.debug("Copying audio track", track_id=track.id, slot=slot)
            args += [f"-c:a:{slot}", "copy"]

        # -map takes the input track ID, everything else the output slot
        args += [
            "-map", f"0:{track.id}",
            f"-disposition:a:{slot}", disposition,
        ]
        slot += 1

    return args


def _subtitle_args(
    tracks: list[Track], prune: bool, default_language: str
) -> list[str]:
    """Build the mapping arguments for all subtitle tracks."""
    args: list[str] = []
    slot = 0

    for track in tracks:
        if track.type != SUBTITLE:
            continue

        language, disposition = language_and_disposition(track, default_language)

        if _pruned(language, prune, default_language):
            logger.info("Pruning subtitle track", track_id=track.id, language=language)
            continue

        args += [
            "-map", f"0:{track.id}",
            f"-c:s:{slot}", "copy",
            f"-disposition:s:{slot}", disposition,
        ]
        slot += 1

    return args


def _epilogue(output_path: str) -> list[str]:
    return [
        "-max_interleave_delta", "0",
        "-y",
        "-f", OUTPUT_FORMAT,
        output_path,
    ]


def build_transcode_command(
    input_path: str,
    output_path: str,
    tracks: list[Track],
    prune: bool,
    default_language: str,
) -> list[str]:
    """Build the ffmpeg command that fixes a Matroska file.

    Args:
        input_path: Source Matroska file
        output_path: Destination file
        tracks: All tracks of the source file, in mkvmerge order
        prune: Drop audio/subtitle tracks that are neither in the default
            language nor undetermined
        default_language: Language flagged as default (empty for none)

    Returns:
        Full ffmpeg argument list, program name included
    """
    args = _preamble(str(input_path))
    args += _audio_args(tracks, prune, default_language)
    args += _subtitle_args(tracks, prune, default_language)
    args += _epilogue(str(output_path))
    return args
