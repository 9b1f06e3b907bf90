"""Processing pipeline orchestrator."""

import shlex
import time
from pathlib import Path

from mkvfix.config import Config
from mkvfix.core.analyzer import TrackAnalyzer
from mkvfix.core.command import EAC3_CODEC, build_transcode_command
from mkvfix.core.executor import Transcoder
from mkvfix.core.tracks import check_prune_safety, filter_tracks
from mkvfix.exceptions import (
    InputFileError,
    MKVFixError,
    ReplaceError,
    TempFileExistsError,
    TranscodeError,
)
from mkvfix.models.file import ProcessResult
from mkvfix.models.track import AUDIO
from mkvfix.utils.logger import get_logger

logger = get_logger(__name__)

MKV_EXTENSION = ".mkv"


def temp_output_path(file_path: Path, suffix: str = "_with_aac") -> Path:
    """Return the temporary output path used while transcoding a file.

    The path lives next to the input so the final rename stays on the same
    filesystem, e.g. ``movie.mkv`` -> ``movie_with_aac.mkv.TMP``.
    """
    extension = file_path.suffix.lower()
    return file_path.with_name(f"{file_path.stem}{suffix}{extension}.TMP")


class ProcessingPipeline:
    """Orchestrates probing, command building and transcoding of one file."""

    def __init__(self, config: Config):
        """Initialize the pipeline with configuration.

        Args:
            config: Application configuration
        """
        self.config = config
        self.analyzer = TrackAnalyzer(config.tools.mkvmerge)
        self.transcoder = Transcoder(config.tools.ffmpeg)

    def _validate(self, file_path: Path) -> Path:
        if not file_path.exists():
            raise InputFileError(f"file not found: {file_path}", file_path)

        if not file_path.is_file():
            raise InputFileError(f"not a regular file: {file_path}", file_path)

        if file_path.suffix.lower() != MKV_EXTENSION:
            raise InputFileError(f"not an MKV file: {file_path}", file_path)

        # Refuse to run if another instance (or a crashed one) left output behind
        output_path = temp_output_path(file_path, self.config.execution.output_suffix)
        if output_path.exists():
            raise TempFileExistsError(output_path, file_path)

        return output_path

    def process(self, file_path: Path) -> ProcessResult:
        """Process a single file through the complete pipeline.

        Pipeline steps:
        1. Validation (file exists, is an MKV, no leftover temporary output)
        2. Track analysis (mkvmerge)
        3. Prune safety check (only when pruning)
        4. Command building
        5. Execution (ffmpeg) and replacement of the original

        Args:
            file_path: Path to the file to process

        Returns:
            ProcessResult with status and details
        """
        start_time = time.time()
        language = self.config.language
        prune = self.config.prune

        logger.info("Processing file", file=str(file_path))

        try:
            output_path = self._validate(file_path)

            tracks = self.analyzer.analyze(file_path)
            logger.info(
                "Input tracks",
                file=str(file_path),
                tracks=[str(track) for track in tracks],
            )

            if self.config.execution.require_eac3 and not filter_tracks(
                tracks, AUDIO, EAC3_CODEC
            ):
                logger.info("No E-AC-3 audio tracks found", file=str(file_path))
                return ProcessResult(
                    status="skipped", file_path=file_path, reason="no_eac3_tracks"
                )

            if prune:
                check_prune_safety(tracks, language)

            command = build_transcode_command(
                str(file_path), str(output_path), tracks, prune, language
            )

            if self.config.execution.dry_run:
                logger.info(
                    "DRY RUN: Would execute command",
                    file=str(file_path),
                    command=shlex.join(command),
                )
                return ProcessResult(status="dry_run", file_path=file_path, command=command)

            self.transcoder.transcode(command, file_path, output_path)

        except (TranscodeError, ReplaceError) as e:
            logger.error("Execution failed", file=str(file_path), error=e.message)
            return ProcessResult(
                status="failed", file_path=file_path, reason="execution_failed", error=e.message
            )

        except MKVFixError as e:
            logger.error("Processing error", file=str(file_path), error=e.message)
            return ProcessResult(status="error", file_path=file_path, error=e.message)

        except Exception as e:
            logger.exception("Pipeline error", file=str(file_path), error=str(e))
            return ProcessResult(status="error", file_path=file_path, error=str(e))

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "File processed successfully",
            file=str(file_path),
            duration_ms=duration_ms,
        )
        return ProcessResult(status="success", file_path=file_path, command=command)
