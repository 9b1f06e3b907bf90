"""Unit tests for the ffmpeg command builder."""

from mkvfix.core.command import build_transcode_command
from mkvfix.models.track import Track

PREAMBLE = [
    "ffmpeg",
    "-loglevel", "error",
    "-stats",
    "-i", "input.mkv",
    "-c:v", "copy",
    "-map", "0:v",
    "-map_chapters", "0",
    "-map_metadata", "0",
]

EPILOGUE = [
    "-max_interleave_delta", "0",
    "-y",
    "-f", "matroska",
    "output.mkv",
]


def build(tracks, prune=False, language="eng"):
    return build_transcode_command("input.mkv", "output.mkv", tracks, prune, language)


def body(args):
    """Strip the fixed preamble and epilogue."""
    assert args[: len(PREAMBLE)] == PREAMBLE
    assert args[-len(EPILOGUE):] == EPILOGUE
    return args[len(PREAMBLE):-len(EPILOGUE)]


def mapped_ids(args):
    """Return the source track IDs mapped after the video streams."""
    return [args[i + 1] for i, arg in enumerate(args) if arg == "-map"][1:]


class TestBuildTranscodeCommand:
    """Test build_transcode_command."""

    def test_no_tracks(self):
        """Without tracks only the preamble and epilogue are emitted."""
        assert build([]) == PREAMBLE + EPILOGUE

    def test_eac3_redundant_with_aac(self, sample_tracks):
        """E-AC-3 is dropped when an AAC track in the same language exists."""
        assert body(build(sample_tracks)) == [
            "-c:a:0", "copy",
            "-map", "0:1",
            "-disposition:a:0", "default",
            "-map", "0:3",
            "-c:s:0", "copy",
            "-disposition:s:0", "default",
        ]

    def test_eac3_transcoded_without_aac(self, sample_tracks):
        """E-AC-3 is converted to AAC when there is no equivalent."""
        tracks = [t for t in sample_tracks if t.codec != "AAC"]

        assert body(build(tracks)) == [
            "-c:a:0", "aac",
            "-b:a:0", "256k",
            "-metadata:s:a:0", "title=AAC Audio (eng)",
            "-map", "0:0",
            "-disposition:a:0", "default",
            "-map", "0:3",
            "-c:s:0", "copy",
            "-disposition:s:0", "default",
        ]

    def test_aac_in_other_language_does_not_count(self):
        """The AAC equivalent must share the E-AC-3 track language."""
        tracks = [
            Track(id=1, type="audio", codec="E-AC-3", language="eng"),
            Track(id=2, type="audio", codec="AAC", language="spa"),
        ]

        args = body(build(tracks))

        assert args[:6] == [
            "-c:a:0", "aac",
            "-b:a:0", "256k",
            "-metadata:s:a:0", "title=AAC Audio (eng)",
        ]
        assert args[6:] == [
            "-map", "0:1",
            "-disposition:a:0", "default",
            "-c:a:1", "copy",
            "-map", "0:2",
            "-disposition:a:1", "-default",
        ]

    def test_undetermined_eac3_always_transcoded(self):
        """E-AC-3 without a language is never considered redundant."""
        tracks = [
            Track(id=1, type="audio", codec="E-AC-3", language=""),
            Track(id=2, type="audio", codec="AAC", language=""),
        ]

        args = build(tracks)

        assert "title=AAC Audio (und)" in args
        assert mapped_ids(args) == ["0:1", "0:2"]

    def test_no_default_language(self, multilang_tracks):
        """With no default language every track is explicitly not default."""
        args = build(multilang_tracks, language="")

        dispositions = [
            args[i + 1] for i, arg in enumerate(args) if arg.startswith("-disposition:")
        ]
        assert dispositions == ["-default"] * 6

    def test_video_tracks_never_mapped_individually(self, multilang_tracks):
        """Video goes through "-map 0:v" only, even when pruning."""
        args = build(multilang_tracks, prune=True)

        assert "0:0" not in args
        assert args.count("0:v") == 1

    def test_audio_before_subtitles(self, multilang_tracks):
        """Audio mappings precede subtitle mappings regardless of input order."""
        tracks = list(reversed(multilang_tracks))

        args = build(tracks)

        assert mapped_ids(args) == ["0:3", "0:2", "0:1", "0:6", "0:5", "0:4"]

    def test_source_ids_preserved(self):
        """-map uses the mkvmerge track ID, codec options use the output slot."""
        tracks = [
            Track(id=7, type="audio", codec="DTS", language="eng"),
            Track(id=12, type="subtitle", codec="SubRip/SRT", language="eng"),
        ]

        assert body(build(tracks)) == [
            "-c:a:0", "copy",
            "-map", "0:7",
            "-disposition:a:0", "default",
            "-map", "0:12",
            "-c:s:0", "copy",
            "-disposition:s:0", "default",
        ]

    def test_prune(self, multilang_tracks):
        """Pruning drops other languages and keeps undetermined tracks."""
        assert body(build(multilang_tracks, prune=True)) == [
            "-c:a:0", "aac",
            "-b:a:0", "256k",
            "-metadata:s:a:0", "title=AAC Audio (eng)",
            "-map", "0:1",
            "-disposition:a:0", "default",
            "-c:a:1", "copy",
            "-map", "0:3",
            "-disposition:a:1", "-default",
            "-map", "0:5",
            "-c:s:0", "copy",
            "-disposition:s:0", "default",
            "-map", "0:6",
            "-c:s:1", "copy",
            "-disposition:s:1", "-default",
        ]

    def test_no_prune_keeps_all_languages(self, multilang_tracks):
        """Without pruning every audio and subtitle track is mapped."""
        args = build(multilang_tracks)

        assert mapped_ids(args) == ["0:1", "0:2", "0:3", "0:4", "0:5", "0:6"]
        assert "title=AAC Audio (spa)" in args
        assert args[args.index("-disposition:a:1") + 1] == "-default"
        assert args[args.index("-disposition:s:1") + 1] == "default"

    def test_skipped_tracks_do_not_use_slots(self):
        """Output slots are numbered only for emitted tracks."""
        tracks = [
            Track(id=0, type="audio", codec="AAC", language="fre"),
            Track(id=1, type="audio", codec="E-AC-3", language="eng"),
            Track(id=2, type="audio", codec="AAC", language="eng"),
            Track(id=3, type="audio", codec="FLAC", language="eng"),
        ]

        args = build(tracks, prune=True)

        assert "-c:a:2" not in args
        assert args[args.index("-c:a:0") + 1] == "copy"
        assert args[args.index("-c:a:0") + 3] == "0:2"
        assert args[args.index("-c:a:1") + 3] == "0:3"

    def test_redundancy_check_uses_unfiltered_tracks(self):
        """The AAC equivalent is looked up in the full track list.

        Only the language is compared, so the AAC twin of a kept E-AC-3
        track is kept by pruning as well and the language stays covered.
        """
        tracks = [
            Track(id=1, type="audio", codec="E-AC-3", language="eng"),
            Track(id=2, type="audio", codec="E-AC-3", language="spa"),
            Track(id=3, type="audio", codec="AAC", language="eng"),
            Track(id=4, type="audio", codec="AAC", language="spa"),
        ]

        args = build(tracks, prune=True)

        assert mapped_ids(args) == ["0:3"]
        assert "aac" not in args
        assert args[args.index("-disposition:a:0") + 1] == "default"

    def test_input_is_not_modified(self, sample_tracks):
        """The builder is a pure function of its inputs."""
        snapshot = list(sample_tracks)

        first = build(sample_tracks)
        second = build(sample_tracks)

        assert first == second
        assert sample_tracks == snapshot
