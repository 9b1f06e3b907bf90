"""Shared pytest fixtures for mkvfix tests."""

import pytest

from mkvfix.config import Config
from mkvfix.models.track import Track


@pytest.fixture
def default_config():
    """Create a configuration with English as default language."""
    return Config(language="eng")


@pytest.fixture
def sample_tracks():
    """Tracks of a typical file: E-AC-3 and AAC English audio, video, subtitles."""
    return [
        Track(id=0, type="audio", codec="E-AC-3", language="eng"),
        Track(id=1, type="audio", codec="AAC", language="eng"),
        Track(id=2, type="video", codec="AVC/H.264/MPEG-4p10", language=""),
        Track(id=3, type="subtitle", codec="SubRip/SRT", language="eng"),
    ]


@pytest.fixture
def multilang_tracks():
    """Tracks in several languages, including undetermined ones."""
    return [
        Track(id=0, type="video", codec="HEVC/H.265/MPEG-H", language=""),
        Track(id=1, type="audio", codec="E-AC-3", language="eng"),
        Track(id=2, type="audio", codec="E-AC-3", language="spa"),
        Track(id=3, type="audio", codec="DTS", language=""),
        Track(id=4, type="subtitle", codec="SubRip/SRT", language="spa"),
        Track(id=5, type="subtitle", codec="SubRip/SRT", language="eng"),
        Track(id=6, type="subtitle", codec="HDMV PGS", language=""),
    ]


@pytest.fixture
def mkvmerge_json():
    """mkvmerge --identify -F json output for a small file."""
    return """{
  "container": {"recognized": true, "supported": true, "type": "Matroska"},
  "tracks": [
    {"codec": "AVC/H.264/MPEG-4p10", "id": 0, "type": "video",
     "properties": {"language": "und", "pixel_dimensions": "1920x1080"}},
    {"codec": "E-AC-3", "id": 1, "type": "audio",
     "properties": {"language": "eng", "audio_channels": 6}},
    {"codec": "AAC", "id": 2, "type": "audio", "properties": {}},
    {"codec": "SubRip/SRT", "id": 3, "type": "subtitles",
     "properties": {"language": "spa"}}
  ]
}"""
