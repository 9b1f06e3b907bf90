"""mkvfix - Fix common problems in Matroska files."""

__version__ = "0.3.0"
