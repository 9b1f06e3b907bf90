"""Data models for mkvfix."""
