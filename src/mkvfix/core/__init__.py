"""Core processing logic for mkvfix."""
