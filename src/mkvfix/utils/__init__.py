"""Utility helpers for mkvfix."""
