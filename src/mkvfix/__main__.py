"""Allow running mkvfix with ``python -m mkvfix``."""

from mkvfix.cli import main

main()
