"""Processing result models."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional


@dataclass
class ProcessResult:
    """Result of processing a single file."""

    status: Literal["success", "skipped", "failed", "error", "dry_run"]
    file_path: Optional[Path] = None
    command: Optional[list[str]] = None  # ffmpeg command that was (or would be) run
    reason: Optional[str] = None  # Reason for skip/failure
    error: Optional[str] = None  # Error message if failed

    def __str__(self) -> str:
        """Human-readable representation."""
        name = self.file_path.name if self.file_path else "<unknown>"
        if self.status == "success":
            return f"✓ {name}: Operation successful"
        elif self.status == "skipped":
            return f"⊘ {name}: Skipped ({self.reason})"
        elif self.status == "dry_run":
            return f"⊙ {name}: Would run {len(self.command or [])}-argument ffmpeg command (dry run)"
        else:
            return f"✗ {name}: Failed ({self.error or self.reason})"
