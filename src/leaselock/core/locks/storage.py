"""Storage collaborators for lock markers.

Contract shared by all storage implementations:
- ``create_exclusive`` is the only operation that must be atomic across
  processes; concurrent creators of one path see exactly one success.
- "Missing" is reported as ``FileNotFoundError`` and "already present" as
  ``FileExistsError``. Anything else is an ``OSError`` the caller surfaces.
- Timestamps are epoch seconds; ``now`` must be comparable with
  ``modified_time``.
"""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Protocol

from leaselock.core.constants import MARKER_FILE_MODE


class Storage(Protocol):
    """Backend abstraction for marker existence and timestamps."""

    def modified_time(self, path: Path) -> float:
        """Return the marker's last-modified time."""

    def create_exclusive(self, path: Path) -> None:
        """Create the marker, failing with FileExistsError if it exists."""

    def remove(self, path: Path) -> None:
        """Delete the marker."""

    def set_modified_time(self, path: Path, when: float) -> None:
        """Set the marker's last-modified time."""

    def now(self) -> float:
        """Return the current time."""


class FilesystemStorage:
    """Markers as empty files on a local or shared filesystem.

    Parent directories are never created; a missing parent surfaces as an
    error from ``create_exclusive``.
    """

    def modified_time(self, path: Path) -> float:
        return os.stat(path).st_mtime

    def create_exclusive(self, path: Path) -> None:
        fd = os.open(str(path), os.O_CREAT | os.O_EXCL | os.O_WRONLY, MARKER_FILE_MODE)
        os.close(fd)

    def remove(self, path: Path) -> None:
        os.unlink(path)

    def set_modified_time(self, path: Path, when: float) -> None:
        os.utime(path, (when, when))

    def now(self) -> float:
        return time.time()
