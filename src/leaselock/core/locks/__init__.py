"""Locking subsystem: timed, advisory locks backed by marker files.

``Locker`` implements the lock lifecycle; storage collaborators decide
where markers live.
"""

from leaselock.core.locks.locker import Locker, MarkerNamer, MarkerStatus, default_marker_namer, suffix_namer
from leaselock.core.locks.storage import FilesystemStorage, Storage

__all__ = [
    "FilesystemStorage",
    "Locker",
    "MarkerNamer",
    "MarkerStatus",
    "Storage",
    "default_marker_namer",
    "suffix_namer",
]
