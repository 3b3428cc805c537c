"""leaselock - timed, advisory locks backed by marker files.

Example:
    >>> from leaselock import Locker, LockedError
    >>> locker = Locker()
    >>> try:
    ...     locker.acquire("data.csv")
    ... except LockedError:
    ...     pass  # someone else holds it; try again later
"""

from leaselock.core import (
    ConfigurationError,
    LeaseLockError,
    LockedError,
    LockerConfig,
    LockStorageError,
    NotLockedError,
    __version__,
    setup_logging,
)
from leaselock.core.locks import (
    FilesystemStorage,
    Locker,
    MarkerStatus,
    Storage,
    suffix_namer,
)

__all__ = [
    "__version__",
    "ConfigurationError",
    "FilesystemStorage",
    "LeaseLockError",
    "LockedError",
    "Locker",
    "LockerConfig",
    "LockStorageError",
    "MarkerStatus",
    "NotLockedError",
    "Storage",
    "setup_logging",
    "suffix_namer",
]
