"""Core module - foundation components for leaselock.

This module provides:
- Version information
- Custom exceptions
- Configuration dataclasses
- Constants and defaults
- Logging helpers
"""

from leaselock.core.version import __version__

from leaselock.core.exceptions import (
    LeaseLockError,
    LockedError,
    NotLockedError,
    LockStorageError,
    ConfigurationError,
)

from leaselock.core.config import LockerConfig

from leaselock.core.constants import (
    DEFAULT_LEASE_SECONDS,
    DEFAULT_MARKER_SUFFIX,
    ENV_LEASE_SECONDS,
    ENV_MARKER_SUFFIX,
)

from leaselock.core.logging import (
    JSONFormatter,
    setup_logging,
    with_log_context,
)

__all__ = [
    # Version
    '__version__',
    # Exceptions
    'LeaseLockError',
    'LockedError',
    'NotLockedError',
    'LockStorageError',
    'ConfigurationError',
    # Config
    'LockerConfig',
    # Constants
    'DEFAULT_LEASE_SECONDS',
    'DEFAULT_MARKER_SUFFIX',
    'ENV_LEASE_SECONDS',
    'ENV_MARKER_SUFFIX',
    # Logging
    'JSONFormatter',
    'setup_logging',
    'with_log_context',
]
