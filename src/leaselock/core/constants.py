"""Constants and default values for leaselock.

Defaults here are the documented behavior of an unconfigured ``Locker``.
"""

# ==================== LEASE DEFAULTS ====================

# A marker older than this no longer holds the lock
DEFAULT_LEASE_SECONDS: float = 60.0

# Marker path for resource X is X + this suffix
DEFAULT_MARKER_SUFFIX: str = ".lock"

# Permission bits for newly created marker files
MARKER_FILE_MODE: int = 0o644

# ==================== ENVIRONMENT ====================

ENV_LEASE_SECONDS: str = "LEASELOCK_LEASE_SECONDS"
ENV_MARKER_SUFFIX: str = "LEASELOCK_MARKER_SUFFIX"
ENV_LOG_LEVEL: str = "LOG_LEVEL"

VALID_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
