"""Custom exceptions for leaselock.

Every failure an operation can report is a distinct exception type, so
callers can tell "I hold the lock", "someone else holds the lock" and
"the storage layer is broken" apart without inspecting messages.
"""

from __future__ import annotations

import os


class LeaseLockError(Exception):
    """Base exception for all leaselock errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class LockedError(LeaseLockError):
    """Raised by acquire when a live lock is already held for the resource.

    This includes losing the create race against another acquirer. The
    library never retries; treat it as "try again later".

    Attributes:
        resource: Resource path that was requested
        marker_path: Marker file that represents the lock
    """

    def __init__(self, resource: str | os.PathLike, marker_path: str | os.PathLike):
        self.resource = os.fspath(resource)
        self.marker_path = os.fspath(marker_path)
        super().__init__(f"Resource '{self.resource}' is locked", details=f"marker {self.marker_path}")

    def __reduce__(self):
        return (type(self), (self.resource, self.marker_path))


class NotLockedError(LeaseLockError):
    """Raised by renew when there is no live lock to renew.

    Attributes:
        resource: Resource path that was renewed
        marker_path: Marker file that was expected to exist
    """

    def __init__(self, resource: str | os.PathLike, marker_path: str | os.PathLike):
        self.resource = os.fspath(resource)
        self.marker_path = os.fspath(marker_path)
        super().__init__(f"Resource '{self.resource}' is not locked", details=f"marker {self.marker_path}")

    def __reduce__(self):
        return (type(self), (self.resource, self.marker_path))


class LockStorageError(LeaseLockError, OSError):
    """Raised when the storage layer fails in an unanticipated way.

    Wraps the underlying ``OSError`` (permission denied, missing parent
    directory, I/O failure, ...). Also an ``OSError`` subclass, so existing
    ``except OSError`` handlers keep working.

    Attributes:
        operation: Storage operation that failed (stat, create, remove, touch)
        marker_path: Marker file the operation targeted
        original_error: The exception raised by the storage layer
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        marker_path: str | os.PathLike | None = None,
        original_error: Exception | None = None,
    ):
        self.operation = operation
        self.marker_path = os.fspath(marker_path) if marker_path is not None else None
        self.original_error = original_error
        details = str(original_error) if original_error is not None else None
        super().__init__(message, details)
        if isinstance(original_error, OSError):
            # Keep the OSError view of the failure intact for errno-based handlers.
            self.errno = original_error.errno
            self.strerror = original_error.strerror
            self.filename = original_error.filename if original_error.filename is not None else self.marker_path

    def __reduce__(self):
        return (type(self), (self.message, self.operation, self.marker_path, self.original_error))

    def __str__(self) -> str:
        parts = [self.message]
        if self.operation:
            parts.append(f"during {self.operation}")
        if self.marker_path:
            parts.append(self.marker_path)
        if self.details:
            parts.append(self.details)
        return " - ".join(parts)


class ConfigurationError(LeaseLockError):
    """Raised for invalid locker configuration.

    Examples:
        - Negative lease duration
        - Non-numeric LEASELOCK_LEASE_SECONDS
        - Empty marker suffix
    """

    def __init__(
        self, message: str, config_file: str | None = None, field: str | None = None, details: str | None = None
    ):
        self.config_file = config_file
        self.field = field
        super().__init__(message, details)

    def __reduce__(self):
        return (type(self), (self.message, self.config_file, self.field, self.details))
