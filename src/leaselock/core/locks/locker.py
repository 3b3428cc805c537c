"""Timed, advisory locks represented by marker files.

A resource is locked while its marker exists and was touched less than
one lease ago. Expired markers are reclaimed lazily by the next acquire or
renew that observes them. The only step that must be atomic is marker
creation; every race lost elsewhere ends in ``LockedError`` or
``NotLockedError``.
"""

from __future__ import annotations

import logging
import math
import os
from functools import lru_cache
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from leaselock.core.config import LockerConfig
from leaselock.core.constants import DEFAULT_LEASE_SECONDS, DEFAULT_MARKER_SUFFIX
from leaselock.core.exceptions import ConfigurationError, LockedError, LockStorageError, NotLockedError
from leaselock.core.locks.storage import FilesystemStorage, Storage
from leaselock.core.logging import with_log_context

logger = logging.getLogger(__name__)

MarkerNamer = Callable[[str], str | os.PathLike]


@lru_cache(maxsize=None)
def suffix_namer(suffix: str) -> MarkerNamer:
    """Return a namer that appends ``suffix`` to the resource path.

    Namers are cached per suffix, so lockers configured alike compare equal.
    """
    if not suffix:
        raise ConfigurationError("Marker suffix must not be empty", field="marker_suffix")

    def namer(path: str) -> str:
        return f"{path}{suffix}"

    return namer


default_marker_namer = suffix_namer(DEFAULT_MARKER_SUFFIX)


class _Observed(Enum):
    """What an expiry check found at the marker path."""

    ABSENT = "absent"
    RECLAIMED = "reclaimed"
    LIVE = "live"


@dataclass(frozen=True)
class MarkerStatus:
    """Read-only snapshot of a marker, for diagnostics."""

    marker_path: Path
    exists: bool
    age_seconds: float | None = None
    expired: bool = False

    @property
    def live(self) -> bool:
        return self.exists and not self.expired


@dataclass(frozen=True)
class Locker:
    """Creates timed, advisory locks on paths.

    ``Locker()`` is ready to use: markers are named ``<path>.lock`` and a
    lease lasts 60 seconds. The value holds no lock state, so one instance
    may be shared freely between threads.

    Attributes:
        marker_namer: Maps a resource path to its marker path (default: append ".lock")
        lease_seconds: Seconds a marker stays live after creation or renewal.
            ``None`` or ``0`` selects the 60 second default.
        storage: Where markers live (default: the local filesystem)
        logger: Logger for lifecycle events (default: this module's logger)
    """

    marker_namer: MarkerNamer | None = None
    lease_seconds: float | None = None
    storage: Storage = field(default_factory=FilesystemStorage, compare=False)
    logger: logging.Logger | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.lease_seconds is not None and (not math.isfinite(self.lease_seconds) or self.lease_seconds < 0):
            raise ConfigurationError(
                "Lease duration must be a non-negative number of seconds",
                field="lease_seconds",
                details=repr(self.lease_seconds),
            )

    @classmethod
    def from_config(
        cls,
        config: LockerConfig,
        *,
        marker_namer: MarkerNamer | None = None,
        storage: Storage | None = None,
        logger: logging.Logger | None = None,
    ) -> Locker:
        """Build a locker from a ``LockerConfig``.

        An explicit ``marker_namer`` takes precedence over the configured suffix.
        """
        return cls(
            marker_namer=marker_namer or suffix_namer(config.marker_suffix),
            lease_seconds=config.lease_seconds,
            storage=storage if storage is not None else FilesystemStorage(),
            logger=logger,
        )

    @property
    def lease_duration(self) -> float:
        """Effective lease duration in seconds."""
        return self.lease_seconds or DEFAULT_LEASE_SECONDS

    def marker_path(self, path: str | os.PathLike[str]) -> Path:
        """Return the marker path that represents the lock on ``path``."""
        namer = self.marker_namer or default_marker_namer
        return Path(namer(os.fspath(path)))

    def acquire(self, path: str | os.PathLike[str]) -> None:
        """Try to lock ``path`` without blocking.

        Raises:
            LockedError: A live marker exists, or another caller created one first.
            LockStorageError: The storage layer failed.
        """
        resource = os.fspath(path)
        marker = self.marker_path(resource)
        log = self._log(resource, marker)

        if self._reclaim_if_expired(marker, log) is _Observed.LIVE:
            log.debug("Lock is held by another caller")
            raise LockedError(resource, marker)

        try:
            self.storage.create_exclusive(marker)
        except FileExistsError:
            log.debug("Lost marker creation race")
            raise LockedError(resource, marker) from None
        except OSError as e:
            raise self._storage_error("create", marker, e) from e
        log.debug("Acquired lock")

    def release(self, path: str | os.PathLike[str]) -> None:
        """Remove the lock on ``path``.

        Releasing an unlocked path is not an error.

        Raises:
            LockStorageError: The storage layer failed.
        """
        resource = os.fspath(path)
        marker = self.marker_path(resource)
        log = self._log(resource, marker)
        try:
            self.storage.remove(marker)
        except FileNotFoundError:
            log.debug("Release of unlocked resource ignored")
            return
        except OSError as e:
            raise self._storage_error("remove", marker, e) from e
        log.debug("Released lock")

    def renew(self, path: str | os.PathLike[str]) -> None:
        """Extend the lease on ``path`` by touching its marker.

        An expired marker is deleted rather than revived; the caller has to
        acquire again.

        Raises:
            NotLockedError: No live marker exists.
            LockStorageError: The storage layer failed.
        """
        resource = os.fspath(path)
        marker = self.marker_path(resource)
        log = self._log(resource, marker)

        if self._reclaim_if_expired(marker, log) is not _Observed.LIVE:
            log.debug("Nothing to renew")
            raise NotLockedError(resource, marker)

        try:
            self.storage.set_modified_time(marker, self.storage.now())
        except FileNotFoundError:
            log.debug("Marker vanished before renewal")
            raise NotLockedError(resource, marker) from None
        except OSError as e:
            raise self._storage_error("touch", marker, e) from e
        log.debug("Renewed lock")

    def status(self, path: str | os.PathLike[str]) -> MarkerStatus:
        """Describe the marker for ``path`` without modifying anything."""
        marker = self.marker_path(path)
        try:
            mtime = self.storage.modified_time(marker)
        except FileNotFoundError:
            return MarkerStatus(marker_path=marker, exists=False)
        except OSError as e:
            raise self._storage_error("stat", marker, e) from e
        age = self.storage.now() - mtime
        return MarkerStatus(
            marker_path=marker,
            exists=True,
            age_seconds=age,
            expired=age >= self.lease_duration,
        )

    @contextmanager
    def held(self, path: str | os.PathLike[str]) -> Iterator[Path]:
        """Hold the lock on ``path`` for the duration of a ``with`` block.

        Fails immediately with ``LockedError`` when contended. On exit, even
        if the block raises, the marker is removed only while it is still
        live. Long-running blocks must call ``renew`` themselves: once the
        lease lapses another caller may reclaim the marker, and a live marker
        found on exit is assumed to be ours. Markers carry no owner, so this
        check narrows but does not close that window.
        """
        self.acquire(path)
        try:
            yield self.marker_path(path)
        finally:
            if self.status(path).live:
                self.release(path)
            else:
                self._log(os.fspath(path), self.marker_path(path)).warning(
                    "Lease lapsed before release; leaving marker for reclamation"
                )

    def _reclaim_if_expired(self, marker: Path, log: logging.Logger | logging.LoggerAdapter) -> _Observed:
        try:
            mtime = self.storage.modified_time(marker)
        except FileNotFoundError:
            return _Observed.ABSENT
        except OSError as e:
            raise self._storage_error("stat", marker, e) from e

        age = self.storage.now() - mtime
        if age < self.lease_duration:
            return _Observed.LIVE

        log.debug("Reclaiming expired marker (age %.3fs, lease %.3fs)", age, self.lease_duration)
        try:
            self.storage.remove(marker)
        except FileNotFoundError:
            # Another caller reclaimed it first.
            pass
        except OSError as e:
            raise self._storage_error("remove", marker, e) from e
        return _Observed.RECLAIMED

    def _log(self, resource: str, marker: Path) -> logging.Logger | logging.LoggerAdapter:
        return with_log_context(self.logger or logger, resource=resource, marker=str(marker))

    @staticmethod
    def _storage_error(operation: str, marker: Path, error: OSError) -> LockStorageError:
        return LockStorageError(
            "Lock storage failure",
            operation=operation,
            marker_path=marker,
            original_error=error,
        )
