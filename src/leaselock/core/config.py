"""Configuration dataclasses for leaselock.

``LockerConfig`` holds the tunables of a ``Locker``. It can be created
directly in code or loaded from environment variables and ``.env`` files.
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from leaselock.core.constants import (
    DEFAULT_LEASE_SECONDS,
    DEFAULT_MARKER_SUFFIX,
    ENV_LEASE_SECONDS,
    ENV_MARKER_SUFFIX,
)
from leaselock.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class LockerConfig:
    """Configuration for lock markers and lease expiry.

    Attributes:
        lease_seconds: Seconds a marker stays live after its last touch (default: 60)
        marker_suffix: Suffix appended to a resource path to name its marker (default: ".lock")
    """

    lease_seconds: float = DEFAULT_LEASE_SECONDS
    marker_suffix: str = DEFAULT_MARKER_SUFFIX

    def __post_init__(self) -> None:
        if not math.isfinite(self.lease_seconds) or self.lease_seconds < 0:
            raise ConfigurationError(
                "Lease duration must be a non-negative number of seconds",
                field="lease_seconds",
                details=repr(self.lease_seconds),
            )
        if not self.marker_suffix:
            raise ConfigurationError("Marker suffix must not be empty", field="marker_suffix")

    def to_dict(self) -> dict[str, Any]:
        return {
            "lease_seconds": self.lease_seconds,
            "marker_suffix": self.marker_suffix,
        }

    @classmethod
    def from_env(
        cls,
        env_file: str | os.PathLike | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> LockerConfig:
        """Load configuration from an optional ``.env`` file and the environment.

        Priority: 1) process environment, 2) ``env_file`` values, 3) defaults.
        """
        values: dict[str, str | None] = {}
        config_file = None
        if env_file is not None:
            path = Path(env_file)
            config_file = str(path)
            if not path.is_file():
                raise ConfigurationError("Environment file not found", config_file=config_file)
            values.update(dotenv_values(path))

        source = os.environ if environ is None else environ
        for key in (ENV_LEASE_SECONDS, ENV_MARKER_SUFFIX):
            if key in source:
                values[key] = source[key]

        lease_seconds = DEFAULT_LEASE_SECONDS
        raw_lease = values.get(ENV_LEASE_SECONDS)
        if raw_lease is not None and raw_lease.strip():
            try:
                lease_seconds = float(raw_lease)
            except ValueError as e:
                raise ConfigurationError(
                    f"{ENV_LEASE_SECONDS} must be a number",
                    config_file=config_file,
                    field="lease_seconds",
                    details=repr(raw_lease),
                ) from e

        marker_suffix = values.get(ENV_MARKER_SUFFIX)
        if marker_suffix is None:
            marker_suffix = DEFAULT_MARKER_SUFFIX

        try:
            return cls(lease_seconds=lease_seconds, marker_suffix=marker_suffix)
        except ConfigurationError as e:
            e.config_file = config_file
            raise
