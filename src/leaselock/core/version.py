"""Version information for leaselock."""

__version__ = "1.0.0"
