"""Exception types raised by bridgegen."""

from __future__ import annotations


class BridgegenError(Exception):
    """Base class for all bridgegen errors."""


class ConfigError(BridgegenError):
    """Raised when a configuration file cannot be loaded or validated."""


class GenerationError(BridgegenError):
    """Raised when a package cannot be built or written.

    The run stops at the first failure.  Files already flushed to disk are
    left in place for inspection.
    """

    def __init__(self, package: str, message: str) -> None:
        self.package = package
        super().__init__(f"Package {package}: {message}")
