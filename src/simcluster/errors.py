"""Error types.

The engine is pure and offline, so the taxonomy is small. Format errors are
deterministic precondition violations and are never retried.
"""

from __future__ import annotations


class SimClusterError(Exception):
    """Base class for all simcluster errors."""


class FingerprintFormatError(SimClusterError, ValueError):
    """A fingerprint is not exactly 16 hexadecimal characters."""

    def __init__(self, value: object, message: str = ""):
        self.value = value
        super().__init__(message or f"Fingerprint must be a 16-character hex string, got {value!r}")


class DocumentFormatError(SimClusterError, ValueError):
    """An input document record is malformed (missing id, bad timestamp, duplicate id)."""
