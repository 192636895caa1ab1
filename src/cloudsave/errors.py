from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised before any remote call when a required argument is missing or out of range."""


class ArchiveConnectionError(ConnectionError):
    """Raised when the channel to the archive service cannot be created."""
