"""Filesystem collaborators (local disk + polling watches)."""

from .local import DEFAULT_POLL_INTERVAL, LocalFileSystem, PollingWatch

__all__ = ["DEFAULT_POLL_INTERVAL", "LocalFileSystem", "PollingWatch"]
