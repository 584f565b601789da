"""Exceptions raised by quake_dash."""

from __future__ import annotations


class QuakeDashError(Exception):
    """Base class for quake_dash errors."""


class IngestionFailure(QuakeDashError):
    """The feed could not be retrieved or parsed as delimited text at all.

    Terminal for the session: no retry is attempted and no partial data is
    returned.
    """

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load earthquake data from {source}: {reason}")
