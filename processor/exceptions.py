"""Exceptions raised while turning SOTA alerts into a calendar."""
from typing import Optional


class SotaCalendarError(Exception):
    """Base class for all feed errors."""


class ParseError(SotaCalendarError, ValueError):
    """A timestamp field could not be read as an instant."""


class DerivationError(SotaCalendarError):
    """An alert could not be turned into a calendar event."""


class UpstreamError(SotaCalendarError):
    """The SOTA alerts API could not be fetched."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
