"""Data models for alert processing."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from processor.exceptions import DerivationError, SotaCalendarError


def _optional_text(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    value = str(value)
    return value if value else None


def _required_text(payload: Mapping[str, Any], key: str) -> str:
    value = _optional_text(payload, key)
    if value is None:
        raise DerivationError(f"Alert missing required field: {key}")
    return value


@dataclass(frozen=True)
class AlertRecord:
    """Activation alert as published by the SOTA API."""
    id: Optional[int]
    poster_user_id: Optional[int]
    last_modified: str
    activation_time: str
    region_code: str
    location_code: str
    activator_callsign: str
    frequency_info: Optional[str] = None
    notes: Optional[str] = None
    activator_display_name: Optional[str] = None
    poster_callsign: Optional[str] = None
    location_details: Optional[str] = None
    epoch: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> 'AlertRecord':
        """
        Build an AlertRecord from one object of the alerts API response.

        Args:
            payload: Deserialized JSON object

        Returns:
            AlertRecord

        Raises:
            DerivationError: If the payload is not an object or a required
                key is missing or empty
        """
        if not isinstance(payload, Mapping):
            raise DerivationError(
                f"Alert must be a JSON object, got {type(payload).__name__}"
            )

        try:
            return cls(
                id=payload.get('id'),
                poster_user_id=payload.get('userID'),
                last_modified=payload['timeStamp'],
                activation_time=payload['dateActivated'],
                region_code=_required_text(payload, 'associationCode'),
                location_code=_required_text(payload, 'summitCode'),
                activator_callsign=_required_text(payload, 'activatingCallsign'),
                frequency_info=_optional_text(payload, 'frequency'),
                notes=_optional_text(payload, 'comments'),
                activator_display_name=_optional_text(payload, 'activatorName'),
                poster_callsign=_optional_text(payload, 'posterCallsign'),
                location_details=_optional_text(payload, 'summitDetails'),
                epoch=_optional_text(payload, 'epoch')
            )
        except KeyError as e:
            raise DerivationError(f"Alert missing required field: {e.args[0]}") from e

    @property
    def summary(self) -> str:
        """Event title, e.g. 'K1ABC on W7O/CN-001'."""
        return f"{self.activator_callsign} on {self.region_code}/{self.location_code}"


@dataclass(frozen=True)
class CalendarEvent:
    """One VEVENT of the generated feed."""
    uid: str
    stamp: datetime
    summary: str
    start: datetime
    end: datetime
    description: str


@dataclass(frozen=True)
class SkippedAlert:
    """Alert left out of the feed and the reason why."""
    index: int
    reason: str
    error: SotaCalendarError


@dataclass
class BuildResult:
    """Result of a calendar build."""
    events: list[CalendarEvent] = field(default_factory=list)
    skipped: list[SkippedAlert] = field(default_factory=list)


AlertInput = Union[AlertRecord, Mapping[str, Any]]
