"""Calendar builder turning SOTA alerts into an ICS document."""
import logging
from datetime import datetime
from typing import Iterable, List

from processor.exceptions import DerivationError, SotaCalendarError
from processor.folding import fold_lines, join_lines
from processor.identity import DEFAULT_UID_DOMAIN, generate_uid
from processor.models import (
    AlertInput,
    AlertRecord,
    BuildResult,
    CalendarEvent,
    SkippedAlert,
)
from processor.text_utils import (
    as_utc,
    escape_calendar_text,
    format_calendar_instant,
    parse_instant,
    relative_age,
)
from processor.window import resolve_window

logger = logging.getLogger(__name__)


class CalendarBuilder:
    """Builder for the SOTA alerts calendar feed."""

    PRODUCT_ID = '-//SOTA Alerts//EN'
    UNKNOWN = 'Unknown'

    def __init__(self, product_id: str = PRODUCT_ID, uid_domain: str = DEFAULT_UID_DOMAIN):
        """
        Initialize the calendar builder.

        Args:
            product_id: PRODID of the generated calendar
            uid_domain: Domain suffix for event UIDs
        """
        self.product_id = product_id
        self.uid_domain = uid_domain

    def build_ics(self, alerts: Iterable[AlertInput], now: datetime) -> str:
        """
        Build the ICS document for a sequence of alerts.

        Alerts that cannot be converted are left out; this never raises
        for bad input records.

        Args:
            alerts: Alert payloads from the API or AlertRecord objects
            now: Generation time, used for DTSTAMP and relative ages

        Returns:
            Folded ICS text with CRLF line endings
        """
        return self.render(self.build(alerts, now).events)

    def build(self, alerts: Iterable[AlertInput], now: datetime) -> BuildResult:
        """
        Convert alerts to calendar events, collecting the ones skipped.

        Args:
            alerts: Alert payloads from the API or AlertRecord objects
            now: Generation time

        Returns:
            BuildResult with events in input order and skipped alerts
        """
        now = as_utc(now)
        result = BuildResult()
        total = 0

        for index, alert in enumerate(alerts or []):
            total += 1
            try:
                result.events.append(self._build_event(alert, now))
            except Exception as e:
                error = e if isinstance(e, SotaCalendarError) else DerivationError(str(e))
                logger.warning(f"Skipping alert #{index} due to error: {error}")
                result.skipped.append(
                    SkippedAlert(index=index, reason=str(error), error=error)
                )

        logger.info(
            f"Built {len(result.events)} calendar events out of "
            f"{total} alerts ({len(result.skipped)} skipped)"
        )
        return result

    def render(self, events: Iterable[CalendarEvent]) -> str:
        """
        Serialize events into a folded ICS document.

        Args:
            events: Calendar events

        Returns:
            ICS text with CRLF line endings
        """
        lines = [
            'BEGIN:VCALENDAR',
            f"PRODID:{self.product_id}",
            'VERSION:2.0',
            'CALSCALE:GREGORIAN',
            'METHOD:PUBLISH',
        ]

        for event in events:
            lines.extend(self._event_lines(event))

        lines.append('END:VCALENDAR')
        return join_lines(fold_lines(lines))

    def _build_event(self, alert: AlertInput, now: datetime) -> CalendarEvent:
        """
        Convert a single alert.

        Raises:
            ParseError: If a timestamp is invalid
            DerivationError: If the alert is incomplete
        """
        record = alert if isinstance(alert, AlertRecord) else AlertRecord.from_api(alert)

        activation_time = parse_instant(record.activation_time)
        last_modified = parse_instant(record.last_modified)

        summary = record.summary
        start, end = resolve_window(activation_time, record.notes)
        uid = generate_uid(summary, activation_time, domain=self.uid_domain)

        age_ms = (now - last_modified).total_seconds() * 1000
        description = self._describe(record, relative_age(age_ms))

        return CalendarEvent(
            uid=uid,
            stamp=now,
            summary=summary,
            start=start,
            end=end,
            description=description
        )

    def _describe(self, record: AlertRecord, age: str) -> str:
        parts = [f"Freqs: {record.frequency_info or self.UNKNOWN}"]
        if record.notes:
            parts.append(f"Comments: {record.notes}")
        parts.append(f"Last updated {age} by {record.poster_callsign or self.UNKNOWN}")
        return '\n'.join(parts)

    def _event_lines(self, event: CalendarEvent) -> List[str]:
        return [
            'BEGIN:VEVENT',
            f"UID:{event.uid}",
            f"DTSTAMP:{format_calendar_instant(event.stamp)}",
            f"SUMMARY:{escape_calendar_text(event.summary)}",
            f"DTSTART:{format_calendar_instant(event.start)}",
            f"DTEND:{format_calendar_instant(event.end)}",
            f"DESCRIPTION:{escape_calendar_text(event.description)}",
            'END:VEVENT',
        ]
