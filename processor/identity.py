"""Stable UID generation for calendar events."""
import hashlib
from datetime import datetime

from processor.text_utils import as_utc

DEFAULT_UID_DOMAIN = 'sota.org.uk'


def generate_uid(summary: str, base: datetime, domain: str = DEFAULT_UID_DOMAIN) -> str:
    """
    Generate the UID of an activation event.

    The hash covers the summary and the zero-based UTC month of the
    activation only, so a re-posted alert for the same summit in the same
    month keeps its UID. Two activations of one summit by one callsign in
    the same month share a UID.

    The digest is SHA-1 and must not change: calendar clients treat a new
    UID as a new event.

    Args:
        summary: Event summary, e.g. 'K1ABC on W7O/CN-001'
        base: Alerted activation time
        domain: Suffix after '@'

    Returns:
        UID string such as '<sha1 hex>@sota.org.uk'
    """
    composite = f"{summary}{as_utc(base).month - 1}"
    digest = hashlib.sha1(composite.encode('utf-8')).hexdigest()
    return f"{digest}@{domain}"
