"""Event window resolution from S+N / S-N hints in alert comments.

Activators note how long they expect to be on air relative to the
alerted time: ``S+2`` means two hours after, ``S-1`` one hour before.
The ``S`` is case-insensitive and only the first hint of each sign counts.
"""
import re
from datetime import datetime, timedelta
from typing import NamedTuple, Optional

DEFAULT_HOURS_BEFORE = 1
DEFAULT_HOURS_AFTER = 3

_AFTER_HINT = re.compile(r'[Ss]\+([0-9]+)')
_BEFORE_HINT = re.compile(r'[Ss]-([0-9]+)')


class WindowHints(NamedTuple):
    hours_after: Optional[int]
    hours_before: Optional[int]


def parse_window_hints(notes: Optional[str]) -> WindowHints:
    """
    Extract window hints from free text.

    Args:
        notes: Alert comments, may be None

    Returns:
        WindowHints with None for each hint that is absent
    """
    if not notes:
        return WindowHints(hours_after=None, hours_before=None)

    after = _AFTER_HINT.search(notes)
    before = _BEFORE_HINT.search(notes)
    return WindowHints(
        hours_after=int(after.group(1)) if after else None,
        hours_before=int(before.group(1)) if before else None
    )


def resolve_window(base: datetime, notes: Optional[str] = None) -> tuple[datetime, datetime]:
    """
    Compute the start and end of an activation.

    The window is not validated; a hint such as 'S+0 S-0' yields a
    zero-length window and is returned as is.

    Args:
        base: Alerted activation time
        notes: Alert comments that may carry hints

    Returns:
        Tuple of (start, end)
    """
    hints = parse_window_hints(notes)
    hours_before = DEFAULT_HOURS_BEFORE if hints.hours_before is None else hints.hours_before
    hours_after = DEFAULT_HOURS_AFTER if hints.hours_after is None else hints.hours_after

    start = base - timedelta(hours=hours_before)
    end = base + timedelta(hours=hours_after)
    return start, end
