"""
Meeting date projection.

Meetings happen every Tuesday and Thursday. The next UPCOMING_WINDOW dates
always show SLOTS_PER_DATE slots: dates with fewer saved rows are padded with
open virtual slots that only exist for the current read.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta
from typing import Iterable, List, Union

from brainslots.model import MEETING_WEEKDAYS, SLOTS_PER_DATE, Slot, VirtualId


def _as_date(reference: Union[date, datetime]) -> date:
    if isinstance(reference, datetime):
        return reference.date()
    return reference


def _next_weekday(start: date, weekday: int) -> date:
    """
    First date on or after start that falls on weekday (Monday == 0).
    """
    return start + timedelta(days=(weekday - start.weekday()) % 7)


def compute_meeting_dates(reference: Union[date, datetime], count: int) -> List[date]:
    """
    Return the next `count` meeting dates on or after the reference date.

    A reference date that is itself a meeting day is included. Raises
    ValueError if count is not positive.
    """
    if count <= 0:
        raise ValueError(f"count must be positive, got {count!r}")

    today = _as_date(reference)
    anchors = [_next_weekday(today, wd) for wd in MEETING_WEEKDAYS]

    dates: List[date] = list(anchors)
    while len(dates) < count:
        anchors = [d + timedelta(days=7) for d in anchors]
        dates.extend(anchors)

    # the weekday tracks never collide, so sorting is enough
    return sorted(dates)[:count]


def project_slots(
    persisted: Iterable[Slot],
    meeting_dates: Iterable[date],
    quota: int = SLOTS_PER_DATE,
) -> List[Slot]:
    """
    Merge saved slots with virtual placeholders for the given meeting dates.

    Each meeting date ends up with at least `quota` slots. Saved rows keep
    their store order and come before the virtual ones on the same date.
    Saved rows outside the meeting dates are returned unchanged.
    """
    if quota < 1:
        raise ValueError(f"quota must be at least 1, got {quota!r}")

    saved = list(persisted)
    per_date = Counter(s.date for s in saved)

    virtual: List[Slot] = []
    for d in sorted(set(meeting_dates)):
        missing = quota - per_date[d]
        for i in range(max(missing, 0)):
            virtual.append(Slot(id=VirtualId(date=d, ordinal=i), date=d))

    # sorted() is stable: saved rows stay ahead of virtual ones per date
    return sorted(saved + virtual, key=lambda s: s.date)
