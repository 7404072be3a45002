"""
Upcoming vs. past meetings.

Slots are grouped per meeting date. A meeting date counts as upcoming until
the daily cutoff on that date (noon Pacific by default), afterwards it is a
past meeting.

The cutoff is computed in a real timezone, so it follows daylight saving:
noon Pacific is 20:00 UTC in winter and 19:00 UTC in summer. Passing
tz="UTC", cutoff_hour=20 gives a fixed 20:00 UTC cutoff instead.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo

from brainslots.model import (
    DEFAULT_CUTOFF_HOUR,
    DEFAULT_TIMEZONE,
    PAST_PREVIEW_LIMIT,
    TUESDAY,
    DateGroup,
    Schedule,
    Slot,
)


def day_label(d: date) -> str:
    return "Tuesday" if d.weekday() == TUESDAY else "Thursday"


def group_slots_by_date(slots: Iterable[Slot]) -> List[DateGroup]:
    """
    Group slots by date, ascending. Slot order inside a date is kept.
    """
    by_date: Dict[date, List[Slot]] = defaultdict(list)
    for slot in slots:
        by_date[slot.date].append(slot)

    return [DateGroup(date=d, day=day_label(d), slots=by_date[d]) for d in sorted(by_date)]


def local_now(tz: str = DEFAULT_TIMEZONE, now: Optional[datetime] = None) -> datetime:
    """
    Current instant in the schedule timezone.

    A naive `now` is taken to already be in that timezone.
    """
    zone = ZoneInfo(tz)
    if now is None:
        return datetime.now(zone)
    if now.tzinfo is None:
        return now.replace(tzinfo=zone)
    return now.astimezone(zone)


def cutoff_for(day: date, tz: str = DEFAULT_TIMEZONE, hour: int = DEFAULT_CUTOFF_HOUR) -> datetime:
    """
    Instant at which a meeting on `day` stops being upcoming.
    """
    return datetime.combine(day, time(hour=hour), tzinfo=ZoneInfo(tz))


def is_upcoming(
    day: date,
    now: datetime,
    tz: str = DEFAULT_TIMEZONE,
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
) -> bool:
    current = local_now(tz, now)
    today = current.date()

    if day == today:
        return current < cutoff_for(day, tz, cutoff_hour)

    return day >= today


def classify(
    groups: Iterable[DateGroup],
    now: datetime,
    tz: str = DEFAULT_TIMEZONE,
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
    past_limit: Optional[int] = PAST_PREVIEW_LIMIT,
) -> Schedule:
    """
    Split date groups into upcoming (ascending) and past (most recent first).

    Only the first `past_limit` past groups are kept; pass None to keep all.
    Schedule.past_total always holds the full count.
    """
    upcoming: List[DateGroup] = []
    past: List[DateGroup] = []

    for group in groups:
        if is_upcoming(group.date, now, tz, cutoff_hour):
            upcoming.append(group)
        else:
            past.append(group)

    upcoming.sort(key=lambda g: g.date)
    past.sort(key=lambda g: g.date, reverse=True)

    total = len(past)
    if past_limit is not None:
        past = past[:past_limit]

    return Schedule(upcoming=upcoming, past=past, past_total=total)
