"""
Central data model definitions used across the project.

This module defines the canonical structure of Slot objects so that:
- the store, the projection and both front ends share the same field names
- "is this slot persisted or only a placeholder" is answered by the type of
  its id, never by inspecting strings
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Union


# ---------------------------------------------------------------------------
# Schedule policy
# ---------------------------------------------------------------------------

TUESDAY = 1
THURSDAY = 3

MEETING_WEEKDAYS = (TUESDAY, THURSDAY)

# Presenter slots offered per meeting date
SLOTS_PER_DATE = 3

# Number of upcoming meeting dates that always show a full set of slots
UPCOMING_WINDOW = 4

# Past meetings shown before the "all past meetings" view
PAST_PREVIEW_LIMIT = 5

VIRTUAL_PREFIX = "virtual-slot-"

# "Today" turns into a past meeting at noon Pacific
DEFAULT_TIMEZONE = "America/Los_Angeles"
DEFAULT_CUTOFF_HOUR = 12


# ---------------------------------------------------------------------------
# Slot identifiers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PersistedId:
    """
    Identifier assigned by the store to a saved row.
    """

    value: str

    is_virtual = False

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class VirtualId:
    """
    Identifier of a placeholder slot that only exists for one read.

    The ordinal restarts at 0 for every date, so ids are unique within a date
    but are not stable across calendar days.
    """

    date: date
    ordinal: int

    is_virtual = True

    def __str__(self) -> str:
        return f"{VIRTUAL_PREFIX}{self.ordinal}-{self.date.isoformat()}"


SlotId = Union[PersistedId, VirtualId]


def parse_slot_id(text: Optional[str]) -> Optional[SlotId]:
    """
    Turn an id coming from outside (CLI, form data) back into a SlotId.

    'virtual-slot-<n>-<yyyy-mm-dd>' becomes a VirtualId, any other non-empty
    text is a PersistedId, blank or None means "no id".
    """
    raw = (text or "").strip()
    if not raw:
        return None

    if raw.startswith(VIRTUAL_PREFIX):
        rest = raw[len(VIRTUAL_PREFIX):]
        ordinal_s, _, date_s = rest.partition("-")
        try:
            return VirtualId(date=date.fromisoformat(date_s), ordinal=int(ordinal_s))
        except ValueError:
            pass

    return PersistedId(raw)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


@dataclass
class Slot:
    """
    Represents one presentation opportunity on a meeting date.

    presenter_name and topic are set together; a slot without a presenter
    is open.
    """

    id: SlotId
    date: date
    presenter_name: Optional[str] = None
    topic: Optional[str] = None

    @property
    def is_virtual(self) -> bool:
        return self.id.is_virtual

    @property
    def is_open(self) -> bool:
        return not self.presenter_name


@dataclass
class DateGroup:
    """
    One meeting date with its slots in display order.
    """

    date: date
    day: str
    slots: List[Slot] = field(default_factory=list)


@dataclass
class Schedule:
    upcoming: List[DateGroup]
    past: List[DateGroup]
    past_total: int

    @property
    def has_more_past(self) -> bool:
        return self.past_total > len(self.past)


@dataclass
class ClaimResult:
    success: bool
    message: str
