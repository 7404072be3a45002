"""
Slot listing and sign-up.

This is the API the front ends talk to:

    list_slots(store)             saved slots + virtual placeholders
    claim_slot(store, ...)        sign up for a slot
    load_schedule(store)          the above, grouped into upcoming / past

Neither operation raises storage errors to the caller. list_slots() returns
[] when the table cannot be read, so an empty list means "nothing to show",
not "no slots exist".
claim_slot() reports every failure through ClaimResult.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional, Union

from brainslots.classify import classify, group_slots_by_date, local_now
from brainslots.config import Settings
from brainslots.model import (
    DEFAULT_TIMEZONE,
    PAST_PREVIEW_LIMIT,
    SLOTS_PER_DATE,
    UPCOMING_WINDOW,
    ClaimResult,
    PersistedId,
    Schedule,
    Slot,
    SlotId,
    parse_slot_id,
)
from brainslots.projection import compute_meeting_dates, project_slots
from brainslots.store import SlotStore, StorageError

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Successfully signed up for the presentation slot!"
UNEXPECTED_MESSAGE = "An unexpected error occurred"


def list_slots(
    store: SlotStore,
    today: Optional[date] = None,
    count: int = UPCOMING_WINDOW,
    quota: int = SLOTS_PER_DATE,
    tz: str = DEFAULT_TIMEZONE,
) -> List[Slot]:
    """
    Return all saved slots plus virtual slots for the next `count` meeting
    dates, sorted by date.

    `today` defaults to the current date in timezone `tz`.
    """
    logger.info("Fetching slots from database")
    try:
        saved = store.fetch_all()
    except Exception as exc:
        logger.error("Error fetching slots: %s", exc)
        return []

    logger.info("Retrieved %d slots from database", len(saved))

    if today is None:
        today = local_now(tz).date()

    meeting_dates = compute_meeting_dates(today, count)
    return project_slots(saved, meeting_dates, quota=quota)


def load_schedule(
    store: SlotStore,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
    past_limit: Optional[int] = PAST_PREVIEW_LIMIT,
) -> Schedule:
    """
    List slots and split them into upcoming and past meeting dates.
    """
    settings = settings or Settings()
    current = local_now(settings.timezone, now)

    slots = list_slots(store, today=current.date(), tz=settings.timezone)
    groups = group_slots_by_date(slots)
    return classify(
        groups,
        current,
        tz=settings.timezone,
        cutoff_hour=settings.cutoff_hour,
        past_limit=past_limit,
    )


def _coerce_id(slot_id: Union[SlotId, str, None]) -> Optional[SlotId]:
    if slot_id is None or isinstance(slot_id, str):
        return parse_slot_id(slot_id)
    return slot_id


def claim_slot(
    store: SlotStore,
    day: date,
    slot_id: Union[SlotId, str, None],
    presenter_name: str,
    topic: str,
) -> ClaimResult:
    """
    Sign `presenter_name` up for a slot on `day`.

    Virtual (or missing) ids create a new row; saved ids update that row in
    place, overwriting whatever was there. Never raises.
    """
    try:
        name = (presenter_name or "").strip()
        text = (topic or "").strip()
        if not name or not text:
            return ClaimResult(False, "Please provide both a name and a topic.")

        sid = _coerce_id(slot_id)
        logger.info("claim_slot called with date=%s slot_id=%s name=%r", day, sid, name)

        if isinstance(sid, PersistedId):
            return _update(store, sid, name, text)
        return _create(store, day, name, text)
    except Exception as exc:
        logger.exception("Error in claim_slot")
        return ClaimResult(False, str(exc) or UNEXPECTED_MESSAGE)


def _create(store: SlotStore, day: date, name: str, topic: str) -> ClaimResult:
    logger.info("Creating new slot for date %s", day)
    try:
        rows = store.insert(day, name, topic)
    except StorageError as exc:
        logger.error("Error creating slot: %s", exc)
        return ClaimResult(False, f"Failed to create slot: {str(exc) or 'Unknown error'}")

    if len(rows) != 1:
        logger.error("Expected one inserted row, got %d", len(rows))
        return ClaimResult(False, f"Failed to create slot: expected 1 row, got {len(rows)}")

    return ClaimResult(True, SUCCESS_MESSAGE)


def _update(store: SlotStore, slot_id: PersistedId, name: str, topic: str) -> ClaimResult:
    logger.info("Updating existing slot %s", slot_id)
    try:
        rows = store.update(slot_id, name, topic)
    except StorageError as exc:
        logger.error("Error updating slot: %s", exc)
        return ClaimResult(False, f"Failed to sign up for the slot: {str(exc) or 'Unknown error'}")

    if not rows:
        logger.error("No slot with id %s", slot_id)
        return ClaimResult(False, f"Failed to sign up for the slot: slot {slot_id} not found")

    return ClaimResult(True, SUCCESS_MESSAGE)
