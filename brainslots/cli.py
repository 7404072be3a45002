"""
CLI (Command Line Interface).

This module provides quick terminal commands, e.g.:

    brainslots list [--all-past]
    brainslots dates [--count N]
    brainslots claim <yyyy-mm-dd> <slot> --name <name> --topic <topic>
    brainslots interactive

Note:
- The interactive UI lives in brainslots/interactive.py
- This CLI prints plain text (no rich formatting)
"""

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime
from typing import Optional

from brainslots.classify import day_label, local_now
from brainslots.config import Settings, load_settings
from brainslots.model import PAST_PREVIEW_LIMIT, UPCOMING_WINDOW, DateGroup, Schedule, Slot
from brainslots.projection import compute_meeting_dates
from brainslots.service import claim_slot, load_schedule
from brainslots.store import SlotStore, build_store


def date_heading(d: date) -> str:
    """
    'Tuesday, October 20'
    """
    return f"{d:%A, %B} {d.day}"


def slot_line(index: int, slot: Slot, past: bool = False) -> str:
    if slot.presenter_name:
        topic = f" - {slot.topic}" if slot.topic else ""
        return f"Slot {index}: {slot.presenter_name}{topic}"
    if past:
        return f"Slot {index}: Not filled"
    return f"Slot {index}: Available"


def _print_group(group: DateGroup, past: bool = False) -> None:
    print(f"{date_heading(group.date)} ({group.date.isoformat()}) [{group.day}]")
    for i, slot in enumerate(group.slots, start=1):
        print(f"  {slot_line(i, slot, past=past)}")


def _cmd_list(args: argparse.Namespace, schedule: Schedule) -> int:
    """
    Print upcoming meetings followed by past meetings.
    """
    print("Upcoming meetings")
    if not schedule.upcoming:
        print("No upcoming meetings scheduled")
    for group in schedule.upcoming:
        _print_group(group)

    print("")
    print("Past meetings")
    if not schedule.past:
        print("No past meetings")
    for group in schedule.past:
        _print_group(group, past=True)

    if schedule.has_more_past:
        print(f"... and {schedule.past_total - len(schedule.past)} more (use --all-past)")

    return 0


def _cmd_dates(args: argparse.Namespace, settings: Settings, now: Optional[datetime] = None) -> int:
    if args.count <= 0:
        print("Count must be a positive number.")
        return 1

    today = local_now(settings.timezone, now).date()
    for d in compute_meeting_dates(today, args.count):
        print(f"{d.isoformat()} {day_label(d)}")
    return 0


def _cmd_claim(args: argparse.Namespace, store: SlotStore, schedule: Schedule) -> int:
    """
    Claim slot number `args.slot` of an upcoming meeting date.
    """
    try:
        day = date.fromisoformat(args.date.strip())
    except ValueError:
        print(f"Invalid date: {args.date!r} (expected yyyy-mm-dd)")
        return 1

    group = next((g for g in schedule.upcoming if g.date == day), None)
    if group is None:
        print(f"No upcoming meeting on {day.isoformat()}.")
        return 1

    if not (1 <= args.slot <= len(group.slots)):
        print(f"Slot must be between 1 and {len(group.slots)}.")
        return 1

    slot = group.slots[args.slot - 1]
    if not slot.is_open:
        print(f"Slot {args.slot} on {day.isoformat()} is already taken by {slot.presenter_name}.")
        return 1

    result = claim_slot(store, day, slot.id, args.name, args.topic)
    print(result.message)
    return 0 if result.success else 1


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="brainslots", description="Brain Trust meeting slots")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log storage activity")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="Show upcoming and past meetings")
    p_list.add_argument("--all-past", action="store_true", help="Show every past meeting, not just the latest")

    p_dates = sub.add_parser("dates", help="Show the next meeting dates")
    p_dates.add_argument("--count", type=int, default=UPCOMING_WINDOW, help="Number of dates")

    p_claim = sub.add_parser("claim", help="Sign up for an open slot")
    p_claim.add_argument("date", type=str, help="Meeting date (e.g. 2026-10-20)")
    p_claim.add_argument("slot", type=int, help="Slot number (1-3)")
    p_claim.add_argument("--name", required=True, help="Presenter name")
    p_claim.add_argument("--topic", required=True, help="What you will present")

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


def main(
    argv: list[str] | None = None,
    store: Optional[SlotStore] = None,
    now: Optional[datetime] = None,
) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.

    `store` replaces the Supabase store built from the environment, `now`
    pins the current instant (default: the system clock).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()

    if args.command == "dates":
        raise SystemExit(_cmd_dates(args, settings, now))

    if store is None:
        store = build_store(settings)

    if args.command == "list":
        past_limit = None if args.all_past else PAST_PREVIEW_LIMIT
        schedule = load_schedule(store, now=now, settings=settings, past_limit=past_limit)
        raise SystemExit(_cmd_list(args, schedule))
    if args.command == "claim":
        schedule = load_schedule(store, now=now, settings=settings)
        raise SystemExit(_cmd_claim(args, store, schedule))

    if args.command == "interactive":
        from brainslots.interactive import run_interactive

        run_interactive(store, settings, now=now)
        raise SystemExit(0)

    raise SystemExit(2)
