from __future__ import annotations

from datetime import datetime
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from brainslots.cli import date_heading
from brainslots.config import Settings
from brainslots.model import DateGroup, Schedule, Slot
from brainslots.service import claim_slot, load_schedule
from brainslots.store import SlotStore

console = Console()


def _println(msg: str = "") -> None:
    console.print(msg)


def _prompt(msg: str) -> str:
    return console.input(msg)


def _slot_cell(slot: Slot, past: bool) -> str:
    if slot.presenter_name:
        topic = f"\n[dim]{escape(slot.topic)}[/]" if slot.topic else ""
        return f"[bold]{escape(slot.presenter_name)}[/]{topic}"
    if past:
        return "[dim]Not filled[/]"
    return "[green]Available[/]"


def _group_table(group: DateGroup, past: bool = False) -> Table:
    day_style = "cyan" if group.day == "Tuesday" else "magenta"
    table = Table(
        title=f"{date_heading(group.date)}  [{day_style}]{group.day}[/]",
        box=box.SIMPLE,
        title_justify="left",
    )
    table.add_column("Slot", justify="right")
    table.add_column("Presenter")
    for i, slot in enumerate(group.slots, start=1):
        table.add_row(str(i), _slot_cell(slot, past))
    return table


def run_interactive(store: SlotStore, settings: Settings, now: Optional[datetime] = None) -> None:
    """
    Interactive menu loop. The schedule is reloaded before every menu so
    sign-ups from other people show up.
    """
    while True:
        schedule = load_schedule(store, now=now, settings=settings)
        _print_header(schedule)

        choice = _prompt(
            "\n[1] Upcoming meetings\n"
            "[2] Past meetings\n"
            "[3] All past meetings\n"
            "[4] Sign up to present\n"
            "[0] Exit\n"
            "Select: "
        ).strip()

        if choice == "0":
            _println("Bye.")
            return

        if choice == "1":
            _flow_upcoming(schedule)
        elif choice == "2":
            _flow_past(schedule)
        elif choice == "3":
            _flow_past(load_schedule(store, now=now, settings=settings, past_limit=None))
        elif choice == "4":
            _flow_sign_up(store, schedule)
        else:
            _println("Invalid choice.")


def _print_header(schedule: Schedule) -> None:
    open_slots = sum(1 for g in schedule.upcoming for s in g.slots if s.is_open)
    _println("\n=== Brain Trust Meetings ===")
    _println(
        f"Upcoming dates: {len(schedule.upcoming)} | Open slots: {open_slots} | "
        f"Past meetings: {schedule.past_total}"
    )


def _flow_upcoming(schedule: Schedule) -> None:
    if not schedule.upcoming:
        _println("No upcoming meetings scheduled")
        return
    for group in schedule.upcoming:
        console.print(_group_table(group))


def _flow_past(schedule: Schedule) -> None:
    if not schedule.past:
        _println("No past meetings")
        return
    for group in schedule.past:
        console.print(_group_table(group, past=True))
    if schedule.has_more_past:
        _println(f"[dim]... {schedule.past_total - len(schedule.past)} older meetings, see [3] All past meetings[/]")


def _pick_number(msg: str, upper: int) -> Optional[int]:
    """
    Ask for a number in 1..upper. Returns None on blank input or bad input.
    """
    pick = _prompt(msg).strip()
    if not pick:
        return None
    if not pick.isdigit():
        _println("Not a number.")
        return None
    n = int(pick)
    if not (1 <= n <= upper):
        _println("Out of range.")
        return None
    return n


def _flow_sign_up(store: SlotStore, schedule: Schedule) -> None:
    """
    Choose an upcoming date, then one of its open slots, then enter name
    and topic.
    """
    dates = [g for g in schedule.upcoming if any(s.is_open for s in g.slots)]
    if not dates:
        _println("No open slots.")
        return

    table = Table(title="Dates with open slots", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Open", justify="right")
    for i, g in enumerate(dates, start=1):
        n_open = sum(1 for s in g.slots if s.is_open)
        table.add_row(str(i), f"{date_heading(g.date)} ({g.day})", f"[yellow]{n_open}[/]")
    console.print(table)

    pick = _pick_number("Enter number of the date (blank = back): ", len(dates))
    if pick is None:
        return
    group = dates[pick - 1]

    console.print(_group_table(group))
    slot_no = _pick_number("Enter slot number (blank = back): ", len(group.slots))
    if slot_no is None:
        return

    slot = group.slots[slot_no - 1]
    if not slot.is_open:
        _println(f"Slot {slot_no} is already taken by {escape(slot.presenter_name)}.")
        return

    name = _prompt("Your name: ").strip()
    topic = _prompt("Topic (brief description of what you'll present): ").strip()
    if not name or not topic:
        _println("Name and topic are required.")
        return

    result = claim_slot(store, group.date, slot.id, name, topic)
    if result.success:
        _println(f"[bold green]Success![/] {escape(result.message)}")
    else:
        _println(f"[bold red]Error[/] {escape(result.message)}")
