"""
CLI (Command Line Interface).

    cmstimetable fetch [--year 2024] [--out timetable.json]
    cmstimetable show [timetable.json] [--week A|B] [--periods periods.json]
    cmstimetable check [timetable.json]

`fetch` logs in with the CMS_USERNAME / CMS_PASSWORD environment variables
and caches the raw timetable document (see cmstimetable.storage). `show`
and `check` work offline on the cached document or on a given file.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cmstimetable.client import DEFAULT_BASE_URL, CMSClient
from cmstimetable.errors import CMSError, DecodeError
from cmstimetable.model import WEEKDAY_NAMES, Week, WeekType, slot_event
from cmstimetable.normalize import normalize
from cmstimetable.parse import parse_timetable
from cmstimetable.storage import load_raw_timetable, save_raw_timetable
from cmstimetable.timeutil import DEFAULT_PERIOD_TIMES, PeriodTable, build_period_table


def _default_year(today: Optional[date] = None) -> int:
    """
    The service names a school year after the calendar year it starts in.
    The school year starts in August.
    """
    today = today or date.today()
    return today.year if today.month >= 8 else today.year - 1


def _load_document(path: Optional[str]) -> Any:
    """
    Load the timetable document from `path`, or from the cache if no path given.
    Returns None if nothing could be loaded.
    """
    if path:
        p = Path(path)
        try:
            return json.loads(p.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            print(f"Cannot read {p}: {exc}")
            return None

    data = load_raw_timetable()
    if data is None:
        print("No cached timetable. Run 'cmstimetable fetch' first or pass a file.")
    return data


def _load_periods(path: Optional[str]) -> PeriodTable:
    """
    Load a period table from a JSON file of ["HH:MM", "HH:MM"] pairs.
    Raises ValueError if the file is not a valid table.
    """
    if not path:
        return DEFAULT_PERIOD_TIMES
    try:
        pairs = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValueError(f"Cannot read period table {path}: {exc}") from exc
    if not isinstance(pairs, list):
        raise ValueError(f"Period table {path} must be a JSON array")
    return build_period_table(pairs)


def _normalized_week(args: argparse.Namespace) -> Optional[Week]:
    """
    Shared by show/check: load, decode and normalize. Prints the first
    problem and returns None on failure.
    """
    data = _load_document(args.file)
    if data is None:
        return None

    try:
        periods = _load_periods(args.periods)
        wire = parse_timetable(data)
    except (ValueError, DecodeError) as exc:
        print(f"Error: {exc}")
        return None

    result = normalize(wire, periods)
    if not result.ok:
        print(f"Invalid timetable: {result.error}")
        return None
    return result.week


def _render_week(week: Week, week_type: WeekType) -> Table:
    table = Table(title=f"Week {week_type.value}", box=box.SIMPLE)
    table.add_column("Time")
    for name in WEEKDAY_NAMES:
        table.add_column(name)

    # every weekday has the same number of slots with the same times
    for i, first in enumerate(week.monday.slots):
        row = [f"{first.start}-{first.end}"]
        for day in week.weekdays:
            ev = slot_event(day.slots[i], week_type)
            row.append(f"{escape(ev.name)}\n[dim]{escape(ev.room)}[/]" if ev is not None else "")
        table.add_row(*row)
    return table


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_fetch(args: argparse.Namespace) -> int:
    username = os.environ.get("CMS_USERNAME", "").strip()
    password = os.environ.get("CMS_PASSWORD", "")
    if not username or not password:
        print("Please set CMS_USERNAME and CMS_PASSWORD.")
        return 1

    year = args.year if args.year is not None else _default_year()
    client = CMSClient(base_url=os.environ.get("CMS_BASE_URL", DEFAULT_BASE_URL))
    try:
        client.login(username, password)
        data = client.fetch_timetable_json(year)
        parse_timetable(data)
    except (CMSError, DecodeError) as exc:
        print(f"Error: {exc}")
        return 1

    out = save_raw_timetable(data, args.out)
    print(f"Saved timetable for {year} to: {out}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    week = _normalized_week(args)
    if week is None:
        return 1

    week_type = WeekType(args.week) if args.week else week.week_type
    console = Console()
    console.print(_render_week(week, week_type))
    if week_type is week.week_type:
        console.print(f"(week {week_type.value} is the current week)")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    week = _normalized_week(args)
    if week is None:
        return 1
    print(f"OK: week {week.week_type.value}, {len(week.monday.slots)} periods per day")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="cmstimetable", description="CMS timetable CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_fetch = sub.add_parser("fetch", help="Download and cache the timetable")
    p_fetch.add_argument("--year", type=int, default=None, help="School year (e.g. 2024)")
    p_fetch.add_argument("--out", type=str, default=None, help="Output file (default: package cache)")

    for name, help_text in (("show", "Show the timetable of one week"), ("check", "Validate the timetable")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("file", type=str, nargs="?", default=None, help="Timetable JSON (default: cache)")
        p.add_argument("--periods", type=str, default=None, help="JSON file with [start, end] pairs")
        if name == "show":
            p.add_argument("--week", choices=["A", "B"], default=None, help="Week to show (default: current)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "fetch":
        raise SystemExit(_cmd_fetch(args))
    if args.command == "show":
        raise SystemExit(_cmd_show(args))
    if args.command == "check":
        raise SystemExit(_cmd_check(args))

    raise SystemExit(2)
