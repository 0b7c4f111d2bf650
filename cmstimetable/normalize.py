"""
Normalization (wire timetable -> domain Week).

This is the only place where timetable data is validated. For every weekday
(Monday..Friday) and every period (0..N) in order:

    0 events   -> EmptySlot
    1 event    -> SameSlot
    2 events   -> DifferentSlot, tags must be exactly one "A" and one "B"
    3+ events  -> StructuralError

The first problem found stops the conversion. A partially normalized Week is
never returned, because display code assumes every slot is classified.

Nothing in here raises: each step returns either its value or an error
object, and normalize() wraps the outcome in a NormalizeResult. The module
keeps no state, so it can be called from several threads at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from cmstimetable.errors import (
    FieldMissingError,
    InvalidIdError,
    NormalizationError,
    PeriodTableError,
    StructuralError,
    UnrecognizedTypeError,
    WeekPairingError,
)
from cmstimetable.model import (
    WEEKDAY_NAMES,
    DifferentSlot,
    EmptySlot,
    Event,
    EventType,
    SameSlot,
    TimeSlot,
    Week,
    WeekType,
    Weekday,
)
from cmstimetable.timeutil import DEFAULT_PERIOD_TIMES, PeriodTable, period_time
from cmstimetable.wire import WireEvent, WireEventType, WirePeriod, WireTimetable, WireWeekday, WireWeekType

logger = logging.getLogger(__name__)


_EVENT_TYPES = {
    WireEventType.LESSON.value: EventType.LESSON,
    WireEventType.ECA.value: EventType.ECA,
}

_WEEK_TYPES = {
    WireWeekType.A: WeekType.A,
    WireWeekType.B: WeekType.B,
}


@dataclass(frozen=True)
class NormalizeResult:
    """
    Outcome of normalize(): exactly one of `week` / `error` is set.
    """

    week: Optional[Week] = None
    error: Optional[NormalizationError] = None

    def __post_init__(self) -> None:
        if (self.week is None) == (self.error is None):
            raise ValueError("NormalizeResult needs exactly one of week / error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Week:
        """
        Return the Week, or raise the error it carries.
        """
        if self.error is not None:
            raise self.error
        return self.week


# ---------------------------------------------------------------------------
# Conversion steps
# ---------------------------------------------------------------------------


def convert_event(wire: WireEvent, weekday: int, period: int, index: int) -> Union[Event, NormalizationError]:
    """
    Convert one wire event. id, type, name and room are all required.
    """
    # checked in this order so the reported field is deterministic
    for field in ("id", "type", "name", "room"):
        if getattr(wire, field) is None:
            return FieldMissingError(field, weekday, period, index)

    # bool is an int subclass, True would otherwise pass as 1
    if isinstance(wire.id, bool) or not isinstance(wire.id, int) or wire.id < 0:
        return InvalidIdError(wire.id, weekday, period, index)

    event_type = None if isinstance(wire.type, bool) else _EVENT_TYPES.get(wire.type)
    if event_type is None:
        return UnrecognizedTypeError(wire.type, weekday, period, index)

    return Event(id=wire.id, type=event_type, name=wire.name, room=wire.room)


def _week_tag(raw: Optional[str]) -> Optional[WeekType]:
    if raw is None:
        return None
    tag = raw.strip().upper()
    if tag == "A":
        return WeekType.A
    if tag == "B":
        return WeekType.B
    return None


def convert_period(wire: WirePeriod, weekday: int, period: int, table: PeriodTable) -> Union[TimeSlot, NormalizationError]:
    """
    Classify one period into a time slot.
    """
    start, end = period_time(period, table)
    events = wire.events

    if len(events) == 0:
        return EmptySlot(start=start, end=end)

    if len(events) == 1:
        ev = convert_event(events[0], weekday, period, 0)
        if isinstance(ev, NormalizationError):
            return ev
        return SameSlot(event=ev, start=start, end=end)

    if len(events) == 2:
        tags = (_week_tag(events[0].week_type), _week_tag(events[1].week_type))
        if set(tags) != {WeekType.A, WeekType.B}:
            return WeekPairingError((events[0].week_type, events[1].week_type), weekday, period)

        first = convert_event(events[0], weekday, period, 0)
        if isinstance(first, NormalizationError):
            return first
        second = convert_event(events[1], weekday, period, 1)
        if isinstance(second, NormalizationError):
            return second

        if tags[0] is WeekType.A:
            return DifferentSlot(week_a=first, week_b=second, start=start, end=end)
        return DifferentSlot(week_a=second, week_b=first, start=start, end=end)

    return StructuralError(f"{len(events)} events in one period (at most 2 supported)", weekday, period)


def convert_weekday(wire: WireWeekday, weekday: int, table: PeriodTable) -> Union[Weekday, NormalizationError]:
    count = len(wire.periods)
    if count > len(table):
        return PeriodTableError(
            f"{count} periods but the period table only has {len(table)}",
            weekday,
        )
    if count < len(table):
        return StructuralError(f"{count} periods, expected {len(table)}", weekday)

    slots: List[TimeSlot] = []
    for i, p in enumerate(wire.periods):
        slot = convert_period(p, weekday, i, table)
        if isinstance(slot, NormalizationError):
            return slot
        slots.append(slot)
    return Weekday(slots=tuple(slots))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def normalize(wire: WireTimetable, periods: PeriodTable = DEFAULT_PERIOD_TIMES) -> NormalizeResult:
    """
    Validate and restructure a wire timetable into a domain Week.

    `periods` is the period table; it decides both the slot times and the
    number of periods every weekday must have.
    """
    if len(wire.weekdays) != len(WEEKDAY_NAMES):
        err = StructuralError(f"{len(wire.weekdays)} weekdays, expected {len(WEEKDAY_NAMES)}")
        logger.debug("Normalization failed: %s", err)
        return NormalizeResult(error=err)

    days: List[Weekday] = []
    for i, wd in enumerate(wire.weekdays):
        day = convert_weekday(wd, i, periods)
        if isinstance(day, NormalizationError):
            logger.debug("Normalization failed: %s", day)
            return NormalizeResult(error=day)
        days.append(day)

    week = Week(weekdays=tuple(days), week_type=_WEEK_TYPES[WireWeekType(wire.week_type)])
    logger.debug("Normalized week %s with %d periods per day", week.week_type.value, len(periods))
    return NormalizeResult(week=week)
