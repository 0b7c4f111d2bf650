"""
Wire model: timetable data exactly as the CMS service sends it.

These records are deliberately permissive. The service omits event fields
unpredictably, so almost everything on an event is Optional. Validation
happens later, in cmstimetable.normalize.

Note the two different week-type representations:
- the timetable's own week (WireTimetable.week_type) is a strict A/B enum
- an event's week tag (WireEvent.week_type) is free text, because the
  service is inconsistent about how it writes it
Keep them separate.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple


class WireWeekType(str, Enum):
    A = "A"
    B = "B"


class WireEventType(IntEnum):
    """
    Event type discriminants as encoded by the service.
    """

    LESSON = 1
    ECA = 2


@dataclass(frozen=True)
class WireEvent:
    """
    One raw event inside a period.

    `type` holds the raw integer discriminant (see WireEventType).
    """

    type: Optional[int] = None
    id: Optional[int] = None
    name: Optional[str] = None
    room: Optional[str] = None
    teacher: Optional[str] = None
    week_type: Optional[str] = None


@dataclass(frozen=True)
class WirePeriod:
    events: Tuple[WireEvent, ...] = ()


@dataclass(frozen=True)
class WireWeekday:
    # position i corresponds to period i of the school day
    periods: Tuple[WirePeriod, ...] = ()


@dataclass(frozen=True)
class WireTimetable:
    """
    The whole weekly timetable response.
    """

    week_type: WireWeekType
    weekdays: Tuple[WireWeekday, ...]
    week_a_periods: int = 0
    week_b_periods: int = 0
    duty_periods: int = 0
    contract_periods: int = 0
