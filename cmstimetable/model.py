"""
Central domain model definitions used across the project.

This is the validated, strictly typed form of a timetable. Everything here
is produced by cmstimetable.normalize and is safe to display directly:
- every Event has an id, a type, a name and a room
- every period of every weekday is classified as one of three slot kinds:
    EmptySlot      nothing in this period
    SameSlot       one event, held in both week A and week B
    DifferentSlot  one event in week A, another one in week B
- slot times come from the period table, never from the service
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

from cmstimetable.timeutil import Time


WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")


class EventType(str, Enum):
    LESSON = "Lesson"
    ECA = "ECA"


class WeekType(str, Enum):
    A = "A"
    B = "B"

    def other(self) -> "WeekType":
        return WeekType.B if self is WeekType.A else WeekType.A


@dataclass(frozen=True)
class Event:
    """
    One lesson or extra-curricular activity.

    The teacher is not part of the normalized event.
    """

    id: int
    type: EventType
    name: str
    room: str


# ---------------------------------------------------------------------------
# Time slots (closed set of variants)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EmptySlot:
    start: Time
    end: Time


@dataclass(frozen=True)
class SameSlot:
    event: Event
    start: Time
    end: Time


@dataclass(frozen=True)
class DifferentSlot:
    week_a: Event
    week_b: Event
    start: Time
    end: Time


TimeSlot = Union[EmptySlot, SameSlot, DifferentSlot]


def slot_event(slot: TimeSlot, week_type: WeekType) -> Optional[Event]:
    """
    Return the event shown in `slot` during week `week_type` (None if empty).
    """
    if isinstance(slot, EmptySlot):
        return None
    if isinstance(slot, SameSlot):
        return slot.event
    if isinstance(slot, DifferentSlot):
        return slot.week_a if week_type is WeekType.A else slot.week_b
    raise TypeError(f"Not a time slot: {slot!r}")


@dataclass(frozen=True)
class Weekday:
    slots: Tuple[TimeSlot, ...]

    def events_for(self, week_type: WeekType) -> List[Tuple[Time, Time, Event]]:
        """
        List (start, end, event) for every occupied period in the given week.
        """
        out: List[Tuple[Time, Time, Event]] = []
        for slot in self.slots:
            ev = slot_event(slot, week_type)
            if ev is not None:
                out.append((slot.start, slot.end, ev))
        return out


@dataclass(frozen=True)
class Week:
    """
    Monday..Friday plus the week type the service says is current.
    """

    weekdays: Tuple[Weekday, Weekday, Weekday, Weekday, Weekday]
    week_type: WeekType

    def __post_init__(self) -> None:
        if len(self.weekdays) != len(WEEKDAY_NAMES):
            raise ValueError(f"A week has {len(WEEKDAY_NAMES)} weekdays, got {len(self.weekdays)}")

    def day(self, which: Union[int, str]) -> Weekday:
        """
        Look up a weekday by index (0 = Monday) or by English name.
        """
        if isinstance(which, str):
            key = which.strip().capitalize()
            if key not in WEEKDAY_NAMES:
                raise KeyError(which)
            return self.weekdays[WEEKDAY_NAMES.index(key)]
        return self.weekdays[which]

    @property
    def monday(self) -> Weekday:
        return self.weekdays[0]

    @property
    def tuesday(self) -> Weekday:
        return self.weekdays[1]

    @property
    def wednesday(self) -> Weekday:
        return self.weekdays[2]

    @property
    def thursday(self) -> Weekday:
        return self.weekdays[3]

    @property
    def friday(self) -> Weekday:
        return self.weekdays[4]


@dataclass(frozen=True)
class Assembly:
    """
    A school assembly as listed by the service.

    `date` is kept as the service sends it (YYYY-MM-DD).
    """

    title: str
    location: str
    date: str
    classes: str


# ---------------------------------------------------------------------------
# Student information
# ---------------------------------------------------------------------------


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class Year(str, Enum):
    G1 = "G1"
    G2 = "G2"
    A1 = "A1"
    A2 = "A2"


class House(str, Enum):
    WOOD = "Wood"
    WATER = "Water"
    METAL = "Metal"
    FIRE = "Fire"


@dataclass(frozen=True)
class GeneralInfo:
    id: int
    name: str
    english_name: str
    pinyin: str
    form_group: str
    photo: str


@dataclass(frozen=True)
class BasicInfo:
    """
    `enrollment` is kept as the service sends it (YYYY.MM).
    """

    gender: Gender
    year: Year
    house: House
    dormitory: str
    dormitory_kind: str
    enrollment: str
    mobile_number: str
    school_email: str
    student_email: str


@dataclass(frozen=True)
class UserInformation:
    """
    The logged-in student's profile.

    `more_info` and `relatives` are passed through undecoded; the service
    has only ever been seen to send null for them.
    """

    has_more_info: bool
    general_info: GeneralInfo
    basic_info: BasicInfo
    more_info: Any = None
    relatives: Any = None
