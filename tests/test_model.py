import unittest

from cmstimetable.model import (
    DifferentSlot,
    EmptySlot,
    Event,
    EventType,
    SameSlot,
    Week,
    WeekType,
    Weekday,
    slot_event,
)
from cmstimetable.timeutil import Time

T1 = (Time(8, 0), Time(8, 40))
T2 = (Time(8, 50), Time(9, 30))
T3 = (Time(9, 40), Time(10, 20))

MATH = Event(1, EventType.LESSON, "Math", "101")
ART = Event(2, EventType.LESSON, "Art", "A1")
CLUB = Event(3, EventType.ECA, "Robotics", "Lab")


def sample_day() -> Weekday:
    return Weekday(slots=(EmptySlot(*T1), SameSlot(MATH, *T2), DifferentSlot(ART, CLUB, *T3)))


class TestSlots(unittest.TestCase):
    def test_slot_event(self) -> None:
        empty, same, different = sample_day().slots
        self.assertIsNone(slot_event(empty, WeekType.A))
        self.assertIs(slot_event(same, WeekType.A), MATH)
        self.assertIs(slot_event(same, WeekType.B), MATH)
        self.assertIs(slot_event(different, WeekType.A), ART)
        self.assertIs(slot_event(different, WeekType.B), CLUB)

    def test_slot_event_rejects_other_values(self) -> None:
        with self.assertRaises(TypeError):
            slot_event("not a slot", WeekType.A)

    def test_events_for(self) -> None:
        day = sample_day()
        self.assertEqual(day.events_for(WeekType.A), [(*T2, MATH), (*T3, ART)])
        self.assertEqual(day.events_for(WeekType.B), [(*T2, MATH), (*T3, CLUB)])


class TestWeek(unittest.TestCase):
    def test_day_lookup(self) -> None:
        days = tuple(Weekday(slots=(SameSlot(Event(i, EventType.LESSON, "X", "R"), *T1),)) for i in range(5))
        week = Week(weekdays=days, week_type=WeekType.A)
        self.assertIs(week.day(0), week.monday)
        self.assertIs(week.day("friday"), week.friday)
        self.assertEqual(week.day("Wednesday").slots[0].event.id, 2)
        with self.assertRaises(KeyError):
            week.day("Saturday")

    def test_week_needs_five_days(self) -> None:
        with self.assertRaises(ValueError):
            Week(weekdays=(sample_day(),) * 4, week_type=WeekType.A)

    def test_other_week(self) -> None:
        self.assertIs(WeekType.A.other(), WeekType.B)
        self.assertIs(WeekType.B.other(), WeekType.A)


if __name__ == "__main__":
    unittest.main()
