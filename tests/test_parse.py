"""
Unit tests for JSON -> wire decoding.

Decoder contract:
- missing/null event fields -> None
- unknown event type discriminant, bad week type, negative id -> DecodeError
- DecodeError.location points at the offending value
"""

import json
import unittest

from cmstimetable.errors import DecodeError
from cmstimetable.parse import loads_timetable, parse_event, parse_timetable
from cmstimetable.wire import WireEvent, WireEventType, WireWeekType


def document(events=None):
    periods = [{"events": []} for _ in range(3)]
    if events is not None:
        periods[0]["events"] = events
    return {
        "week_type": "B",
        "week_a_periods": 30,
        "week_b_periods": 31,
        "duty_periods": 2,
        "contract_periods": 0,
        "weekdays": [{"periods": periods} for _ in range(5)],
    }


class TestParseTimetable(unittest.TestCase):
    def test_full_document(self) -> None:
        doc = document(
            [
                {"type": 1, "id": 3, "name": "Maths", "room": "101", "teacher": "T", "week_type": "A"},
                {"type": 2, "id": 4, "name": "Chess", "room": None, "teacher": None, "week_type": "B"},
            ]
        )
        wire = parse_timetable(doc)
        self.assertIs(wire.week_type, WireWeekType.B)
        self.assertEqual(len(wire.weekdays), 5)
        self.assertEqual(len(wire.weekdays[0].periods), 3)
        self.assertEqual((wire.week_a_periods, wire.week_b_periods, wire.duty_periods), (30, 31, 2))

        first, second = wire.weekdays[0].periods[0].events
        self.assertEqual(first, WireEvent(type=1, id=3, name="Maths", room="101", teacher="T", week_type="A"))
        self.assertEqual(second.type, WireEventType.ECA)
        self.assertIsNone(second.room)

    def test_missing_event_fields_become_none(self) -> None:
        self.assertEqual(parse_event({}), WireEvent())

    def test_counters_default_to_zero(self) -> None:
        doc = document()
        del doc["duty_periods"]
        self.assertEqual(parse_timetable(doc).duty_periods, 0)

    def test_unknown_event_type(self) -> None:
        with self.assertRaises(DecodeError) as ctx:
            parse_timetable(document([{"type": 3, "id": 1}]))
        self.assertEqual(ctx.exception.location, "$.weekdays[0].periods[0].events[0].type")

    def test_bad_ids(self) -> None:
        for bad in (-1, "7", True, 1.5):
            with self.subTest(id=bad):
                with self.assertRaises(DecodeError):
                    parse_event({"id": bad})

    def test_bad_week_type(self) -> None:
        doc = document()
        doc["week_type"] = "C"
        with self.assertRaises(DecodeError) as ctx:
            parse_timetable(doc)
        self.assertEqual(ctx.exception.location, "$.week_type")

    def test_missing_top_level_keys(self) -> None:
        for key in ("week_type", "weekdays"):
            with self.subTest(key=key):
                doc = document()
                del doc[key]
                with self.assertRaises(DecodeError):
                    parse_timetable(doc)

    def test_wrong_container_types(self) -> None:
        doc = document()
        doc["weekdays"][2]["periods"] = {"events": []}
        with self.assertRaises(DecodeError) as ctx:
            parse_timetable(doc)
        self.assertEqual(ctx.exception.location, "$.weekdays[2].periods")

        with self.assertRaises(DecodeError):
            parse_timetable([])

    def test_loads_timetable(self) -> None:
        wire = loads_timetable(json.dumps(document()))
        self.assertIs(wire.week_type, WireWeekType.B)
        with self.assertRaises(DecodeError):
            loads_timetable("{not json")


if __name__ == "__main__":
    unittest.main()
