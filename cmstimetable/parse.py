"""
Parsing (service JSON -> records).

Mainly turns the document returned by

    GET /api/legacy/students/my/timetable

into cmstimetable.wire records. Layout of the document:

    {
      "week_type": "A",
      "week_a_periods": 30, "week_b_periods": 31,
      "duty_periods": 0, "contract_periods": 0,
      "weekdays": [
        {"periods": [
          {"events": [
            {"type": 1, "id": 12, "name": "Maths", "room": "101",
             "teacher": "...", "week_type": "A"}
          ]}
        ]}
      ]
    }

Important rules:
- Optional event fields may be missing or null -> None (no defaults here)
- Unknown event type discriminants are rejected here already
- Anything that is not the expected layout -> DecodeError with its location

The assembly list and the student profile are parsed at the bottom of the
module. Their fields are required: a missing or null value is a DecodeError,
never the string "None".
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from cmstimetable.errors import DecodeError
from cmstimetable.model import Assembly, BasicInfo, Gender, GeneralInfo, House, UserInformation, Year
from cmstimetable.wire import WireEvent, WireEventType, WirePeriod, WireTimetable, WireWeekday, WireWeekType


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _require_dict(value: Any, location: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"expected an object, got {type(value).__name__}", location)
    return value


def _require_list(value: Any, location: str) -> List[Any]:
    if not isinstance(value, list):
        raise DecodeError(f"expected an array, got {type(value).__name__}", location)
    return value


def _optional_str(value: Any, location: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f"expected a string, got {type(value).__name__}", location)
    return value


def _count(obj: Dict[str, Any], key: str, location: str) -> int:
    # bool is an int subclass; the service never sends booleans here
    value = obj.get(key, 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DecodeError(f"expected a non-negative integer, got {value!r}", f"{location}.{key}")
    return value


# ---------------------------------------------------------------------------
# Record parsing
# ---------------------------------------------------------------------------


def parse_event(raw: Any, location: str = "$") -> WireEvent:
    """
    Parse one event object. Missing fields become None.
    """
    obj = _require_dict(raw, location)

    event_type = obj.get("type")
    if event_type is not None:
        if isinstance(event_type, bool) or not isinstance(event_type, int):
            raise DecodeError(f"invalid event type {event_type!r}", f"{location}.type")
        try:
            WireEventType(event_type)
        except ValueError:
            raise DecodeError(f"invalid event type {event_type!r}", f"{location}.type") from None

    event_id = obj.get("id")
    if event_id is not None:
        if isinstance(event_id, bool) or not isinstance(event_id, int) or event_id < 0:
            raise DecodeError(f"expected a non-negative integer id, got {event_id!r}", f"{location}.id")

    return WireEvent(
        type=event_type,
        id=event_id,
        name=_optional_str(obj.get("name"), f"{location}.name"),
        room=_optional_str(obj.get("room"), f"{location}.room"),
        teacher=_optional_str(obj.get("teacher"), f"{location}.teacher"),
        week_type=_optional_str(obj.get("week_type"), f"{location}.week_type"),
    )


def parse_period(raw: Any, location: str = "$") -> WirePeriod:
    obj = _require_dict(raw, location)
    events = _require_list(obj.get("events", []), f"{location}.events")
    return WirePeriod(events=tuple(parse_event(e, f"{location}.events[{i}]") for i, e in enumerate(events)))


def parse_weekday(raw: Any, location: str = "$") -> WireWeekday:
    obj = _require_dict(raw, location)
    periods = _require_list(obj.get("periods", []), f"{location}.periods")
    return WireWeekday(periods=tuple(parse_period(p, f"{location}.periods[{i}]") for i, p in enumerate(periods)))


def parse_timetable(data: Any) -> WireTimetable:
    """
    Parse a whole timetable document (already decoded from JSON).
    """
    obj = _require_dict(data, "$")

    if "week_type" not in obj:
        raise DecodeError("missing 'week_type'", "$")
    try:
        week_type = WireWeekType(obj["week_type"])
    except ValueError:
        raise DecodeError(f"invalid week type {obj['week_type']!r}", "$.week_type") from None

    if "weekdays" not in obj:
        raise DecodeError("missing 'weekdays'", "$")
    weekdays = _require_list(obj["weekdays"], "$.weekdays")

    return WireTimetable(
        week_type=week_type,
        weekdays=tuple(parse_weekday(d, f"$.weekdays[{i}]") for i, d in enumerate(weekdays)),
        week_a_periods=_count(obj, "week_a_periods", "$"),
        week_b_periods=_count(obj, "week_b_periods", "$"),
        duty_periods=_count(obj, "duty_periods", "$"),
        contract_periods=_count(obj, "contract_periods", "$"),
    )


def loads_timetable(text: str) -> WireTimetable:
    """
    Parse a timetable from JSON text.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"malformed JSON ({exc.msg}, line {exc.lineno})") from exc
    return parse_timetable(data)


# ---------------------------------------------------------------------------
# Assemblies and student information
# ---------------------------------------------------------------------------


def _require_str(obj: Dict[str, Any], key: str, location: str) -> str:
    if key not in obj:
        raise DecodeError(f"missing '{key}'", location)
    value = _optional_str(obj[key], f"{location}.{key}")
    if value is None:
        raise DecodeError("expected a string, got null", f"{location}.{key}")
    return value


def _require_enum(obj: Dict[str, Any], key: str, enum_cls: Any, location: str) -> Any:
    value = _require_str(obj, key, location)
    try:
        return enum_cls(value)
    except ValueError:
        raise DecodeError(f"invalid {enum_cls.__name__.lower()} {value!r}", f"{location}.{key}") from None


def parse_assemblies(data: Any) -> List[Assembly]:
    """
    Parse the assembly list. All four fields are required strings.
    """
    items = _require_list(data, "$")
    out: List[Assembly] = []
    for i, raw in enumerate(items):
        location = f"$[{i}]"
        obj = _require_dict(raw, location)
        out.append(
            Assembly(
                title=_require_str(obj, "title", location),
                location=_require_str(obj, "location", location),
                date=_require_str(obj, "date", location),
                classes=_require_str(obj, "classes", location),
            )
        )
    return out


def parse_user_information(data: Any) -> UserInformation:
    """
    Parse the student profile document from GET /api/legacy/students/my.
    """
    obj = _require_dict(data, "$")

    has_more_info = obj.get("has_more_info")
    if not isinstance(has_more_info, bool):
        raise DecodeError(f"expected a boolean, got {has_more_info!r}", "$.has_more_info")

    if "general_info" not in obj:
        raise DecodeError("missing 'general_info'", "$")
    gen = _require_dict(obj["general_info"], "$.general_info")
    student_id = gen.get("id")
    if isinstance(student_id, bool) or not isinstance(student_id, int) or student_id < 0:
        raise DecodeError(f"expected a non-negative integer id, got {student_id!r}", "$.general_info.id")
    general_info = GeneralInfo(
        id=student_id,
        name=_require_str(gen, "name", "$.general_info"),
        english_name=_require_str(gen, "en_name", "$.general_info"),
        pinyin=_require_str(gen, "pingyin", "$.general_info"),
        form_group=_require_str(gen, "form_group", "$.general_info"),
        photo=_require_str(gen, "photo", "$.general_info"),
    )

    if "basic_info" not in obj:
        raise DecodeError("missing 'basic_info'", "$")
    basic = _require_dict(obj["basic_info"], "$.basic_info")
    basic_info = BasicInfo(
        gender=_require_enum(basic, "gender", Gender, "$.basic_info"),
        year=_require_enum(basic, "grade", Year, "$.basic_info"),
        house=_require_enum(basic, "house", House, "$.basic_info"),
        dormitory=_require_str(basic, "dormitory", "$.basic_info"),
        dormitory_kind=_require_str(basic, "dormitory_kind", "$.basic_info"),
        enrollment=_require_str(basic, "enrollment", "$.basic_info"),
        mobile_number=_require_str(basic, "mobile", "$.basic_info"),
        school_email=_require_str(basic, "school_email", "$.basic_info"),
        student_email=_require_str(basic, "student_email", "$.basic_info"),
    )

    return UserInformation(
        has_more_info=has_more_info,
        general_info=general_info,
        basic_info=basic_info,
        more_info=obj.get("more_info"),
        relatives=obj.get("relatives"),
    )
