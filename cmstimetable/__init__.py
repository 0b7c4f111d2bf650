"""Normalize CMS school timetables into a week-aware schedule model."""

from cmstimetable.errors import (
    FieldMissingError,
    InvalidIdError,
    NormalizationError,
    PeriodTableError,
    StructuralError,
    UnrecognizedTypeError,
    WeekPairingError,
)
from cmstimetable.model import DifferentSlot, EmptySlot, Event, EventType, SameSlot, Week, WeekType, Weekday
from cmstimetable.normalize import NormalizeResult, normalize

__all__ = [
    "DifferentSlot",
    "EmptySlot",
    "Event",
    "EventType",
    "FieldMissingError",
    "InvalidIdError",
    "NormalizationError",
    "NormalizeResult",
    "PeriodTableError",
    "SameSlot",
    "StructuralError",
    "UnrecognizedTypeError",
    "Week",
    "WeekPairingError",
    "WeekType",
    "Weekday",
    "normalize",
]
