"""
Error types.

Normalization errors are returned as values by cmstimetable.normalize (see
NormalizeResult), but they are still Exception subclasses so a caller can
raise them or test their kind with isinstance():

    NormalizationError
    ├── StructuralError
    │   └── PeriodTableError
    ├── FieldMissingError
    ├── InvalidIdError
    ├── UnrecognizedTypeError
    └── WeekPairingError

DecodeError and CMSError belong to the JSON and HTTP layers and never reach
the normalization engine.
"""

from __future__ import annotations

from typing import Optional, Tuple

from cmstimetable.model import WEEKDAY_NAMES


class NormalizationError(Exception):
    """
    Base class. `weekday` and `period` are zero-based positions, or None
    when the error is not tied to one.
    """

    def __init__(self, message: str, weekday: Optional[int] = None, period: Optional[int] = None) -> None:
        self.message = message
        self.weekday = weekday
        self.period = period
        super().__init__(self._format())

    def _where(self) -> str:
        if self.weekday is None:
            return ""
        day = WEEKDAY_NAMES[self.weekday] if 0 <= self.weekday < len(WEEKDAY_NAMES) else f"day {self.weekday}"
        if self.period is None:
            return day
        return f"{day}, period {self.period}"

    def _format(self) -> str:
        where = self._where()
        return f"{where}: {self.message}" if where else self.message


class StructuralError(NormalizationError):
    """The timetable does not have the shape of a school week."""


class PeriodTableError(StructuralError):
    """The configured period table is too short for the timetable."""


class FieldMissingError(NormalizationError):
    def __init__(self, field: str, weekday: int, period: int, event: int) -> None:
        self.field = field
        self.event = event
        super().__init__(f"event {event} is missing '{field}'", weekday, period)


class InvalidIdError(NormalizationError):
    def __init__(self, value: object, weekday: int, period: int, event: int) -> None:
        self.value = value
        self.event = event
        super().__init__(f"event {event} has invalid id {value!r} (expected a non-negative integer)", weekday, period)


class UnrecognizedTypeError(NormalizationError):
    def __init__(self, value: object, weekday: int, period: int, event: int) -> None:
        self.value = value
        self.event = event
        super().__init__(f"event {event} has unknown type {value!r}", weekday, period)


class WeekPairingError(NormalizationError):
    def __init__(self, tags: Tuple[Optional[str], Optional[str]], weekday: int, period: int) -> None:
        self.tags = tags
        super().__init__(f"two events must be tagged 'A' and 'B', got {tags[0]!r} and {tags[1]!r}", weekday, period)


class DecodeError(ValueError):
    """The JSON document does not have the timetable layout."""

    def __init__(self, message: str, location: str = "$") -> None:
        self.location = location
        super().__init__(f"{location}: {message}")


class CMSError(Exception):
    """A request to the CMS service failed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)
