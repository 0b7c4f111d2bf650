"""
Time-of-day values and the school period table.

The remote service only tells us *which* period an event belongs to
(its position inside the day), never the clock time. The clock times
come from a fixed table configured here:

    DEFAULT_PERIOD_TIMES[i] == (start, end) of period i

The length of that table is the number of periods every weekday must have.
"""

from __future__ import annotations

from functools import total_ordering
from typing import Iterable, Tuple


@total_ordering
class Time:
    """
    A wall-clock time of day.

    Stored packed into one integer (hour in the upper 16 bits, minute in the
    lower 16 bits). Because the hour occupies the high bits, comparing the
    packed values orders by hour first and minute second.
    """

    __slots__ = ("_packed",)

    def __init__(self, hour: int, minute: int) -> None:
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise ValueError(f"Invalid time value: {hour:02d}:{minute:02d}")
        self._packed = (hour << 16) | minute

    @classmethod
    def parse(cls, hhmm: str) -> "Time":
        """
        Build a Time from 'HH:MM'.
        Raises ValueError for invalid formats.
        """
        if not isinstance(hhmm, str):
            raise ValueError(f"Invalid time format: {hhmm!r}")
        parts = hhmm.strip().split(":")
        if len(parts) != 2:
            raise ValueError(f"Invalid time format: {hhmm!r}")
        try:
            h = int(parts[0])
            m = int(parts[1])
        except ValueError:
            raise ValueError(f"Invalid time format: {hhmm!r}") from None
        return cls(h, m)

    @property
    def hour(self) -> int:
        return self._packed >> 16

    @property
    def minute(self) -> int:
        return self._packed & 0xFFFF

    def to_minutes(self) -> int:
        return self.hour * 60 + self.minute

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._packed == other._packed

    def __lt__(self, other: "Time") -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._packed < other._packed

    def __hash__(self) -> int:
        return hash(self._packed)

    def __repr__(self) -> str:
        return f"Time(hour={self.hour}, minute={self.minute})"

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


PeriodTable = Tuple[Tuple[Time, Time], ...]


# ---------------------------------------------------------------------------
# Period table
# ---------------------------------------------------------------------------


def build_period_table(pairs: Iterable[Tuple[str, str]]) -> PeriodTable:
    """
    Build a period table from ("HH:MM", "HH:MM") text pairs.

    Periods must be listed in chronological order, each one ending after it
    starts and starting no earlier than the previous one ended.
    """
    table: list[tuple[Time, Time]] = []
    for i, pair in enumerate(pairs):
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise ValueError(f"Period {i}: expected a (start, end) pair, got {pair!r}")
        start = Time.parse(pair[0])
        end = Time.parse(pair[1])
        if end <= start:
            raise ValueError(f"Period {i}: end {end} is not after start {start}")
        if table and start < table[-1][1]:
            raise ValueError(f"Period {i}: starts at {start} before period {i - 1} ends at {table[-1][1]}")
        table.append((start, end))
    return tuple(table)


DEFAULT_PERIOD_TIMES: PeriodTable = build_period_table(
    [
        ("08:00", "08:40"),
        ("08:50", "09:30"),
        ("09:40", "10:20"),
        ("10:40", "11:20"),
        ("11:30", "12:10"),
        ("13:30", "14:10"),
        ("14:20", "15:00"),
        ("15:10", "15:50"),
        ("16:00", "16:40"),
        ("16:50", "17:30"),
    ]
)


def period_time(index: int, table: PeriodTable = DEFAULT_PERIOD_TIMES) -> Tuple[Time, Time]:
    """
    Return (start, end) of the period at zero-based position `index`.
    Raises IndexError if the table has no such period.
    """
    if not 0 <= index < len(table):
        raise IndexError(f"Period {index} is outside the period table (0..{len(table) - 1})")
    return table[index]
