"""MS-DOS packed date/time conversion.

ZIP directory records store modification times as a 32-bit word: the date in
the high half (years since 1980, month, day) and the time in the low half
(hour, minute, seconds / 2). Values carry no timezone and are read as local
time.
"""

from __future__ import annotations

import calendar
from datetime import datetime

DOS_EPOCH_YEAR = 1980


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def unpack_dos_time(packed: int) -> tuple[int, int, int, int, int, int]:
    """Split ``packed`` into a ``(year, month, day, hour, minute, second)`` tuple.

    Fields outside their calendar range are clamped so that any 32-bit word
    maps to a real moment.
    """
    year = ((packed >> 25) & 0x7F) + DOS_EPOCH_YEAR
    month = _clamp((packed >> 21) & 0x0F, 1, 12)
    day = _clamp((packed >> 16) & 0x1F, 1, calendar.monthrange(year, month)[1])
    hour = _clamp((packed >> 11) & 0x1F, 0, 23)
    minute = _clamp((packed >> 5) & 0x3F, 0, 59)
    second = _clamp((packed << 1) & 0x3E, 0, 59)
    return year, month, day, hour, minute, second


def dos_time_to_ns(packed: int) -> int:
    """Convert a packed DOS timestamp to epoch nanoseconds (local time)."""
    moment = datetime(*unpack_dos_time(packed))
    return int(moment.timestamp()) * 1_000_000_000


def pack_dos_time(date_time: tuple[int, ...]) -> int:
    """Pack a ``zipfile``-style ``date_time`` tuple into a DOS timestamp word."""
    year, month, day, hour, minute, second = date_time[:6]
    year = _clamp(year, DOS_EPOCH_YEAR, DOS_EPOCH_YEAR + 0x7F)
    return (
        ((year - DOS_EPOCH_YEAR) << 25)
        | (month << 21)
        | (day << 16)
        | (hour << 11)
        | (minute << 5)
        | (second // 2)
    )


__all__ = ["DOS_EPOCH_YEAR", "unpack_dos_time", "dos_time_to_ns", "pack_dos_time"]
