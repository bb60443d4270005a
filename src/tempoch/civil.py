"""Civil date-time breakdown.

:class:`CivilTime` is the interchange format between day-count scales and
human-readable time. It always labels **UTC** and performs no validation of
its own; the time core adjudicates validity during conversion.

``CivilTime`` is a :class:`~typing.NamedTuple`, which JAX treats as a
pytree automatically.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import NamedTuple


class CivilTime(NamedTuple):
    """UTC date-time breakdown.

    The default value is 2000-01-01 12:00:00, the civil noon of J2000.

    Attributes:
        year: Gregorian year (astronomical year numbering).
        month: Month ``[1, 12]``.
        day: Day of month ``[1, 31]``.
        hour: Hour ``[0, 23]``.
        minute: Minute ``[0, 59]``.
        second: Second ``[0, 60]``; 60 only during a leap second.
        nanosecond: Nanosecond ``[0, 999_999_999]``.

    Examples:
        ```python
        from tempoch import CivilTime, JulianDate
        jd = JulianDate.from_civil(CivilTime(2026, 7, 15, 22))
        str(jd.to_civil())  # '2026-07-15 22:00:00'
        ```
    """

    year: int = 2000
    month: int = 1
    day: int = 1
    hour: int = 12
    minute: int = 0
    second: int = 0
    nanosecond: int = 0

    def to_native(self) -> tuple[int, int, int, int, int, float]:
        """Return the argument layout of ERFA ``dtf2d``.

        Returns:
            tuple: ``(year, month, day, hour, minute, seconds)`` where
                seconds carries the nanoseconds as a fraction.
        """
        return (
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second + self.nanosecond * 1e-9,
        )

    @classmethod
    def from_native(cls, year, month, day, ihmsf, ndp: int) -> CivilTime:
        """Build from ERFA ``d2dtf`` output.

        Args:
            year: Year returned by ``d2dtf``.
            month: Month returned by ``d2dtf``.
            day: Day returned by ``d2dtf``.
            ihmsf: Structured ``(h, m, s, f)`` record returned by ``d2dtf``.
            ndp (int): Number of decimal places ``d2dtf`` was asked for; ``f``
                is the fraction of a second in units of ``10**-ndp``.

        Returns:
            CivilTime: The breakdown, with the fraction scaled to nanoseconds.
        """
        return cls(
            int(year),
            int(month),
            int(day),
            int(ihmsf["h"]),
            int(ihmsf["m"]),
            int(ihmsf["s"]),
            int(ihmsf["f"]) * 10 ** (9 - ndp),
        )

    def to_datetime(self) -> datetime:
        """Convert to a timezone-aware UTC :class:`~datetime.datetime`.

        ``datetime`` cannot hold a leap second, so second 60 clamps to
        ``59.999999``. Sub-microsecond digits are truncated.

        Returns:
            datetime: The same instant in UTC.
        """
        if self.second >= 60:
            return datetime(
                self.year, self.month, self.day, self.hour, self.minute, 59, 999999,
                tzinfo=timezone.utc,
            )
        return datetime(
            self.year, self.month, self.day, self.hour, self.minute, self.second,
            self.nanosecond // 1000,
            tzinfo=timezone.utc,
        )

    @classmethod
    def from_datetime(cls, value: datetime) -> CivilTime:
        """Build from a :class:`~datetime.datetime`.

        Naive values are taken to be UTC; aware values are converted to UTC.

        Args:
            value (datetime): The instant to break down.

        Returns:
            CivilTime: The UTC breakdown.
        """
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return cls(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond * 1000,
        )

    def __str__(self) -> str:
        text = (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        )
        if self.nanosecond != 0:
            text += f".{self.nanosecond:09d}"
        return text

