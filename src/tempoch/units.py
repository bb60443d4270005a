"""Time units accepted at the quantity boundary.

Durations are :class:`astropy.units.Quantity` values. This module only
re-exports the time units tempoch works with and defines the Julian
century, which astropy does not ship under its own name. Conversion between
units is left to astropy.

Typical usage::

    from tempoch.units import HOUR
    later = jd.add(12.0 * HOUR)
"""

from __future__ import annotations

import astropy.units as u

from .constants import DAYS_PER_JULIAN_CENTURY

SECOND = u.s
MINUTE = u.min
HOUR = u.hour
DAY = u.day
JULIAN_YEAR = u.yr

JULIAN_CENTURY = u.def_unit(
    "julian_century",
    DAYS_PER_JULIAN_CENTURY * u.day,
    doc="Julian century: 36525 days",
)

Quantity = u.Quantity
UnitConversionError = u.UnitConversionError


def is_duration(value) -> bool:
    """Return ``True`` if *value* is a quantity convertible to days.

    Args:
        value: Any object.

    Returns:
        bool: Whether *value* is an astropy quantity with a time unit.
    """
    return isinstance(value, u.Quantity) and value.unit.is_equivalent(u.day)
