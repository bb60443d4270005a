"""Scale tags and their trait table.

Each scale is a class that is never instantiated. The class itself is the
tag selecting a scale and it also carries the trait implementation for that
scale as classmethods, so every tag has exactly one specialization by
construction. :class:`~tempoch.time.Time` dispatches every operation
through these classmethods and contains no per-scale branching.

Three scales are backed directly by their own time-core calls:

- :class:`JDScale`: Julian Date on the TT axis. This is the hub scale.
- :class:`MJDScale`: Modified Julian Date on the TT axis.
- :class:`UTCScale`: UTC labelling of the MJD day-count.

Every other scale derives from :class:`JDBackedScale` and only supplies the
two half-paths ``to_jd`` and ``from_jd``. Civil conversion and arithmetic
are inherited by routing through Julian Date.

Adding a scale::

    class MyScale(JDBackedScale):
        name = "MY"

        @classmethod
        def to_jd(cls, value):
            ...

        @classmethod
        def from_jd(cls, jd):
            ...
"""

from __future__ import annotations

import abc
import logging
from typing import ClassVar

import astropy.units as u
import jax.numpy as jnp

from . import _core
from .civil import CivilTime
from .constants import SECONDS_PER_DAY
from .errors import check_status

logger = logging.getLogger(__name__)

_SCALES: list[type[TimeScale]] = []


def all_scales() -> tuple[type[TimeScale], ...]:
    """Return every scale tag defined so far, in definition order.

    Returns:
        tuple: Scale tag classes.
    """
    return tuple(_SCALES)


class TimeScale(abc.ABC):
    """Trait contract shared by all scale tags.

    Subclasses define ``name`` (the human-readable label) and the two civil
    conversions. Day arithmetic defaults to plain addition and subtraction
    in :attr:`native_unit`.

    Attributes:
        name (str): Scale label, e.g. ``"JD"``.
        native_unit: Unit of the stored day-count (``astropy.units.day``
            unless overridden).
    """

    name: ClassVar[str]
    native_unit: ClassVar[u.UnitBase] = u.day

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "name" in cls.__dict__:
            _SCALES.append(cls)
            logger.debug("registered time scale %s", cls.name)

    def __init__(self) -> None:
        raise TypeError(f"{type(self).__name__} is a scale tag and is never instantiated")

    @classmethod
    def label(cls) -> str:
        """Return the scale label."""
        return cls.name

    @classmethod
    def _operation(cls, op: str) -> str:
        return f"Time<{cls.name}>.{op}"

    @classmethod
    def _checked(cls, op: str, result):
        status, value = result
        check_status(status, cls._operation(op))
        return value

    @classmethod
    @abc.abstractmethod
    def from_civil(cls, civil: CivilTime):
        """Convert a UTC civil breakdown to a day-count on this scale."""

    @classmethod
    @abc.abstractmethod
    def to_civil(cls, value) -> CivilTime:
        """Convert a day-count on this scale to a UTC civil breakdown."""

    @classmethod
    def add_days(cls, value, delta):
        return _core.add_days(value, delta)

    @classmethod
    def difference(cls, a, b):
        return _core.difference(a, b)

    @classmethod
    def add_quantity(cls, value, quantity):
        """Advance *value* by a time quantity.

        Raises:
            NullPointerError: If *quantity* is ``None``.
            InvalidQuantityError: If *quantity* is not a time duration.
        """
        return cls._checked("add", _core.add_quantity(value, quantity, cls.native_unit))

    @classmethod
    def difference_quantity(cls, a, b) -> u.Quantity:
        """Return ``a - b`` as a quantity in :attr:`native_unit`."""
        return _core.difference_quantity(a, b, cls.native_unit)


# ---------------------------------------------------------------------------
# Direct specializations
# ---------------------------------------------------------------------------


class JDScale(TimeScale):
    """Julian Date on the TT axis (hub scale)."""

    name = "JD"

    @classmethod
    def from_civil(cls, civil):
        return cls._checked("from_civil", _core.jd_from_civil(civil))

    @classmethod
    def to_civil(cls, value):
        return cls._checked("to_civil", _core.jd_to_civil(value))


class MJDScale(TimeScale):
    """Modified Julian Date (JD - 2400000.5) on the TT axis."""

    name = "MJD"

    @classmethod
    def from_civil(cls, civil):
        return cls._checked("from_civil", _core.mjd_from_civil(civil))

    @classmethod
    def to_civil(cls, value):
        return cls._checked("to_civil", _core.mjd_to_civil(value))


class UTCScale(TimeScale):
    """UTC, carried on the MJD day-count.

    A UTC value is the MJD of the same instant, so JD, MJD and UTC convert
    by pure arithmetic. Leap seconds enter only when a civil breakdown is
    read or written, through the same path as :class:`MJDScale`.
    """

    name = "UTC"

    @classmethod
    def from_civil(cls, civil):
        return cls._checked("from_civil", _core.utc_from_civil(civil))

    @classmethod
    def to_civil(cls, value):
        return cls._checked("to_civil", _core.utc_to_civil(value))


# ---------------------------------------------------------------------------
# Hub adapter
# ---------------------------------------------------------------------------


class JDBackedScale(TimeScale):
    """Base for scales expressed as a Julian Date plus an offset.

    A subclass supplies ``to_jd`` and ``from_jd``; everything else routes
    through :class:`JDScale`. Arithmetic therefore advances by days of the
    hub (TT) axis. It stays traceable under ``jax.jit`` only when both
    half-paths are pure arithmetic.
    """

    @classmethod
    @abc.abstractmethod
    def to_jd(cls, value):
        """Convert a value on this scale to Julian Date (TT)."""

    @classmethod
    @abc.abstractmethod
    def from_jd(cls, jd):
        """Convert a Julian Date (TT) to a value on this scale."""

    @classmethod
    def from_civil(cls, civil):
        return cls.from_jd(cls._checked("from_civil", _core.jd_from_civil(civil)))

    @classmethod
    def to_civil(cls, value):
        return cls._checked("to_civil", _core.jd_to_civil(cls.to_jd(value)))

    @classmethod
    def add_days(cls, value, delta):
        return cls.from_jd(JDScale.add_days(cls.to_jd(value), delta))

    @classmethod
    def difference(cls, a, b):
        return JDScale.difference(cls.to_jd(a), cls.to_jd(b))

    @classmethod
    def add_quantity(cls, value, quantity):
        jd = cls._checked("add", _core.add_quantity(cls.to_jd(value), quantity))
        return cls.from_jd(jd)

    @classmethod
    def difference_quantity(cls, a, b):
        return JDScale.difference_quantity(cls.to_jd(a), cls.to_jd(b))


class TTScale(JDBackedScale):
    """Terrestrial Time, Julian Date. Shares the hub axis."""

    name = "TT"

    @classmethod
    def to_jd(cls, value):
        return value

    @classmethod
    def from_jd(cls, jd):
        return jd


class TAIScale(JDBackedScale):
    """International Atomic Time, Julian Date (TT - 32.184 s)."""

    name = "TAI"

    @classmethod
    def to_jd(cls, value):
        return _core.tai_to_jd(value)

    @classmethod
    def from_jd(cls, jd):
        return _core.jd_to_tai(jd)


class TDBScale(JDBackedScale):
    """Barycentric Dynamical Time, Julian Date.

    TDB - TT is evaluated for a geocentric observer; the periodic terms stay
    below 2 ms.
    """

    name = "TDB"

    @classmethod
    def to_jd(cls, value):
        return _core.tdb_to_jd(value)

    @classmethod
    def from_jd(cls, jd):
        return _core.jd_to_tdb(jd)


class TCGScale(JDBackedScale):
    """Geocentric Coordinate Time, Julian Date."""

    name = "TCG"

    @classmethod
    def to_jd(cls, value):
        return _core.tcg_to_jd(value)

    @classmethod
    def from_jd(cls, jd):
        return _core.jd_to_tcg(jd)


class TCBScale(JDBackedScale):
    """Barycentric Coordinate Time, Julian Date. Reached through TDB."""

    name = "TCB"

    @classmethod
    def to_jd(cls, value):
        return _core.tdb_to_jd(_core.tcb_to_tdb(value))

    @classmethod
    def from_jd(cls, jd):
        return _core.tdb_to_tcb(_core.jd_to_tdb(jd))


class GPSScale(JDBackedScale):
    """GPS Time, Julian Date (TAI - 19 s)."""

    name = "GPS"

    @classmethod
    def to_jd(cls, value):
        return _core.tai_to_jd(_core.gps_to_tai(value))

    @classmethod
    def from_jd(cls, jd):
        return _core.tai_to_gps(_core.jd_to_tai(jd))


class UT1Scale(JDBackedScale):
    """Universal Time, Julian Date.

    UT1 = TT - ΔT, where ΔT comes from the leap-second count and the
    configured UT1-UTC offset, see :func:`tempoch.config.set_dut1`.
    """

    name = "UT1"

    @classmethod
    def to_jd(cls, value):
        return _core.ut1_to_jd(value)

    @classmethod
    def from_jd(cls, jd):
        return _core.jd_to_ut1(jd)


class JDEScale(TDBScale):
    """Julian Ephemeris Date: a Julian Date on the TDB axis."""

    name = "JDE"


class UnixScale(JDBackedScale):
    """Unix time: seconds on the UTC day-count, zero at MJD 40587.0.

    The value is ``(utc - 40587) * 86400``, so it converts to and from the
    other scales by pure arithmetic. Arithmetic and quantities are handled
    in seconds rather than routed through the hub. Civil conversion goes
    through the UTC path, which applies the leap seconds.
    """

    name = "Unix"
    native_unit = u.s

    @classmethod
    def to_jd(cls, value):
        return _core.utc_to_jd(_core.unix_to_utc(value))

    @classmethod
    def from_jd(cls, jd):
        return _core.utc_to_unix(_core.jd_to_utc(jd))

    @classmethod
    def from_civil(cls, civil):
        return _core.utc_to_unix(cls._checked("from_civil", _core.utc_from_civil(civil)))

    @classmethod
    def to_civil(cls, value):
        return cls._checked("to_civil", _core.utc_to_civil(_core.unix_to_utc(value)))

    @classmethod
    def add_days(cls, value, delta):
        return _core.add_days(value, jnp.multiply(delta, SECONDS_PER_DAY))

    @classmethod
    def difference(cls, a, b):
        return _core.difference(a, b)

    @classmethod
    def add_quantity(cls, value, quantity):
        return cls._checked("add", _core.add_quantity(value, quantity, cls.native_unit))

    @classmethod
    def difference_quantity(cls, a, b):
        return _core.difference_quantity(a, b, cls.native_unit)
