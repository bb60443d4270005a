"""The time module provides ``Time``, a day-count tagged with its time scale.

``Time[S]`` holds a single day-count (seconds for Unix time) on scale ``S``
and forwards every operation to the scale's trait class in
:mod:`tempoch.scales` and to the conversion graph in
:mod:`tempoch.conversions`. It has no per-scale branches of its own.

Every scale has a concrete subclass (``JulianDate``, ``UTCTime``, ...).
Methods that only make sense on one scale live on that scale's subclass
alone: ``JulianDate.j2000()`` exists, ``UTCTime.j2000()`` does not.

Time-points on different scales are different types. Comparing them for
equality yields ``False`` and ordering them raises ``TypeError``; convert
one of them first with :meth:`Time.convert_to`.

Every ``Time`` subclass is registered as a JAX pytree with the day-count as
its single leaf, so time-points can be passed through ``jax.jit``,
``jax.vmap`` and ``jax.lax.scan``. Day arithmetic, comparisons and
conversions among JD, MJD, UTC, TT, TAI, GPS and Unix are pure ``jnp``
operations and trace; civil conversion and the UT1 and relativistic scale
conversions go through ERFA and must run eagerly.
"""

from __future__ import annotations

import types
from typing import ClassVar, Generic, TypeVar

import astropy.units as u
import jax
import jax.numpy as jnp
import numpy as np

from . import _core
from .civil import CivilTime
from .config import get_dtype
from .conversions import convert
from .scales import (
    GPSScale,
    JDEScale,
    JDScale,
    MJDScale,
    TAIScale,
    TCBScale,
    TCGScale,
    TDBScale,
    TimeScale,
    TTScale,
    UnixScale,
    UT1Scale,
    UTCScale,
)
from .units import JULIAN_CENTURY

S = TypeVar("S", bound=TimeScale)

_NUMBER_TYPES = (int, float, np.number, np.ndarray, jax.Array)


def _as_days(value) -> jax.Array:
    return jnp.asarray(value, dtype=get_dtype())


class Time(Generic[S]):
    """A single instant on time scale ``S``.

    Subclasses bind the scale with a class keyword::

        class JulianDate(Time[JDScale], scale=JDScale):
            __slots__ = ()

    The day-count is stored as a 0-d JAX array of the configured dtype (see
    :func:`tempoch.config.set_dtype`). Instances are immutable; arithmetic
    and conversion return new instances.

    Constructors:
        JulianDate(2451545.0)
        JulianDate.from_civil(CivilTime(2000, 1, 1, 12))
        JulianDate.from_civil((2000, 1, 1, 12, 0, 0))
        some_mjd.convert_to(JulianDate)
    """

    __slots__ = ("_days",)
    __array_ufunc__ = None

    scale: ClassVar[type[TimeScale]]
    _classes: ClassVar[dict[type[TimeScale], type[Time]]] = {}

    def __init_subclass__(cls, scale: type[TimeScale] | None = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if scale is None:
            return
        cls.scale = scale
        Time._classes.setdefault(scale, cls)
        jax.tree_util.register_pytree_node(
            cls,
            lambda t: ((t._days,), None),
            lambda _, children, cls=cls: cls._from_internal(*children),
        )

    def __init__(self, value) -> None:
        """Initialize from a raw day-count or a same-scale time-point.

        Args:
            value: Day-count on this scale (seconds for Unix time), or another
                time-point on the same scale.

        Raises:
            TypeError: If *value* is a time-point on a different scale.
        """
        if isinstance(value, Time):
            if value.scale is not self.scale:
                raise TypeError(
                    f"Cannot build {type(self).__name__} from a {value.label()} time; "
                    f"use convert_to()"
                )
            value = value._days
        self._days = _as_days(value)

    @classmethod
    def _from_internal(cls, days):
        """Create a time-point from a stored day-count without conversion.

        Used by pytree unflatten and by arithmetic results.
        """
        obj = object.__new__(cls)
        obj._days = days
        return obj

    @classmethod
    def for_scale(cls, scale: type[TimeScale]) -> type[Time]:
        """Return the ``Time`` class for *scale*.

        Scales without a hand-written class get one generated on first use;
        the generated class is reused afterwards.

        Args:
            scale: Scale tag.

        Returns:
            type[Time]: The concrete class for *scale*.
        """
        try:
            return Time._classes[scale]
        except KeyError:
            pass
        name = f"Time{scale.__name__.removesuffix('Scale')}"
        types.new_class(
            name,
            (Time[scale],),
            {"scale": scale},
            lambda ns: ns.update(__slots__=(), __module__=__name__),
        )
        return Time._classes[scale]

    # Construction and access

    @classmethod
    def from_civil(cls, civil: CivilTime | tuple):
        """Create a time-point from a UTC civil breakdown.

        Args:
            civil: A :class:`CivilTime`, or a tuple of its fields.

        Returns:
            Time: The instant on this scale.

        Raises:
            UtcConversionError: If the breakdown is not a valid UTC instant.
            NullPointerError: If *civil* is ``None``.
        """
        if civil is not None and not isinstance(civil, CivilTime):
            civil = CivilTime(*civil)
        return cls._from_internal(_as_days(cls.scale.from_civil(civil)))

    def value(self) -> jax.Array:
        """Return the raw day-count (seconds for Unix time)."""
        return self._days

    @classmethod
    def label(cls) -> str:
        """Return the scale label, e.g. ``"JD"``."""
        return cls.scale.label()

    def to_civil(self) -> CivilTime:
        """Return the UTC civil breakdown of this instant.

        Seconds are rounded to the configured civil precision (see
        :func:`tempoch.config.set_civil_precision`). Not traceable.

        Raises:
            UtcConversionError: For out-of-range or non-finite values.
        """
        return self.scale.to_civil(self._days)

    def convert_to(self, target):
        """Return this instant on another scale.

        Args:
            target: A scale tag (``UTCScale``) or a ``Time`` subclass
                (``UTCTime``).

        Returns:
            Time: Time-point on the target scale.
        """
        if isinstance(target, type) and issubclass(target, Time):
            target_cls = target
        else:
            target_cls = Time.for_scale(target)
        days = convert(self.scale, target_cls.scale, self._days)
        return target_cls._from_internal(_as_days(days))

    # Arithmetic

    def add(self, duration: u.Quantity):
        """Return this instant advanced by a physical duration.

        The unit of *duration* is honoured whatever the native granularity
        of the scale.

        Raises:
            NullPointerError: If *duration* is ``None``.
            InvalidQuantityError: If *duration* is not a time quantity.
        """
        return type(self)._from_internal(
            _as_days(self.scale.add_quantity(self._days, duration))
        )

    def subtract(self, duration: u.Quantity):
        """Return this instant moved back by a physical duration."""
        if isinstance(duration, u.Quantity):
            duration = -duration
        return self.add(duration)

    def add_days(self, delta):
        """Return this instant advanced by *delta* days."""
        return type(self)._from_internal(_as_days(self.scale.add_days(self._days, delta)))

    def difference(self, other) -> u.Quantity:
        """Return ``self - other`` as a quantity in days.

        Raises:
            TypeError: If *other* is not on the same scale.
        """
        if not self._same_scale(other):
            raise TypeError(
                f"Cannot take the difference of {type(self).__name__} and {type(other).__name__}"
            )
        return self.scale.difference_quantity(self._days, other._days)

    def __add__(self, other):
        if isinstance(other, u.Quantity):
            return self.add(other)
        if isinstance(other, _NUMBER_TYPES):
            return self.add_days(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Time):
            if not self._same_scale(other):
                return NotImplemented
            return self.difference(other)
        if isinstance(other, u.Quantity):
            return self.subtract(other)
        if isinstance(other, _NUMBER_TYPES):
            return self.add_days(-other)
        return NotImplemented

    # Comparison operators

    def _same_scale(self, other) -> bool:
        return isinstance(other, Time) and other.scale is self.scale

    def __eq__(self, other):
        if not self._same_scale(other):
            return NotImplemented
        return self._days == other._days

    def __ne__(self, other):
        if not self._same_scale(other):
            return NotImplemented
        return self._days != other._days

    def __lt__(self, other):
        if not self._same_scale(other):
            return NotImplemented
        return self._days < other._days

    def __le__(self, other):
        if not self._same_scale(other):
            return NotImplemented
        return self._days <= other._days

    def __gt__(self, other):
        if not self._same_scale(other):
            return NotImplemented
        return self._days > other._days

    def __ge__(self, other):
        if not self._same_scale(other):
            return NotImplemented
        return self._days >= other._days

    # String representations

    def __float__(self):
        return float(self._days)

    def __str__(self):
        return f"{self.label()} {float(self._days)}"

    def __repr__(self):
        return f"{type(self).__name__}({float(self._days)!r})"

    def __hash__(self):
        return hash((self.scale, float(self._days)))


# ---------------------------------------------------------------------------
# Concrete time-point classes
# ---------------------------------------------------------------------------


class JulianDate(Time[JDScale], scale=JDScale):
    """Julian Date on the TT axis.

    Examples:
        ```python
        jd = JulianDate.j2000()
        jd.julian_centuries()  # 0.0
        ```
    """

    __slots__ = ()

    @classmethod
    def j2000(cls) -> JulianDate:
        """Return the J2000.0 epoch, JD 2451545.0 exactly."""
        return cls(_core.jd_j2000())

    def julian_centuries(self) -> jax.Array:
        """Return Julian centuries elapsed since J2000.0.

        Traceable under ``jax.jit``.
        """
        return _core.jd_julian_centuries(self._days)

    def julian_centuries_qty(self) -> u.Quantity:
        """Return Julian centuries elapsed since J2000.0 as a quantity."""
        return u.Quantity(np.asarray(self.julian_centuries()), JULIAN_CENTURY)

    def to_mjd(self) -> ModifiedJulianDate:
        """Return the same instant as a Modified Julian Date."""
        return self.convert_to(ModifiedJulianDate)


class ModifiedJulianDate(Time[MJDScale], scale=MJDScale):
    """Modified Julian Date (JD - 2400000.5) on the TT axis."""

    __slots__ = ()

    @classmethod
    def from_jd(cls, jd: JulianDate) -> ModifiedJulianDate:
        """Create from a :class:`JulianDate`."""
        return jd.convert_to(cls)

    def to_jd(self) -> JulianDate:
        """Return the same instant as a Julian Date."""
        return self.convert_to(JulianDate)


class UTCTime(Time[UTCScale], scale=UTCScale):
    """UTC, carried on the MJD day-count.

    ``UTCTime(60200.0)`` and ``ModifiedJulianDate(60200.0)`` are the same
    instant; the leap seconds separating UTC from TT apply in
    :meth:`from_civil` and :meth:`to_civil`.
    """

    __slots__ = ()


class TerrestrialTime(Time[TTScale], scale=TTScale):
    """Terrestrial Time (TT), Julian Date."""

    __slots__ = ()


class AtomicTime(Time[TAIScale], scale=TAIScale):
    """International Atomic Time (TAI), Julian Date."""

    __slots__ = ()


class BarycentricDynamicalTime(Time[TDBScale], scale=TDBScale):
    """Barycentric Dynamical Time (TDB), Julian Date."""

    __slots__ = ()


class GeocentricCoordinateTime(Time[TCGScale], scale=TCGScale):
    """Geocentric Coordinate Time (TCG), Julian Date."""

    __slots__ = ()


class BarycentricCoordinateTime(Time[TCBScale], scale=TCBScale):
    """Barycentric Coordinate Time (TCB), Julian Date."""

    __slots__ = ()


class GPSTime(Time[GPSScale], scale=GPSScale):
    """GPS Time, Julian Date."""

    __slots__ = ()


class UniversalTime(Time[UT1Scale], scale=UT1Scale):
    """Universal Time (UT1), Julian Date."""

    __slots__ = ()

    def delta_t(self) -> u.Quantity:
        """Return ΔT = TT - UT1 at this instant, in seconds.

        ΔT follows from the leap-second table, the fixed TT - TAI offset and
        the configured UT1 - UTC (:func:`tempoch.config.set_dut1`).

        Before 1960 no leap seconds are counted.
        """
        return u.Quantity(_core.delta_t_seconds(self._days), u.s)


class JulianEphemerisDate(Time[JDEScale], scale=JDEScale):
    """Julian Ephemeris Date: a Julian Date on the TDB axis."""

    __slots__ = ()


class UnixTime(Time[UnixScale], scale=UnixScale):
    """Unix time: seconds on the UTC day-count, zero at MJD 40587.0."""

    __slots__ = ()
