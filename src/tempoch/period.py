"""Closed time intervals over any time representation.

A :class:`Period` stores its bounds as Modified Julian Dates on the TT axis
whatever representation it was built from. The representation (a ``Time``
subclass, ``float`` or ``datetime``) is remembered and rebuilt on read
through a *traits adapter*: a pair of functions mapping a value to its
canonical MJD and back.

Adapters for every ``Time`` subclass are derived on first use from the
conversion graph. ``float`` values are taken as raw MJD (TT). ``datetime``
values are UTC civil times and go through the same leap-second-aware path
as :meth:`Time.from_civil`; naive values are assumed to already be UTC.
Other types can be supported with :func:`register_time_traits`.

``Period`` is registered as a JAX pytree with the two canonical bounds as
leaves and the representation as static data.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Generic, NamedTuple, TypeVar

import astropy.units as u
import jax
import jax.numpy as jnp
import numpy as np

from . import _core
from .civil import CivilTime
from .config import get_dtype
from .conversions import convert
from .errors import check_status
from .scales import MJDScale
from .time import Time

logger = logging.getLogger(__name__)

R = TypeVar("R")


class TimeTraits(NamedTuple):
    """Mapping between a representation type and canonical MJD (TT).

    Attributes:
        to_mjd: Function returning the canonical MJD of a value.
        from_mjd: Function rebuilding a value from a canonical MJD.
    """

    to_mjd: Callable[[Any], Any]
    from_mjd: Callable[[Any], Any]


_TRAITS: dict[type, TimeTraits] = {}


def register_time_traits(rep_type: type, to_mjd: Callable, from_mjd: Callable) -> None:
    """Register the traits adapter for a representation type.

    Subclasses of *rep_type* use the adapter too unless they have their own.

    Args:
        rep_type (type): The representation type.
        to_mjd (Callable): Value -> canonical MJD (TT).
        from_mjd (Callable): Canonical MJD (TT) -> value.
    """
    _TRAITS[rep_type] = TimeTraits(to_mjd, from_mjd)
    logger.debug("registered period traits for %s", rep_type.__name__)


def _time_traits(rep_type: type[Time]) -> TimeTraits:
    def to_mjd(value):
        return convert(value.scale, MJDScale, value.value())

    def from_mjd(mjd):
        return rep_type._from_internal(
            jnp.asarray(convert(MJDScale, rep_type.scale, mjd), dtype=get_dtype())
        )

    return TimeTraits(to_mjd, from_mjd)


def traits_for(rep_type: type) -> TimeTraits:
    """Return the traits adapter for *rep_type*.

    Raises:
        TypeError: If no adapter is registered for *rep_type* or its bases.
    """
    traits = _TRAITS.get(rep_type)
    if traits is not None:
        return traits
    if issubclass(rep_type, Time):
        traits = _time_traits(rep_type)
        _TRAITS[rep_type] = traits
        return traits
    for base in rep_type.__mro__[1:]:
        if base in _TRAITS:
            return _TRAITS[base]
    raise TypeError(f"No time traits registered for {rep_type.__name__}")


def _datetime_to_mjd(value: datetime):
    status, mjd = _core.mjd_from_civil(CivilTime.from_datetime(value))
    check_status(status, "Period.from_datetime")
    return mjd


def _datetime_from_mjd(mjd) -> datetime:
    # Microseconds, the resolution of datetime itself.
    status, civil = _core.mjd_to_civil(mjd, ndp=6)
    check_status(status, "Period.to_datetime")
    return civil.to_datetime()


register_time_traits(float, lambda value: value, float)
register_time_traits(datetime, _datetime_to_mjd, _datetime_from_mjd)


class Period(Generic[R]):
    """A closed interval ``[start, end]`` with ``start <= end``.

    Both bounds must have the same representation type. A period whose
    bounds coincide is valid and contains exactly one instant.

    Examples:
        ```python
        from tempoch import ModifiedJulianDate as MJD, Period
        a = Period(MJD(60200.0), MJD(60202.0))
        b = Period(MJD(60201.0), MJD(60203.0))
        str(a.intersection(b))  # '[MJD 60201.0, MJD 60202.0]'
        ```
    """

    __slots__ = ("_start", "_end", "_rep")

    def __init__(self, start: R, end: R) -> None:
        """Initialize from two bounds of the same representation.

        Args:
            start: Lower bound.
            end: Upper bound.

        Raises:
            InvalidPeriodError: If *start* is later than *end*.
            NullPointerError: If either bound is ``None``.
            TypeError: If the bounds differ in type or the type has no
                traits adapter.
        """
        rep = None
        start_mjd = end_mjd = None
        if start is not None and end is not None:
            rep = type(start)
            if type(end) is not rep:
                raise TypeError(
                    f"Period bounds must share a representation, got "
                    f"{rep.__name__} and {type(end).__name__}"
                )
            traits = traits_for(rep)
            start_mjd = jnp.asarray(traits.to_mjd(start), dtype=get_dtype())
            end_mjd = jnp.asarray(traits.to_mjd(end), dtype=get_dtype())

        status, bounds = _core.period_new(start_mjd, end_mjd)
        check_status(status, "Period.new")
        self._start, self._end = bounds
        self._rep = rep

    @classmethod
    def _from_internal(cls, start_mjd, end_mjd, rep: type):
        """Create a period from canonical bounds already known to be ordered.

        Used by :meth:`intersection` and pytree unflatten.
        """
        obj = object.__new__(cls)
        obj._start = start_mjd
        obj._end = end_mjd
        obj._rep = rep
        return obj

    @property
    def representation(self) -> type:
        """The representation type of the bounds."""
        return self._rep

    def start(self) -> R:
        """Return the lower bound in the period's representation."""
        return traits_for(self._rep).from_mjd(self._start)

    def end(self) -> R:
        """Return the upper bound in the period's representation."""
        return traits_for(self._rep).from_mjd(self._end)

    def start_mjd(self) -> jax.Array:
        """Return the lower bound as a canonical MJD (TT)."""
        return self._start

    def end_mjd(self) -> jax.Array:
        """Return the upper bound as a canonical MJD (TT)."""
        return self._end

    def duration(self, unit=u.day) -> u.Quantity:
        """Return the length of the period.

        Args:
            unit: Any astropy time unit. Default: day.

        Returns:
            astropy.units.Quantity: Elapsed time in *unit*.
        """
        days = _core.period_duration_days(self._start, self._end)
        return u.Quantity(np.asarray(days), u.day).to(unit)

    def intersection(self, other: Period[R]) -> Period[R]:
        """Return the overlap of two periods.

        Raises:
            NoIntersectionError: If the periods share no instant.
            TypeError: If *other* uses a different representation.
        """
        self._check_compatible(other)
        status, bounds = _core.period_intersection(
            (self._start, self._end), (other._start, other._end)
        )
        check_status(status, "Period.intersection")
        return Period._from_internal(*bounds, self._rep)

    def contains(self, point: R):
        """Return whether *point* lies in the closed interval."""
        if type(point) is not self._rep:
            raise TypeError(
                f"Cannot test a {type(point).__name__} against a period of {self._rep.__name__}"
            )
        mjd = traits_for(self._rep).to_mjd(point)
        return (self._start <= mjd) & (mjd <= self._end)

    def _check_compatible(self, other):
        if not isinstance(other, Period):
            raise TypeError(f"Expected a Period, got {type(other).__name__}")
        if other._rep is not self._rep:
            raise TypeError(
                f"Cannot combine periods of {self._rep.__name__} and {other._rep.__name__}"
            )

    def __eq__(self, other):
        if not isinstance(other, Period) or other._rep is not self._rep:
            return NotImplemented
        return (self._start == other._start) & (self._end == other._end)

    def __ne__(self, other):
        if not isinstance(other, Period) or other._rep is not self._rep:
            return NotImplemented
        return (self._start != other._start) | (self._end != other._end)

    def __hash__(self):
        return hash((self._rep, float(self._start), float(self._end)))

    def __str__(self):
        return f"[{self.start()}, {self.end()}]"

    def __repr__(self):
        return f"Period({self.start()!r}, {self.end()!r})"


jax.tree_util.register_pytree_node(
    Period,
    lambda p: ((p._start, p._end), p._rep),
    lambda rep, children: Period._from_internal(*children, rep),
)
