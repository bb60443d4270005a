"""Tests for the tempoch.period module."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import astropy.units as u
import jax
import numpy as np
import pytest

from tempoch.civil import CivilTime
from tempoch.errors import InvalidPeriodError, NoIntersectionError, NullPointerError
from tempoch.period import Period, register_time_traits, traits_for
from tempoch.time import (
    AtomicTime,
    BarycentricCoordinateTime,
    BarycentricDynamicalTime,
    GeocentricCoordinateTime,
    GPSTime,
    JulianDate,
    JulianEphemerisDate,
    ModifiedJulianDate as MJD,
    TerrestrialTime,
    UniversalTime,
    UnixTime,
    UTCTime,
)

_DAY_CLASSES = [
    JulianDate,
    MJD,
    UTCTime,
    TerrestrialTime,
    AtomicTime,
    BarycentricDynamicalTime,
    GeocentricCoordinateTime,
    BarycentricCoordinateTime,
    GPSTime,
    UniversalTime,
    JulianEphemerisDate,
]

# A few float64 ulps of a present-day Julian Date
_DAY_TOL = 8 * np.spacing(2460200.5)


def _bounds(period):
    return float(period.start_mjd()), float(period.end_mjd())


# ──────────────────────────────────────────────
# Construction
# ──────────────────────────────────────────────


class TestPeriodConstruction:
    def test_valid(self):
        period = Period(MJD(60200.0), MJD(60201.0))
        assert _bounds(period) == (60200.0, 60201.0)
        assert period.representation is MJD

    def test_reversed_raises(self):
        with pytest.raises(InvalidPeriodError, match="Period.new failed: invalid period"):
            Period(MJD(60203.0), MJD(60200.0))

    def test_zero_length_is_valid(self):
        period = Period(MJD(60200.0), MJD(60200.0))
        assert period.duration().value == 0.0
        assert period.contains(MJD(60200.0))

    def test_none_raises(self):
        with pytest.raises(NullPointerError):
            Period(None, MJD(60200.0))
        with pytest.raises(NullPointerError):
            Period(MJD(60200.0), None)

    def test_mixed_representations_raise(self):
        with pytest.raises(TypeError, match="share a representation"):
            Period(MJD(60200.0), JulianDate(2460201.5))

    def test_unregistered_representation_raises(self):
        with pytest.raises(TypeError, match="No time traits"):
            Period("60200", "60201")

    def test_nan_bound_raises(self):
        with pytest.raises(InvalidPeriodError):
            Period(float("nan"), 60200.0)

    def test_bounds_normalized_to_mjd(self):
        period = Period(JulianDate(2460200.5), JulianDate(2460201.5))
        assert _bounds(period) == (60200.0, 60201.0)


# ──────────────────────────────────────────────
# Bounds
# ──────────────────────────────────────────────


class TestPeriodBounds:
    def test_start_end_mjd(self):
        period = Period(MJD(60200.0), MJD(60201.0))
        assert period.start() == MJD(60200.0)
        assert period.end() == MJD(60201.0)
        assert isinstance(period.start(), MJD)

    def test_start_end_julian_date(self):
        period = Period(JulianDate(2460200.5), JulianDate(2460201.5))
        assert isinstance(period.end(), JulianDate)
        assert period.end() == JulianDate(2460201.5)

    def test_start_end_utc(self):
        period = Period(UTCTime(60200.0), UTCTime(60201.0))
        assert period.start() == UTCTime(60200.0)
        assert period.end() == UTCTime(60201.0)

    def test_start_end_unix(self):
        period = Period(UnixTime(1.6e9), UnixTime(1.6e9 + 3600.0))
        assert float(period.start().value()) == pytest.approx(1.6e9, abs=1e-6)
        assert float(period.end().value()) == pytest.approx(1.6e9 + 3600.0, abs=1e-6)
        assert period.duration(u.s).value == pytest.approx(3600.0, abs=2e-6)

    def test_unix_bounds_keep_microseconds(self):
        period = Period(UnixTime(1.7e9), UnixTime(1.7e9 + 10.0))
        assert float(period.start().value()) == pytest.approx(1.7e9, abs=1e-6)
        assert float(period.end().value()) == pytest.approx(1.7e9 + 10.0, abs=1e-6)

    @pytest.mark.parametrize("cls", _DAY_CLASSES)
    def test_bounds_read_back_in_own_scale(self, cls):
        start = JulianDate(2460200.5).convert_to(cls)
        end = start.add_days(0.25)
        period = Period(start, end)
        assert type(period.start()) is cls
        assert float(period.start().value()) == pytest.approx(float(start.value()), abs=_DAY_TOL)
        assert float(period.end().value()) == pytest.approx(float(end.value()), abs=_DAY_TOL)

    def test_float_representation(self):
        period = Period(60200.0, 60201.0)
        assert period.start() == 60200.0
        assert type(period.end()) is float

    def test_datetime_representation(self):
        start = datetime(2023, 9, 14, tzinfo=timezone.utc)
        end = datetime(2023, 9, 15, tzinfo=timezone.utc)
        period = Period(start, end)
        assert period.duration(u.hour).value == pytest.approx(24.0, abs=1e-6)
        assert abs(period.start() - start) < timedelta(microseconds=10)
        assert abs(period.end() - end) < timedelta(microseconds=10)

    def test_naive_datetime_is_utc(self):
        naive = Period(datetime(2023, 9, 14), datetime(2023, 9, 15))
        aware = Period(datetime(2023, 9, 14, tzinfo=timezone.utc), datetime(2023, 9, 15, tzinfo=timezone.utc))
        assert _bounds(naive) == pytest.approx(_bounds(aware), abs=1e-11)

    def test_datetime_matches_utc_scale(self):
        dt_period = Period(datetime(2023, 9, 14, tzinfo=timezone.utc), datetime(2023, 9, 15, tzinfo=timezone.utc))
        utc_period = Period(UTCTime.from_civil(CivilTime(2023, 9, 14)), UTCTime.from_civil(CivilTime(2023, 9, 15)))
        assert _bounds(dt_period) == pytest.approx(_bounds(utc_period), abs=1e-10)


# ──────────────────────────────────────────────
# Duration
# ──────────────────────────────────────────────


class TestPeriodDuration:
    def test_default_unit_is_day(self):
        duration = Period(MJD(60200.0), MJD(60201.0)).duration()
        assert duration.unit == u.day
        assert duration.value == pytest.approx(1.0)

    @pytest.mark.parametrize(
        "unit, expected",
        [(u.day, 1.0), (u.hour, 24.0), (u.min, 1440.0), (u.s, 86400.0)],
    )
    def test_unit_conversion(self, unit, expected):
        duration = Period(MJD(60200.0), MJD(60201.0)).duration(unit)
        assert duration.unit == unit
        assert duration.value == pytest.approx(expected)

    def test_julian_dates(self):
        duration = Period(JulianDate(2451545.0), JulianDate(2451545.0 + 36525.0)).duration(u.yr)
        assert duration.value == pytest.approx(100.0)


# ──────────────────────────────────────────────
# Intersection
# ──────────────────────────────────────────────


class TestPeriodIntersection:
    def test_overlap(self):
        a = Period(MJD(60200.0), MJD(60202.0))
        b = Period(MJD(60201.0), MJD(60203.0))
        overlap = a.intersection(b)
        assert _bounds(overlap) == (60201.0, 60202.0)
        assert overlap.representation is MJD

    def test_commutative(self):
        a = Period(MJD(60200.0), MJD(60202.0))
        b = Period(MJD(60201.0), MJD(60203.0))
        assert a.intersection(b) == b.intersection(a)

    def test_associative(self):
        a = Period(60200.0, 60205.0)
        b = Period(60201.0, 60204.0)
        c = Period(60202.5, 60210.0)
        assert a.intersection(b).intersection(c) == a.intersection(b.intersection(c))

    def test_contained(self):
        outer = Period(MJD(60200.0), MJD(60210.0))
        inner = Period(MJD(60202.0), MJD(60203.0))
        assert outer.intersection(inner) == inner

    def test_touching_is_single_instant(self):
        a = Period(MJD(60200.0), MJD(60201.0))
        b = Period(MJD(60201.0), MJD(60202.0))
        assert _bounds(a.intersection(b)) == (60201.0, 60201.0)

    def test_disjoint_raises(self):
        a = Period(MJD(60200.0), MJD(60201.0))
        b = Period(MJD(60202.0), MJD(60203.0))
        with pytest.raises(NoIntersectionError, match="Period.intersection failed: periods do not intersect"):
            a.intersection(b)

    def test_different_representation_raises(self):
        with pytest.raises(TypeError, match="Cannot combine"):
            Period(60200.0, 60201.0).intersection(Period(MJD(60200.0), MJD(60201.0)))

    def test_non_period_raises(self):
        with pytest.raises(TypeError, match="Expected a Period"):
            Period(60200.0, 60201.0).intersection((60200.0, 60201.0))


# ──────────────────────────────────────────────
# Membership
# ──────────────────────────────────────────────


class TestPeriodContains:
    def test_inside(self):
        assert Period(MJD(60200.0), MJD(60201.0)).contains(MJD(60200.5))

    def test_bounds_are_inclusive(self):
        period = Period(MJD(60200.0), MJD(60201.0))
        assert period.contains(MJD(60200.0))
        assert period.contains(MJD(60201.0))

    def test_outside(self):
        assert not Period(MJD(60200.0), MJD(60201.0)).contains(MJD(60201.5))

    def test_wrong_type_raises(self):
        with pytest.raises(TypeError):
            Period(MJD(60200.0), MJD(60201.0)).contains(JulianDate(2460200.5))


# ──────────────────────────────────────────────
# Traits adapters
# ──────────────────────────────────────────────


@dataclass(frozen=True)
class _Stamp:
    mjd: float


class TestTraits:
    def test_register_custom_representation(self):
        register_time_traits(_Stamp, lambda s: s.mjd, lambda m: _Stamp(float(m)))
        period = Period(_Stamp(60200.0), _Stamp(60201.5))
        assert period.end() == _Stamp(60201.5)
        assert period.duration(u.hour).value == pytest.approx(36.0)

    def test_time_traits_are_cached(self):
        assert traits_for(UTCTime) is traits_for(UTCTime)

    def test_subclass_uses_base_traits(self):
        class Mjd(float):
            pass

        assert traits_for(Mjd) is traits_for(float)


# ──────────────────────────────────────────────
# Equality, rendering, JAX
# ──────────────────────────────────────────────


class TestPeriodEquality:
    def test_equal(self):
        assert Period(MJD(60200.0), MJD(60201.0)) == Period(MJD(60200.0), MJD(60201.0))

    def test_not_equal(self):
        assert Period(MJD(60200.0), MJD(60201.0)) != Period(MJD(60200.0), MJD(60202.0))

    def test_different_representation_not_equal(self):
        assert (Period(60200.0, 60201.0) == Period(MJD(60200.0), MJD(60201.0))) is False

    def test_hashable(self):
        periods = {Period(60200.0, 60201.0), Period(60200.0, 60201.0)}
        assert len(periods) == 1


class TestPeriodString:
    def test_str_mjd(self):
        assert str(Period(MJD(60200.0), MJD(60201.0))) == "[MJD 60200.0, MJD 60201.0]"

    def test_str_float(self):
        assert str(Period(60200.0, 60201.0)) == "[60200.0, 60201.0]"

    def test_repr(self):
        assert repr(Period(MJD(60200.0), MJD(60201.0))) == (
            "Period(ModifiedJulianDate(60200.0), ModifiedJulianDate(60201.0))"
        )


class TestPeriodJAXCompatibility:
    def test_pytree_roundtrip(self):
        period = Period(MJD(60200.0), MJD(60201.0))
        leaves, treedef = jax.tree_util.tree_flatten(period)
        assert len(leaves) == 2
        assert treedef.unflatten(leaves) == period

    def test_jit_passthrough(self):
        period = Period(MJD(60200.0), MJD(60202.0))
        result = jax.jit(lambda p: p)(period)
        assert result == period
        assert result.representation is MJD

    def test_jit_contains(self):
        period = Period(MJD(60200.0), MJD(60202.0))
        inside = jax.jit(lambda p, t: p.contains(t))(period, MJD(60201.0))
        assert bool(inside)

    def test_jit_shift_bounds(self):
        period = Period(MJD(60200.0), MJD(60202.0))
        shifted = jax.jit(lambda p: Period(p.start().add_days(1.0), p.end().add_days(1.0)))
        with pytest.raises(jax.errors.ConcretizationTypeError):
            shifted(period)
