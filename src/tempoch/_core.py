"""Native time-core boundary.

Thin layer over ERFA, reached through pyERFA's raw ufunc module
(``erfa.ufunc``). The raw ufuncs return ERFA's integer status next to each
result instead of raising, and this module maps those codes onto
:class:`~tempoch.errors.Status`. Nothing here raises for bad input: every
fallible function returns ``(Status, value)`` and leaves translation to
:func:`~tempoch.errors.check_status`.

Leap seconds are applied only where a civil breakdown meets a day-count.
The UTC scale carries the MJD day-count itself, and every scale-pair
converter is total: finite input always gives finite output.

Day-counts are passed to ERFA as two-part Julian Dates. JD-valued inputs
use ``(jd, 0.0)``; MJD-valued inputs use ``(JD_MJD_OFFSET, mjd)``, which
keeps the full float64 resolution of the MJD through the conversion.

ERFA status conventions mapped here:

- negative: rejected input (bad year/month/day/hour/minute/second, date
  outside the supported range) -> ``UTC_CONVERSION_FAILED``
- ``+1``: dubious year (before 1960, or past the leap-second table's
  horizon) -> accepted, logged at DEBUG
- ``+2``/``+3`` from ``dtf2d``: time after the end of the day -> rejected

Pure-arithmetic functions (day offsets, differences, JD/MJD/UTC, TAI, GPS
and Unix offsets) use ``jnp`` and are traceable under ``jax.jit``.
Everything that calls ERFA is eager-only.
"""

from __future__ import annotations

import logging

import astropy.units as u
import jax.numpy as jnp
import numpy as np
from erfa import ufunc as erfa_ufunc

from .civil import CivilTime
from .config import get_civil_precision, get_dut1
from .constants import (
    DAYS_PER_JULIAN_CENTURY,
    JD_J2000,
    JD_MJD_OFFSET,
    MJD_UNIX_EPOCH,
    SECONDS_PER_DAY,
    TAI_GPS,
    TT_TAI,
)
from .errors import Status

logger = logging.getLogger(__name__)

_UTC = b"UTC"

# ERFA jd2cal lower limit and 9999-01-01; dat reads 0 before 1960
_DAT_JD_FIRST = -68569.5
_DAT_JD_LAST = 5373119.5


def _translate(raw, function: str, reject_above: int = 1) -> Status:
    """Map a raw ERFA status (scalar or array) onto :class:`Status`.

    Args:
        raw: ERFA status code(s).
        function (str): Name of the ERFA function, for logging.
        reject_above (int): Highest positive code still accepted.

    Returns:
        Status: ``OK`` or ``UTC_CONVERSION_FAILED``.
    """
    raw = np.asarray(raw)
    rejected = (raw < 0) | (raw > reject_above)
    if rejected.any():
        logger.debug("erfa %s rejected input with status %d", function, int(raw[rejected].flat[0]))
        return Status.UTC_CONVERSION_FAILED
    if (raw > 0).any():
        logger.debug("erfa %s flagged a dubious year", function)
    return Status.OK


def _f64(value):
    return np.asarray(value, dtype=np.float64)


def _finite(*values) -> bool:
    return all(bool(np.all(np.isfinite(_f64(v)))) for v in values)


# ---------------------------------------------------------------------------
# Civil <-> day-count
# ---------------------------------------------------------------------------


def _utc_parts_from_civil(civil: CivilTime | None):
    if civil is None:
        return Status.NULL_POINTER, None
    d1, d2, raw = erfa_ufunc.dtf2d(_UTC, *civil.to_native())
    status = _translate(raw, "dtf2d")
    if status == Status.OK and not _finite(d1, d2):
        status = Status.UTC_CONVERSION_FAILED
    return status, (d1, d2)


def _utc_parts_to_civil(utc1, utc2, ndp=None):
    if not _finite(utc1, utc2):
        return Status.UTC_CONVERSION_FAILED, None
    if ndp is None:
        ndp = get_civil_precision()
    iy, im, iday, ihmsf, raw = erfa_ufunc.d2dtf(_UTC, ndp, _f64(utc1), _f64(utc2))
    status = _translate(raw, "d2dtf")
    if status != Status.OK:
        return status, None
    return status, CivilTime.from_native(iy, im, iday, ihmsf, ndp)


def _utc_to_tt(utc1, utc2):
    tai1, tai2, raw = erfa_ufunc.utctai(_f64(utc1), _f64(utc2))
    status = _translate(raw, "utctai")
    tt1, tt2, _ = erfa_ufunc.taitt(tai1, tai2)
    return status, tt1, tt2


def _tt_to_utc(tt1, tt2):
    tai1, tai2, _ = erfa_ufunc.tttai(_f64(tt1), _f64(tt2))
    utc1, utc2, raw = erfa_ufunc.taiutc(tai1, tai2)
    return _translate(raw, "taiutc"), utc1, utc2


def jd_from_civil(civil: CivilTime | None):
    """Convert a UTC civil breakdown to a Julian Date on the TT axis.

    Args:
        civil (CivilTime): UTC breakdown.

    Returns:
        tuple[Status, float]: Status and Julian Date (TT).
    """
    status, parts = _utc_parts_from_civil(civil)
    if status != Status.OK:
        return status, None
    status, tt1, tt2 = _utc_to_tt(*parts)
    return status, tt1 + tt2


def jd_to_civil(jd, ndp=None):
    """Convert a Julian Date on the TT axis to a UTC civil breakdown.

    Args:
        jd: Julian Date (TT).
        ndp (int): Decimal places of seconds. Default: the configured civil
            precision.

    Returns:
        tuple[Status, CivilTime]: Status and UTC breakdown.
    """
    if not _finite(jd):
        return Status.UTC_CONVERSION_FAILED, None
    status, utc1, utc2 = _tt_to_utc(jd, 0.0)
    if status != Status.OK:
        return status, None
    return _utc_parts_to_civil(utc1, utc2, ndp)


def mjd_from_civil(civil: CivilTime | None):
    """Convert a UTC civil breakdown to a Modified Julian Date on the TT axis.

    Returns:
        tuple[Status, float]: Status and MJD (TT).
    """
    status, parts = _utc_parts_from_civil(civil)
    if status != Status.OK:
        return status, None
    status, tt1, tt2 = _utc_to_tt(*parts)
    return status, (tt1 - JD_MJD_OFFSET) + tt2


def mjd_to_civil(mjd, ndp=None):
    """Convert a Modified Julian Date on the TT axis to a UTC civil breakdown.

    Args:
        mjd: Modified Julian Date (TT).
        ndp (int): Decimal places of seconds. Default: the configured civil
            precision.

    Returns:
        tuple[Status, CivilTime]: Status and UTC breakdown.
    """
    if not _finite(mjd):
        return Status.UTC_CONVERSION_FAILED, None
    status, utc1, utc2 = _tt_to_utc(JD_MJD_OFFSET, mjd)
    if status != Status.OK:
        return status, None
    return _utc_parts_to_civil(utc1, utc2, ndp)


def utc_from_civil(civil: CivilTime | None):
    """Convert a UTC civil breakdown to a UTC day-count.

    The UTC scale shares the MJD day-count, so this is :func:`mjd_from_civil`.

    Returns:
        tuple[Status, float]: Status and MJD.
    """
    return mjd_from_civil(civil)


def utc_to_civil(utc_mjd, ndp=None):
    """Convert a UTC day-count to a UTC civil breakdown.

    Returns:
        tuple[Status, CivilTime]: Status and UTC breakdown.
    """
    return mjd_to_civil(utc_mjd, ndp)


# ---------------------------------------------------------------------------
# Day arithmetic
# ---------------------------------------------------------------------------


def add_days(days, delta):
    """Return ``days + delta``."""
    return jnp.add(days, delta)


def difference(a, b):
    """Return ``a - b`` in the operands' own units."""
    return jnp.subtract(a, b)


def add_quantity(days, quantity, native_unit=u.day):
    """Advance a day-count by a time quantity.

    Args:
        days: Day-count (or seconds, for second-based scales).
        quantity (astropy.units.Quantity): Duration to add.
        native_unit: Unit the day-count is expressed in.

    Returns:
        tuple[Status, Array]: Status and the advanced value.
    """
    if quantity is None:
        return Status.NULL_POINTER, None
    if not isinstance(quantity, u.Quantity):
        return Status.INVALID_QUANTITY, None
    try:
        delta = quantity.to_value(native_unit)
    except u.UnitConversionError:
        logger.debug("cannot express %s in %s", quantity.unit, native_unit)
        return Status.INVALID_QUANTITY, None
    return Status.OK, jnp.add(days, delta)


def difference_quantity(a, b, native_unit=u.day):
    """Return ``a - b`` as a quantity in days.

    Args:
        a: Minuend day-count.
        b: Subtrahend day-count.
        native_unit: Unit the day-counts are expressed in.

    Returns:
        astropy.units.Quantity: Elapsed time in days.
    """
    return u.Quantity(np.asarray(jnp.subtract(a, b)), native_unit).to(u.day)


# ---------------------------------------------------------------------------
# Scale-pair converters
# ---------------------------------------------------------------------------


def jd_to_mjd(jd):
    """Julian Date to Modified Julian Date (same axis)."""
    return jnp.subtract(jd, JD_MJD_OFFSET)


def mjd_to_jd(mjd):
    """Modified Julian Date to Julian Date (same axis)."""
    return jnp.add(mjd, JD_MJD_OFFSET)


def jd_to_utc(jd):
    """JD to the UTC day-count, which is the MJD of the same instant."""
    return jd_to_mjd(jd)


def utc_to_jd(utc_mjd):
    """UTC day-count to JD."""
    return mjd_to_jd(utc_mjd)


def utc_to_unix(utc_mjd):
    """UTC day-count to Unix seconds, zero at MJD 40587.0."""
    return jnp.multiply(jnp.subtract(utc_mjd, MJD_UNIX_EPOCH), SECONDS_PER_DAY)


def unix_to_utc(seconds):
    """Unix seconds to the UTC day-count."""
    return jnp.add(jnp.divide(seconds, SECONDS_PER_DAY), MJD_UNIX_EPOCH)


def jd_to_tai(jd):
    """JD (TT) to JD (TAI)."""
    return jnp.subtract(jd, TT_TAI / SECONDS_PER_DAY)


def tai_to_jd(tai):
    """JD (TAI) to JD (TT)."""
    return jnp.add(tai, TT_TAI / SECONDS_PER_DAY)


def tai_to_gps(tai):
    """JD (TAI) to JD (GPS)."""
    return jnp.subtract(tai, TAI_GPS / SECONDS_PER_DAY)


def gps_to_tai(gps):
    """JD (GPS) to JD (TAI)."""
    return jnp.add(gps, TAI_GPS / SECONDS_PER_DAY)


# The relativistic transforms below are closed-form in ERFA and always
# return status 0, so only the two-part result is kept.


def _tdb_minus_tt(date1, date2):
    # Geocentric observer: the topocentric terms vanish, so UT only enters
    # through them and the TT fraction of day is an adequate stand-in.
    date1 = _f64(date1)
    ut = np.mod(date1 - 0.5 + date2, 1.0)
    return erfa_ufunc.dtdb(date1, date2, ut, 0.0, 0.0, 0.0)


def jd_to_tdb(jd):
    """JD (TT) to JD (TDB)."""
    tdb1, tdb2, _ = erfa_ufunc.tttdb(_f64(jd), 0.0, _tdb_minus_tt(jd, 0.0))
    return tdb1 + tdb2


def tdb_to_jd(tdb):
    """JD (TDB) to JD (TT)."""
    tt1, tt2, _ = erfa_ufunc.tdbtt(_f64(tdb), 0.0, _tdb_minus_tt(tdb, 0.0))
    return tt1 + tt2


def jd_to_tcg(jd):
    """JD (TT) to JD (TCG)."""
    tcg1, tcg2, _ = erfa_ufunc.tttcg(_f64(jd), 0.0)
    return tcg1 + tcg2


def tcg_to_jd(tcg):
    """JD (TCG) to JD (TT)."""
    tt1, tt2, _ = erfa_ufunc.tcgtt(_f64(tcg), 0.0)
    return tt1 + tt2


def tdb_to_tcb(tdb):
    """JD (TDB) to JD (TCB)."""
    tcb1, tcb2, _ = erfa_ufunc.tdbtcb(_f64(tdb), 0.0)
    return tcb1 + tcb2


def tcb_to_tdb(tcb):
    """JD (TCB) to JD (TDB)."""
    tdb1, tdb2, _ = erfa_ufunc.tcbtdb(_f64(tcb), 0.0)
    return tdb1 + tdb2


def _tai_minus_utc(jd):
    # Dates outside the calendar span ERFA handles read the nearest end of it.
    jd = _f64(jd)
    jd = np.clip(np.where(np.isfinite(jd), jd, _DAT_JD_FIRST), _DAT_JD_FIRST, _DAT_JD_LAST)
    iy, im, iday, fd, _ = erfa_ufunc.jd2cal(jd, 0.0)
    dat, _ = erfa_ufunc.dat(iy, im, iday, fd)
    return dat


def _delta_t_days(jd):
    return (TT_TAI + _tai_minus_utc(jd) - get_dut1()) / SECONDS_PER_DAY


def jd_to_ut1(jd):
    """JD (TT) to JD (UT1).

    UT1 = TT - ΔT, with ΔT taken from the leap-second count, the TT-TAI
    constant and the configured UT1-UTC.
    """
    jd = _f64(jd)
    return jd - _delta_t_days(jd)


def ut1_to_jd(ut1):
    """JD (UT1) to JD (TT)."""
    ut1 = _f64(ut1)
    return ut1 + _delta_t_days(ut1 + _delta_t_days(ut1))


# ---------------------------------------------------------------------------
# Julian Date helpers
# ---------------------------------------------------------------------------


def jd_j2000() -> float:
    """Return the Julian Date of J2000.0."""
    return JD_J2000


def jd_julian_centuries(jd):
    """Return Julian centuries elapsed since J2000.0."""
    return jnp.divide(jnp.subtract(jd, JD_J2000), DAYS_PER_JULIAN_CENTURY)


def delta_t_seconds(ut1):
    """Return ΔT = TT - UT1 at the given UT1 Julian Date, in seconds.

    ΔT follows from the leap-second table (TAI-UTC), the TT-TAI constant and
    the configured UT1-UTC; no ΔT model is evaluated. Before 1960 no leap
    seconds are counted.
    """
    ut1 = _f64(ut1)
    return _delta_t_days(ut1 + _delta_t_days(ut1)) * SECONDS_PER_DAY


# ---------------------------------------------------------------------------
# Periods (canonical MJD bounds)
# ---------------------------------------------------------------------------


def period_new(start_mjd, end_mjd):
    """Validate a closed interval ``[start_mjd, end_mjd]``.

    ``start_mjd == end_mjd`` is a valid single-instant period. NaN bounds
    are rejected because they cannot satisfy ``start <= end``.

    Returns:
        tuple[Status, tuple]: Status and the ``(start, end)`` pair.
    """
    if start_mjd is None or end_mjd is None:
        return Status.NULL_POINTER, None
    if not bool(start_mjd <= end_mjd):
        return Status.INVALID_PERIOD, None
    return Status.OK, (start_mjd, end_mjd)


def period_duration_days(start_mjd, end_mjd):
    """Return the length of ``[start_mjd, end_mjd]`` in days."""
    return jnp.subtract(end_mjd, start_mjd)


def period_intersection(a, b):
    """Intersect two validated ``(start, end)`` pairs.

    Returns:
        tuple[Status, tuple]: Status and the overlapping ``(start, end)``.
    """
    if a is None or b is None:
        return Status.NULL_POINTER, None
    start = jnp.maximum(a[0], b[0])
    end = jnp.minimum(a[1], b[1])
    if bool(start > end):
        return Status.NO_INTERSECTION, None
    return Status.OK, (start, end)
