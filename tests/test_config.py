"""Tests for the tempoch.config module."""

import jax
import jax.numpy as jnp
import pytest

from tempoch.civil import CivilTime
from tempoch.config import (
    get_civil_precision,
    get_dtype,
    get_dut1,
    set_civil_precision,
    set_dtype,
    set_dut1,
)
from tempoch.time import JulianDate, ModifiedJulianDate, UniversalTime, UTCTime


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float64

    def test_set_float32(self):
        set_dtype(jnp.float32)
        assert get_dtype() == jnp.float32

    def test_set_float16(self):
        set_dtype(jnp.float16)
        assert get_dtype() == jnp.float16

    def test_set_bfloat16(self):
        set_dtype(jnp.bfloat16)
        assert get_dtype() == jnp.bfloat16

    def test_roundtrip(self):
        for dtype in (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float32")

    def test_float64_enables_x64(self):
        set_dtype(jnp.float64)
        assert jax.config.jax_enable_x64 is True


class TestCivilPrecision:
    def test_default(self):
        assert get_civil_precision() == 3

    def test_set_and_get(self):
        set_civil_precision(6)
        assert get_civil_precision() == 6

    @pytest.mark.parametrize("ndp", [-1, 10, 2.5, True, "3"])
    def test_invalid_raises(self, ndp):
        with pytest.raises(ValueError, match="Civil precision"):
            set_civil_precision(ndp)

    def test_whole_seconds(self):
        set_civil_precision(0)
        civil = UTCTime.from_civil(CivilTime(2024, 3, 15, 6, 30, 45, 400_000_000)).to_civil()
        assert civil == CivilTime(2024, 3, 15, 6, 30, 45, 0)

    def test_tenths_of_milliseconds(self):
        set_civil_precision(4)
        civil = UTCTime.from_civil(CivilTime(2024, 3, 15, 6, 30, 45, 123_400_000)).to_civil()
        assert civil.nanosecond == 123_400_000


class TestDut1:
    def test_default(self):
        assert get_dut1() == 0.0

    def test_set_and_get(self):
        set_dut1(-0.25)
        assert get_dut1() == -0.25

    @pytest.mark.parametrize("seconds", [1.5, -1.01])
    def test_out_of_range_raises(self, seconds):
        with pytest.raises(ValueError, match="UT1-UTC"):
            set_dut1(seconds)

    def test_dut1_shifts_ut1(self):
        jd = JulianDate(2460000.5)
        ut1_zero = float(jd.convert_to(UniversalTime).value())
        set_dut1(0.5)
        ut1_half = float(jd.convert_to(UniversalTime).value())
        assert (ut1_half - ut1_zero) * 86400.0 == pytest.approx(0.5, abs=1e-4)


class TestDtypeSwitchingOutputs:
    """Verify that stored day-counts follow the configured dtype."""

    def test_time_dtype_float64(self):
        assert JulianDate(2451545.0).value().dtype == jnp.float64

    def test_time_dtype_float32(self):
        set_dtype(jnp.float32)
        assert ModifiedJulianDate(60000.0).value().dtype == jnp.float32

    def test_from_civil_dtype_float32(self):
        set_dtype(jnp.float32)
        mjd = ModifiedJulianDate.from_civil(CivilTime(2024, 1, 1))
        assert mjd.value().dtype == jnp.float32

    def test_jit_retrace_on_dtype_change(self):
        """JIT should retrace when the stored dtype changes."""

        @jax.jit
        def next_day(t):
            return t.add_days(1.0)

        set_dtype(jnp.float32)
        assert next_day(ModifiedJulianDate(60000.0)).value().dtype == jnp.float32

        set_dtype(jnp.float64)
        assert next_day(ModifiedJulianDate(60000.0)).value().dtype == jnp.float64


class TestFloat64Precision:
    def test_jd_resolves_milliseconds(self):
        """A float64 Julian Date round-trips a civil time to the millisecond."""
        civil = CivilTime(2024, 6, 15, 6, 30, 0, 250_000_000)
        assert JulianDate.from_civil(civil).to_civil() == civil
