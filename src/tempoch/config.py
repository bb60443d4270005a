"""Module-wide configuration for tempoch.

Provides getter/setter pairs for the handful of process-global knobs:

- ``set_dtype`` / ``get_dtype``: float dtype used to store day-counts.
  The default is ``jnp.float64`` because a Julian Date near 2.45e6 only
  resolves ~0.25 day in float32. Selecting float64 enables JAX's 64-bit
  mode (``jax_enable_x64``), which happens on import with the default.
- ``set_civil_precision`` / ``get_civil_precision``: decimal places of
  seconds produced when converting day-counts back to a civil breakdown.
- ``set_dut1`` / ``get_dut1``: the UT1-UTC offset used when routing values
  to and from the UT1 scale.

Like JAX's own ``jax.config.update``, call these **before** any JIT
compilation. Under JIT the values are read during tracing and baked into
the compiled program.
"""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp

logger = logging.getLogger(__name__)

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_dtype = jnp.float64
jax.config.update("jax_enable_x64", True)

# Decimal places of seconds returned by civil conversions (milliseconds).
_civil_precision = 3

# UT1-UTC in seconds.
_dut1 = 0.0


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for stored day-counts.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is automatically
    enabled via ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    if dtype != _dtype:
        logger.info("tempoch dtype set to %s", jnp.dtype(dtype).name)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


def set_civil_precision(ndp: int) -> None:
    """Set the number of decimal places of seconds in civil conversions.

    ``0`` gives whole seconds, ``3`` milliseconds, ``9`` nanoseconds. A
    float64 Julian Date resolves roughly 40 microseconds, so values beyond
    ``4`` mostly expose floating-point noise for JD-based scales.

    Args:
        ndp (int): Decimal places, between 0 and 9 inclusive.

    Raises:
        ValueError: If *ndp* is outside ``[0, 9]`` or not an integer.
    """
    global _civil_precision
    if isinstance(ndp, bool) or not isinstance(ndp, int) or not 0 <= ndp <= 9:
        raise ValueError(f"Civil precision must be an integer in [0, 9], got {ndp!r}")
    logger.info("tempoch civil precision set to %d decimal places", ndp)
    _civil_precision = ndp


def get_civil_precision() -> int:
    """Return the number of decimal places of seconds in civil conversions.

    Returns:
        int: Decimal places (default ``3``).
    """
    return _civil_precision


def set_dut1(seconds: float) -> None:
    """Set the UT1-UTC offset used by the UT1 scale.

    IERS keeps ``|UT1-UTC| < 0.9 s`` by inserting leap seconds, so the
    default of ``0.0`` bounds the UT1 error below one second.

    Args:
        seconds (float): UT1-UTC in seconds, within ``[-1, 1]``.

    Raises:
        ValueError: If *seconds* is outside ``[-1, 1]``.
    """
    global _dut1
    seconds = float(seconds)
    if not -1.0 <= seconds <= 1.0:
        raise ValueError(f"UT1-UTC must be within [-1, 1] seconds, got {seconds}")
    logger.info("tempoch UT1-UTC set to %.7f s", seconds)
    _dut1 = seconds


def get_dut1() -> float:
    """Return the UT1-UTC offset used by the UT1 scale.

    Returns:
        float: UT1-UTC in seconds (default ``0.0``).
    """
    return _dut1
