import jax.numpy as jnp
import pytest

from tempoch.config import set_civil_precision, set_dtype, set_dut1


@pytest.fixture(autouse=True)
def _ensure_defaults():
    """Restore float64 and the default civil precision and UT1-UTC before every test.

    Configuration is process-global, so a test that changes it (e.g.
    test_config.py switching to float32) must not leak into the next one.
    """
    set_dtype(jnp.float64)
    set_civil_precision(3)
    set_dut1(0.0)
