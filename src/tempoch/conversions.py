"""Conversion graph between time scales.

``convert(src, dst, value)`` maps a day-count on ``src`` to the same instant
on ``dst``. Resolution order for a pair:

1. ``src is dst``: identity, the input is returned unchanged.
2. A direct conversion registered with :func:`register_conversion`.
3. Composition through the hub, ``src -> JD -> dst``. Each half-path is a
   direct conversion to or from :class:`~tempoch.scales.JDScale` or, for
   scales derived from :class:`~tempoch.scales.JDBackedScale`, their own
   ``to_jd`` / ``from_jd``.

Resolved paths are memoized, so dispatch for a pair is computed once.
Registering a new direct conversion clears the memo.

A new JD-backed scale therefore gains a path to and from every other scale
without touching this module.
"""

from __future__ import annotations

import functools
import logging
from typing import Callable

from . import _core
from .scales import (
    JDBackedScale,
    JDEScale,
    JDScale,
    MJDScale,
    TDBScale,
    TimeScale,
    UnixScale,
    UTCScale,
)

logger = logging.getLogger(__name__)

Converter = Callable[[object], object]

_DIRECT: dict[tuple[type[TimeScale], type[TimeScale]], Converter] = {}


def register_conversion(src: type[TimeScale], dst: type[TimeScale]):
    """Decorator registering a direct conversion from *src* to *dst*.

    Args:
        src: Source scale tag.
        dst: Destination scale tag.

    Returns:
        Callable: Decorator that registers and returns the function.

    Examples:
        ```python
        @register_conversion(MyScale, UTCScale)
        def _my_to_utc(value):
            ...
        ```
    """
    def decorator(func: Converter) -> Converter:
        _DIRECT[(src, dst)] = func
        _route.cache_clear()
        logger.debug("registered direct conversion %s -> %s", src.name, dst.name)
        return func
    return decorator


def _identity(value):
    return value


def _to_hub(src: type[TimeScale]) -> Converter | None:
    if src is JDScale:
        return _identity
    if (src, JDScale) in _DIRECT:
        return _DIRECT[(src, JDScale)]
    if issubclass(src, JDBackedScale):
        return src.to_jd
    return None


def _from_hub(dst: type[TimeScale]) -> Converter | None:
    if dst is JDScale:
        return _identity
    if (JDScale, dst) in _DIRECT:
        return _DIRECT[(JDScale, dst)]
    if issubclass(dst, JDBackedScale):
        return dst.from_jd
    return None


@functools.lru_cache(maxsize=None)
def _route(src: type[TimeScale], dst: type[TimeScale]) -> tuple[Converter, tuple]:
    if src is dst:
        return _identity, (src,)

    direct = _DIRECT.get((src, dst))
    if direct is not None:
        return direct, (src, dst)

    to_hub = _to_hub(src)
    from_hub = _from_hub(dst)
    if to_hub is None or from_hub is None:
        raise TypeError(f"No conversion path from {src.name} to {dst.name}")

    if src is JDScale or dst is JDScale:
        return (from_hub if src is JDScale else to_hub), (src, dst)

    def via_hub(value):
        return from_hub(to_hub(value))

    return via_hub, (src, JDScale, dst)


def resolve(src: type[TimeScale], dst: type[TimeScale]) -> Converter:
    """Return the memoized conversion function for ``src -> dst``.

    Raises:
        TypeError: If either scale has no path to the hub.
    """
    return _route(src, dst)[0]


def conversion_path(src: type[TimeScale], dst: type[TimeScale]) -> tuple[type[TimeScale], ...]:
    """Return the scales visited when converting ``src -> dst``.

    Returns:
        tuple: ``(src,)`` for identity, ``(src, dst)`` for a direct
            conversion, ``(src, JDScale, dst)`` when routed through the hub.
    """
    return _route(src, dst)[1]


def convert(src: type[TimeScale], dst: type[TimeScale], value):
    """Convert a day-count on *src* to the same instant on *dst*.

    Args:
        src: Source scale tag.
        dst: Destination scale tag.
        value: Day-count (seconds for Unix) on *src*.

    Returns:
        The day-count on *dst*. ``value`` itself when ``src is dst``. Every
        built-in conversion is total: finite input gives finite output.

    Raises:
        TypeError: If either scale has no path to the hub.
    """
    return resolve(src, dst)(value)


# ---------------------------------------------------------------------------
# Direct conversions
# ---------------------------------------------------------------------------


@register_conversion(JDScale, MJDScale)
def _jd_to_mjd(jd):
    return _core.jd_to_mjd(jd)


@register_conversion(MJDScale, JDScale)
def _mjd_to_jd(mjd):
    return _core.mjd_to_jd(mjd)


@register_conversion(JDScale, UTCScale)
def _jd_to_utc(jd):
    return _core.jd_to_utc(jd)


@register_conversion(UTCScale, JDScale)
def _utc_to_jd(utc):
    return _core.utc_to_jd(utc)


# UTC carries the MJD day-count, and JDE the TDB Julian Date.
register_conversion(MJDScale, UTCScale)(_identity)
register_conversion(UTCScale, MJDScale)(_identity)
register_conversion(TDBScale, JDEScale)(_identity)
register_conversion(JDEScale, TDBScale)(_identity)


@register_conversion(UTCScale, UnixScale)
@register_conversion(MJDScale, UnixScale)
def _to_unix(mjd):
    return _core.utc_to_unix(mjd)


@register_conversion(UnixScale, UTCScale)
@register_conversion(UnixScale, MJDScale)
def _from_unix(seconds):
    return _core.unix_to_utc(seconds)
