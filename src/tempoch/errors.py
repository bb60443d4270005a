"""Status codes and the typed exception hierarchy.

Every fallible call into :mod:`tempoch._core` returns a :class:`Status`
next to its result. :func:`check_status` is the single translation point
from those codes to exceptions; it raises exactly one exception class per
code and preserves unrecognized codes in :class:`UnknownStatusError`.
"""

from __future__ import annotations

import enum
import logging

logger = logging.getLogger(__name__)


class Status(enum.IntEnum):
    """Result code of a native time-core call.

    Attributes:
        OK: The call succeeded.
        NULL_POINTER: A required input or output was missing.
        UTC_CONVERSION_FAILED: A civil <-> day-count conversion was rejected.
        INVALID_PERIOD: A period was requested with start later than end.
        NO_INTERSECTION: Two periods share no instant.
        INVALID_QUANTITY: A duration could not be expressed in a time unit.
    """

    OK = 0
    NULL_POINTER = 1
    UTC_CONVERSION_FAILED = 2
    INVALID_PERIOD = 3
    NO_INTERSECTION = 4
    INVALID_QUANTITY = 5


class TempochError(Exception):
    """Base exception for all tempoch errors.

    Attributes:
        operation (str): Name of the logical operation that failed.
        cause (str): Human-readable reason.
    """

    def __init__(self, operation: str, cause: str) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


class NullPointerError(TempochError, TypeError):
    """A required input or output was ``None``."""


class UtcConversionError(TempochError, ValueError):
    """A civil <-> day-count conversion was rejected (invalid or out of range)."""


class InvalidPeriodError(TempochError, ValueError):
    """A period was constructed with start later than end."""


class NoIntersectionError(TempochError, ValueError):
    """Two periods do not overlap."""


class InvalidQuantityError(TempochError, ValueError):
    """A duration was not convertible to a time unit."""


class UnknownStatusError(TempochError):
    """The time core returned a status code this version does not know.

    Attributes:
        code (int): The raw status code.
    """

    def __init__(self, operation: str, code: int) -> None:
        super().__init__(operation, f"unknown error ({code})")
        self.code = code


_ERRORS: dict[Status, tuple[type[TempochError], str]] = {
    Status.NULL_POINTER: (NullPointerError, "null input or output"),
    Status.UTC_CONVERSION_FAILED: (UtcConversionError, "UTC conversion failed"),
    Status.INVALID_PERIOD: (InvalidPeriodError, "invalid period (start > end)"),
    Status.NO_INTERSECTION: (NoIntersectionError, "periods do not intersect"),
    Status.INVALID_QUANTITY: (InvalidQuantityError, "quantity is not a time duration"),
}


def check_status(status: int, operation: str) -> None:
    """Raise the exception matching *status*, or return if it is ``OK``.

    Args:
        status (int): Status code returned by a time-core call.
        operation (str): Name of the logical operation, used in the message.

    Raises:
        NullPointerError: For ``Status.NULL_POINTER``.
        UtcConversionError: For ``Status.UTC_CONVERSION_FAILED``.
        InvalidPeriodError: For ``Status.INVALID_PERIOD``.
        NoIntersectionError: For ``Status.NO_INTERSECTION``.
        InvalidQuantityError: For ``Status.INVALID_QUANTITY``.
        UnknownStatusError: For any code not in :class:`Status`.
    """
    code = int(status)
    if code == Status.OK:
        return

    logger.debug("%s returned status %d", operation, code)
    try:
        error_cls, cause = _ERRORS[Status(code)]
    except (ValueError, KeyError):
        raise UnknownStatusError(operation, code) from None
    raise error_cls(operation, cause)
