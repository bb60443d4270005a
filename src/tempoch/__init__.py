"""
tempoch is a typed multi-scale time library with a period algebra, implemented in JAX on top of ERFA.
"""

from .constants import (
    JD_MJD_OFFSET,
    JD_J2000,
    MJD2000,
    MJD_UNIX_EPOCH,
    SECONDS_PER_DAY,
    DAYS_PER_JULIAN_YEAR,
    DAYS_PER_JULIAN_CENTURY,
    TT_TAI,
    TAI_GPS
)

from .config import (
    set_dtype,
    get_dtype,
    set_civil_precision,
    get_civil_precision,
    set_dut1,
    get_dut1,
)

from .errors import (
    Status,
    TempochError,
    NullPointerError,
    UtcConversionError,
    InvalidPeriodError,
    NoIntersectionError,
    InvalidQuantityError,
    UnknownStatusError,
    check_status,
)

from .civil import CivilTime

from .units import (
    SECOND,
    MINUTE,
    HOUR,
    DAY,
    JULIAN_YEAR,
    JULIAN_CENTURY,
)

from .scales import (
    TimeScale,
    JDBackedScale,
    JDScale,
    MJDScale,
    UTCScale,
    TTScale,
    TAIScale,
    TDBScale,
    TCGScale,
    TCBScale,
    GPSScale,
    UT1Scale,
    JDEScale,
    UnixScale,
    all_scales,
)

from .conversions import (
    convert,
    resolve,
    conversion_path,
    register_conversion,
)

from .time import (
    Time,
    JulianDate,
    ModifiedJulianDate,
    UTCTime,
    TerrestrialTime,
    AtomicTime,
    BarycentricDynamicalTime,
    GeocentricCoordinateTime,
    BarycentricCoordinateTime,
    GPSTime,
    UniversalTime,
    JulianEphemerisDate,
    UnixTime,
)

from .period import (
    Period,
    TimeTraits,
    register_time_traits,
    traits_for,
)

__all__ = [
    # Constants
    "JD_MJD_OFFSET",
    "JD_J2000",
    "MJD2000",
    "MJD_UNIX_EPOCH",
    "SECONDS_PER_DAY",
    "DAYS_PER_JULIAN_YEAR",
    "DAYS_PER_JULIAN_CENTURY",
    "TT_TAI",
    "TAI_GPS",
    # Config
    "set_dtype",
    "get_dtype",
    "set_civil_precision",
    "get_civil_precision",
    "set_dut1",
    "get_dut1",
    # Errors
    "Status",
    "TempochError",
    "NullPointerError",
    "UtcConversionError",
    "InvalidPeriodError",
    "NoIntersectionError",
    "InvalidQuantityError",
    "UnknownStatusError",
    "check_status",
    # Civil Time
    "CivilTime",
    # Units
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "JULIAN_YEAR",
    "JULIAN_CENTURY",
    # Scales
    "TimeScale",
    "JDBackedScale",
    "JDScale",
    "MJDScale",
    "UTCScale",
    "TTScale",
    "TAIScale",
    "TDBScale",
    "TCGScale",
    "TCBScale",
    "GPSScale",
    "UT1Scale",
    "JDEScale",
    "UnixScale",
    "all_scales",
    # Conversions
    "convert",
    "resolve",
    "conversion_path",
    "register_conversion",
    # Time
    "Time",
    "JulianDate",
    "ModifiedJulianDate",
    "UTCTime",
    "TerrestrialTime",
    "AtomicTime",
    "BarycentricDynamicalTime",
    "GeocentricCoordinateTime",
    "BarycentricCoordinateTime",
    "GPSTime",
    "UniversalTime",
    "JulianEphemerisDate",
    "UnixTime",
    # Period
    "Period",
    "TimeTraits",
    "register_time_traits",
    "traits_for",
]
