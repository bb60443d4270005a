"""
The `constants` module defines the time constants shared across tempoch.
"""

# Day-count Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
JD_J2000 = 2451545.0

"""
Modified Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
MJD2000 = 51544.5

"""
Modified Julian Date of the Unix epoch (1970-01-01 00:00:00 UTC). Units: *days*
"""
MJD_UNIX_EPOCH = 40587.0

"""
Seconds in a day. Units: *s/day*
"""
SECONDS_PER_DAY = 86400.0

"""
Days in a Julian year. Units: *days*
"""
DAYS_PER_JULIAN_YEAR = 365.25

"""
Days in a Julian century. Units: *days*
"""
DAYS_PER_JULIAN_CENTURY = 36525.0

# Scale Offsets

"""
TT - TAI offset (constant by definition). Units: *s*

References:

1. G. Petit and B. Luzum, *IERS Conventions (2010)*, IERS Technical Note 36
"""
TT_TAI = 32.184

"""
TAI - GPS offset (GPS time was aligned with UTC on 1980-01-06). Units: *s*
"""
TAI_GPS = 19.0
