"""
pySunMoon.julian - Julian Day arithmetic

Calendar instants are converted with the standard Gregorian-to-Julian-Day
formula, so the Julian century used by the solar series stays accurate over
roughly 1900-2100.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

from datetime import datetime, timezone

__all__ = [
    'as_utc',
    'julian_century',
    'julian_day',
    'julian_day_from_calendar',
]

# Constants
_JD_J2000 = 2451545.0  # JD of J2000.0 (2000-01-01T12:00 TT)
_JULIAN_CENTURY = 36525.0  # Julian century (days)


def julian_day_from_calendar(
    year,
    month,
    day,
    hour=0,
    minute=0,
    second=0.0,
):
    """
    Compute the Julian Day from proleptic Gregorian calendar fields

    Parameters
    ----------
    year, month, day : int or np.ndarray
        Calendar date (month 1-12)
    hour, minute : int or np.ndarray, default 0
        UTC time of day
    second : float or np.ndarray, default 0.0
        UTC seconds, may be fractional

    Returns
    -------
    float or np.ndarray
        Julian Day

    Notes
    -----
    The integer part is the Julian Day Number of the civil date, which
    refers to noon; the time of day is therefore offset by 12 hours.

    Examples
    --------
    >>> julian_day_from_calendar(2000, 1, 1, 12)
    2451545.0
    """
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    jdn = (day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100
           + y // 400 - 32045)
    day_fraction = (hour - 12) / 24.0 + minute / 1440.0 + second / 86400.0
    return jdn + day_fraction


def as_utc(instant: datetime) -> datetime:
    """Return ``instant`` in UTC; naive datetimes are taken as UTC"""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def julian_day(instant: datetime) -> float:
    """
    Compute the Julian Day of a datetime

    Parameters
    ----------
    instant : datetime
        Timezone-aware datetime, or naive datetime already in UTC

    Returns
    -------
    float
        Julian Day (UTC)
    """
    utc = as_utc(instant)
    second = utc.second + utc.microsecond / 1e6
    return float(julian_day_from_calendar(
        utc.year, utc.month, utc.day, utc.hour, utc.minute, second
    ))


def julian_century(jd):
    """Julian centuries elapsed since J2000.0"""
    return (jd - _JD_J2000) / _JULIAN_CENTURY
