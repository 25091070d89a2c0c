"""
pySunMoon.localtime - Civil local time to UTC

Local times are mapped to UTC with a whole-hour offset derived from the
observer longitude (one zone per 15 degrees). This is not a political time
zone lookup: half-hour zones and daylight saving are ignored.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone

from .errors import DomainError, FormatError

__all__ = [
    'offset_hours_from_longitude',
    'to_utc',
]

_LOCAL_PATTERN = re.compile(
    r'([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2})'
)


def offset_hours_from_longitude(longitude_deg: float) -> int:
    """
    Whole-hour offset of the nominal zone containing a longitude

    Halves are rounded up (towards +inf), so 7.5 E gives +1 and
    7.5 W gives 0.

    Examples
    --------
    >>> offset_hours_from_longitude(121.5)
    8
    >>> offset_hours_from_longitude(-74.0)
    -5
    """
    if not math.isfinite(longitude_deg):
        raise DomainError(f"Longitude must be finite: {longitude_deg!r}")
    return int(math.floor(longitude_deg / 15.0 + 0.5))


def to_utc(local: str, longitude_deg: float) -> datetime:
    """
    Convert a local civil time string to a UTC datetime

    Parameters
    ----------
    local : str
        Local time formatted exactly as ``YYYY-MM-DDTHH:mm``
    longitude_deg : float
        Observer longitude (degrees, +East)

    Returns
    -------
    datetime
        Timezone-aware UTC datetime

    Raises
    ------
    FormatError
        If ``local`` does not match the pattern, is not a valid date/time,
        or its UTC instant falls outside years 1-9999

    Examples
    --------
    >>> to_utc('2024-06-21T12:00', 121.5).isoformat()
    '2024-06-21T04:00:00+00:00'
    """
    if not isinstance(local, str):
        raise FormatError(
            f"Invalid local time {local!r}: expected YYYY-MM-DDTHH:mm"
        )
    match = _LOCAL_PATTERN.fullmatch(local)
    if match is None:
        raise FormatError(
            f"Invalid local time {local!r}: expected YYYY-MM-DDTHH:mm"
        )
    year, month, day, hour, minute = (int(g) for g in match.groups())
    offset = offset_hours_from_longitude(longitude_deg)
    # fields are interpreted directly, never through the host time zone
    try:
        local_as_utc = datetime(year, month, day, hour, minute,
                                tzinfo=timezone.utc)
    except ValueError as e:
        raise FormatError(f"Invalid local time {local!r}: {e}") from e
    try:
        return local_as_utc - timedelta(hours=offset)
    except OverflowError as e:
        raise FormatError(
            f"Local time {local!r} at UTC{offset:+d} falls outside the "
            f"representable UTC range (years 1-9999)"
        ) from e
