"""
pySunMoon.astro.providers - High-precision solar position providers

A provider is any object exposing ``apparent_sun(instant, latitude_deg,
longitude_deg)`` that returns the apparent (of date, aberration included)
equatorial position of the Sun for a topocentric observer. The solar
calculator uses it as the primary strategy and falls back to the analytic
series when it is absent or fails.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol, Union, runtime_checkable

from skyfield.api import Loader, wgs84

from ..julian import as_utc

__all__ = [
    'ApparentPosition',
    'EphemerisProvider',
    'SkyfieldProvider',
]


@dataclass(frozen=True)
class ApparentPosition:
    """Apparent equatorial position of the Sun, all in degrees"""

    right_ascension_deg: float  # of date
    declination_deg: float  # of date
    hour_angle_deg: float  # local, positive west of the meridian


@runtime_checkable
class EphemerisProvider(Protocol):
    def apparent_sun(
        self,
        instant: datetime,
        latitude_deg: float,
        longitude_deg: float,
    ) -> ApparentPosition:
        ...


class SkyfieldProvider:
    """
    Apparent solar positions from a Skyfield JPL ephemeris

    Parameters
    ----------
    timescale : skyfield.timelib.Timescale
        Skyfield timescale
    ephemeris : skyfield.jpllib.SpiceKernel
        Loaded ephemeris containing ``earth`` and ``sun`` (e.g. de421.bsp)

    Examples
    --------
    >>> provider = SkyfieldProvider.load('.skyfield_data')
    >>> facade = EphemerisFacade(provider=provider)
    """

    def __init__(self, timescale, ephemeris):
        self._ts = timescale
        self._earth = ephemeris['earth']
        self._sun = ephemeris['sun']

    @classmethod
    def load(
        cls,
        data_dir: Union[str, Path],
        ephemeris_name: str = 'de421.bsp',
    ) -> SkyfieldProvider:
        """Load timescale and ephemeris through a Skyfield ``Loader``

        The ephemeris is downloaded into ``data_dir`` if it is missing.
        """
        loader = Loader(str(data_dir))
        return cls(loader.timescale(), loader(ephemeris_name))

    def apparent_sun(
        self,
        instant: datetime,
        latitude_deg: float,
        longitude_deg: float,
    ) -> ApparentPosition:
        t = self._ts.from_datetime(as_utc(instant))
        observer = self._earth + wgs84.latlon(
            latitude_degrees=latitude_deg,
            longitude_degrees=longitude_deg,
        )
        apparent = observer.at(t).observe(self._sun).apparent()
        ra, dec, _ = apparent.radec(epoch='date')
        ha, _, _ = apparent.hadec()
        return ApparentPosition(
            right_ascension_deg=float(ra.hours) * 15.0,
            declination_deg=float(dec.degrees),
            hour_angle_deg=float(ha.hours) * 15.0,
        )
