"""
pySunMoon.astro - Astronomical calculation module

Provides functions for:
- Low-precision solar position and sidereal time
- Moon direction and illuminated fraction
- High-precision solar positions from Skyfield

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from .solar import (
    solar_horizontal,
    solar_equatorial,
    greenwich_mean_sidereal_time,
    local_sidereal_time,
    hour_angle,
    equatorial_to_horizontal,
    polynomial_sum,
    normalize_angle,
    normalize_hour_angle,
)
from .lunar import (
    moon_from_sun,
    moon_from_ephemeris,
    lunar_ecef,
    lunar_direction,
    illumination_from_phase_angle,
)
from .providers import (
    ApparentPosition,
    EphemerisProvider,
    SkyfieldProvider,
)

__all__ = [
    'solar_horizontal',
    'solar_equatorial',
    'greenwich_mean_sidereal_time',
    'local_sidereal_time',
    'hour_angle',
    'equatorial_to_horizontal',
    'polynomial_sum',
    'normalize_angle',
    'normalize_hour_angle',
    'moon_from_sun',
    'moon_from_ephemeris',
    'lunar_ecef',
    'lunar_direction',
    'illumination_from_phase_angle',
    'ApparentPosition',
    'EphemerisProvider',
    'SkyfieldProvider',
]
