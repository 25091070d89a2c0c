"""
pySunMoon - Sun and Moon directions for lighting

Computes the apparent direction of the Sun and Moon and the Moon's
illuminated fraction for any instant and observer, expressed as unit
vectors in the Earth-Centered Earth-Fixed frame.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.

Usage:
    import pySunMoon

    # Local civil time at the observer, offset from the longitude
    utc = pySunMoon.to_utc('2024-06-21T12:00', 121.5)

    eph = pySunMoon.compute_ephemeris(utc, 31.2, 121.5)
    eph.sun_world, eph.moon_world, eph.illumination

    # Prefer a Skyfield ephemeris when one is available locally
    facade = pySunMoon.EphemerisFacade.from_environment()
    eph = facade.compute(utc, 31.2, 121.5)
"""

import logging

from . import astro
from . import spatial
from .compute import (
    EphemerisFacade,
    compute_ephemeris,
    earth_state,
    moon_phase,
)
from .errors import (
    ComputationError,
    DomainError,
    FormatError,
    ProviderFailure,
    ProviderFallbackWarning,
)
from .julian import (
    julian_day,
    julian_day_from_calendar,
    julian_century,
)
from .localtime import (
    to_utc,
    offset_hours_from_longitude,
)
from .models import (
    Vector3,
    GeoCoordinate,
    HorizontalCoordinate,
    Ephemeris,
    MoonEstimate,
    MoonPhaseInfo,
    EarthState,
)
from .spatial import (
    horizontal_to_enu,
    enu_to_ecef,
    ecef_to_enu,
    enu_to_horizontal,
    observer_ecef,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = '0.1.0'
__all__ = [
    'astro',
    'spatial',
    # Facade
    'EphemerisFacade',
    'compute_ephemeris',
    'earth_state',
    'moon_phase',
    # Errors
    'ComputationError',
    'DomainError',
    'FormatError',
    'ProviderFailure',
    'ProviderFallbackWarning',
    # Time
    'julian_day',
    'julian_day_from_calendar',
    'julian_century',
    'to_utc',
    'offset_hours_from_longitude',
    # Models
    'Vector3',
    'GeoCoordinate',
    'HorizontalCoordinate',
    'Ephemeris',
    'MoonEstimate',
    'MoonPhaseInfo',
    'EarthState',
    # Spatial
    'horizontal_to_enu',
    'enu_to_ecef',
    'ecef_to_enu',
    'enu_to_horizontal',
    'observer_ecef',
]
