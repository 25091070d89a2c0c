"""
pySunMoon.compute - Sun and Moon ephemeris API

Chains the solar calculator, the frame conversions and the Moon estimator
into one immutable :class:`Ephemeris` per query.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Optional

import numpy as np

from . import config
from .astro.lunar import moon_from_ephemeris, moon_from_sun
from .astro.providers import EphemerisProvider
from .astro.solar import solar_horizontal
from .errors import ComputationError, DomainError
from .julian import as_utc
from .localtime import to_utc
from .models import EarthState, Ephemeris, GeoCoordinate, MoonPhaseInfo
from .spatial import enu_to_ecef, horizontal_to_enu, observer_ecef

__all__ = [
    'EphemerisFacade',
    'compute_ephemeris',
    'earth_state',
    'moon_phase',
]

_log = logging.getLogger(__name__)

_MOON_MODELS = ('heuristic', 'analytic')


def _finite(value, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise DomainError(f"{name} must be a number: {value!r}") from e
    if not math.isfinite(number):
        raise DomainError(f"{name} must be finite: {value!r}")
    return number


def _validate_observer(latitude_deg, longitude_deg) -> tuple[float, float]:
    lat = _finite(latitude_deg, 'Latitude')
    lon = _finite(longitude_deg, 'Longitude')
    if not -90.0 <= lat <= 90.0:
        raise DomainError(f"Latitude out of range [-90, 90]: {latitude_deg!r}")
    return lat, lon


class EphemerisFacade:
    """
    Sun/Moon directions and lunar illumination for an observer

    Parameters
    ----------
    provider : EphemerisProvider, optional
        High-precision solar position source; the analytic series is used
        when it is None or fails
    logger : logging.Logger, optional
        Destination for intermediate values (silent unless configured)
    moon_model : {'heuristic', 'analytic'}, default 'heuristic'
        'heuristic' derives the Moon from the Sun direction;
        'analytic' uses the low-precision lunar series

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> facade = EphemerisFacade()
    >>> eph = facade.compute(datetime(2024, 6, 21, 4, tzinfo=timezone.utc), 31.2, 121.5)
    >>> eph.altitude_deg > 60.0
    True
    """

    def __init__(
        self,
        provider: Optional[EphemerisProvider] = None,
        logger: Optional[logging.Logger] = None,
        moon_model: str = 'heuristic',
    ):
        if moon_model not in _MOON_MODELS:
            raise ValueError(
                f"Unknown moon model: {moon_model}. Supported: {list(_MOON_MODELS)}"
            )
        self.provider = provider
        self.logger = logger or _log
        self.moon_model = moon_model

    @classmethod
    def from_environment(cls, **kwargs) -> EphemerisFacade:
        """Facade using the provider configured by environment variables"""
        return cls(provider=config.default_provider(), **kwargs)

    def compute(
        self,
        instant: datetime,
        latitude_deg: float,
        longitude_deg: float,
    ) -> Ephemeris:
        """
        Compute the ephemeris of an observer at a UTC instant

        Parameters
        ----------
        instant : datetime
            UTC instant (naive datetimes are taken as UTC)
        latitude_deg : float
            Observer latitude (degrees, +North)
        longitude_deg : float
            Observer longitude (degrees, +East)

        Returns
        -------
        Ephemeris

        Raises
        ------
        DomainError
            If the latitude or longitude is invalid
        ComputationError
            If any later step fails
        """
        return self._evaluate(instant, latitude_deg, longitude_deg)

    def compute_at(self, instant: datetime, location: GeoCoordinate) -> Ephemeris:
        """Same as :meth:`compute` for a :class:`GeoCoordinate`"""
        return self._evaluate(instant, location.latitude_deg, location.longitude_deg)

    def _evaluate(
        self,
        instant: datetime,
        latitude_deg: float,
        longitude_deg: float,
    ) -> Ephemeris:
        # called directly by every public entry point (warning stacklevel)
        lat, lon = _validate_observer(latitude_deg, longitude_deg)
        try:
            return self._compute(as_utc(instant), lat, lon)
        except Exception as e:
            raise ComputationError(
                f"Ephemeris computation failed for {instant!r} at "
                f"({latitude_deg}, {longitude_deg}): {e}"
            ) from e

    def _compute(
        self,
        instant: datetime,
        latitude_deg: float,
        longitude_deg: float,
    ) -> Ephemeris:
        horizontal = solar_horizontal(
            instant, latitude_deg, longitude_deg,
            provider=self.provider, logger=self.logger,
            # solar_horizontal <- _compute <- _evaluate <- entry point <- caller
            stacklevel=5,
        )
        sun_enu = horizontal_to_enu(horizontal.azimuth_deg, horizontal.altitude_deg)
        sun_world = enu_to_ecef(sun_enu, latitude_deg, longitude_deg)
        observer_world = observer_ecef(latitude_deg, longitude_deg)

        if self.moon_model == 'analytic':
            moon = moon_from_ephemeris(sun_world, instant)
        else:
            moon = moon_from_sun(sun_world)

        self.logger.debug(
            "ephemeris %s at (%s, %s): az=%.3f alt=%.3f sun=%s moon=%s ill=%.4f",
            instant.isoformat(), latitude_deg, longitude_deg,
            horizontal.azimuth_deg, horizontal.altitude_deg,
            sun_world, moon.moon_world, moon.illumination,
        )
        return Ephemeris(
            instant=instant,
            sun_world=sun_world,
            moon_world=moon.moon_world,
            observer_world=observer_world,
            altitude_deg=horizontal.altitude_deg,
            azimuth_deg=horizontal.azimuth_deg,
            illumination=moon.illumination,
        )


def compute_ephemeris(
    instant: datetime,
    latitude_deg: float,
    longitude_deg: float,
    **kwargs
) -> Ephemeris:
    """
    Compute an ephemeris with a fresh :class:`EphemerisFacade`

    Keyword arguments are passed to the facade constructor; without a
    ``provider`` only the analytic solar series is used.
    """
    return EphemerisFacade(**kwargs)._evaluate(instant, latitude_deg, longitude_deg)


def earth_state(
    local: str,
    latitude_deg: float,
    longitude_deg: float,
    **kwargs
) -> EarthState:
    """
    World-frame lighting state from a local civil time string

    Parameters
    ----------
    local : str
        Local time ``YYYY-MM-DDTHH:mm``, converted with the longitude offset
    latitude_deg, longitude_deg : float
        Observer location (degrees)
    **kwargs
        Passed to :class:`EphemerisFacade`
    """
    eph = EphemerisFacade(**kwargs)._evaluate(
        to_utc(local, longitude_deg), latitude_deg, longitude_deg)
    return EarthState(
        sun_direction=eph.sun_world,
        moon_direction=eph.moon_world,
        illumination=eph.illumination,
    )


def moon_phase(
    local: str,
    latitude_deg: float,
    longitude_deg: float,
    **kwargs
) -> MoonPhaseInfo:
    """
    Lunar illumination and phase angle from a local civil time string

    The phase angle is recovered from the illumination,
    ``i = arccos(2 k - 1)``, so it lies in [0, pi].
    """
    eph = EphemerisFacade(**kwargs)._evaluate(
        to_utc(local, longitude_deg), latitude_deg, longitude_deg)
    illumination = float(np.clip(eph.illumination, 0.0, 1.0))
    phase_angle = float(np.arccos(np.clip(2.0 * illumination - 1.0, -1.0, 1.0)))
    return MoonPhaseInfo(illumination=illumination, phase_angle_rad=phase_angle)
