"""
Low-precision solar position

Computes the Sun's apparent horizontal coordinates for an observer using
the analytic series of Meeus (mean longitude, mean anomaly, equation of
center, mean obliquity) together with the mean sidereal time. A
higher-precision provider may be supplied; it is used first and the
analytic series is the fallback when the provider is missing, raises or
returns an invalid position.

All angles are in degrees unless otherwise stated.

References:
    J. Meeus, "Astronomical Algorithms", 2nd edition, 1998, ch. 12 and 25.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

import logging
import math
import warnings
from datetime import datetime
from typing import Optional

import numpy as np

from ..errors import ProviderFailure, ProviderFallbackWarning
from ..julian import julian_century, julian_day
from ..models import HorizontalCoordinate
from ..spatial import components_to_horizontal
from .providers import ApparentPosition, EphemerisProvider

__all__ = [
    'equatorial_to_horizontal',
    'greenwich_mean_sidereal_time',
    'hour_angle',
    'local_sidereal_time',
    'normalize_angle',
    'normalize_hour_angle',
    'polynomial_sum',
    'solar_equatorial',
    'solar_horizontal',
]

_log = logging.getLogger(__name__)

# Constants
_JD_J2000 = 2451545.0  # JD of J2000.0

# Polynomial coefficients in Julian centuries (degrees)
_MEAN_LONGITUDE = (280.46646, 36000.76983, 0.0003032)
_MEAN_ANOMALY = (357.52911, 35999.05029, -0.0001537)
_OBLIQUITY = (23.439291, -0.0130042)
# Mean sidereal time in days since J2000.0 (degrees)
_GMST = (280.46061837, 360.98564736629)


def polynomial_sum(coefficients, t):
    """
    Compute polynomial sum using Horner's method

    Parameters
    ----------
    coefficients : sequence of float
        Coefficients [c0, c1, c2, ...]
    t : float or np.ndarray
        Time variable

    Returns
    -------
    float or np.ndarray
        c0 + c1*t + c2*t^2 + ...
    """
    result = 0.0
    for c in reversed(coefficients):
        result = result * t + c
    return result


def normalize_angle(theta, circle: float = 360.0):
    """
    Normalize an angle to a single rotation [0, circle)

    Parameters
    ----------
    theta : float or np.ndarray
        Angle to normalize
    circle : float, default 360.0
        Circle of the angle (360.0 for degrees, 2*pi for radians)
    """
    return np.mod(theta, circle)


def normalize_hour_angle(theta):
    """Normalize an angle in degrees to (-180, 180]"""
    return 180.0 - np.mod(180.0 - theta, 360.0)


def solar_equatorial(jd) -> tuple:
    """
    Compute the Sun's geocentric right ascension and declination

    Parameters
    ----------
    jd : float or np.ndarray
        Julian Day (UTC)

    Returns
    -------
    alpha : float or np.ndarray
        Right ascension (degrees, [0, 360))
    delta : float or np.ndarray
        Declination (degrees)
    """
    T = julian_century(jd)

    # Mean longitude and mean anomaly of the Sun
    L0 = normalize_angle(polynomial_sum(_MEAN_LONGITUDE, T))
    M = normalize_angle(polynomial_sum(_MEAN_ANOMALY, T))
    M_rad = np.radians(M)

    # Equation of center
    C = ((1.914602 - T * (0.004817 + T * 0.000014)) * np.sin(M_rad)
         + (0.019993 - T * 0.000101) * np.sin(2.0 * M_rad)
         + 0.000289 * np.sin(3.0 * M_rad))

    # True longitude
    L_rad = np.radians(normalize_angle(L0 + C))

    # Mean obliquity of the ecliptic
    epsilon_rad = np.radians(polynomial_sum(_OBLIQUITY, T))

    alpha = normalize_angle(np.degrees(np.arctan2(
        np.cos(epsilon_rad) * np.sin(L_rad), np.cos(L_rad)
    )))
    delta = np.degrees(np.arcsin(np.sin(epsilon_rad) * np.sin(L_rad)))
    return alpha, delta


def greenwich_mean_sidereal_time(jd):
    """
    Compute Greenwich Mean Sidereal Time

    Parameters
    ----------
    jd : float or np.ndarray
        Julian Day (UTC)

    Returns
    -------
    float or np.ndarray
        GMST (degrees, [0, 360))
    """
    return normalize_angle(polynomial_sum(_GMST, jd - _JD_J2000))


def local_sidereal_time(jd, longitude_deg):
    """Local mean sidereal time (degrees, [0, 360)) at an east longitude"""
    return normalize_angle(greenwich_mean_sidereal_time(jd) + longitude_deg)


def hour_angle(lst, right_ascension):
    """Local hour angle (degrees, (-180, 180]), positive west of the meridian"""
    return normalize_hour_angle(lst - right_ascension)


def equatorial_to_horizontal(
    hour_angle_deg: float,
    declination_deg: float,
    latitude_deg: float,
) -> HorizontalCoordinate:
    """
    Convert local hour angle and declination to horizontal coordinates

    Parameters
    ----------
    hour_angle_deg : float
        Local hour angle (degrees, positive west)
    declination_deg : float
        Declination (degrees)
    latitude_deg : float
        Observer latitude (degrees)

    Returns
    -------
    HorizontalCoordinate
        Azimuth clockwise from north, altitude above the horizon
    """
    H = np.radians(hour_angle_deg)
    delta = np.radians(declination_deg)
    phi = np.radians(latitude_deg)

    cos_delta = np.cos(delta)
    sin_delta = np.sin(delta)
    cos_phi = np.cos(phi)
    sin_phi = np.sin(phi)
    cos_H = np.cos(H)

    # a positive hour angle puts the body west of the meridian
    east = -cos_delta * np.sin(H)
    north = cos_phi * sin_delta - sin_phi * cos_delta * cos_H
    up = sin_phi * sin_delta + cos_phi * cos_delta * cos_H
    return components_to_horizontal(float(east), float(north), float(up))


def _checked(position: ApparentPosition) -> ApparentPosition:
    """Reject provider results that cannot describe a direction"""
    values = (position.right_ascension_deg, position.declination_deg,
              position.hour_angle_deg)
    if not all(math.isfinite(v) for v in values):
        raise ProviderFailure(f"Non-finite apparent position: {position!r}")
    if not -90.0 <= position.declination_deg <= 90.0:
        raise ProviderFailure(
            f"Declination out of range: {position.declination_deg!r}"
        )
    return position


def _analytic_horizontal(
    instant: datetime,
    latitude_deg: float,
    longitude_deg: float,
    logger: logging.Logger,
) -> HorizontalCoordinate:
    jd = julian_day(instant)
    alpha, delta = solar_equatorial(jd)
    lst = local_sidereal_time(jd, longitude_deg)
    H = hour_angle(lst, alpha)
    logger.debug(
        "analytic sun: jd=%.6f ra=%.4f dec=%.4f lst=%.4f ha=%.4f",
        jd, alpha, delta, lst, H,
    )
    return equatorial_to_horizontal(H, delta, latitude_deg)


def _report_fallback(
    failure: ProviderFailure,
    logger: logging.Logger,
    stacklevel: int,
) -> None:
    logger.warning("ephemeris provider failed, using analytic sun: %s", failure)
    try:
        warnings.warn(
            f"Ephemeris provider failed ({failure}). "
            "Falling back to the analytic solar position.",
            ProviderFallbackWarning,
            stacklevel=stacklevel + 1
        )
    except ProviderFallbackWarning:
        # raised under an "error" warnings filter; the log record above stands
        logger.debug("fallback warning raised by the warnings filter")


def solar_horizontal(
    instant: datetime,
    latitude_deg: float,
    longitude_deg: float,
    provider: Optional[EphemerisProvider] = None,
    logger: Optional[logging.Logger] = None,
    stacklevel: int = 2,
) -> HorizontalCoordinate:
    """
    Compute the Sun's azimuth and altitude for an observer

    Parameters
    ----------
    instant : datetime
        UTC instant (naive datetimes are taken as UTC)
    latitude_deg : float
        Observer latitude (degrees, +North)
    longitude_deg : float
        Observer longitude (degrees, +East)
    provider : EphemerisProvider, optional
        High-precision source of the apparent solar position. Failures are
        logged, reported with a :class:`ProviderFallbackWarning` and the
        analytic series is used instead. A warnings filter set to "error"
        never turns a fallback into an exception.
    logger : logging.Logger, optional
        Destination for intermediate values (module logger by default)
    stacklevel : int, default 2
        Stack level of the fallback warning, as for ``warnings.warn``
        called from this function

    Returns
    -------
    HorizontalCoordinate
        Azimuth clockwise from north [0, 360), altitude [-90, 90]
    """
    logger = logger or _log
    if provider is not None:
        try:
            position = _checked(
                provider.apparent_sun(instant, latitude_deg, longitude_deg)
            )
        except Exception as e:
            failure = e if isinstance(e, ProviderFailure) else ProviderFailure(
                f"{type(e).__name__}: {e}"
            )
            _report_fallback(failure, logger, stacklevel)
        else:
            logger.debug(
                "provider sun: ra=%.4f dec=%.4f ha=%.4f",
                position.right_ascension_deg, position.declination_deg,
                position.hour_angle_deg,
            )
            return equatorial_to_horizontal(
                position.hour_angle_deg, position.declination_deg, latitude_deg
            )
    return _analytic_horizontal(instant, latitude_deg, longitude_deg, logger)
