"""
Moon direction and illuminated fraction

Two estimators are provided:

- ``moon_from_sun``: a visual approximation that places the Moon as a
  fixed function of the Sun direction. It has no orbital content and is
  kept for parity with existing renderings.
- ``moon_from_ephemeris``: the low-precision lunar series (mean longitude,
  mean elongation, ascending node, anomalies) rotated from the ecliptic to
  the Earth-fixed frame.

Copyright (c) 2024-2026 tkykszk
A derivative work of PyTMD (https://github.com/tsutterley/pyTMD)
Original author: Tyler Sutterley
Original license: MIT License (source code), CC BY 4.0 (content)

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

from datetime import datetime

import numpy as np

from ..julian import julian_century, julian_day
from ..models import MoonEstimate, Vector3
from .solar import greenwich_mean_sidereal_time

__all__ = [
    'illumination_from_phase_angle',
    'lunar_direction',
    'lunar_ecef',
    'moon_from_ephemeris',
    'moon_from_sun',
]

_ARCSEC_TO_RAD = np.pi / (180.0 * 3600.0)  # Arcseconds to radians
_DEG_TO_RAD = np.pi / 180.0  # Degrees to radians
_EPSILON_J2000 = 23.43929111 * _DEG_TO_RAD  # Obliquity of ecliptic (radians)
_COS_EPSILON = np.cos(_EPSILON_J2000)
_SIN_EPSILON = np.sin(_EPSILON_J2000)

# Weights of the Sun-relative placement used by moon_from_sun
_HEURISTIC_WEIGHTS = (-0.5, 0.3, -0.5)


def illumination_from_phase_angle(phase_angle_rad):
    """Illuminated fraction of the disk, (1 + cos i) / 2, in [0, 1]"""
    return np.clip((1.0 + np.cos(phase_angle_rad)) / 2.0, 0.0, 1.0)


def _angle_between(a: Vector3, b: Vector3) -> float:
    # rounding can push the dot product of unit vectors past +/-1
    return float(np.arccos(np.clip(a.dot(b), -1.0, 1.0)))


def moon_from_sun(sun_world: Vector3) -> MoonEstimate:
    """
    Approximate Moon direction derived from the Sun direction alone

    Parameters
    ----------
    sun_world : Vector3
        Unit Sun direction (ECEF)

    Returns
    -------
    MoonEstimate
        Unit Moon direction, illumination and phase angle, where the phase
        angle is the angle between the Sun and Moon directions

    Notes
    -----
    The Moon is placed at ``(-0.5 x, 0.3 |y|, -0.5 z)`` of the Sun vector,
    normalized. This is not a lunar ephemeris; use
    :func:`moon_from_ephemeris` for the Moon's real position.
    """
    wx, wy, wz = _HEURISTIC_WEIGHTS
    raw = Vector3(wx * sun_world.x, wy * abs(sun_world.y), wz * sun_world.z)
    moon = raw.normalized() if raw.norm() > 0.0 else -sun_world.normalized()
    phase_angle = _angle_between(sun_world, moon)
    return MoonEstimate(
        moon_world=moon,
        illumination=float(illumination_from_phase_angle(phase_angle)),
        phase_angle_rad=phase_angle,
    )


def lunar_ecef(jd) -> tuple:
    """
    Compute lunar ECEF coordinates

    Parameters
    ----------
    jd : float or np.ndarray
        Julian Day (UTC, used in place of TT)

    Returns
    -------
    X, Y, Z : float or np.ndarray
        Lunar ECEF coordinates (metres)
    """
    T = julian_century(jd)

    # Lunar mean longitude
    s = (218.3164477 + T * (481267.88123421 + T * (-1.5786e-3 +
         T * (1.855835e-6 - 1.53388e-8 * T)))) * _DEG_TO_RAD

    # Lunar mean elongation
    D = (297.8501921 + T * (445267.1114034 + T * (-1.8819e-3 +
         T * (1.83195e-6 - 8.8445e-9 * T)))) * _DEG_TO_RAD

    # Lunar ascending node longitude
    N = (125.04452 + T * (-1934.136261 + T * (2.0708e-3 + 2.22222e-6 * T))) * _DEG_TO_RAD
    F = s - N

    # Solar and lunar mean anomalies
    M = (357.5256 + 35999.049 * T) * _DEG_TO_RAD
    l = (134.96292 + 477198.86753 * T) * _DEG_TO_RAD

    D2 = 2.0 * D
    l2 = 2.0 * l
    F2 = 2.0 * F
    sin_M = np.sin(M)
    sin_F2 = np.sin(F2)

    # Lunar distance (metres)
    r_moon = 1e3 * (
        385000.0
        - 20905.0 * np.cos(l)
        - 3699.0 * np.cos(D2 - l)
        - 2956.0 * np.cos(D2)
        - 570.0 * np.cos(l2)
        + 246.0 * np.cos(l2 - D2)
        - 205.0 * np.cos(M - D2)
        - 171.0 * np.cos(l + D2)
        - 152.0 * np.cos(l + M - D2)
    )

    # Lunar ecliptic longitude (radians)
    lambda_moon = s + _ARCSEC_TO_RAD * (
        22640.0 * np.sin(l)
        + 769.0 * np.sin(l2)
        - 4586.0 * np.sin(l - D2)
        + 2370.0 * np.sin(D2)
        - 668.0 * sin_M
        - 412.0 * sin_F2
        - 212.0 * np.sin(l2 - D2)
        - 206.0 * np.sin(l + M - D2)
        + 192.0 * np.sin(l + D2)
        - 165.0 * np.sin(M - D2)
        - 148.0 * np.sin(l - M)
        - 125.0 * np.sin(D)
        - 110.0 * np.sin(l + M)
        - 55.0 * np.sin(F2 - D2)
    )

    # Lunar ecliptic latitude (radians)
    q = _ARCSEC_TO_RAD * (412.0 * sin_F2 + 541.0 * sin_M)
    F_minus_D2 = F - D2
    beta_moon = _ARCSEC_TO_RAD * (
        18520.0 * np.sin(F + lambda_moon - s + q)
        - 526.0 * np.sin(F_minus_D2)
        + 44.0 * np.sin(l + F_minus_D2)
        - 31.0 * np.sin(-l + F_minus_D2)
        - 25.0 * np.sin(-l2 + F)
        - 23.0 * np.sin(M + F_minus_D2)
        + 21.0 * np.sin(-l + F)
        + 11.0 * np.sin(-M + F_minus_D2)
    )

    # Ecliptic rectangular coordinates
    cos_beta = np.cos(beta_moon)
    x = r_moon * np.cos(lambda_moon) * cos_beta
    y = r_moon * np.sin(lambda_moon) * cos_beta
    z = r_moon * np.sin(beta_moon)

    # Ecliptic to equatorial: rotation about X by -epsilon
    u = x
    v = _COS_EPSILON * y - _SIN_EPSILON * z
    w = _SIN_EPSILON * y + _COS_EPSILON * z

    # Equatorial to Earth-fixed: rotation about Z by the sidereal angle
    theta = np.radians(greenwich_mean_sidereal_time(jd))
    cos_theta = np.cos(theta)
    sin_theta = np.sin(theta)
    X = cos_theta * u + sin_theta * v
    Y = -sin_theta * u + cos_theta * v
    Z = w

    return X, Y, Z


def lunar_direction(instant: datetime) -> Vector3:
    """Unit geocentric Moon direction in ECEF at a UTC instant"""
    return Vector3.from_array(lunar_ecef(julian_day(instant))).normalized()


def moon_from_ephemeris(sun_world: Vector3, instant: datetime) -> MoonEstimate:
    """
    Moon direction and phase from the lunar series

    Parameters
    ----------
    sun_world : Vector3
        Unit Sun direction (ECEF)
    instant : datetime
        UTC instant

    Returns
    -------
    MoonEstimate
        Unit Moon direction, illumination and phase angle

    Notes
    -----
    The phase angle is approximated by pi minus the Sun-Moon elongation,
    which neglects the Moon's distance relative to the Sun's (< 0.2 deg).
    """
    moon = lunar_direction(instant)
    phase_angle = np.pi - _angle_between(sun_world, moon)
    return MoonEstimate(
        moon_world=moon,
        illumination=float(illumination_from_phase_angle(phase_angle)),
        phase_angle_rad=float(phase_angle),
    )
