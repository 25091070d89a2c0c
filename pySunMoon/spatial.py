"""
pySunMoon.spatial - Local and geocentric frame conversions

Provides the pure geometric conversions between horizontal coordinates,
the observer's local tangent plane and the Earth-Centered Earth-Fixed frame.

Functions:
    horizontal_to_enu: Convert azimuth/altitude to an East-North-Up vector
    enu_to_ecef: Rotate an East-North-Up vector into ECEF
    ecef_to_enu: Rotate an ECEF vector into East-North-Up
    enu_to_horizontal: Convert an East-North-Up vector to azimuth/altitude
    observer_ecef: Unit "up" vector of an observer in ECEF
    enu_basis: East, North and Up basis vectors expressed in ECEF

ENU vectors are stored in :class:`Vector3` as ``(x=east, y=north, z=up)``.
All directions live on the unit sphere; no Earth radius or ellipsoid
scaling is applied.

References:
    J. Meeus, "Astronomical Algorithms", 1998.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

import numpy as np

from .models import HorizontalCoordinate, Vector3

__all__ = [
    'components_to_horizontal',
    'ecef_to_enu',
    'enu_basis',
    'enu_to_ecef',
    'enu_to_horizontal',
    'horizontal_to_enu',
    'observer_ecef',
    'wrap_azimuth',
]

# Below this magnitude the horizontal projection has no defined azimuth
_AZIMUTH_EPSILON = 1e-12


def wrap_azimuth(azimuth_deg: float) -> float:
    """Wrap an azimuth to [0, 360)"""
    az = float(np.mod(azimuth_deg, 360.0))
    # np.mod of a tiny negative value rounds up to exactly 360
    return 0.0 if az >= 360.0 else az


def components_to_horizontal(
    east: float,
    north: float,
    up: float,
) -> HorizontalCoordinate:
    """
    Convert local East/North/Up direction components to azimuth/altitude

    Parameters
    ----------
    east, north, up : float
        Components of a unit direction in the local tangent plane

    Returns
    -------
    HorizontalCoordinate
        Azimuth clockwise from north [0, 360), altitude [-90, 90]

    Notes
    -----
    The altitude argument is clamped to [-1, 1] before ``arcsin``.
    When the direction is vertical (observer at a pole, or the body at the
    zenith/nadir) both horizontal components vanish and the azimuth is
    reported as 0.
    """
    altitude = np.degrees(np.arcsin(np.clip(up, -1.0, 1.0)))
    if abs(east) < _AZIMUTH_EPSILON and abs(north) < _AZIMUTH_EPSILON:
        azimuth = 0.0
    else:
        azimuth = wrap_azimuth(np.degrees(np.arctan2(east, north)))
    return HorizontalCoordinate(azimuth_deg=azimuth, altitude_deg=float(altitude))


def horizontal_to_enu(azimuth_deg: float, altitude_deg: float) -> Vector3:
    """
    Convert azimuth/altitude to a unit East-North-Up vector

    Parameters
    ----------
    azimuth_deg : float
        Azimuth clockwise from north (degrees), wrapped to [0, 360)
    altitude_deg : float
        Altitude above the horizon (degrees), clamped to [-90, 90]

    Returns
    -------
    Vector3
        ``(east, north, up)`` unit vector

    Examples
    --------
    >>> horizontal_to_enu(90.0, 0.0).x
    1.0
    """
    az = np.radians(wrap_azimuth(azimuth_deg))
    alt = np.radians(np.clip(altitude_deg, -90.0, 90.0))
    cos_alt = np.cos(alt)
    return Vector3(
        float(np.sin(az) * cos_alt),
        float(np.cos(az) * cos_alt),
        float(np.sin(alt)),
    )


def enu_basis(latitude_deg: float, longitude_deg: float) -> np.ndarray:
    """
    East, North and Up basis vectors of an observer in ECEF

    Parameters
    ----------
    latitude_deg : float
        Observer latitude (degrees)
    longitude_deg : float
        Observer longitude (degrees)

    Returns
    -------
    np.ndarray
        Orthonormal matrix, shape (3, 3); rows are E, N and U
    """
    phi = np.radians(latitude_deg)
    lam = np.radians(longitude_deg)

    cos_phi = np.cos(phi)
    sin_phi = np.sin(phi)
    cos_lam = np.cos(lam)
    sin_lam = np.sin(lam)

    return np.array([
        [-sin_lam, cos_lam, 0.0],
        [-sin_phi * cos_lam, -sin_phi * sin_lam, cos_phi],
        [cos_phi * cos_lam, cos_phi * sin_lam, sin_phi],
    ])


def enu_to_ecef(enu: Vector3, latitude_deg: float, longitude_deg: float) -> Vector3:
    """
    Rotate an East-North-Up vector into the ECEF frame

    Parameters
    ----------
    enu : Vector3
        ``(east, north, up)`` vector
    latitude_deg : float
        Observer latitude (degrees)
    longitude_deg : float
        Observer longitude (degrees)

    Returns
    -------
    Vector3
        ECEF vector, same length as ``enu``
    """
    basis = enu_basis(latitude_deg, longitude_deg)
    # ECEF = east*E + north*N + up*U
    return Vector3.from_array(basis.T @ enu.as_array())


def ecef_to_enu(ecef: Vector3, latitude_deg: float, longitude_deg: float) -> Vector3:
    """Rotate an ECEF vector into the observer's East-North-Up frame"""
    basis = enu_basis(latitude_deg, longitude_deg)
    return Vector3.from_array(basis @ ecef.as_array())


def enu_to_horizontal(enu: Vector3) -> HorizontalCoordinate:
    """
    Convert an East-North-Up vector to azimuth/altitude

    The vector is normalized first, so any non-zero length is accepted.
    """
    unit = enu.normalized()
    return components_to_horizontal(unit.x, unit.y, unit.z)


def observer_ecef(latitude_deg: float, longitude_deg: float) -> Vector3:
    """
    Unit vector from the Earth's centre towards an observer

    Examples
    --------
    >>> observer_ecef(0.0, 0.0)
    Vector3(x=1.0, y=0.0, z=0.0)
    """
    return Vector3.from_array(enu_basis(latitude_deg, longitude_deg)[2])
