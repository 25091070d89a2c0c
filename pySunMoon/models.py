"""
pySunMoon.models - Immutable value types

Every result is built fresh per call and never mutated afterwards.

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

import numpy as np

__all__ = [
    'EarthState',
    'Ephemeris',
    'GeoCoordinate',
    'HorizontalCoordinate',
    'MoonEstimate',
    'MoonPhaseInfo',
    'Vector3',
]


@dataclass(frozen=True)
class Vector3:
    """
    Real triple used both as a unit direction and as a position

    Examples
    --------
    >>> v = Vector3(3.0, 0.0, 4.0)
    >>> v.norm()
    5.0
    >>> v.normalized()
    Vector3(x=0.6, y=0.0, z=0.8)
    """

    x: float
    y: float
    z: float

    @classmethod
    def from_array(cls, values) -> Vector3:
        """Build from any length-3 sequence or numpy array"""
        x, y, z = np.asarray(values, dtype=np.float64).reshape(3)
        return cls(float(x), float(y), float(z))

    def as_array(self) -> np.ndarray:
        """Return the components as a float64 numpy array, shape (3,)"""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def normalized(self) -> Vector3:
        """Unit vector along self; raises ValueError for the zero vector"""
        n = self.norm()
        if n == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vector3(self.x / n, self.y / n, self.z / n)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)


@dataclass(frozen=True)
class GeoCoordinate:
    """Observer location in degrees (latitude +North, longitude +East)"""

    latitude_deg: float
    longitude_deg: float


@dataclass(frozen=True)
class HorizontalCoordinate:
    """Azimuth clockwise from north in [0, 360), altitude in [-90, 90]"""

    azimuth_deg: float
    altitude_deg: float


@dataclass(frozen=True)
class MoonEstimate:
    """Moon direction with its phase quantities"""

    moon_world: Vector3  # unit direction, ECEF
    illumination: float  # illuminated fraction of the disk [0, 1]
    phase_angle_rad: float  # Sun-Moon-observer angle (radians)


@dataclass(frozen=True)
class Ephemeris:
    """Result of a single :meth:`EphemerisFacade.compute` call"""

    instant: datetime  # UTC
    sun_world: Vector3  # unit direction, ECEF
    moon_world: Vector3  # unit direction, ECEF
    observer_world: Vector3  # unit vector on the ECEF unit sphere
    altitude_deg: float  # solar altitude
    azimuth_deg: float  # solar azimuth (0=N, 90=E)
    illumination: float  # lunar illuminated fraction [0, 1]


@dataclass(frozen=True)
class MoonPhaseInfo:
    illumination: float
    phase_angle_rad: float


@dataclass(frozen=True)
class EarthState:
    """World-frame lighting state for a renderer"""

    sun_direction: Vector3
    moon_direction: Vector3
    illumination: float
