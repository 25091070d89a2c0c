"""
Ephemeris facade tests

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

import dataclasses
import logging
import math
import os
import warnings
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import numpy as np
import pytest

import pySunMoon
from pySunMoon import compute
from pySunMoon.astro.providers import ApparentPosition
from pySunMoon.compute import EphemerisFacade, compute_ephemeris, earth_state, moon_phase
from pySunMoon.errors import (
    ComputationError,
    DomainError,
    FormatError,
    ProviderFallbackWarning,
)
from pySunMoon.models import Ephemeris, GeoCoordinate
from pySunMoon.spatial import observer_ecef

UTC = timezone.utc


class _BrokenProvider:
    def apparent_sun(self, instant, latitude_deg, longitude_deg):
        raise RuntimeError("provider offline")


def _random_queries(n, seed):
    rng = np.random.default_rng(seed)
    start = datetime(1900, 1, 1, tzinfo=UTC)
    hours = rng.uniform(0, 200 * 365.25 * 24, n)
    lat = rng.uniform(-90, 90, n)
    lon = rng.uniform(-180, 180, n)
    for i in range(n):
        yield start + timedelta(hours=float(hours[i])), float(lat[i]), float(lon[i])


@pytest.mark.parametrize("moon_model", ["heuristic", "analytic"])
def test_unit_vectors_and_ranges(moon_model):
    """All directions are unit vectors; angles and illumination in range"""
    facade = EphemerisFacade(moon_model=moon_model)
    for instant, lat, lon in _random_queries(300, seed=6):
        eph = facade.compute(instant, lat, lon)
        assert abs(eph.sun_world.norm() - 1.0) < 1e-6
        assert abs(eph.moon_world.norm() - 1.0) < 1e-6
        assert abs(eph.observer_world.norm() - 1.0) < 1e-6
        assert 0.0 <= eph.illumination <= 1.0
        assert 0.0 <= eph.azimuth_deg < 360.0
        assert -90.0 <= eph.altitude_deg <= 90.0


def test_sun_altitude_consistent_with_observer():
    """The Sun's component along the observer's zenith is sin(altitude)"""
    for instant, lat, lon in _random_queries(100, seed=7):
        eph = compute_ephemeris(instant, lat, lon)
        up = eph.sun_world.dot(eph.observer_world)
        assert np.isclose(up, math.sin(math.radians(eph.altitude_deg)), atol=1e-9)


def test_equator_equinox_scenario():
    eph = compute_ephemeris(datetime(2024, 3, 20, 12, 0, tzinfo=UTC), 0.0, 0.0)
    assert abs(eph.altitude_deg - 90.0) < 5.0
    # Sun nearly overhead: close to the observer direction (1, 0, 0)
    assert eph.sun_world.x > 0.99


def test_shanghai_solstice_scenario():
    utc = pySunMoon.to_utc("2024-06-21T12:00", 121.5)
    eph = compute_ephemeris(utc, 31.2, 121.5)
    assert eph.altitude_deg > 60.0
    assert eph.instant == datetime(2024, 6, 21, 4, 0, tzinfo=UTC)


def test_idempotent():
    """Repeated calls return identical results"""
    facade = EphemerisFacade()
    instant = datetime(2024, 6, 21, 4, 0, tzinfo=UTC)
    first = facade.compute(instant, 31.2, 121.5)
    second = facade.compute(instant, 31.2, 121.5)
    assert first == second
    assert first is not second
    assert compute_ephemeris(instant, 31.2, 121.5) == first


def test_result_is_immutable():
    eph = compute_ephemeris(datetime(2024, 6, 21, tzinfo=UTC), 0.0, 0.0)
    assert isinstance(eph, Ephemeris)
    with pytest.raises(dataclasses.FrozenInstanceError):
        eph.illumination = 0.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        eph.sun_world.x = 0.0


def test_observer_world():
    eph = compute_ephemeris(datetime(2024, 6, 21, tzinfo=UTC), 31.2, 121.5)
    assert eph.observer_world == observer_ecef(31.2, 121.5)


def test_naive_and_aware_instants():
    """Naive instants are UTC; aware instants are normalized to UTC"""
    naive = compute_ephemeris(datetime(2024, 6, 21, 4, 0), 31.2, 121.5)
    shanghai = datetime(2024, 6, 21, 12, 0, tzinfo=timezone(timedelta(hours=8)))
    aware = compute_ephemeris(shanghai, 31.2, 121.5)
    assert naive == aware
    assert aware.instant.tzinfo == UTC


def test_compute_at_geocoordinate():
    facade = EphemerisFacade()
    instant = datetime(2024, 6, 21, 4, 0, tzinfo=UTC)
    assert facade.compute_at(instant, GeoCoordinate(31.2, 121.5)) == \
        facade.compute(instant, 31.2, 121.5)


def test_longitude_conventions():
    """(-180, 180] and [0, 360) longitudes give the same result"""
    instant = datetime(2024, 6, 21, 4, 0, tzinfo=UTC)
    west = compute_ephemeris(instant, 40.7, -74.0)
    east = compute_ephemeris(instant, 40.7, 286.0)
    assert np.isclose(west.altitude_deg, east.altitude_deg)
    assert np.isclose(west.azimuth_deg, east.azimuth_deg)
    assert np.allclose(west.sun_world.as_array(), east.sun_world.as_array())


@pytest.mark.parametrize("lat, lon", [
    (90.5, 0.0),
    (-91.0, 0.0),
    (math.nan, 0.0),
    (math.inf, 0.0),
    (0.0, math.nan),
    (0.0, -math.inf),
    ("north", 0.0),
    (None, 0.0),
])
def test_domain_errors(lat, lon):
    """Invalid coordinates are rejected before any computation"""
    with pytest.raises(DomainError):
        compute_ephemeris(datetime(2024, 6, 21, tzinfo=UTC), lat, lon)


def test_domain_error_is_value_error():
    with pytest.raises(ValueError):
        compute_ephemeris(datetime(2024, 6, 21, tzinfo=UTC), 100.0, 0.0)


def test_pole_coordinates_accepted():
    for lat in (90.0, -90.0):
        eph = compute_ephemeris(datetime(2024, 6, 21, tzinfo=UTC), lat, 0.0)
        assert abs(eph.sun_world.norm() - 1.0) < 1e-6


def test_internal_failure_wrapped(monkeypatch):
    """Unexpected failures surface as ComputationError with the cause"""
    def broken(sun_world):
        raise ZeroDivisionError("broken estimator")

    monkeypatch.setattr(compute, "moon_from_sun", broken)
    with pytest.raises(ComputationError) as excinfo:
        compute_ephemeris(datetime(2024, 6, 21, tzinfo=UTC), 0.0, 0.0)
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)
    assert "broken estimator" in str(excinfo.value)


def test_invalid_instant_wrapped():
    with pytest.raises(ComputationError):
        compute_ephemeris("2024-06-21T04:00", 0.0, 0.0)


def test_unknown_moon_model():
    with pytest.raises(ValueError):
        EphemerisFacade(moon_model="elp2000")


def test_provider_fallback_transparent():
    """A failing provider gives the analytic result plus a warning"""
    instant = datetime(2024, 6, 21, 4, 0, tzinfo=UTC)
    with pytest.warns(ProviderFallbackWarning):
        eph = EphemerisFacade(provider=_BrokenProvider()).compute(instant, 31.2, 121.5)
    assert eph == EphemerisFacade().compute(instant, 31.2, 121.5)


def test_provider_position_used():
    class _Overhead:
        def apparent_sun(self, instant, latitude_deg, longitude_deg):
            return ApparentPosition(0.0, latitude_deg, 0.0)

    eph = EphemerisFacade(provider=_Overhead()).compute(
        datetime(2024, 6, 21, tzinfo=UTC), 20.0, 45.0)
    assert np.isclose(eph.altitude_deg, 90.0)
    assert np.allclose(eph.sun_world.as_array(), eph.observer_world.as_array())


def test_injected_logger(caplog):
    logger = logging.getLogger("pySunMoon.test.facade")
    facade = EphemerisFacade(logger=logger)
    with caplog.at_level(logging.DEBUG, logger="pySunMoon.test.facade"):
        facade.compute(datetime(2024, 6, 21, tzinfo=UTC), 31.2, 121.5)
    messages = [r.getMessage() for r in caplog.records if r.name == "pySunMoon.test.facade"]
    assert any(m.startswith("analytic sun") for m in messages)
    assert any(m.startswith("ephemeris") for m in messages)


def test_from_environment_disabled(tmp_path):
    with patch.dict(os.environ, {"PYSUNMOON_DISABLE_PROVIDER": "1",
                                 "PYSUNMOON_DATA_DIR": str(tmp_path)}):
        facade = EphemerisFacade.from_environment(moon_model="analytic")
    assert facade.provider is None
    assert facade.moon_model == "analytic"


def test_earth_state():
    state = earth_state("2024-06-21T12:00", 31.2, 121.5)
    eph = compute_ephemeris(datetime(2024, 6, 21, 4, 0, tzinfo=UTC), 31.2, 121.5)
    assert state.sun_direction == eph.sun_world
    assert state.moon_direction == eph.moon_world
    assert state.illumination == eph.illumination


def test_earth_state_propagates_errors():
    with pytest.raises(FormatError):
        earth_state("2024-06-21 12:00", 31.2, 121.5)
    with pytest.raises(DomainError):
        earth_state("2024-06-21T12:00", 95.0, 121.5)


@pytest.mark.parametrize("moon_model", ["heuristic", "analytic"])
def test_moon_phase(moon_model):
    info = moon_phase("2024-06-21T12:00", 31.2, 121.5, moon_model=moon_model)
    assert 0.0 <= info.illumination <= 1.0
    assert 0.0 <= info.phase_angle_rad <= math.pi
    assert np.isclose((1.0 + math.cos(info.phase_angle_rad)) / 2.0, info.illumination)


def test_provider_fallback_under_error_filter(caplog):
    """Warnings escalated to errors never turn a fallback into a failure"""
    instant = datetime(2024, 6, 21, 4, 0, tzinfo=UTC)
    expected = EphemerisFacade().compute(instant, 31.2, 121.5)
    facade = EphemerisFacade(provider=_BrokenProvider())
    with caplog.at_level(logging.WARNING, logger="pySunMoon"):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            eph = facade.compute(instant, 31.2, 121.5)
            state = earth_state("2024-06-21T12:00", 31.2, 121.5,
                                provider=_BrokenProvider())
    assert eph == expected
    assert state.sun_direction == expected.sun_world
    assert any("provider offline" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("call", [
    lambda: EphemerisFacade(provider=_BrokenProvider()).compute(
        datetime(2024, 6, 21, tzinfo=UTC), 31.2, 121.5),
    lambda: EphemerisFacade(provider=_BrokenProvider()).compute_at(
        datetime(2024, 6, 21, tzinfo=UTC), GeoCoordinate(31.2, 121.5)),
    lambda: compute_ephemeris(datetime(2024, 6, 21, tzinfo=UTC), 31.2, 121.5,
                              provider=_BrokenProvider()),
    lambda: earth_state("2024-06-21T12:00", 31.2, 121.5, provider=_BrokenProvider()),
    lambda: moon_phase("2024-06-21T12:00", 31.2, 121.5, provider=_BrokenProvider()),
])
def test_fallback_warning_points_at_caller(call):
    """Fallback warnings are attributed to the calling code, not the package"""
    with pytest.warns(ProviderFallbackWarning) as record:
        call()
    assert record[0].filename == __file__
