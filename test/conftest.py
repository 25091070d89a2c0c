import pathlib

import pytest

from pySunMoon import config

# default JPL ephemeris location for the Skyfield provider tests
_default_ephemeris = config.get_data_dir() / config.get_ephemeris_name()


def pytest_addoption(parser):
    parser.addoption("--ephemeris", action="store", help="JPL ephemeris file for Skyfield tests", default=_default_ephemeris, type=pathlib.Path)


@pytest.fixture(scope="session")
def ephemeris_file(request):
    """ Returns the JPL ephemeris file, skipping if it is not present """
    path = pathlib.Path(request.config.getoption("--ephemeris"))
    if not path.exists():
        pytest.skip(f"Ephemeris file not found: {path}")
    return path
