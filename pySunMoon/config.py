"""
pySunMoon.config - Environment configuration for the ephemeris provider

Environment variables (read at call time):
- PYSUNMOON_DATA_DIR: Directory holding Skyfield data files
  (default: ~/.skyfield_data)
- PYSUNMOON_EPHEMERIS: JPL ephemeris file name (default: de421.bsp)
- PYSUNMOON_DISABLE_PROVIDER: Use the analytic solar series only
  (1, true or yes)

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .astro.providers import SkyfieldProvider

__all__ = [
    'default_provider',
    'ephemeris_available',
    'get_data_dir',
    'get_ephemeris_name',
    'is_provider_enabled',
]

_DEFAULT_DATA_DIR = Path.home() / '.skyfield_data'
_DEFAULT_EPHEMERIS = 'de421.bsp'
_TRUTHY = ('1', 'true', 'yes')


def get_data_dir() -> Path:
    """Directory holding Skyfield data files"""
    data_dir = os.environ.get('PYSUNMOON_DATA_DIR')
    if data_dir:
        return Path(data_dir).expanduser()
    return _DEFAULT_DATA_DIR


def get_ephemeris_name() -> str:
    """JPL ephemeris file name"""
    return os.environ.get('PYSUNMOON_EPHEMERIS', '').strip() or _DEFAULT_EPHEMERIS


def is_provider_enabled() -> bool:
    """False when PYSUNMOON_DISABLE_PROVIDER is set to a true value"""
    disabled = os.environ.get('PYSUNMOON_DISABLE_PROVIDER', '').lower()
    return disabled not in _TRUTHY


def ephemeris_available() -> bool:
    """Return True if the configured ephemeris file exists locally

    Does NOT attempt to download the file.
    """
    return (get_data_dir() / get_ephemeris_name()).exists()


def default_provider() -> Optional[SkyfieldProvider]:
    """
    Build the configured Skyfield provider

    Returns
    -------
    SkyfieldProvider or None
        None if the provider is disabled or the ephemeris file is not
        present locally
    """
    if not is_provider_enabled() or not ephemeris_available():
        return None
    return SkyfieldProvider.load(get_data_dir(), get_ephemeris_name())
