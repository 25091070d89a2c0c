"""
pySunMoon.errors - Exception and warning types

Copyright (c) 2024-2026 tkykszk

This software is licensed under the MIT License.
See LICENSE file for details.
"""

__all__ = [
    'ComputationError',
    'DomainError',
    'FormatError',
    'ProviderFailure',
    'ProviderFallbackWarning',
]


class FormatError(ValueError):
    """Local date-time string does not match ``YYYY-MM-DDTHH:mm``."""


class DomainError(ValueError):
    """Observer coordinates outside their valid range."""


class ComputationError(RuntimeError):
    """Unexpected failure while assembling an ephemeris."""


class ProviderFailure(RuntimeError):
    """External ephemeris provider raised or returned an invalid result.

    Never escapes the solar calculator: it is converted into a
    :class:`ProviderFallbackWarning` and the analytic path is used.
    """


class ProviderFallbackWarning(RuntimeWarning):
    """Emitted when the solar calculator falls back to the analytic path."""
