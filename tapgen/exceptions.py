# -*- coding: utf-8 -*-
"""
tapgen Exception Hierarchy - Domain-specific exceptions for tap generation.

Provides a small exception hierarchy that lets callers catch tapgen
errors distinctly from Python built-in exceptions. All tapgen exceptions
subclass both ``TapgenError`` and the appropriate built-in exception so
that existing ``except ValueError`` handlers keep working.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""


class TapgenError(Exception):
    """Base exception for all tapgen errors."""


class ConfigurationError(TapgenError, ValueError):
    """Invalid resampler configuration.

    Raised for zero sizes, a phase count that does not match the output
    size, unknown method names, and option values of the wrong type or
    outside their allowed range. Always raised before any tap is
    computed.
    """


class QueryMisuseError(TapgenError, RuntimeError):
    """Resampler handle used in the wrong state.

    Raised when a handle is queried before ``build()`` or after
    ``release()``, or when ``build()`` is called a second time.
    """


class TapgenWarning(UserWarning):
    """Base warning for tapgen."""


class DegenerateKernelWarning(TapgenWarning, RuntimeWarning):
    """One or more tap rows summed to zero and were left un-normalized."""
