# -*- coding: utf-8 -*-
"""
tapgen - Resampling kernel tap tables for 1-D axis resampling.

Computes, for each of ``out_size`` output samples, which of ``in_size``
source samples contribute and with what weights. Tables are normalized
to unit sum per output sample and boundary-safe: every read stays inside
the source.

Available methods: ``nearest``, ``linear``, ``cubic``, ``sinc`` and
``lanczos``.

Main entry points:

- ``ResamplerConfig`` / ``Resampler``: configuration record and the
  handle that builds and serves a ``TapTable``.
- ``create_resampler``: build a handle in one call.
- ``select_kernel`` / ``build_tap_table``: the two stages used by
  ``Resampler.build()``.

Dependencies
------------
numpy

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from tapgen.exceptions import (
    TapgenError,
    ConfigurationError,
    QueryMisuseError,
    TapgenWarning,
    DegenerateKernelWarning,
)
from tapgen.vocabulary import ResamplerMethod, ResamplerFlags
from tapgen.params import KernelOptions
from tapgen.kernels import (
    Kernel,
    NearestKernel,
    LinearKernel,
    CubicKernel,
    SincKernel,
    LanczosKernel,
)
from tapgen.selector import KernelSelection, select_kernel
from tapgen.builder import TapTable, build_tap_table
from tapgen.resampler import (
    HandleState,
    Resampler,
    ResamplerConfig,
    create_resampler,
)

__all__ = [
    'TapgenError',
    'ConfigurationError',
    'QueryMisuseError',
    'TapgenWarning',
    'DegenerateKernelWarning',
    'ResamplerMethod',
    'ResamplerFlags',
    'KernelOptions',
    'Kernel',
    'NearestKernel',
    'LinearKernel',
    'CubicKernel',
    'SincKernel',
    'LanczosKernel',
    'KernelSelection',
    'select_kernel',
    'TapTable',
    'build_tap_table',
    'HandleState',
    'Resampler',
    'ResamplerConfig',
    'create_resampler',
]
