# -*- coding: utf-8 -*-
"""
Kernel Selector - Resolve a method and options to a kernel and tap count.

Maps a ``ResamplerMethod`` plus ``KernelOptions`` to the kernel object,
the default tap count for the method, and the final ``max_taps`` after
the option cap and the source-size cap.

Default tap counts when none are requested:

- nearest: 1
- linear: 2
- cubic: always 4, the requested count is ignored
- sinc: 4
- lanczos: ``2 * ceil(envelope / fx)``, grows when downsampling

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

# Standard library
import logging
import math
from dataclasses import dataclass
from typing import Tuple, Union

# tapgen internal
from tapgen.exceptions import ConfigurationError
from tapgen.kernels import (
    CubicKernel,
    Kernel,
    LanczosKernel,
    LinearKernel,
    NearestKernel,
    SincKernel,
)
from tapgen.params import KernelOptions
from tapgen.vocabulary import ResamplerMethod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KernelSelection:
    """Outcome of kernel selection.

    Parameters
    ----------
    method : ResamplerMethod
        Resolved method.
    kernel : Kernel
        Tap weight function configured for this build.
    requested_taps : int
        Tap count asked for by the caller (0 = auto).
    resolved_taps : int
        Tap count chosen for the method before capping.
    max_taps : int
        Final tap count, ``min(resolved_taps, max-taps, in_size)``.
    """

    method: ResamplerMethod
    kernel: Kernel
    requested_taps: int
    resolved_taps: int
    max_taps: int


def resolve_method(method: Union[ResamplerMethod, str]) -> ResamplerMethod:
    """Resolve a method enum or case-insensitive name.

    Raises
    ------
    ConfigurationError
        If *method* is not a known resampling method.
    """
    if isinstance(method, ResamplerMethod):
        return method
    if isinstance(method, str):
        try:
            return ResamplerMethod(method.strip().lower())
        except ValueError:
            pass
    valid = ', '.join(m.value for m in ResamplerMethod)
    raise ConfigurationError(
        f"Unknown resampling method {method!r}; expected one of: {valid}"
    )


def lanczos_factors(
    in_size: int,
    out_size: int,
    envelope: float,
    sharpness: float,
) -> Tuple[float, float, int]:
    """Derive the Lanczos scale factors from the resample ratio.

    Parameters
    ----------
    in_size, out_size : int
        Source and destination lengths.
    envelope : float
        Window extent in lobes.
    sharpness : float
        Sinc frequency multiplier.

    Returns
    -------
    fx : float
        Sinc frequency scale, ``sharpness / (in/out)`` when downsampling
        and ``sharpness`` otherwise.
    ex : float
        Envelope scale, ``fx / envelope``.
    dx : int
        Kernel half-width in source samples, ``ceil(envelope / fx)``.
    """
    resample_inc = in_size / out_size
    if resample_inc > 1.0:
        fx = sharpness / resample_inc
    else:
        fx = sharpness
    ex = fx / envelope
    dx = int(math.ceil(envelope / fx))
    return fx, ex, dx


def select_kernel(
    method: Union[ResamplerMethod, str],
    n_taps: int,
    in_size: int,
    out_size: int,
    options: KernelOptions,
) -> KernelSelection:
    """Choose the kernel and tap count for a build.

    Parameters
    ----------
    method : ResamplerMethod or str
        Resampling method.
    n_taps : int
        Requested tap count, 0 for the method default. Ignored by cubic.
    in_size, out_size : int
        Source and destination lengths.
    options : KernelOptions
        Validated kernel options.

    Returns
    -------
    KernelSelection

    Raises
    ------
    ConfigurationError
        If *method* is unknown or *n_taps* is negative.
    """
    method = resolve_method(method)
    if n_taps < 0:
        raise ConfigurationError(f"n_taps must be >= 0, got {n_taps}")

    logger.debug("%s %d  %d->%d", method.value, n_taps, in_size, out_size)

    if method is ResamplerMethod.NEAREST:
        kernel = NearestKernel()
        resolved = n_taps or 1
    elif method is ResamplerMethod.LINEAR:
        kernel = None  # needs the final tap count
        resolved = n_taps or 2
    elif method is ResamplerMethod.CUBIC:
        kernel = CubicKernel(options.cubic_b, options.cubic_c)
        resolved = 4
    elif method is ResamplerMethod.SINC:
        kernel = SincKernel()
        resolved = n_taps or 4
    else:
        fx, ex, dx = lanczos_factors(
            in_size, out_size, options.envelope, options.sharpness,
        )
        kernel = LanczosKernel(fx, ex, options.sharpen)
        resolved = n_taps or 2 * dx

    max_taps = min(max(resolved, 0), options.max_taps)
    max_taps = min(max_taps, in_size)

    # The tent width follows the final tap count
    if method is ResamplerMethod.LINEAR:
        kernel = LinearKernel(max_taps)

    logger.debug(
        "Selected %r: resolved %d taps, using %d", kernel, resolved, max_taps,
    )
    return KernelSelection(
        method=method,
        kernel=kernel,
        requested_taps=n_taps,
        resolved_taps=resolved,
        max_taps=max_taps,
    )
