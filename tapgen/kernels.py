# -*- coding: utf-8 -*-
"""
Kernel Functions - Tap weight evaluation for each resampling method.

Every kernel implements ``tap(l, xi, x)``: the weight of tap ``l`` in the
window anchored at integer source index ``xi`` for the fractional source
coordinate ``x``. Arguments broadcast, so a full table is evaluated in a
single call by passing ``l`` with shape ``(1, T)`` and ``xi``/``x`` with
shape ``(M, 1)``. Weights are not normalized here; the tap table builder
divides each row by its sum.

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
from abc import ABC, abstractmethod

# Third-party
import numpy as np

# tapgen internal
from tapgen.vocabulary import ResamplerMethod


# ── Shared window functions ──────────────────────────────────────────────


def sinc(t):
    """Normalized sinc: ``sin(pi*t) / (pi*t)``, exactly 1.0 at ``t == 0``."""
    return np.sinc(t)


def envelope(t):
    """Sinc window of unit half-width; zero for ``|t| >= 1``."""
    t = np.asarray(t, dtype=np.float64)
    return np.where(np.abs(t) < 1.0, np.sinc(t), 0.0)


def bicubic(s, b: float, c: float):
    """Mitchell-Netravali piecewise cubic.

    Parameters
    ----------
    s : float or np.ndarray
        Distance in samples. Only ``|s|`` is used.
    b, c : float
        Shape parameters. ``b=0, c=0.5`` is Catmull-Rom, ``b=c=1/3`` is
        the Mitchell filter.

    Returns
    -------
    np.ndarray
        Kernel value, zero for ``|s| > 2``.
    """
    s = np.abs(np.asarray(s, dtype=np.float64))
    s2 = s * s
    s3 = s2 * s

    inner = ((12.0 - 9.0 * b - 6.0 * c) * s3
             + (-18.0 + 12.0 * b + 6.0 * c) * s2
             + (6.0 - 2.0 * b)) / 6.0
    outer = ((-b - 6.0 * c) * s3
             + (6.0 * b + 30.0 * c) * s2
             + (-12.0 * b - 48.0 * c) * s
             + (8.0 * b + 24.0 * c)) / 6.0

    return np.where(s <= 1.0, inner, np.where(s <= 2.0, outer, 0.0))


# ── Kernels ──────────────────────────────────────────────────────────────


class Kernel(ABC):
    """Abstract tap weight function.

    Subclasses hold their per-build constants as attributes and
    implement :meth:`tap`. Instances are not mutated after construction.
    """

    method: ResamplerMethod

    @abstractmethod
    def tap(self, l, xi, x) -> np.ndarray:
        """Evaluate tap weights.

        Parameters
        ----------
        l : int or np.ndarray
            Tap index within the window, ``0 <= l < max_taps``.
        xi : int or np.ndarray
            Integer anchor (first source index before boundary
            correction).
        x : float or np.ndarray
            Fractional source coordinate of the output sample.

        Returns
        -------
        np.ndarray
            Raw (un-normalized) weights, broadcast shape of the inputs.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NearestKernel(Kernel):
    """Constant kernel; normally used with a single tap."""

    method = ResamplerMethod.NEAREST

    def tap(self, l, xi, x) -> np.ndarray:
        return np.ones(np.broadcast(l, xi, x).shape)


class LinearKernel(Kernel):
    """Triangular (tent) kernel whose width follows the tap count.

    Parameters
    ----------
    max_taps : int
        Final tap count of the table. The tent half-width is
        ``(max_taps + 1) // 2`` samples.
    """

    method = ResamplerMethod.LINEAR

    def __init__(self, max_taps: int) -> None:
        self.max_taps = max_taps
        self.half_width = (max_taps + 1) // 2

    def tap(self, l, xi, x) -> np.ndarray:
        h = float(self.half_width)
        a = np.abs(np.asarray(x, dtype=np.float64) - (xi + l))
        return np.where(a < h, (h - a) / h, 0.0)

    def __repr__(self) -> str:
        return f"LinearKernel(max_taps={self.max_taps})"


class CubicKernel(Kernel):
    """Four-tap bicubic kernel.

    Tap ``l`` evaluates :func:`bicubic` at ``1+a``, ``a``, ``1-a`` and
    ``2-a`` for ``l = 0, 1, 2, 3`` where ``a = x - (xi + 1)``. Indices
    past 3 reuse the last distance.

    Parameters
    ----------
    b, c : float
        Bicubic shape parameters.
    """

    method = ResamplerMethod.CUBIC

    _BASE = np.array([1.0, 0.0, 1.0, 2.0])
    _SIGN = np.array([1.0, 1.0, -1.0, -1.0])

    def __init__(self, b: float = 1.0 / 3.0, c: float = 1.0 / 3.0) -> None:
        self.b = b
        self.c = c

    def tap(self, l, xi, x) -> np.ndarray:
        a = np.asarray(x, dtype=np.float64) - (xi + 1)
        idx = np.minimum(np.asarray(l), 3)
        s = self._BASE[idx] + self._SIGN[idx] * a
        return bicubic(s, self.b, self.c)

    def __repr__(self) -> str:
        return f"CubicKernel(b={self.b!r}, c={self.c!r})"


class SincKernel(Kernel):
    """Unwindowed sinc; only sensible for small tap counts."""

    method = ResamplerMethod.SINC

    def tap(self, l, xi, x) -> np.ndarray:
        return sinc(np.asarray(x, dtype=np.float64) - (xi + l))


class LanczosKernel(Kernel):
    """Sinc-windowed sinc with ratio-dependent width.

    Weight: ``(sinc(d * fx) - sharpen) * envelope(d * ex)`` with
    ``d = x - (xi + l)``.

    Parameters
    ----------
    fx : float
        Sinc frequency scale. Below 1 when downsampling, which widens
        the kernel to suppress aliasing.
    ex : float
        Envelope scale, ``fx / envelope``.
    sharpen : float
        Constant subtracted from the sinc before windowing.
    """

    method = ResamplerMethod.LANCZOS

    def __init__(self, fx: float, ex: float, sharpen: float = 0.0) -> None:
        self.fx = fx
        self.ex = ex
        self.sharpen = sharpen

    def tap(self, l, xi, x) -> np.ndarray:
        d = np.asarray(x, dtype=np.float64) - (xi + l)
        return (sinc(d * self.fx) - self.sharpen) * envelope(d * self.ex)

    def __repr__(self) -> str:
        return (
            f"LanczosKernel(fx={self.fx!r}, ex={self.ex!r}, "
            f"sharpen={self.sharpen!r})"
        )
