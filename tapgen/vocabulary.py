# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for tapgen.

Defines the resampling methods and the resampler flag bits. Method values
are the lowercase names accepted in configuration (``'nearest'``,
``'linear'``, ``'cubic'``, ``'sinc'``, ``'lanczos'``).

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

from enum import Enum, IntFlag


class ResamplerMethod(Enum):
    """Interpolation kernel used to generate taps."""

    NEAREST = "nearest"
    LINEAR = "linear"
    CUBIC = "cubic"
    SINC = "sinc"
    LANCZOS = "lanczos"


class ResamplerFlags(IntFlag):
    """Resampler option bits.

    Reserved for orientation and half-pixel-center options. Flags are
    carried through the configuration and reported by the handle but do
    not change the generated table.
    """

    NONE = 0
    HALF_TAPS = 1
