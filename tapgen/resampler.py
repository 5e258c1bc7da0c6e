# -*- coding: utf-8 -*-
"""
Resampler Handle - Configuration record and tap table lifecycle.

``ResamplerConfig`` is the immutable input record. ``Resampler`` owns one
config and, after ``build()``, the ``TapTable`` generated from it. A
handle moves through three states::

    UNBUILT --build()--> BUILT --release()--> RELEASED

Queries are only valid in ``BUILT``. A handle is built at most once; a
different configuration needs a new handle.

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
import numbers
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

# Third-party
import numpy as np

# tapgen internal
from tapgen.builder import TapTable, build_tap_table
from tapgen.exceptions import ConfigurationError, QueryMisuseError
from tapgen.params import KernelOptions
from tapgen.selector import KernelSelection, resolve_method, select_kernel
from tapgen.vocabulary import ResamplerFlags, ResamplerMethod

logger = logging.getLogger(__name__)


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class ResamplerConfig:
    """Immutable resampler configuration.

    Parameters
    ----------
    method : ResamplerMethod or str
        ``'nearest'``, ``'linear'``, ``'cubic'``, ``'sinc'`` or
        ``'lanczos'``.
    in_size : int
        Number of source samples. Must be >= 1.
    out_size : int
        Number of output samples. Must be >= 1.
    n_taps : int
        Requested taps per output sample, 0 to let the method choose.
    shift : float
        Sub-sample phase offset applied to every output position.
    flags : ResamplerFlags
        Reserved option bits.
    n_phases : int, optional
        Number of filter phases. There is one phase per output sample,
        so this must equal ``out_size`` when given.
    options : Mapping[str, float]
        Kernel options keyed by ``'cubic-b'``, ``'cubic-c'``,
        ``'envelope'``, ``'sharpness'``, ``'sharpen'`` and
        ``'max-taps'``. Other keys are ignored. A read-only copy is kept.

    Raises
    ------
    ConfigurationError
        If *options* is not a mapping.
    """

    method: Union[ResamplerMethod, str]
    in_size: int
    out_size: int
    n_taps: int = 0
    shift: float = 0.0
    flags: ResamplerFlags = ResamplerFlags.NONE
    n_phases: Optional[int] = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        options = self.options if self.options is not None else {}
        if not isinstance(options, Mapping):
            raise ConfigurationError(
                f"options must be a mapping, got {type(options).__name__}"
            )
        object.__setattr__(self, 'options', MappingProxyType(dict(options)))

    def validate(self) -> KernelOptions:
        """Check the configuration and parse its options.

        Returns
        -------
        KernelOptions
            Validated kernel options.

        Raises
        ------
        ConfigurationError
            On any invalid field or option.
        """
        if not _is_int(self.in_size) or self.in_size < 1:
            raise ConfigurationError(
                f"in_size must be a positive integer, got {self.in_size!r}"
            )
        if not _is_int(self.out_size) or self.out_size < 1:
            raise ConfigurationError(
                f"out_size must be a positive integer, got {self.out_size!r}"
            )
        if self.n_phases is not None and self.n_phases != self.out_size:
            raise ConfigurationError(
                f"n_phases ({self.n_phases!r}) must equal "
                f"out_size ({self.out_size})"
            )
        if not _is_int(self.n_taps) or self.n_taps < 0:
            raise ConfigurationError(
                f"n_taps must be a non-negative integer, got {self.n_taps!r}"
            )
        if isinstance(self.shift, bool) or not isinstance(
            self.shift, numbers.Real
        ) or not np.isfinite(self.shift):
            raise ConfigurationError(
                f"shift must be a finite real number, got {self.shift!r}"
            )
        resolve_method(self.method)
        return KernelOptions.from_mapping(self.options)


class HandleState(Enum):
    """Lifecycle state of a :class:`Resampler`."""

    UNBUILT = "unbuilt"
    BUILT = "built"
    RELEASED = "released"


class Resampler:
    """Owner of a resampler configuration and its tap table.

    Parameters
    ----------
    config : ResamplerConfig
        Configuration to build from.

    Examples
    --------
    >>> cfg = ResamplerConfig('lanczos', in_size=640, out_size=1920)
    >>> with Resampler(cfg) as rs:
    ...     rs.build()
    ...     first = rs.offset_at(0), rs.taps_at(0)
    """

    def __init__(self, config: ResamplerConfig) -> None:
        self._config = config
        self._state = HandleState.UNBUILT
        self._table: Optional[TapTable] = None
        self._selection: Optional[KernelSelection] = None

    @property
    def config(self) -> ResamplerConfig:
        """The configuration this handle was created with."""
        return self._config

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def is_built(self) -> bool:
        return self._state is HandleState.BUILT

    def build(self) -> TapTable:
        """Generate the tap table.

        Returns
        -------
        TapTable

        Raises
        ------
        ConfigurationError
            If the configuration is invalid. The handle stays
            ``UNBUILT``.
        QueryMisuseError
            If the handle has already been built or released.
        """
        return self._build(stacklevel=4)

    def _build(self, stacklevel: int) -> TapTable:
        if self._state is not HandleState.UNBUILT:
            raise QueryMisuseError(
                f"build() called on a {self._state.value} resampler; "
                f"create a new Resampler to rebuild"
            )
        cfg = self._config
        options = cfg.validate()
        selection = select_kernel(
            cfg.method, cfg.n_taps, cfg.in_size, cfg.out_size, options,
        )
        table = build_tap_table(
            selection.kernel,
            selection.max_taps,
            cfg.in_size,
            cfg.out_size,
            shift=float(cfg.shift),
            stacklevel=stacklevel,
        )
        self._selection = selection
        self._table = table
        self._state = HandleState.BUILT
        logger.debug(
            "Resampler built: %s %d->%d, %d taps, flags %r",
            selection.method.value, cfg.in_size, cfg.out_size,
            selection.max_taps, cfg.flags,
        )
        return table

    def release(self) -> None:
        """Drop the tap table. Further queries fail."""
        if self._state is HandleState.RELEASED:
            return
        self._table = None
        self._selection = None
        self._state = HandleState.RELEASED
        logger.debug("Resampler released")

    def _require_built(self) -> TapTable:
        if self._state is not HandleState.BUILT:
            raise QueryMisuseError(
                f"Resampler is {self._state.value}; call build() first"
            )
        return self._table

    def _require_index(self, j: int) -> TapTable:
        table = self._require_built()
        if not 0 <= j < table.out_size:
            raise IndexError(
                f"Output index {j} out of range for out_size {table.out_size}"
            )
        return table

    @property
    def table(self) -> TapTable:
        """The built tap table."""
        return self._require_built()

    @property
    def selection(self) -> KernelSelection:
        """Kernel and tap count chosen at build time."""
        self._require_built()
        return self._selection

    def tap_count(self) -> int:
        """Taps per output sample (``max_taps``)."""
        return self._require_built().max_taps

    def offset_at(self, j: int) -> int:
        """First source index read for output sample *j*."""
        table = self._require_index(j)
        return int(table.offset[j])

    def phase_at(self, j: int) -> int:
        """Phase index for output sample *j* (always *j*)."""
        table = self._require_index(j)
        return int(table.phase[j])

    def n_taps_at(self, j: int) -> int:
        """Number of taps for output sample *j*."""
        table = self._require_index(j)
        return int(table.n_taps[j])

    def taps_at(self, j: int) -> np.ndarray:
        """Weights for output sample *j* (read-only view)."""
        return self._require_built().row(j)

    def __enter__(self) -> 'Resampler':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return (
            f"Resampler(method={self._config.method!r}, "
            f"in_size={self._config.in_size}, "
            f"out_size={self._config.out_size}, "
            f"state={self._state.value})"
        )


def create_resampler(
    method: Union[ResamplerMethod, str],
    in_size: int,
    out_size: int,
    n_taps: int = 0,
    shift: float = 0.0,
    flags: ResamplerFlags = ResamplerFlags.NONE,
    options: Optional[Mapping[str, Any]] = None,
    n_phases: Optional[int] = None,
) -> Resampler:
    """Create and build a resampler.

    Convenience factory function. See :class:`ResamplerConfig` for the
    parameters.

    Returns
    -------
    Resampler
        A handle in the ``BUILT`` state.
    """
    resampler = Resampler(ResamplerConfig(
        method=method,
        in_size=in_size,
        out_size=out_size,
        n_taps=n_taps,
        shift=shift,
        flags=flags,
        n_phases=n_phases,
        options=options,
    ))
    resampler._build(stacklevel=4)
    return resampler
