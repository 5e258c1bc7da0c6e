# -*- coding: utf-8 -*-
"""
Tap Table Builder - Per-output-sample offsets and normalized weights.

For every output index ``j`` the builder maps the output sample center
into source coordinates, anchors a window of ``max_taps`` source samples
around it, evaluates the kernel over the window, normalizes the row to
unit sum, and folds any part of the window that falls outside
``[0, in_size)`` back onto the nearest valid tap. The folding keeps the
row sum unchanged, so every row still has unit DC gain.

The result is a ``TapTable``: a consumer computes output sample ``j`` as
``sum(taps[j, k] * src[offset[j] + k] for k in range(n_taps[j]))``.

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
import warnings
from dataclasses import dataclass

# Third-party
import numpy as np

# tapgen internal
from tapgen.exceptions import ConfigurationError, DegenerateKernelWarning
from tapgen.kernels import Kernel

logger = logging.getLogger(__name__)

#: Row sums with magnitude below this are treated as zero.
_ZERO_SUM = 1e-15


@dataclass(frozen=True, eq=False)
class TapTable:
    """Immutable tap table for a 1-D resample.

    All arrays are read-only.

    Parameters
    ----------
    in_size : int
        Source length.
    out_size : int
        Destination length (also the number of phases).
    max_taps : int
        Taps per output sample.
    offset : np.ndarray
        ``int64``, shape ``(out_size,)``. First source index read for
        each output sample. ``0 <= offset[j] <= in_size - max_taps``.
    phase : np.ndarray
        ``int64``, shape ``(out_size,)``. ``phase[j] == j``.
    n_taps : np.ndarray
        ``int64``, shape ``(out_size,)``. Every entry is ``max_taps``.
    taps : np.ndarray
        ``float64``, flat, shape ``(out_size * max_taps,)``. Row ``j``
        holds the weights for output sample ``j``.
    """

    in_size: int
    out_size: int
    max_taps: int
    offset: np.ndarray
    phase: np.ndarray
    n_taps: np.ndarray
    taps: np.ndarray

    def __len__(self) -> int:
        return self.out_size

    @property
    def taps_2d(self) -> np.ndarray:
        """Read-only ``(out_size, max_taps)`` view of :attr:`taps`."""
        return self.taps.reshape(self.out_size, self.max_taps)

    def row(self, j: int) -> np.ndarray:
        """Return the weights for output sample *j* (read-only view)."""
        if not 0 <= j < self.out_size:
            raise IndexError(
                f"Output index {j} out of range for out_size {self.out_size}"
            )
        start = j * self.max_taps
        return self.taps[start:start + self.max_taps]

    def dump(self) -> str:
        """Render the table as text, one line per output sample.

        Each line shows the output index, the offset, every tap weight
        and the row sum. The text is also logged at debug level.
        """
        lines = []
        for j in range(self.out_size):
            row = self.row(j)
            weights = ' '.join(f"{w: f}" for w in row)
            lines.append(
                f"{j}: {self.offset[j]}  {weights}  : sum {row.sum():f}"
            )
        text = '\n'.join(lines)
        logger.debug("Tap table %d->%d:\n%s", self.in_size, self.out_size, text)
        return text


def _fold_left(row: np.ndarray, sh: int) -> None:
    """Fold the first *sh* taps into tap *sh* and shift the row left."""
    n = row.shape[0]
    for l in range(sh):
        row[sh] += row[l]
    row[:n - sh] = row[sh:].copy()
    row[n - sh:] = 0.0


def _fold_right(row: np.ndarray, sh: int) -> None:
    """Fold the last *sh* taps into tap ``n - sh - 1`` and shift right."""
    n = row.shape[0]
    for l in range(sh):
        row[n - sh - 1] += row[n - sh + l]
    row[sh:] = row[:n - sh].copy()
    row[:sh] = 0.0


def build_tap_table(
    kernel: Kernel,
    max_taps: int,
    in_size: int,
    out_size: int,
    shift: float = 0.0,
    stacklevel: int = 2,
) -> TapTable:
    """Compute offsets and normalized weights for every output sample.

    Parameters
    ----------
    kernel : Kernel
        Tap weight function.
    max_taps : int
        Taps per output sample. Must satisfy ``1 <= max_taps <= in_size``.
    in_size : int
        Source length.
    out_size : int
        Destination length.
    shift : float
        Sub-sample phase offset, in output samples, subtracted from every
        output position before mapping into the source.
    stacklevel : int
        Passed to ``warnings.warn`` so a degeneracy warning points at the
        code that asked for the table.

    Returns
    -------
    TapTable

    Raises
    ------
    ConfigurationError
        If a size is below 1 or *max_taps* exceeds *in_size*.

    Warns
    -----
    DegenerateKernelWarning
        If any row sums to zero. Those rows keep their raw kernel
        weights instead of being divided by zero.
    """
    if in_size < 1 or out_size < 1:
        raise ConfigurationError(
            f"in_size and out_size must be >= 1, got {in_size}, {out_size}"
        )
    if not 1 <= max_taps <= in_size:
        raise ConfigurationError(
            f"max_taps must be in [1, {in_size}], got {max_taps}"
        )

    tap_offs = (max_taps - 1) // 2
    corr = 0.0 if max_taps == 1 else 0.5

    # Output sample centers mapped into source coordinates
    j = np.arange(out_size, dtype=np.float64)
    ox = (0.5 + j - shift) / out_size
    x = np.clip(ox * in_size - corr, 0.0, in_size - 1)
    xi = np.floor(x - tap_offs).astype(np.int64)

    l = np.arange(max_taps)
    taps = np.array(
        np.broadcast_to(
            kernel.tap(l[np.newaxis, :], xi[:, np.newaxis], x[:, np.newaxis]),
            (out_size, max_taps),
        ),
        dtype=np.float64,
    )

    # Normalize rows to unit DC gain
    weight = taps.sum(axis=1)
    degenerate = np.abs(weight) < _ZERO_SUM
    np.divide(
        taps, weight[:, np.newaxis],
        out=taps, where=~degenerate[:, np.newaxis],
    )
    if degenerate.any():
        n_bad = int(degenerate.sum())
        logger.debug("%d zero-sum tap rows left un-normalized", n_bad)
        warnings.warn(
            f"{n_bad} of {out_size} tap rows sum to zero and were left "
            f"un-normalized ({kernel!r})",
            DegenerateKernelWarning,
            stacklevel=stacklevel,
        )

    # Fold taps that fall outside [0, in_size)
    offset = xi.copy()
    for jj in np.flatnonzero(xi < 0):
        sh = int(-xi[jj])
        _fold_left(taps[jj], sh)
        offset[jj] += sh

    limit = in_size - max_taps
    for jj in np.flatnonzero(xi > limit):
        sh = int(xi[jj] - limit)
        _fold_right(taps[jj], sh)
        offset[jj] -= sh

    phase = np.arange(out_size, dtype=np.int64)
    n_taps = np.full(out_size, max_taps, dtype=np.int64)
    flat = taps.reshape(-1)
    for arr in (offset, phase, n_taps, flat):
        arr.setflags(write=False)

    logger.debug(
        "Built %d->%d tap table, %d taps, shift %g",
        in_size, out_size, max_taps, shift,
    )
    return TapTable(
        in_size=in_size,
        out_size=out_size,
        max_taps=max_taps,
        offset=offset,
        phase=phase,
        n_taps=n_taps,
        taps=flat,
    )
