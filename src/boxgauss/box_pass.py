"""One-dimensional box blur along rows or columns of a plane.

Samples outside a line are replaced by the nearest edge sample. Each output
sample is the rounded mean of the ``2r + 1`` samples centred on it, computed
from a running sum so the cost per line does not depend on ``r``.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

# widest window whose sum of 8-bit samples, plus rounding, fits in int64
_MAX_VECTORIZED_WIDTH = np.iinfo(np.int64).max // 256


class Axis(enum.Enum):
    """Direction of a pass. The value is the numpy axis the window slides along."""

    HORIZONTAL = 1
    VERTICAL = 0


def box_blur_line(line: Sequence[int], radius: int) -> list[int]:
    """
    Box blur a single line of samples with a sliding accumulator.

    Args:
        line (Sequence[int]): Samples of one row or column, at least one.
        radius (int): Half-width of the window. 0 returns a copy.

    Returns:
        list[int]: Blurred samples, same length as ``line``.
    """
    samples = [int(v) for v in line]
    if radius == 0:
        return samples

    last = len(samples) - 1
    width = 2 * radius + 1
    first_value = samples[0]
    last_value = samples[last]

    def at(i: int) -> int:
        if i < 0:
            return first_value
        if i > last:
            return last_value
        return samples[i]

    # window of sample 0 is [-r, r]: r copies of the first sample on the left
    acc = radius * first_value + sum(samples[: min(radius, last) + 1])
    if radius > last:
        acc += (radius - last) * last_value

    out = [0] * len(samples)
    for i in range(len(samples)):
        # (acc + r) // w == round(acc / w); w is odd so there are no ties
        out[i] = (acc + radius) // width
        acc += at(i + radius + 1) - at(i - radius)
    return out


def box_blur_pass(
    src: NDArray[np.uint8],
    dst: NDArray[np.uint8],
    radius: int,
    axis: Axis,
    fast: bool = True,
) -> NDArray[np.uint8]:
    """
    Apply a box blur of half-width ``radius`` to every line of ``src`` along ``axis``.

    Args:
        src (NDArray[np.uint8]): Source plane (H, W). Not modified.
        dst (NDArray[np.uint8]): Destination plane (H, W). Must not overlap ``src``.
        radius (int): Half-width of the window.
        axis (Axis): ``Axis.HORIZONTAL`` blurs rows, ``Axis.VERTICAL`` columns.
        fast (bool): Use the vectorized implementation. Both produce identical output;
            windows too wide for int64 sums always take the per-line loop.

    Returns:
        NDArray[np.uint8]: ``dst``.
    """
    if src.shape != dst.shape or src.ndim != 2:
        raise ValueError(
            f"src and dst must be planes of the same shape, got {src.shape} and {dst.shape}"
        )
    if radius < 0:
        raise ValueError(f"radius must be non-negative, got {radius}")
    if np.shares_memory(src, dst):
        raise ValueError("src and dst must not share memory")

    if radius == 0:
        np.copyto(dst, src)
        return dst

    # run along the last axis of a (lines, length) view
    if axis is Axis.VERTICAL:
        src_lines, dst_lines = src.T, dst.T
    else:
        src_lines, dst_lines = src, dst

    if fast and 2 * radius + 1 <= _MAX_VECTORIZED_WIDTH:
        _blur_lines_vectorized(src_lines, dst_lines, radius)
    else:
        for i in range(src_lines.shape[0]):
            dst_lines[i, :] = box_blur_line(src_lines[i, :].tolist(), radius)
    return dst


def _blur_lines_vectorized(src: NDArray[np.uint8], dst: NDArray[np.uint8], radius: int) -> None:
    n_lines, length = src.shape
    width = 2 * radius + 1

    prefix = np.zeros((n_lines, length + 1), dtype=np.int64)
    np.cumsum(src, axis=1, dtype=np.int64, out=prefix[:, 1:])

    idx = np.arange(length)
    lo = np.maximum(idx - radius, 0)
    hi = np.minimum(idx + radius, length - 1)
    # clamped reads past either end
    n_left = np.maximum(radius - idx, 0)
    n_right = np.maximum(idx + radius - (length - 1), 0)

    sums = prefix[:, hi + 1] - prefix[:, lo]
    sums += n_left * src[:, :1].astype(np.int64)
    sums += n_right * src[:, -1:].astype(np.int64)

    sums += radius
    sums //= width
    dst[...] = sums
