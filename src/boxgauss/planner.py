"""Turn a Gaussian sigma into a short sequence of box filters.

Successive box blurs converge towards a Gaussian. For ``n`` boxes whose
widths sum to a given variance, the best integer approximation uses two
neighbouring odd widths ``wl`` and ``wu = wl + 2``: ``m`` boxes of width
``wl`` followed by ``n - m`` boxes of width ``wu``.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from fractions import Fraction

from .radius import Radius

DEFAULT_PASSES = 3


@dataclass(frozen=True)
class BoxFilterSpec:
    """One box filter, described by its half-width."""

    radius: int

    def __post_init__(self):
        if isinstance(self.radius, bool) or not isinstance(self.radius, numbers.Integral):
            raise TypeError(f"radius must be an integer, got {self.radius!r}")
        if self.radius < 0:
            raise ValueError(f"radius must be non-negative, got {self.radius}")

    @property
    def width(self) -> int:
        return 2 * self.radius + 1


class BoxSpecSequence(tuple):
    """Immutable, ordered sequence of :class:`BoxFilterSpec`."""

    def __new__(cls, specs=()):
        return super().__new__(cls, specs)

    @property
    def radii(self) -> tuple[int, ...]:
        return tuple(spec.radius for spec in self)

    @property
    def widths(self) -> tuple[int, ...]:
        return tuple(spec.width for spec in self)

    @property
    def effective_sigma(self) -> float:
        """Standard deviation of the convolution of all boxes in the sequence."""
        # variance of a discrete box of width w is (w^2 - 1) / 12
        total = sum(int(w) * int(w) - 1 for w in self.widths)
        if total.bit_length() < 1000:
            return math.sqrt(total / 12)
        return float(math.isqrt(total // 12))

    def __repr__(self) -> str:
        return f"BoxSpecSequence(radii={self.radii!r})"


def plan_boxes(sigma: float | int | Radius, passes: int = DEFAULT_PASSES) -> BoxSpecSequence:
    """
    Compute the box filters whose successive application approximates a Gaussian.

    Args:
        sigma (float | Radius): Standard deviation of the target Gaussian.
        passes (int): Number of boxes. The blur engine always uses 3.

    Returns:
        BoxSpecSequence: ``passes`` specs, narrower boxes first.

    Raises:
        InvalidRadius: ``sigma`` is negative, NaN or infinite.
        ValueError: ``passes`` is smaller than 1.
    """
    s = Radius.coerce(sigma).sigma
    if passes < 1:
        raise ValueError(f"passes must be at least 1, got {passes}")
    n = passes

    if s == 0.0:
        return BoxSpecSequence(BoxFilterSpec(0) for _ in range(n))

    # exact rationals: 12 * sigma^2 overflows a float long before sigma does
    variance12 = 12 * Fraction(s) ** 2

    # floor(sqrt(x)) == isqrt(floor(x)) for x >= 0
    wl = math.isqrt(math.floor(variance12 / n + 1))
    if wl % 2 == 0:
        wl -= 1
    wu = wl + 2

    m_ideal = (variance12 - n * wl * wl - 4 * n * wl - 3 * n) / (-4 * wl - 4)
    # round half up; negative values end up clamped to 0 either way
    m = math.floor(m_ideal + Fraction(1, 2))
    m = min(max(m, 0), n)

    return BoxSpecSequence(
        BoxFilterSpec((wl - 1) // 2 if i < m else (wu - 1) // 2) for i in range(n)
    )
