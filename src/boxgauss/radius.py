"""Validated blur radius."""

from __future__ import annotations

import math
import numbers

from .errors import InvalidRadius


class Radius:
    """Standard deviation (sigma) of the Gaussian to approximate.

    ``Radius(value)`` checks that ``value`` is a real, finite, non-negative
    number and raises :class:`InvalidRadius` otherwise.

    ``Radius.unchecked(value)`` builds a radius without any checks. It exists
    for callers that have already validated the number themselves; passing a
    negative, NaN or infinite value through it is a caller bug and the blur
    result is undefined.
    """

    __slots__ = ("_sigma",)

    def __init__(self, value: float | int | Radius):
        if isinstance(value, Radius):
            self._sigma = value._sigma
            return
        self._sigma = _validate(value)

    @classmethod
    def unchecked(cls, value: float) -> Radius:
        radius = cls.__new__(cls)
        radius._sigma = float(value)
        return radius

    @classmethod
    def coerce(cls, value: float | int | Radius) -> Radius:
        """Return ``value`` unchanged if it is a Radius, else validate it."""
        if isinstance(value, Radius):
            return value
        return cls(value)

    @property
    def sigma(self) -> float:
        return self._sigma

    def __float__(self) -> float:
        return self._sigma

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Radius):
            return self._sigma == other._sigma
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._sigma)

    def __repr__(self) -> str:
        return f"Radius({self._sigma!r})"


def _validate(value: object) -> float:
    # bool is an Integral, but True/False as a radius is always a mistake
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidRadius(value, "must be a real number")
    sigma = float(value)
    if math.isnan(sigma):
        raise InvalidRadius(value, "must not be NaN")
    if math.isinf(sigma):
        raise InvalidRadius(value, "must be finite")
    if sigma < 0.0:
        raise InvalidRadius(value, "must not be negative")
    return sigma
