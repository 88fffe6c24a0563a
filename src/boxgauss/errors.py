"""Custom exceptions for boxgauss."""

from __future__ import annotations


class BoxBlurError(Exception):
    """Base class for boxgauss exceptions."""


class InvalidRadius(ValueError, BoxBlurError):
    """Raised when a blur radius is negative, NaN, infinite or not a number."""

    def __init__(self, value: object, reason: str = "must be a finite, non-negative number"):
        self.value = value
        super().__init__(f"Invalid blur radius {value!r}: {reason}")


class ImageFormatError(ValueError, BoxBlurError):
    """Raised when a pixel container is not a writable 8-bit image."""


__all__ = [
    "BoxBlurError",
    "ImageFormatError",
    "InvalidRadius",
]
