"""8-bit interleaved image container used by the blur engine."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .errors import ImageFormatError


class Image:
    """
    View over a row-major, channel-interleaved, one byte per sample pixel buffer.

    The image never owns a copy of the pixels: ``data`` is a (H, W, C) view of
    the caller's storage, so writes through :meth:`write_plane` land in the
    original array or byte buffer.

    Args:
        array (NDArray[np.uint8]): Pixels as (H, W) or (H, W, C). Must be writable.
    """

    def __init__(self, array: NDArray[np.uint8]):
        if not isinstance(array, np.ndarray):
            raise ImageFormatError(f"Expected a numpy array, got {type(array).__name__}")
        if array.dtype != np.uint8:
            raise ImageFormatError(f"Expected dtype uint8, got {array.dtype}")
        if array.ndim == 2:
            data = array[:, :, np.newaxis]
        elif array.ndim == 3:
            data = array
        else:
            raise ImageFormatError(f"Expected shape (H, W) or (H, W, C), got {array.shape}")
        if data.shape[0] < 1 or data.shape[1] < 1 or data.shape[2] < 1:
            raise ImageFormatError(f"Image must not be empty, got shape {array.shape}")
        if not array.flags.writeable:
            raise ImageFormatError("Image buffer is read-only")

        self._data = data

    @classmethod
    def from_buffer(cls, buffer, width: int, height: int, channels: int) -> Image:
        """
        Wrap a mutable byte buffer (bytearray, writable memoryview, ...).

        Args:
            buffer: Object exposing the buffer protocol, ``width * height * channels`` bytes long.
            width (int): Pixels per row.
            height (int): Number of rows.
            channels (int): Samples per pixel.
        """
        if width < 1 or height < 1 or channels < 1:
            raise ImageFormatError(
                f"Dimensions must be positive, got {width}x{height}x{channels}"
            )
        flat = np.frombuffer(buffer, dtype=np.uint8)
        expected = width * height * channels
        if flat.size != expected:
            raise ImageFormatError(
                f"Buffer holds {flat.size} bytes, expected {width}x{height}x{channels} = {expected}"
            )
        return cls(flat.reshape(height, width, channels))

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def channels(self) -> int:
        return self._data.shape[2]

    @property
    def data(self) -> NDArray[np.uint8]:
        """Pixels as an (H, W, C) view of the wrapped storage."""
        return self._data

    def new_plane(self) -> NDArray[np.uint8]:
        return np.empty((self.height, self.width), dtype=np.uint8)

    def read_plane(self, channel: int, out: NDArray[np.uint8] | None = None) -> NDArray[np.uint8]:
        """Copy one channel into a contiguous (H, W) plane."""
        if out is None:
            out = self.new_plane()
        np.copyto(out, self._data[:, :, channel])
        return out

    def write_plane(self, channel: int, plane: NDArray[np.uint8]) -> None:
        """Interleave a (H, W) plane back into ``channel``."""
        self._data[:, :, channel] = plane

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height}, channels={self.channels})"
