"""Separable box-blur engine approximating a Gaussian blur in place."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from numpy.typing import NDArray

from .box_pass import Axis, box_blur_pass
from .image import Image
from .planner import DEFAULT_PASSES, BoxSpecSequence, plan_boxes
from .radius import Radius

logger = logging.getLogger(__name__)


class _PingPong:
    """The plane being read and the plane being written; swapped after every pass."""

    __slots__ = ("current", "scratch")

    def __init__(self, current: NDArray[np.uint8], scratch: NDArray[np.uint8]):
        self.current = current
        self.scratch = scratch

    def swap(self) -> None:
        self.current, self.scratch = self.scratch, self.current


class SeparableBlurEngine:
    """
    Blurs every channel of an image with three box filters per axis.

    Per channel, each planned box runs horizontally into a scratch plane and
    then vertically back, so the channel costs ``3 * 2`` linear passes no
    matter how large the radius is.

    Args:
        image (Image | NDArray[np.uint8]): Image to blur in place. Arrays are (H, W) or (H, W, C).
        threads (int): Worker threads for the channel loop. -1 for auto-detection.
        max_threads (int): Upper bound on worker threads. -1 for no bound.
        fast (bool): Use the vectorized box pass instead of the per-line reference loop.
    """

    passes = DEFAULT_PASSES

    def __init__(
        self,
        image: Image | NDArray[np.uint8],
        threads: int = -1,
        max_threads: int = -1,
        fast: bool = True,
    ):
        if threads == 0 or threads < -1:
            raise ValueError(f"threads must be -1 or a positive number, got {threads}")
        if max_threads == 0 or max_threads < -1:
            raise ValueError(f"max_threads must be -1 or a positive number, got {max_threads}")

        self.image = image if isinstance(image, Image) else Image(image)
        self.threads = threads
        self.max_threads = max_threads
        self.fast = fast

    def worker_count(self) -> int:
        workers = self.threads if self.threads > 0 else (os.cpu_count() or 1)
        if self.max_threads > 0:
            workers = min(workers, self.max_threads)
        return max(1, min(workers, self.image.channels))

    def run(self, radius: float | Radius) -> None:
        """Blur the image in place. Raises InvalidRadius before touching any pixel."""
        sigma = Radius.coerce(radius)
        boxes = plan_boxes(sigma, self.passes)
        workers = self.worker_count()
        image = self.image

        logger.debug(
            "Blurring %dx%dx%d image: sigma=%.3f radii=%s workers=%d",
            image.width,
            image.height,
            image.channels,
            sigma.sigma,
            boxes.radii,
            workers,
        )

        if all(spec.radius == 0 for spec in boxes):
            return

        channels = range(image.channels)
        if workers == 1:
            self._blur_channels(channels, boxes)
            return

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self._blur_channels, channels[k::workers], boxes)
                for k in range(workers)
            ]
            for future in futures:
                future.result()

    def _blur_channels(self, channels: range, boxes: BoxSpecSequence) -> None:
        # one plane and one scratch plane per worker, reused for all its channels
        plane = self.image.new_plane()
        scratch = self.image.new_plane()
        for channel in channels:
            self.image.read_plane(channel, out=plane)
            result = self._blur_plane(plane, scratch, boxes)
            self.image.write_plane(channel, result)

    def _blur_plane(
        self,
        plane: NDArray[np.uint8],
        scratch: NDArray[np.uint8],
        boxes: BoxSpecSequence,
    ) -> NDArray[np.uint8]:
        buffers = _PingPong(plane, scratch)
        for spec in boxes:
            box_blur_pass(buffers.current, buffers.scratch, spec.radius, Axis.HORIZONTAL, self.fast)
            buffers.swap()
            box_blur_pass(buffers.current, buffers.scratch, spec.radius, Axis.VERTICAL, self.fast)
            buffers.swap()
        return buffers.current


def blur(
    image: Image | NDArray[np.uint8],
    radius: float | Radius,
    *,
    threads: int = -1,
    max_threads: int = -1,
    fast: bool = True,
) -> Image | NDArray[np.uint8]:
    """
    Approximate a Gaussian blur of standard deviation ``radius``, in place.

    Args:
        image (Image | NDArray[np.uint8]): Image (H, W) or (H, W, C), any channel count.
        radius (float | Radius): Sigma of the Gaussian. Must be finite and non-negative.
        threads (int): -1 for auto. Channels are processed in parallel.
        max_threads (int): -1 for auto. Maximum number of threads to use.
        fast (bool): Use the vectorized box pass.

    Returns:
        Image | NDArray[np.uint8]: ``image`` itself, blurred.

    Raises:
        InvalidRadius: ``radius`` is negative, NaN or infinite. ``image`` is unchanged.
        ImageFormatError: ``image`` is not a writable, non-empty uint8 image.
    """
    sigma = Radius.coerce(radius)
    SeparableBlurEngine(image, threads=threads, max_threads=max_threads, fast=fast).run(sigma)
    return image


def blur_bytes(
    buffer: bytearray | memoryview,
    width: int,
    height: int,
    channels: int,
    radius: float | Radius,
    **kwargs,
) -> bytearray | memoryview:
    """
    Blur a raw row-major, channel-interleaved byte buffer in place.

    Args:
        buffer (bytearray | memoryview): ``width * height * channels`` writable bytes.
        width (int): Pixels per row.
        height (int): Number of rows.
        channels (int): Samples per pixel, e.g. 3 for RGB, 4 for RGBA, 1 for luminance.
        radius (float | Radius): Sigma of the Gaussian.
        **kwargs: ``threads``, ``max_threads`` and ``fast`` as for :func:`blur`.

    Returns:
        bytearray | memoryview: ``buffer`` itself, blurred.
    """
    if isinstance(buffer, bytes):
        raise TypeError("bytes objects are immutable; pass a bytearray instead")
    sigma = Radius.coerce(radius)
    blur(Image.from_buffer(buffer, width, height, channels), sigma, **kwargs)
    return buffer
