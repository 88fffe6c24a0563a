"""Radius-independent approximate Gaussian blur for 8-bit images with any channel count."""

from .box_pass import Axis, box_blur_line, box_blur_pass
from .engine import SeparableBlurEngine, blur, blur_bytes
from .errors import BoxBlurError, ImageFormatError, InvalidRadius
from .image import Image
from .planner import BoxFilterSpec, BoxSpecSequence, plan_boxes
from .radius import Radius

__version__ = "0.1.0"

__all__ = [
    "Axis",
    "BoxBlurError",
    "BoxFilterSpec",
    "BoxSpecSequence",
    "Image",
    "ImageFormatError",
    "InvalidRadius",
    "Radius",
    "SeparableBlurEngine",
    "blur",
    "blur_bytes",
    "box_blur_line",
    "box_blur_pass",
    "plan_boxes",
]
