"""Common module - value types, errors and the resizer protocol."""

from .errors import InvalidConfiguration, PictureError, ResizeFailure
from .resizer import Resizer
from .schemas import (
    Box,
    ImageAsset,
    ImageDimensions,
    ImageLike,
    Point,
    ResizeConfiguration,
    ResizeMode,
    ResizeOptions,
    round_pixels,
)

__all__ = [
    "Box",
    "ImageAsset",
    "ImageDimensions",
    "ImageLike",
    "InvalidConfiguration",
    "PictureError",
    "Point",
    "ResizeConfiguration",
    "ResizeFailure",
    "ResizeMode",
    "ResizeOptions",
    "Resizer",
    "round_pixels",
]
