"""responsive_picture - srcset/sizes generation for adaptive <picture> elements."""

from .common.errors import InvalidConfiguration, PictureError, ResizeFailure
from .common.resizer import Resizer
from .common.schemas import (
    ImageAsset,
    ImageDimensions,
    ImageLike,
    ResizeConfiguration,
    ResizeMode,
    ResizeOptions,
)
from .picture import (
    DescriptorKind,
    DescriptorSpec,
    Picture,
    PictureConfiguration,
    PictureGenerator,
    SizeItem,
    parse_densities,
)
from .resize import PillowResizer, ResizeCalculator, ResizeCoordinates

__version__ = "0.1.0"

__all__ = [
    "DescriptorKind",
    "DescriptorSpec",
    "ImageAsset",
    "ImageDimensions",
    "ImageLike",
    "InvalidConfiguration",
    "Picture",
    "PictureConfiguration",
    "PictureError",
    "PictureGenerator",
    "PillowResizer",
    "ResizeCalculator",
    "ResizeConfiguration",
    "ResizeCoordinates",
    "ResizeFailure",
    "ResizeMode",
    "ResizeOptions",
    "Resizer",
    "SizeItem",
    "__version__",
    "parse_densities",
]
