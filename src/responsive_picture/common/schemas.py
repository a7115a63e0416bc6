"""Immutable value types shared by the calculator, the resizers and the generator."""

from enum import StrEnum
from pathlib import Path
from typing import ClassVar, Protocol, runtime_checkable

from PIL import ExifTags, Image
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import InvalidConfiguration

# EXIF orientations that rotate the image by 90 or 270 degrees
TRANSPOSED_ORIENTATIONS = frozenset({5, 6, 7, 8})


def round_pixels(value: float) -> int:
    """Round half-up to a whole pixel, never below 1px."""
    return max(1, int(value + 0.5))


# ─────────────────────────────────────────────────────────────
# Geometry
# ─────────────────────────────────────────────────────────────


class Box(BaseModel):
    """Width/height pair in pixels."""

    width: int = Field(..., gt=0, description="Width in pixels")
    height: int = Field(..., gt=0, description="Height in pixels")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class Point(BaseModel):
    """Top-left corner of a crop window."""

    x: int = Field(default=0, ge=0)
    y: int = Field(default=0, ge=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class ImageDimensions(BaseModel):
    """Stored pixel size of an image plus its EXIF orientation."""

    width: int = Field(..., gt=0, description="Stored width in pixels")
    height: int = Field(..., gt=0, description="Stored height in pixels")
    orientation: int = Field(default=1, ge=1, le=8, description="EXIF orientation (1-8)")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def size(self) -> Box:
        """Visible size, with width and height swapped for rotated orientations."""
        if self.orientation in TRANSPOSED_ORIENTATIONS:
            return Box(width=self.height, height=self.width)
        return Box(width=self.width, height=self.height)


# ─────────────────────────────────────────────────────────────
# Resize configuration
# ─────────────────────────────────────────────────────────────


class ResizeMode(StrEnum):
    FIT = "fit"
    CROP = "crop"


class ResizeConfiguration(BaseModel):
    """Requested output box.

    Leaving both ``width`` and ``height`` unset means no resize is requested.
    With both set, ``mode`` and ``zoom`` decide how the source fills the box:
    ``fit`` keeps the whole image visible, ``crop`` interpolates between that
    (zoom 0) and an exact center crop to the box (zoom 100).
    """

    width: int | None = Field(default=None, description="Target width in pixels")
    height: int | None = Field(default=None, description="Target height in pixels")
    mode: ResizeMode = Field(default=ResizeMode.CROP, description="fit or crop")
    zoom: int = Field(default=100, description="Crop intensity (0-100)")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_dimensions(self) -> "ResizeConfiguration":
        for name, value in (("width", self.width), ("height", self.height)):
            if value is not None and value <= 0:
                raise InvalidConfiguration(f"Resize {name} must be positive, got {value}", value)
        if not 0 <= self.zoom <= 100:
            raise InvalidConfiguration(f"Zoom must be between 0 and 100, got {self.zoom}", self.zoom)
        return self

    @property
    def is_empty(self) -> bool:
        return self.width is None and self.height is None

    def scaled(self, factor: float, fallback_width: int) -> "ResizeConfiguration":
        """Return a new configuration with every set dimension multiplied by ``factor``.

        An empty configuration is given an explicit width of
        ``fallback_width * factor`` so the request still scales.
        """
        if factor == 1:
            return self

        width = round_pixels(self.width * factor) if self.width is not None else None
        height = round_pixels(self.height * factor) if self.height is not None else None
        if width is None and height is None:
            width = round_pixels(fallback_width * factor)

        return ResizeConfiguration(width=width, height=height, mode=self.mode, zoom=self.zoom)


class ResizeOptions(BaseModel):
    """Options passed through to the resizer untouched by the generator."""

    target_dir: str | None = Field(
        default=None,
        description="Directory for resized files (resizer default if None)",
    )
    bypass_cache: bool = Field(default=False, description="Always re-render existing files")
    skip_if_dimensions_match: bool = Field(
        default=False,
        description="Return the source itself when no pixels would change",
    )
    save_options: dict[str, object] = Field(
        default_factory=dict,
        description="Extra keyword arguments for the encoder",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


# ─────────────────────────────────────────────────────────────
# Images
# ─────────────────────────────────────────────────────────────


@runtime_checkable
class ImageLike(Protocol):
    """Anything with dimensions, a public URL and an absolute file path."""

    @property
    def dimensions(self) -> ImageDimensions: ...

    @property
    def url(self) -> str: ...

    @property
    def path(self) -> str: ...


class ImageAsset(BaseModel):
    """Concrete image reference used for sources and resize results."""

    path: str = Field(..., description="Absolute file path")
    url: str = Field(..., description="Public URL of the file")
    dimensions: ImageDimensions

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @classmethod
    def from_file(cls, path: str | Path, url: str | None = None) -> "ImageAsset":
        """Read dimensions and EXIF orientation of an image file."""
        path = Path(path).resolve()
        if not path.exists():
            raise FileNotFoundError(f"Image not found: {path}")

        with Image.open(path) as img:
            width, height = img.size
            orientation = img.getexif().get(ExifTags.Base.Orientation, 1)

        if orientation not in range(1, 9):
            orientation = 1

        return cls(
            path=str(path),
            url=url if url is not None else path.as_posix(),
            dimensions=ImageDimensions(width=width, height=height, orientation=orientation),
        )
