"""Test configuration and fixtures for responsive_picture.

This module provides:
- Fake resizers that name every rendered file ``image-<width>.jpg``
- Source image factories (in-memory assets and real files in ``tmp_path``)
"""

from collections.abc import Callable
from pathlib import Path
from typing_extensions import override

import pytest
from PIL import ExifTags, Image

from responsive_picture import (
    ImageAsset,
    ImageDimensions,
    ImageLike,
    ResizeCalculator,
    ResizeConfiguration,
    ResizeOptions,
    Resizer,
)

RenderFn = Callable[[ResizeConfiguration], tuple[int, int]]


# ============================================================================
# Fake resizers
# ============================================================================


class FakeResizer(Resizer):
    """Resizer computing rendered dimensions with a callback instead of pixels."""

    def __init__(self, render: RenderFn) -> None:
        self.render: RenderFn = render
        self.calls: list[ResizeConfiguration] = []

    @override
    def resize(
        self,
        image: ImageLike,
        config: ResizeConfiguration,
        options: ResizeOptions,
    ) -> ImageLike:
        self.calls.append(config)
        width, height = self.render(config)
        return ImageAsset(
            path=f"/dir/image-{width}.jpg",
            url=f"image-{width}.jpg",
            dimensions=ImageDimensions(width=width, height=height),
        )


@pytest.fixture
def make_resizer() -> Callable[[RenderFn], FakeResizer]:
    """Factory for fake resizers; each records the configurations it received in ``calls``."""
    return FakeResizer


@pytest.fixture
def capped_render() -> Callable[[int], RenderFn]:
    """Render the requested box, clamped to ``limit`` on both axes."""

    def make(limit: int) -> RenderFn:
        def render(config: ResizeConfiguration) -> tuple[int, int]:
            assert config.width is not None and config.height is not None
            return min(limit, config.width), min(limit, config.height)

        return render

    return make


@pytest.fixture
def calculated_render() -> Callable[[ImageDimensions], RenderFn]:
    """Render exactly what the calculator computes for ``source``."""
    calculator = ResizeCalculator()

    def make(source: ImageDimensions) -> RenderFn:
        def render(config: ResizeConfiguration) -> tuple[int, int]:
            size = calculator.compute(config, source).crop_size
            return size.width, size.height

        return render

    return make


@pytest.fixture
def source_image() -> Callable[[int, int], ImageAsset]:
    """In-memory source asset of the given size."""

    def make(width: int, height: int) -> ImageAsset:
        return ImageAsset(
            path="/dir/source.jpg",
            url="source.jpg",
            dimensions=ImageDimensions(width=width, height=height),
        )

    return make


# ============================================================================
# Image files
# ============================================================================


@pytest.fixture
def make_image_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a solid test image and return its path."""

    def make(
        name: str = "source.png",
        size: tuple[int, int] = (400, 200),
        orientation: int | None = None,
    ) -> Path:
        path = tmp_path / name
        img = Image.new("RGB", size, color=(200, 120, 40))
        if orientation is None:
            img.save(path)
        else:
            exif = Image.Exif()
            exif[ExifTags.Base.Orientation] = orientation
            img.save(path, exif=exif)
        return path

    return make
