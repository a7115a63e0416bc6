"""Pure resize target computation (fit / crop / zoom arithmetic)."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from ..common.schemas import (
    Box,
    ImageDimensions,
    Point,
    ResizeConfiguration,
    ResizeMode,
    round_pixels,
)


class ResizeCoordinates(BaseModel):
    """Scale the source to ``target_size``, then cut ``crop_size`` at ``crop_offset``."""

    target_size: Box
    crop_offset: Point
    crop_size: Box

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def is_cropped(self) -> bool:
        return self.crop_size != self.target_size

    @property
    def crop_box(self) -> tuple[int, int, int, int]:
        """Crop window as a (left, upper, right, lower) tuple."""
        return (
            self.crop_offset.x,
            self.crop_offset.y,
            self.crop_offset.x + self.crop_size.width,
            self.crop_offset.y + self.crop_size.height,
        )


class ResizeCalculator:
    """
    Stateless calculator mapping a resize configuration onto a source size.

    - One dimension set: the other follows the source aspect ratio
    - Both set: ``fit`` contains the image, ``crop`` interpolates the crop
      window between contain (zoom 0) and an exact center crop (zoom 100)
    - The source is never enlarged unless ``enlarge=True``
    """

    def compute(
        self,
        config: ResizeConfiguration,
        dimensions: ImageDimensions,
        *,
        enlarge: bool = False,
    ) -> ResizeCoordinates:
        size = dimensions.size
        source_width, source_height = size.width, size.height

        if config.is_empty:
            return ResizeCoordinates(target_size=size, crop_offset=Point(), crop_size=size)

        window_width, window_height = float(source_width), float(source_height)

        if config.height is None:
            scale = config.width / source_width
        elif config.width is None:
            scale = config.height / source_height
        else:
            window_width, window_height = self._crop_window(config, source_width, source_height)
            scale = min(config.width / window_width, config.height / window_height)

        if not enlarge and scale > 1:
            scale = 1.0

        return self._build(source_width, source_height, window_width, window_height, scale)

    def _crop_window(
        self,
        config: ResizeConfiguration,
        source_width: int,
        source_height: int,
    ) -> tuple[float, float]:
        """Visible part of the source, in source pixels."""
        assert config.width is not None and config.height is not None

        if config.mode == ResizeMode.FIT or config.zoom == 0:
            return float(source_width), float(source_height)

        # Largest window with the requested aspect ratio that fits the source
        cover = max(config.width / source_width, config.height / source_height)
        exact_width = config.width / cover
        exact_height = config.height / cover

        zoom = config.zoom / 100
        return (
            source_width + (exact_width - source_width) * zoom,
            source_height + (exact_height - source_height) * zoom,
        )

    def _build(
        self,
        source_width: int,
        source_height: int,
        window_width: float,
        window_height: float,
        scale: float,
    ) -> ResizeCoordinates:
        target = Box(
            width=round_pixels(source_width * scale),
            height=round_pixels(source_height * scale),
        )
        crop = Box(
            width=min(round_pixels(window_width * scale), target.width),
            height=min(round_pixels(window_height * scale), target.height),
        )

        # Centered window, kept inside the scaled image after rounding
        x = int((source_width - window_width) / 2 * scale + 0.5)
        y = int((source_height - window_height) / 2 * scale + 0.5)
        offset = Point(
            x=min(x, target.width - crop.width),
            y=min(y, target.height - crop.height),
        )

        return ResizeCoordinates(target_size=target, crop_offset=offset, crop_size=crop)
