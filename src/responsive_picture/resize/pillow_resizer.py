"""Pillow-backed resizer writing cached variants next to the source (or into a target dir)."""

import hashlib
import json
from pathlib import Path
from typing_extensions import override

from loguru import logger
from PIL import Image, ImageOps, UnidentifiedImageError

from ..common.errors import ResizeFailure
from ..common.resizer import Resizer
from ..common.schemas import (
    ImageAsset,
    ImageDimensions,
    ImageLike,
    ResizeConfiguration,
    ResizeOptions,
)
from .calculator import ResizeCalculator, ResizeCoordinates

HASH_LENGTH = 10


class PillowResizer(Resizer):
    """Resizer using Pillow with an on-disk cache keyed by source identity and configuration.

    Output files are named ``<stem>-<hash><suffix>``; an existing file with
    the same name is reused unless ``options.bypass_cache`` is set.
    """

    def __init__(
        self,
        calculator: ResizeCalculator | None = None,
        url_prefix: str | None = None,
    ) -> None:
        """
        Args:
            calculator: Calculator used for the resize coordinates
            url_prefix: Public URL of the output directory. Without it the
                URL of a resized image is its absolute posix path.
        """
        self._calculator: ResizeCalculator = calculator or ResizeCalculator()
        self._url_prefix: str | None = url_prefix

    @override
    def resize(
        self,
        image: ImageLike,
        config: ResizeConfiguration,
        options: ResizeOptions,
    ) -> ImageLike:
        coordinates = self._calculator.compute(config, image.dimensions)

        if (
            options.skip_if_dimensions_match
            and not coordinates.is_cropped
            and coordinates.target_size == image.dimensions.size
        ):
            return image

        source_path = Path(image.path)
        target_dir = Path(options.target_dir) if options.target_dir else source_path.parent
        output_path = target_dir / self._output_name(source_path, config, options)

        if output_path.exists() and not options.bypass_cache:
            logger.debug(f"Reusing resized image: {output_path}")
        else:
            self._render(source_path, output_path, coordinates, options)

        return ImageAsset(
            path=str(output_path),
            url=self._url_for(output_path),
            dimensions=ImageDimensions(
                width=coordinates.crop_size.width,
                height=coordinates.crop_size.height,
            ),
        )

    def _output_name(
        self,
        source_path: Path,
        config: ResizeConfiguration,
        options: ResizeOptions,
    ) -> str:
        try:
            stat = source_path.stat()
        except FileNotFoundError as exc:
            raise ResizeFailure(source_path, "source file not found") from exc

        key = json.dumps(
            {
                "path": str(source_path),
                "mtime": stat.st_mtime_ns,
                "size": stat.st_size,
                "config": config.model_dump(mode="json"),
                "save_options": options.save_options,
            },
            sort_keys=True,
            default=str,
        )
        digest = hashlib.md5(key.encode("utf-8")).hexdigest()[:HASH_LENGTH]
        return f"{source_path.stem}-{digest}{source_path.suffix}"

    def _render(
        self,
        source_path: Path,
        output_path: Path,
        coordinates: ResizeCoordinates,
        options: ResizeOptions,
    ) -> None:
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)

            with Image.open(source_path) as img:
                # Calculator sizes refer to the visible (EXIF-rotated) image
                oriented = ImageOps.exif_transpose(img)
                resized = oriented.resize(
                    (coordinates.target_size.width, coordinates.target_size.height),
                    Image.Resampling.LANCZOS,
                )
                if coordinates.is_cropped:
                    resized = resized.crop(coordinates.crop_box)

                resized.save(output_path, **options.save_options)

        except FileNotFoundError as exc:
            raise ResizeFailure(source_path, "source file not found") from exc
        except UnidentifiedImageError as exc:
            raise ResizeFailure(source_path, "unsupported image format") from exc
        except OSError as exc:
            raise ResizeFailure(source_path, str(exc)) from exc

        logger.info(
            f"Resized {source_path.name} to "
            f"{coordinates.crop_size.width}x{coordinates.crop_size.height}: {output_path}"
        )

    def _url_for(self, output_path: Path) -> str:
        if self._url_prefix is None:
            return output_path.as_posix()
        return f"{self._url_prefix.rstrip('/')}/{output_path.name}"
