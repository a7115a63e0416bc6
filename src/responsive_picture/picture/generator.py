"""Picture generator - builds srcset/sizes/src attributes for every configured size."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from loguru import logger

from ..common.resizer import Resizer
from ..common.schemas import ImageLike, ResizeConfiguration, ResizeOptions
from ..resize.calculator import ResizeCalculator
from .descriptors import DEFAULT_DENSITY, DescriptorKind, DescriptorSpec, format_descriptor
from .picture import Picture, PictureSource, SrcsetEntry
from .schema import PictureConfiguration, SizeItem

# sizes attribute used for width descriptors without an explicit one
DEFAULT_SIZES = "100vw"


@dataclass(frozen=True)
class ResizedCandidate:
    """One resized variant of a size item, before dedup and formatting."""

    descriptor: DescriptorSpec
    factor: float
    requested_width: int
    image: ImageLike

    @property
    def rendered_width(self) -> int:
        return self.image.dimensions.size.width

    @property
    def is_capped(self) -> bool:
        """Source was too small to render the requested width."""
        return self.rendered_width < self.requested_width


class PictureGenerator:
    """
    Generates a Picture for one source image and a PictureConfiguration.

    - The 1x candidate of every size is always rendered first and becomes src
    - Width descriptors are turned into scale factors relative to the 1x width
    - A size switches to width descriptors when a width token or an explicit
      sizes attribute is configured, or when any candidate was capped by the
      source size
    - Resizer failures abort the whole call
    """

    def __init__(
        self,
        resizer: Resizer,
        calculator: ResizeCalculator | None = None,
        max_workers: int = 1,
    ) -> None:
        """
        Args:
            resizer: Resizer invoked once per candidate
            calculator: Calculator for the 1x and requested widths
            max_workers: Parallel resize calls per size item (1 = sequential)
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")

        self._resizer: Resizer = resizer
        self._calculator: ResizeCalculator = calculator or ResizeCalculator()
        self._max_workers: int = max_workers

    def generate(
        self,
        image: ImageLike,
        config: PictureConfiguration,
        options: ResizeOptions | None = None,
    ) -> Picture:
        """
        Resize ``image`` for every size of ``config`` and build the picture attributes.

        Args:
            image: Source image
            config: Default size and ordered alternate sizes
            options: Passed to the resizer untouched

        Returns:
            Picture with the <img> attributes and one <source> per alternate

        Raises:
            Any exception raised by the resizer, unchanged
        """
        options = options or ResizeOptions()

        img, *sources = (self._generate_source(image, item, options) for item in config.size_items)

        return Picture(img=img, sources=tuple(sources))

    def _generate_source(
        self,
        image: ImageLike,
        item: SizeItem,
        options: ResizeOptions,
    ) -> PictureSource:
        width1x = self._calculator.compute(
            item.resize_config, image.dimensions, enlarge=True
        ).crop_size.width

        planned = self._plan(item, width1x)
        configs = [resize_config for _, _, resize_config in planned]
        resized = self._resize_all(image, configs, options)

        candidates = [
            ResizedCandidate(
                descriptor=descriptor,
                factor=factor,
                requested_width=self._calculator.compute(
                    resize_config, image.dimensions, enlarge=True
                ).crop_size.width,
                image=resized_image,
            )
            for (descriptor, factor, resize_config), resized_image in zip(planned, resized)
        ]

        if (
            item.sizes is not None
            or any(descriptor.kind is DescriptorKind.WIDTH for descriptor in item.densities)
            or any(candidate.is_capped for candidate in candidates)
        ):
            kind = DescriptorKind.WIDTH
        else:
            kind = DescriptorKind.DENSITY

        srcset = self._build_srcset(candidates, kind)
        base = candidates[0].image
        sizes = item.sizes if item.sizes is not None else (DEFAULT_SIZES if kind is DescriptorKind.WIDTH else None)

        logger.debug(
            f"Generated {len(srcset)} srcset entries ({kind.unit}) "
            f"for {item.media or 'default size'} of {image.path}"
        )

        return PictureSource(
            srcset=srcset,
            src=SrcsetEntry(url=base.url, path=base.path),
            width=base.dimensions.size.width,
            height=base.dimensions.size.height,
            sizes=sizes,
            media=item.media,
        )

    def _plan(
        self, item: SizeItem, width1x: int
    ) -> list[tuple[DescriptorSpec, float, ResizeConfiguration]]:
        """Scale factor and resize request per descriptor, 1x first.

        Descriptors whose scaled request equals an already planned one are
        folded into it, keeping the smaller factor, so every request reaches
        the resizer once.
        """
        planned: dict[ResizeConfiguration, tuple[DescriptorSpec, float]] = {
            item.resize_config: (DEFAULT_DENSITY, 1.0)
        }

        for descriptor in item.densities:
            if descriptor.kind is DescriptorKind.DENSITY:
                factor = descriptor.value
            else:
                factor = descriptor.value / width1x

            resize_config = item.resize_config.scaled(factor, width1x)
            if resize_config in planned:
                first, planned_factor = planned[resize_config]
                planned[resize_config] = (first, min(planned_factor, factor))
                continue
            planned[resize_config] = (descriptor, factor)

        return [(descriptor, factor, resize_config) for resize_config, (descriptor, factor) in planned.items()]

    def _resize_all(
        self,
        image: ImageLike,
        configs: list[ResizeConfiguration],
        options: ResizeOptions,
    ) -> list[ImageLike]:
        if self._max_workers == 1 or len(configs) == 1:
            return [self._resize_one(image, config, options) for config in configs]

        # map() keeps the input order and re-raises the first failure
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            return list(executor.map(lambda config: self._resize_one(image, config, options), configs))

    def _resize_one(
        self,
        image: ImageLike,
        config: ResizeConfiguration,
        options: ResizeOptions,
    ) -> ImageLike:
        resized = self._resizer.resize(image, config, options)
        size = resized.dimensions.size
        logger.debug(
            f"Candidate {size.width}x{size.height} for request "
            f"{config.model_dump(exclude_none=True)}: {resized.url}"
        )
        return resized

    def _build_srcset(
        self,
        candidates: list[ResizedCandidate],
        kind: DescriptorKind,
    ) -> tuple[SrcsetEntry, ...]:
        # url -> (smallest value, image), in order of first occurrence
        slots: dict[str, tuple[float, ImageLike]] = {}
        for candidate in candidates:
            if kind is DescriptorKind.DENSITY:
                value = candidate.factor
            else:
                value = float(candidate.rendered_width)

            url = candidate.image.url
            if url in slots:
                slots[url] = (min(slots[url][0], value), slots[url][1])
            else:
                slots[url] = (value, candidate.image)

        if len(slots) == 1 and kind is DescriptorKind.DENSITY:
            ((url, (value, resized_image)),) = slots.items()
            if value == 1:
                return (SrcsetEntry(url=url, path=resized_image.path),)

        entries: list[SrcsetEntry] = []
        used_descriptors: set[str] = set()
        for url, (value, resized_image) in slots.items():
            descriptor = format_descriptor(value, kind)
            if descriptor in used_descriptors:
                continue
            used_descriptors.add(descriptor)
            entries.append(SrcsetEntry(url=url, path=resized_image.path, descriptor=descriptor))

        return tuple(entries)
