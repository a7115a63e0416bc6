"""Picture configuration schemas: one default size plus ordered alternate sizes."""

from collections.abc import Sequence
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..common.schemas import ResizeConfiguration
from .descriptors import DEFAULT_DENSITY, DescriptorSpec, parse_densities


class SizeItem(BaseModel):
    """One size of a picture: a resize configuration plus its srcset/sizes/media settings.

    ``densities`` accepts the raw descriptor string (``"1x, 2x"``,
    ``"200w, 400w"``) and is parsed on construction, so malformed tokens fail
    before anything is resized.
    """

    resize_config: ResizeConfiguration = Field(
        default_factory=ResizeConfiguration,
        description="Resize configuration of the 1x image",
    )
    densities: tuple[DescriptorSpec, ...] = Field(
        default=(DEFAULT_DENSITY,),
        description="Pixel density / width descriptors to generate",
    )
    sizes: str | None = Field(default=None, description="Value of the sizes attribute")
    media: str | None = Field(default=None, description="Media query of the <source> element")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @field_validator("densities", mode="before")
    @classmethod
    def parse_density_string(
        cls, value: str | Sequence[DescriptorSpec] | None
    ) -> str | Sequence[DescriptorSpec]:
        if value is None or isinstance(value, str):
            return parse_densities(value)
        if not value:
            return (DEFAULT_DENSITY,)
        return value

    @field_validator("sizes", "media", mode="before")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class PictureConfiguration(BaseModel):
    """Default size (the <img>) and alternate sizes (the <source>s, in order)."""

    default_size: SizeItem = Field(default_factory=SizeItem)
    alternates: tuple[SizeItem, ...] = Field(
        default=(),
        description="Alternate sizes; order becomes the <source> order",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def size_items(self) -> tuple[SizeItem, ...]:
        """Default size first, then the alternates."""
        return (self.default_size, *self.alternates)
