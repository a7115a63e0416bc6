"""Picture generation: configuration, descriptors, generator and output."""

from .descriptors import (
    DescriptorKind,
    DescriptorSpec,
    format_descriptor,
    format_descriptor_value,
    parse_densities,
)
from .generator import PictureGenerator, ResizedCandidate
from .picture import Picture, PictureSource, SrcsetEntry, relative_url
from .schema import PictureConfiguration, SizeItem

__all__ = [
    "DescriptorKind",
    "DescriptorSpec",
    "Picture",
    "PictureConfiguration",
    "PictureGenerator",
    "PictureSource",
    "ResizedCandidate",
    "SizeItem",
    "SrcsetEntry",
    "format_descriptor",
    "format_descriptor_value",
    "parse_densities",
    "relative_url",
]
