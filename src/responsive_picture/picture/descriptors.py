"""Density/width descriptor parsing and locale independent formatting."""

import re
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator

from ..common.errors import InvalidConfiguration

TOKEN_SEPARATOR = re.compile(r"[\s,]+")
DENSITY_TOKEN = re.compile(r"^(\d+(?:\.\d+)?|\.\d+)x$")
WIDTH_TOKEN = re.compile(r"^(\d+)w$")

# Fraction digits kept in density descriptors (1.35354 -> "1.354")
DESCRIPTOR_PRECISION = 3


def format_descriptor_value(value: float, precision: int = DESCRIPTOR_PRECISION) -> str:
    """Format a descriptor number with a period separator regardless of the process locale.

    Rounds half-up to ``precision`` fraction digits and strips trailing zeros.
    """
    quantum = Decimal(1).scaleb(-precision)
    number = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class DescriptorKind(StrEnum):
    DENSITY = "density"
    WIDTH = "width"

    @property
    def unit(self) -> str:
        return "x" if self is DescriptorKind.DENSITY else "w"


class DescriptorSpec(BaseModel):
    """One parsed token of a densities string, e.g. ``1.5x`` or ``400w``."""

    kind: DescriptorKind
    value: float

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_value(self) -> "DescriptorSpec":
        if self.value <= 0:
            raise InvalidConfiguration(f"Descriptor value must be positive, got {self.value}", self.value)
        if self.kind is DescriptorKind.DENSITY and format_descriptor_value(self.value) == "0":
            raise InvalidConfiguration(
                f"Density descriptor {self.value} rounds to 0 at {DESCRIPTOR_PRECISION} fraction digits",
                self.value,
            )
        if self.kind is DescriptorKind.WIDTH and not self.value.is_integer():
            raise InvalidConfiguration(f"Width descriptor must be an integer, got {self.value}", self.value)
        return self

    def __str__(self) -> str:
        return format_descriptor(self.value, self.kind)


DEFAULT_DENSITY = DescriptorSpec(kind=DescriptorKind.DENSITY, value=1)


def parse_densities(densities: str | None) -> tuple[DescriptorSpec, ...]:
    """
    Parse a densities string such as ``"1x, 1.5x 2x"`` or ``"200w, 400w, 0.5x"``.

    Tokens are separated by commas and/or whitespace. An empty string yields a
    single ``1x`` descriptor.

    Raises:
        InvalidConfiguration: If a token is neither ``<number>x`` nor ``<integer>w``
            or its value is zero (densities below 0.0005 print as zero)
    """
    tokens = [token for token in TOKEN_SEPARATOR.split(densities or "") if token]
    if not tokens:
        return (DEFAULT_DENSITY,)

    parsed: list[DescriptorSpec] = []
    for token in tokens:
        if match := DENSITY_TOKEN.match(token):
            parsed.append(DescriptorSpec(kind=DescriptorKind.DENSITY, value=float(match.group(1))))
        elif match := WIDTH_TOKEN.match(token):
            parsed.append(DescriptorSpec(kind=DescriptorKind.WIDTH, value=int(match.group(1))))
        else:
            raise InvalidConfiguration(
                f"Malformed descriptor token {token!r} in {densities!r}",
                token,
            )

    return tuple(parsed)


def format_descriptor(value: float, kind: DescriptorKind) -> str:
    return f"{format_descriptor_value(value)}{kind.unit}"
