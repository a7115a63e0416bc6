"""Test suite for descriptor parsing and formatting."""

import pytest

from responsive_picture import DescriptorKind, DescriptorSpec, InvalidConfiguration, parse_densities
from responsive_picture.picture.descriptors import format_descriptor, format_descriptor_value


def density(value: float) -> DescriptorSpec:
    return DescriptorSpec(kind=DescriptorKind.DENSITY, value=value)


def width(value: int) -> DescriptorSpec:
    return DescriptorSpec(kind=DescriptorKind.WIDTH, value=value)


# ============================================================================
# Test Class 1: Parsing
# ============================================================================


class TestParseDensities:
    """Test parse_densities grammar."""

    def test_empty_string_is_1x(self) -> None:
        assert parse_densities("") == (density(1),)
        assert parse_densities(None) == (density(1),)
        assert parse_densities(" , ") == (density(1),)

    def test_comma_separated(self) -> None:
        assert parse_densities("1x, 1.35354x, 2x") == (density(1), density(1.35354), density(2))

    def test_space_separated_and_mixed(self) -> None:
        assert parse_densities("200w 400w,0.5x") == (width(200), width(400), density(0.5))

    def test_leading_dot_density(self) -> None:
        assert parse_densities(".5x") == (density(0.5),)

    def test_keeps_order_and_repeats(self) -> None:
        assert parse_densities("2x, 1x, 2x") == (density(2), density(1), density(2))

    @pytest.mark.parametrize(
        "densities",
        ["abc", "1.5w", "2", "x", "-1x", "2xx", "1,5x", "100px", "2X"],
    )
    def test_malformed_tokens(self, densities: str) -> None:
        with pytest.raises(InvalidConfiguration):
            _ = parse_densities(densities)

    @pytest.mark.parametrize("densities", ["0x", "0.0x", "0w", "0.0004x", ".0001x"])
    def test_zero_values(self, densities: str) -> None:
        with pytest.raises(InvalidConfiguration):
            _ = parse_densities(densities)

    def test_density_printing_as_zero(self) -> None:
        with pytest.raises(InvalidConfiguration) as exc_info:
            _ = parse_densities("1x, 0.0004x")

        assert exc_info.value.value == 0.0004
        assert [str(descriptor) for descriptor in parse_densities("0.0005x")] == ["0.001x"]

    def test_error_carries_token(self) -> None:
        with pytest.raises(InvalidConfiguration) as exc_info:
            _ = parse_densities("1x, huge")

        assert exc_info.value.value == "huge"

    def test_width_must_be_integral(self) -> None:
        with pytest.raises(InvalidConfiguration):
            _ = DescriptorSpec(kind=DescriptorKind.WIDTH, value=10.5)


# ============================================================================
# Test Class 2: Formatting
# ============================================================================


class TestFormatting:
    """Locale independent number formatting."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1, "1"),
            (1.35354, "1.354"),
            (1.9999, "2"),
            (0.5, "0.5"),
            (0.615, "0.615"),
            (6.25, "6.25"),
            (0.0005, "0.001"),
            (1234567.0, "1234567"),
            (10, "10"),
        ],
    )
    def test_format_value(self, value: float, expected: str) -> None:
        assert format_descriptor_value(value) == expected

    def test_format_descriptor_units(self) -> None:
        assert format_descriptor(1.35354, DescriptorKind.DENSITY) == "1.354x"
        assert format_descriptor(400, DescriptorKind.WIDTH) == "400w"

    def test_descriptor_str(self) -> None:
        assert str(density(2)) == "2x"
        assert str(width(640)) == "640w"
