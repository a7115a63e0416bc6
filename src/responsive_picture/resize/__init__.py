"""Resize target computation and the Pillow reference resizer."""

from .calculator import ResizeCalculator, ResizeCoordinates
from .pillow_resizer import PillowResizer

__all__ = ["PillowResizer", "ResizeCalculator", "ResizeCoordinates"]
