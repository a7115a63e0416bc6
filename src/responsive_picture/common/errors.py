"""Error taxonomy for picture generation."""

from pathlib import Path


class PictureError(Exception):
    """Base class for picture generation errors."""


class InvalidConfiguration(PictureError):
    """Raised for malformed descriptors, non-positive dimensions or bad zoom values.

    Not a ``ValueError``: it leaves pydantic validators unwrapped.
    """

    def __init__(self, message: str, value: object = None):
        self.value: object = value
        super().__init__(message)


class ResizeFailure(PictureError):
    """Raised by a resizer when an image cannot be read, resized or written."""

    def __init__(self, path: str | Path, reason: str):
        self.path: str = str(path)
        self.reason: str = reason
        super().__init__(f"Failed to resize '{self.path}': {reason}")
