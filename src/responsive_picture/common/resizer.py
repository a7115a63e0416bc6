"""
Resizer Protocol - the single capability the picture generator depends on.

Implementations own:
- decoding, resizing and encoding pixels
- where resized files live and how they are cached
- their own failure modes (raised unchanged through the generator)
"""

from typing import Protocol, runtime_checkable

from .schemas import ImageLike, ResizeConfiguration, ResizeOptions


@runtime_checkable
class Resizer(Protocol):
    """Produces one resized image for one resize configuration."""

    def resize(
        self,
        image: ImageLike,
        config: ResizeConfiguration,
        options: ResizeOptions,
    ) -> ImageLike:
        """
        Resize ``image`` according to ``config``.

        Args:
            image: Source image
            config: Requested output box
            options: Resizer specific options, forwarded verbatim

        Returns:
            The resized image (final dimensions, URL and absolute path)
        """
        ...
