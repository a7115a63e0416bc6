"""Picture output aggregate with root-relative URL projection."""

import os
from pathlib import PurePath
from typing import ClassVar
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

AttributeMap = dict[str, str | int]


def relative_url(url: str, path: str, root_dir: str | os.PathLike[str] | None, prefix: str = "") -> str:
    """
    Rewrite ``url`` relative to ``root_dir`` when ``path`` lies under it.

    Args:
        url: Public URL of the file
        path: Absolute file path
        root_dir: Web root; ``None`` keeps every URL unchanged
        prefix: Prepended to rewritten URLs (e.g. a CDN origin)

    Returns:
        ``prefix`` + the percent-encoded posix path below ``root_dir``, or
        ``url`` unchanged for files outside of it
    """
    if root_dir is None:
        return url

    try:
        relative = PurePath(os.path.normpath(path)).relative_to(os.path.normpath(root_dir))
    except ValueError:
        return url

    if not relative.parts:
        return url

    return prefix + "/".join(quote(part) for part in relative.parts)


class SrcsetEntry(BaseModel):
    """One srcset candidate: a resized file and its descriptor (``None`` for a bare URL)."""

    url: str
    path: str
    descriptor: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    def render(self, root_dir: str | os.PathLike[str] | None = None, prefix: str = "") -> str:
        url = relative_url(self.url, self.path, root_dir, prefix)
        if self.descriptor is None:
            return url
        return f"{url} {self.descriptor}"


class PictureSource(BaseModel):
    """Attributes of the <img> or of one <source> element."""

    srcset: tuple[SrcsetEntry, ...] = Field(..., min_length=1)
    src: SrcsetEntry
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    sizes: str | None = None
    media: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    def to_attributes(
        self,
        root_dir: str | os.PathLike[str] | None = None,
        prefix: str = "",
    ) -> AttributeMap:
        attributes: AttributeMap = {
            "srcset": ", ".join(entry.render(root_dir, prefix) for entry in self.srcset),
            "src": relative_url(self.src.url, self.src.path, root_dir, prefix),
            "width": self.width,
            "height": self.height,
        }
        if self.sizes is not None:
            attributes["sizes"] = self.sizes
        if self.media is not None:
            attributes["media"] = self.media
        return attributes


class Picture(BaseModel):
    """Generated picture: the <img> attributes and the ordered <source> attributes."""

    img: PictureSource
    sources: tuple[PictureSource, ...] = ()

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    def get_img(
        self,
        root_dir: str | os.PathLike[str] | None = None,
        prefix: str = "",
    ) -> AttributeMap:
        return self.img.to_attributes(root_dir, prefix)

    def get_sources(
        self,
        root_dir: str | os.PathLike[str] | None = None,
        prefix: str = "",
    ) -> list[AttributeMap]:
        return [source.to_attributes(root_dir, prefix) for source in self.sources]
