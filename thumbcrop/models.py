"""Value types passed to the thumbnail and crop operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from PIL import Image

from config import CONFIG


@dataclass(frozen=True)
class ImageSource:
    """An image on disk with its declared format and decoded size.

    Attributes
    ----------
    path
        Location of the image file.
    format
        Pillow format identifier derived from the filename extension.
    size
        Pixel dimensions (width, height) read from the image header.
    """

    path: Path
    format: str
    size: Tuple[int, int]

    @classmethod
    def probe(cls, path: Path, format: str) -> "ImageSource":
        """Read the header of ``path`` without decoding pixel data."""

        with Image.open(path) as img:
            size = img.size
        return cls(path=Path(path), format=format, size=size)

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]


@dataclass(frozen=True)
class Region:
    """Rectangle in source pixel coordinates.

    The rectangle is not checked against the source bounds; Pillow decides what
    happens to pixels outside the image.
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Pillow crop box (left, upper, right, lower)."""

        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class ThumbnailSpec:
    """Requested thumbnail geometry.

    Attributes
    ----------
    width, height
        Target dimensions.
    force
        Output exactly ``width`` x ``height`` even if that distorts the
        source. When False the size is fitted to the source aspect ratio.
    prefix
        Filename prefix, used only when the destination is derived from the
        source path.
    """

    width: int
    height: int
    force: bool = field(default_factory=lambda: CONFIG.thumbnail.force)
    prefix: str = field(default_factory=lambda: CONFIG.thumbnail.prefix)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Thumbnail size must be positive, got {self.width}x{self.height}"
            )

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)
