"""Global configuration for the thumbcrop image toolkit.

This module centralizes defaults and user-tunable settings for:
- the image formats the toolkit accepts
- thumbnail naming, canvas and resampling behavior
- crop output naming
- metadata handling and logging

All values can be overridden via CLI flags or by passing explicit arguments to
the operations in ``thumbcrop``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple


# Pillow format identifier -> filename extensions written for it. Entries the
# running Pillow build cannot both open and save are dropped at startup.
FORMAT_EXTENSIONS: Dict[str, Tuple[str, ...]] = {
    "BMP": ("bmp",),
    "GIF": ("gif",),
    "JPEG": ("jpg", "jpeg", "jpe"),
    "PNG": ("png",),
    "TIFF": ("tif", "tiff"),
    "WEBP": ("webp",),
}

# Formats whose Pillow encoder accepts an ``exif`` save parameter.
EXIF_FORMATS = frozenset({"JPEG", "PNG", "WEBP"})

LIGHT_GRAY: Tuple[int, int, int] = (192, 192, 192)

RESAMPLE_METHOD = "bicubic"  # one of {nearest, bilinear, bicubic, lanczos}


@dataclass
class ThumbnailDefaults:
    """Thumbnail behavior.

    Attributes
    ----------
    prefix
        Prepended to the source filename when the destination is derived from
        the source path.
    force
        If True, output exactly the requested size and ignore the source
        aspect ratio.
    background
        RGB fill for canvas areas the source does not cover.
    resample
        Resampling method used to scale the source onto the canvas. One of:
        'nearest', 'bilinear', 'bicubic', 'lanczos'.
    """

    prefix: str = "thumb_"
    force: bool = False
    background: Tuple[int, int, int] = LIGHT_GRAY
    resample: str = RESAMPLE_METHOD


@dataclass
class CropDefaults:
    """Crop behavior.

    Attributes
    ----------
    prefix
        Leading part of derived crop filenames,
        ``<prefix><timestamp-millis>_<original-filename>``.
    """

    prefix: str = "cut_"


@dataclass
class Behavior:
    """Processing behavior toggles.

    Attributes
    ----------
    keep_metadata
        If True, carry EXIF metadata over to the output where the format
        supports it.
    """

    keep_metadata: bool = True


@dataclass
class LoggingSettings:
    """Logging destinations.

    Attributes
    ----------
    level
        Root log level name.
    log_file
        Optional file receiving a copy of the log output.
    """

    level: str = "INFO"
    log_file: Optional[Path] = None


@dataclass
class ProjectConfig:
    """Top-level configuration container."""

    thumbnail: ThumbnailDefaults = field(default_factory=ThumbnailDefaults)
    crop: CropDefaults = field(default_factory=CropDefaults)
    behavior: Behavior = field(default_factory=Behavior)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    formats: Dict[str, Tuple[str, ...]] = field(
        default_factory=lambda: dict(FORMAT_EXTENSIONS)
    )


# Default singleton-style config instance used by CLI unless overridden
CONFIG = ProjectConfig()
