"""I/O utilities and helpers for image processing.

This module provides helpers to check sources, carry EXIF metadata over to
transformed images, encode images in their source format, and map resampling
method names to Pillow constants.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import piexif
from PIL import Image

from config import EXIF_FORMATS

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Failures Pillow raises while opening, decoding or encoding. Some plugins
# report corrupt data as SyntaxError.
CODEC_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


def source_exists(path: PathLike) -> bool:
    """Return True if ``path`` exists, logging a warning otherwise."""

    if Path(path).exists():
        return True
    logger.warning("The source image '%s' does not exist.", path)
    return False


def read_exif(image: Image.Image) -> Optional[bytes]:
    """Return the raw EXIF block of an opened image, if any.

    Parameters
    ----------
    image
        Image opened with Pillow.

    Returns
    -------
    bytes or None
        EXIF bytes as stored by Pillow in ``image.info``.
    """

    exif_bytes = image.info.get("exif")
    return exif_bytes or None


def exif_for_size(exif_bytes: bytes, size: Tuple[int, int]) -> Optional[bytes]:
    """Rewrite an EXIF block for an image of a new pixel size.

    Pixel dimension tags are set to ``size`` and the embedded preview
    thumbnail is dropped, since it no longer matches the image.

    Parameters
    ----------
    exif_bytes
        Original EXIF block.
    size
        (width, height) of the image the block will be attached to.

    Returns
    -------
    bytes or None
        The rewritten block, or None if the original could not be parsed.
    """

    try:
        exif_dict = piexif.load(exif_bytes)
        exif_dict.setdefault("Exif", {})
        exif_dict["Exif"][piexif.ExifIFD.PixelXDimension] = size[0]
        exif_dict["Exif"][piexif.ExifIFD.PixelYDimension] = size[1]
        exif_dict["1st"] = {}
        exif_dict["thumbnail"] = None
        return piexif.dump(exif_dict)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Dropping unreadable EXIF metadata: %s", exc)
        return None


def encode_image(
    image: Image.Image,
    format: str,
    exif: Optional[bytes] = None,
) -> bytes:
    """Encode an image with the codec defaults of ``format``.

    Parameters
    ----------
    image
        Image to encode.
    format
        Pillow format identifier, e.g. ``"JPEG"``.
    exif
        EXIF block to embed; ignored for formats that cannot carry one.

    Returns
    -------
    bytes
        The complete encoded file.
    """

    params = {}
    if exif and format in EXIF_FORMATS:
        params["exif"] = exif
    buffer = io.BytesIO()
    image.save(buffer, format=format, **params)
    return buffer.getvalue()


def write_payload(dest_path: Path, payload: bytes) -> None:
    """Write an encoded image to ``dest_path``, replacing any existing file."""

    with open(dest_path, "wb") as fh:
        fh.write(payload)


def map_resample(name: str) -> int:
    """Resolve a ``--resample`` name for scaling thumbnails onto the canvas.

    Matching ignores case. Empty or unknown names give bicubic, which is also
    what ``Image.resize`` uses when no filter is passed.
    """

    name_lower = (name or "").lower()
    if name_lower == "nearest":
        return Image.NEAREST
    if name_lower == "bilinear":
        return Image.BILINEAR
    if name_lower == "lanczos":
        return Image.LANCZOS
    return Image.BICUBIC
