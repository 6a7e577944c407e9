"""Region extraction.

Cropping opens the source lazily and, for codecs that store pixel data in
several strips or tiles, hands Pillow only the tiles that intersect the
requested region. Single-tile codecs (JPEG, PNG, ...) are decoded in full and
then cropped.
"""

from __future__ import annotations

import logging
import time
from contextlib import ExitStack
from dataclasses import replace
from pathlib import Path
from typing import BinaryIO, Optional, Sequence, Tuple

from PIL import Image

from config import CONFIG
from .format_gate import FormatGate, validate_format
from .io_utils import (
    CODEC_ERRORS,
    PathLike,
    encode_image,
    exif_for_size,
    read_exif,
    source_exists,
    write_payload,
)
from .models import Region
from .results import OperationResult, Outcome

logger = logging.getLogger(__name__)

Box = Tuple[int, int, int, int]


def _intersects(extents: Optional[Sequence[int]], box: Box) -> bool:
    if extents is None:
        return True
    left, upper, right, lower = box
    x0, y0, x1, y1 = extents
    return x0 < right and x1 > left and y0 < lower and y1 > upper


def restrict_to_region(image: Image.Image, box: Box) -> bool:
    """Drop decoder tiles of a not-yet-loaded image that miss ``box``.

    Parameters
    ----------
    image
        Image returned by ``Image.open`` before ``load()`` was called.
    box
        Region (left, upper, right, lower) that will be cropped afterwards.

    Returns
    -------
    bool
        True if the decoder will now skip part of the file, False if the image
        has to be decoded in full.
    """

    tiles = list(getattr(image, "tile", None) or [])
    if len(tiles) < 2:
        return False
    kept = [tile for tile in tiles if _intersects(tile[1], box)]
    if not kept or len(kept) == len(tiles):
        return False
    image.tile = kept
    return True


def _crop_to_bytes(
    source: Path,
    region: Region,
    keep_metadata: bool,
    gate: Optional[FormatGate],
) -> Tuple[OperationResult, Optional[bytes]]:
    if not source_exists(source):
        return (
            OperationResult.failure(
                Outcome.MISSING_SOURCE, f"source image '{source}' does not exist"
            ),
            None,
        )
    fmt = validate_format(source, gate)
    if fmt is None:
        return (
            OperationResult.failure(
                Outcome.UNSUPPORTED_FORMAT, f"unsupported image format: '{source.name}'"
            ),
            None,
        )

    try:
        with ExitStack() as stack:
            fh = stack.enter_context(open(source, "rb"))
            img = stack.enter_context(Image.open(fh))
            windowed = restrict_to_region(img, region.box)
            logger.debug(
                "Cropping %s at %s (%s decode).",
                source.name,
                region.box,
                "windowed" if windowed else "full",
            )
            cropped = img.crop(region.box)
            exif = read_exif(img) if keep_metadata else None
            if exif:
                exif = exif_for_size(exif, cropped.size)
            payload = encode_image(cropped, fmt, exif=exif)
    except CODEC_ERRORS as exc:
        logger.error("Cropping image '%s' failed.", source, exc_info=exc)
        return (
            OperationResult.failure(
                Outcome.IO_FAILURE, f"cropping '{source}' failed: {exc}", error=exc
            ),
            None,
        )
    return OperationResult.success(cropped.size, fmt), payload


def crop_image(
    source: PathLike,
    output: BinaryIO,
    region: Region,
    keep_metadata: Optional[bool] = None,
    gate: Optional[FormatGate] = None,
) -> OperationResult:
    """Crop ``region`` out of ``source`` and write it to ``output``.

    The output is encoded in the format of the source. ``output`` is left open
    for the caller; it receives either the complete image or nothing.

    Parameters
    ----------
    source
        Path to the source image.
    output
        Writable binary stream.
    region
        Rectangle to extract, in source pixel coordinates.
    keep_metadata
        Carry EXIF metadata over. Defaults to ``CONFIG.behavior.keep_metadata``.
    gate
        Format gate to validate against. Defaults to the process-wide gate.

    Returns
    -------
    OperationResult
        Outcome of the call; failures are logged, never raised.
    """

    if keep_metadata is None:
        keep_metadata = CONFIG.behavior.keep_metadata
    result, payload = _crop_to_bytes(Path(source), region, keep_metadata, gate)
    if payload is None:
        return result
    try:
        output.write(payload)
    except (OSError, ValueError) as exc:
        logger.error("Writing cropped image failed.", exc_info=exc)
        return OperationResult.failure(
            Outcome.IO_FAILURE, f"writing cropped image failed: {exc}", error=exc
        )
    return result


def crop_image_to_dir(
    source: PathLike,
    destination: PathLike,
    region: Region,
    prefix: Optional[str] = None,
    keep_metadata: Optional[bool] = None,
    gate: Optional[FormatGate] = None,
) -> OperationResult:
    """Crop ``region`` out of ``source`` into a file next to ``destination``.

    The file is named ``<prefix><timestamp-millis>_<original-filename>`` and
    placed in ``destination`` if it is a directory, or in its parent directory
    if it is a file. ``destination`` must already exist. Two crops of the
    same source within one millisecond share a name; the later one wins.

    Parameters
    ----------
    source
        Path to the source image.
    destination
        Existing directory, or existing file whose directory is used.
    region
        Rectangle to extract.
    prefix
        Filename prefix. Defaults to ``CONFIG.crop.prefix``.
    keep_metadata
        Carry EXIF metadata over. Defaults to ``CONFIG.behavior.keep_metadata``.
    gate
        Format gate to validate against.

    Returns
    -------
    OperationResult
        Outcome with ``destination`` set to the written file on success.
    """

    dest = Path(destination)
    if not dest.exists():
        logger.warning("The destination folder '%s' does not exist.", dest)
        return OperationResult.failure(
            Outcome.MISSING_DESTINATION, f"destination '{dest}' does not exist"
        )
    folder = dest if dest.is_dir() else dest.parent
    source = Path(source)
    prefix = CONFIG.crop.prefix if prefix is None else prefix
    if keep_metadata is None:
        keep_metadata = CONFIG.behavior.keep_metadata

    result, payload = _crop_to_bytes(source, region, keep_metadata, gate)
    if payload is None:
        return result

    dest_path = folder / f"{prefix}{int(time.time() * 1000)}_{source.name}"
    try:
        write_payload(dest_path, payload)
    except OSError as exc:
        logger.error("Writing cropped image '%s' failed.", dest_path, exc_info=exc)
        return OperationResult.failure(
            Outcome.IO_FAILURE, f"writing '{dest_path}' failed: {exc}", error=exc
        )
    logger.info("Cropped %s -> %s", source.name, dest_path)
    return replace(result, destination=dest_path)
