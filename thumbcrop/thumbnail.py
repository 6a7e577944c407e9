"""Thumbnail generation.

A thumbnail is the source image scaled onto a new RGB canvas. Unless the
caller forces the requested size, the canvas size is first fitted to the
source aspect ratio with :func:`fit_dimensions`.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

from PIL import Image

from config import CONFIG, LIGHT_GRAY, RESAMPLE_METHOD
from .format_gate import FormatGate, validate_format
from .io_utils import (
    CODEC_ERRORS,
    PathLike,
    encode_image,
    exif_for_size,
    map_resample,
    read_exif,
    source_exists,
    write_payload,
)
from .models import ThumbnailSpec
from .results import OperationResult, Outcome

logger = logging.getLogger(__name__)


def fit_dimensions(width: int, height: int, w: int, h: int) -> Tuple[int, int]:
    """Adjust a requested thumbnail size to the aspect ratio of the source.

    Only one axis is recomputed, and only when the source is larger than the
    request on the axis being compared. A 400x200 source asked for 100x100
    yields 200x100: the ratios compare 4.0 against 2.0, so the width is
    recomputed from the height.

    Parameters
    ----------
    width, height
        Natural size of the source.
    w, h
        Requested thumbnail size.

    Returns
    -------
    tuple
        Final (w, h).
    """

    if width / w < height / h:
        if width > w:
            h = int(round(height * w / width))
            logger.debug("Changed thumbnail height, width:%d, height:%d.", w, h)
    else:
        if height > h:
            w = int(round(width * h / height))
            logger.debug("Changed thumbnail width, width:%d, height:%d.", w, h)
    return w, h


def render_thumbnail(
    image: Image.Image,
    size: Tuple[int, int],
    background: Tuple[int, int, int] = LIGHT_GRAY,
    resample: str = RESAMPLE_METHOD,
) -> Image.Image:
    """Scale ``image`` to exactly ``size`` on an opaque RGB canvas.

    Transparent source pixels show ``background``.
    """

    canvas = Image.new("RGB", size, background)
    scaled = image.convert("RGBA").resize(size, map_resample(resample))
    canvas.paste(scaled, (0, 0), scaled)
    return canvas


def _thumbnail_to_bytes(
    source: Path,
    spec: ThumbnailSpec,
    background: Tuple[int, int, int],
    resample: str,
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

    logger.debug(
        "Target thumbnail size, width:%d, height:%d.", spec.width, spec.height
    )
    try:
        with Image.open(source) as img:
            img.load()
            if spec.force:
                size = spec.size
            else:
                size = fit_dimensions(img.width, img.height, spec.width, spec.height)
            canvas = render_thumbnail(img, size, background, resample)
            exif = read_exif(img) if keep_metadata else None
        if exif:
            exif = exif_for_size(exif, canvas.size)
        payload = encode_image(canvas, fmt, exif=exif)
    except CODEC_ERRORS as exc:
        logger.error("Generating thumbnail of '%s' failed.", source, exc_info=exc)
        return (
            OperationResult.failure(
                Outcome.IO_FAILURE,
                f"generating thumbnail of '{source}' failed: {exc}",
                error=exc,
            ),
            None,
        )
    return OperationResult.success(canvas.size, fmt), payload


def thumbnail_image(
    source: PathLike,
    output: BinaryIO,
    spec: ThumbnailSpec,
    background: Optional[Tuple[int, int, int]] = None,
    resample: Optional[str] = None,
    keep_metadata: Optional[bool] = None,
    gate: Optional[FormatGate] = None,
) -> OperationResult:
    """Write a thumbnail of ``source`` to ``output`` and close it.

    Parameters
    ----------
    source
        Path to the source image.
    output
        Writable binary stream. Closed after a successful write.
    spec
        Requested size and aspect handling.
    background
        Canvas fill. Defaults to ``CONFIG.thumbnail.background``.
    resample
        Resampling method name. Defaults to ``CONFIG.thumbnail.resample``.
    keep_metadata
        Carry EXIF metadata over. Defaults to ``CONFIG.behavior.keep_metadata``.
    gate
        Format gate to validate against.

    Returns
    -------
    OperationResult
        Outcome of the call; failures are logged, never raised.
    """

    result, payload = _thumbnail_to_bytes(
        Path(source),
        spec,
        CONFIG.thumbnail.background if background is None else background,
        resample or CONFIG.thumbnail.resample,
        CONFIG.behavior.keep_metadata if keep_metadata is None else keep_metadata,
        gate,
    )
    if payload is None:
        return result
    try:
        output.write(payload)
        output.close()
    except (OSError, ValueError) as exc:
        logger.error("Writing thumbnail failed.", exc_info=exc)
        return OperationResult.failure(
            Outcome.IO_FAILURE, f"writing thumbnail failed: {exc}", error=exc
        )
    return result


def thumbnail_image_beside(
    source: PathLike,
    spec: ThumbnailSpec,
    background: Optional[Tuple[int, int, int]] = None,
    resample: Optional[str] = None,
    keep_metadata: Optional[bool] = None,
    gate: Optional[FormatGate] = None,
) -> OperationResult:
    """Write a thumbnail of ``source`` as ``<prefix><filename>`` next to it.

    If ``source`` denotes a directory the thumbnail is placed inside it.
    Remaining parameters are as for :func:`thumbnail_image`.

    Returns
    -------
    OperationResult
        Outcome with ``destination`` set to the written file on success.
    """

    source = Path(source)
    folder = source if source.is_dir() else source.parent
    dest_path = folder / f"{spec.prefix}{source.name}"

    result, payload = _thumbnail_to_bytes(
        source,
        spec,
        CONFIG.thumbnail.background if background is None else background,
        resample or CONFIG.thumbnail.resample,
        CONFIG.behavior.keep_metadata if keep_metadata is None else keep_metadata,
        gate,
    )
    if payload is None:
        return result
    try:
        write_payload(dest_path, payload)
    except OSError as exc:
        logger.error("The thumbnail destination '%s' is not writable.", dest_path, exc_info=exc)
        return OperationResult.failure(
            Outcome.IO_FAILURE, f"writing '{dest_path}' failed: {exc}", error=exc
        )
    logger.info("Thumbnail %s -> %s (%dx%d)", source.name, dest_path, *result.size)
    return replace(result, destination=dest_path)
