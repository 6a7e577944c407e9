"""Functional modules for thumbnailing and cropping images.

Submodules
----------
format_gate
    Format detection against the supported codec table.
crop
    Region extraction with windowed decode.
thumbnail
    Aspect-fit thumbnails rendered onto a fixed canvas.
io_utils
    Source checks, EXIF handling and encoding helpers.
models
    Value types shared by the operations.
results
    Tagged operation outcomes.
logging_utils
    Logging setup for the CLI.
"""

from .crop import crop_image, crop_image_to_dir
from .format_gate import FormatGate, validate_format
from .models import ImageSource, Region, ThumbnailSpec
from .results import ImageOperationError, OperationResult, Outcome
from .thumbnail import fit_dimensions, thumbnail_image, thumbnail_image_beside

__all__ = [
    "FormatGate",
    "ImageOperationError",
    "ImageSource",
    "OperationResult",
    "Outcome",
    "Region",
    "ThumbnailSpec",
    "crop_image",
    "crop_image_to_dir",
    "fit_dimensions",
    "thumbnail_image",
    "thumbnail_image_beside",
    "validate_format",
]
