"""CLI for thumbnailing and cropping images.

Commands:
  - thumbnail: Render a thumbnail, aspect-fitted unless forced
  - crop: Cut a rectangular region into a timestamped file
  - formats: List the image formats this build accepts
  - inspect: Show the format and size of an image
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
from config import CONFIG
from thumbcrop.crop import crop_image_to_dir
from thumbcrop.format_gate import default_gate
from thumbcrop.io_utils import CODEC_ERRORS
from thumbcrop.logging_utils import setup_logging
from thumbcrop.models import ImageSource, Region, ThumbnailSpec
from thumbcrop.results import OperationResult
from thumbcrop.thumbnail import thumbnail_image, thumbnail_image_beside

RESAMPLE_CHOICES = ["nearest", "bilinear", "bicubic", "lanczos"]


def _report(result: OperationResult) -> None:
    if not result.ok:
        raise click.ClickException(result.message or result.outcome.value)
    width, height = result.size
    target = result.destination if result.destination else "output"
    click.echo(f"{target} ({result.format}, {width}x{height})")


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=CONFIG.logging.level,
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Also write log records to this file",
)
def cli(log_level: str, log_file: Optional[Path]) -> None:
    """Thumbnail and crop toolkit."""

    CONFIG.logging.level = log_level
    CONFIG.logging.log_file = log_file
    setup_logging(CONFIG.logging)


@cli.command(name="thumbnail")
@click.option(
    "--input-path",
    type=click.Path(path_type=Path),
    required=True,
    help="Source image",
)
@click.option("--width", type=int, required=True)
@click.option("--height", type=int, required=True)
@click.option(
    "--force/--no-force",
    default=CONFIG.thumbnail.force,
    help="Output exactly WIDTHxHEIGHT, ignoring the aspect ratio",
)
@click.option("--prefix", type=str, default=CONFIG.thumbnail.prefix)
@click.option(
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write here instead of <prefix><name> next to the source",
)
@click.option(
    "--resample",
    type=click.Choice(RESAMPLE_CHOICES, case_sensitive=False),
    default=CONFIG.thumbnail.resample,
)
@click.option("--keep-metadata/--no-keep-metadata", default=CONFIG.behavior.keep_metadata)
def cmd_thumbnail(
    input_path: Path,
    width: int,
    height: int,
    force: bool,
    prefix: str,
    output: Optional[Path],
    resample: str,
    keep_metadata: bool,
) -> None:
    """Generate a thumbnail of an image."""

    if width <= 0 or height <= 0:
        raise click.BadParameter("width and height must be positive")
    spec = ThumbnailSpec(width=width, height=height, force=force, prefix=prefix)

    if output is None:
        result = thumbnail_image_beside(
            input_path, spec, resample=resample, keep_metadata=keep_metadata
        )
    else:
        try:
            stream = open(output, "wb")
        except OSError as exc:
            raise click.ClickException(f"cannot open '{output}': {exc}") from exc
        with stream:
            result = thumbnail_image(
                input_path, stream, spec, resample=resample, keep_metadata=keep_metadata
            )
        if result.ok:
            result = OperationResult.success(result.size, result.format, output)
        else:
            output.unlink(missing_ok=True)
    _report(result)


@cli.command(name="crop")
@click.option(
    "--input-path",
    type=click.Path(path_type=Path),
    required=True,
    help="Source image",
)
@click.option(
    "--output-dir",
    type=click.Path(path_type=Path),
    required=True,
    help="Existing directory (or file within it) for the cropped image",
)
@click.option("--x", "x", type=int, required=True)
@click.option("--y", "y", type=int, required=True)
@click.option("--width", type=int, required=True)
@click.option("--height", type=int, required=True)
@click.option("--prefix", type=str, default=CONFIG.crop.prefix)
@click.option("--keep-metadata/--no-keep-metadata", default=CONFIG.behavior.keep_metadata)
def cmd_crop(
    input_path: Path,
    output_dir: Path,
    x: int,
    y: int,
    width: int,
    height: int,
    prefix: str,
    keep_metadata: bool,
) -> None:
    """Crop a rectangular region out of an image."""

    result = crop_image_to_dir(
        input_path,
        output_dir,
        Region(x, y, width, height),
        prefix=prefix,
        keep_metadata=keep_metadata,
    )
    _report(result)


@cli.command(name="formats")
def cmd_formats() -> None:
    """List accepted image formats and their extensions."""

    gate = default_gate()
    for fmt in gate.formats:
        click.echo(f"{fmt}: {', '.join(gate.extensions_for(fmt))}")


@cli.command(name="inspect")
@click.argument("image_path", type=click.Path(path_type=Path, exists=True, dir_okay=False))
def cmd_inspect(image_path: Path) -> None:
    """Show the format and pixel size of an image."""

    fmt = default_gate().validate(image_path)
    if fmt is None:
        raise click.ClickException(f"unsupported image format: '{image_path.name}'")
    try:
        source = ImageSource.probe(image_path, fmt)
    except CODEC_ERRORS as exc:
        raise click.ClickException(f"cannot read '{image_path}': {exc}") from exc
    click.echo(f"{source.path.name}: {source.format} {source.width}x{source.height}")


if __name__ == "__main__":
    cli()
