"""
Tests for the click command line interface.
"""

import pytest
from click.testing import CliRunner
from PIL import Image

from main import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestThumbnailCommand:
    """Tests for `thumbnail`."""

    def test_writes_next_to_source(self, runner, make_image):
        src = make_image("wide.png", size=(400, 200))

        result = runner.invoke(
            cli, ["thumbnail", "--input-path", str(src), "--width", "100", "--height", "100"]
        )

        assert result.exit_code == 0, result.output
        with Image.open(src.parent / "thumb_wide.png") as img:
            assert img.size == (200, 100)

    def test_forced_output_file(self, runner, make_image, tmp_path):
        src = make_image("wide.png", size=(400, 200))
        out = tmp_path / "exact.png"

        result = runner.invoke(
            cli,
            [
                "thumbnail",
                "--input-path", str(src),
                "--width", "100",
                "--height", "100",
                "--force",
                "--output", str(out),
            ],
        )

        assert result.exit_code == 0, result.output
        with Image.open(out) as img:
            assert img.size == (100, 100)

    def test_failure_exits_non_zero(self, runner, tmp_path):
        out = tmp_path / "never.png"

        result = runner.invoke(
            cli,
            [
                "thumbnail",
                "--input-path", str(tmp_path / "nope.png"),
                "--width", "10",
                "--height", "10",
                "--output", str(out),
            ],
        )

        assert result.exit_code == 1
        assert not out.exists()

    def test_rejects_non_positive_size(self, runner, png_path):
        result = runner.invoke(
            cli, ["thumbnail", "--input-path", str(png_path), "--width", "0", "--height", "10"]
        )

        assert result.exit_code == 2


class TestCropCommand:
    """Tests for `crop`."""

    def test_crops_into_directory(self, runner, png_path, tmp_path):
        out_dir = tmp_path / "cuts"
        out_dir.mkdir()

        result = runner.invoke(
            cli,
            [
                "crop",
                "--input-path", str(png_path),
                "--output-dir", str(out_dir),
                "--x", "250",
                "--y", "70",
                "--width", "300",
                "--height", "400",
            ],
        )

        assert result.exit_code == 0, result.output
        (written,) = list(out_dir.iterdir())
        assert written.name.startswith("cut_")
        with Image.open(written) as img:
            assert img.size == (300, 400)

    def test_missing_destination(self, runner, png_path, tmp_path):
        result = runner.invoke(
            cli,
            [
                "crop",
                "--input-path", str(png_path),
                "--output-dir", str(tmp_path / "missing"),
                "--x", "0",
                "--y", "0",
                "--width", "10",
                "--height", "10",
            ],
        )

        assert result.exit_code == 1
        assert "does not exist" in result.output


class TestInfoCommands:
    """Tests for `formats` and `inspect`."""

    def test_formats_lists_png(self, runner):
        result = runner.invoke(cli, ["formats"])

        assert result.exit_code == 0
        assert "PNG: png" in result.output
        assert "JPEG: jpe, jpeg, jpg" in result.output

    def test_inspect(self, runner, png_path):
        result = runner.invoke(cli, ["inspect", str(png_path)])

        assert result.exit_code == 0
        assert "photo.png: PNG 600x500" in result.output

    def test_inspect_unsupported(self, runner, tmp_path):
        src = tmp_path / "notes.txt"
        src.write_text("hello")

        result = runner.invoke(cli, ["inspect", str(src)])

        assert result.exit_code == 1
