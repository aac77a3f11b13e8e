import numpy as np
from click.testing import CliRunner
from PIL import Image

from qoicodec import QOI
from qoicodec.cli import main


def test_png_to_qoi_and_back(tmp_path, palette_rgba):
    png = tmp_path / "palette.png"
    Image.fromarray(palette_rgba).save(png)
    runner = CliRunner()

    result = runner.invoke(main, [str(png), str(tmp_path / "palette.qoi")])
    assert result.exit_code == 0, result.output
    assert "40x48 Channels: 4" in result.output

    data, desc = QOI.read(tmp_path / "palette.qoi")
    assert data == palette_rgba.tobytes()

    result = runner.invoke(main, [str(tmp_path / "palette.qoi"), str(tmp_path / "back.png")])
    assert result.exit_code == 0, result.output
    assert np.array_equal(np.array(Image.open(tmp_path / "back.png")), palette_rgba)


def test_options(tmp_path, gradient_rgb):
    png = tmp_path / "gradient.png"
    Image.fromarray(gradient_rgb).save(png)

    result = CliRunner().invoke(
        main,
        ["--colorspace", "linear", "--channels", "4", "-v", str(png), str(tmp_path / "g.qoi")],
    )
    assert result.exit_code == 0, result.output

    _, desc = QOI.read(tmp_path / "g.qoi")
    assert (desc.channels, desc.colorspace) == (4, 1)


def test_needs_a_qoi_file(tmp_path):
    result = CliRunner().invoke(main, [str(tmp_path / "a.png"), str(tmp_path / "b.png")])
    assert result.exit_code == 2
    assert ".qoi" in result.output


def test_missing_input(tmp_path):
    result = CliRunner().invoke(main, [str(tmp_path / "missing.qoi"), str(tmp_path / "out.png")])
    assert result.exit_code == 1
    assert "Couldn't load/decode" in result.output


def test_corrupt_input(tmp_path):
    bad = tmp_path / "bad.qoi"
    bad.write_bytes(b"not a qoi file at all")
    result = CliRunner().invoke(main, [str(bad), str(tmp_path / "out.png")])
    assert result.exit_code == 1
    assert "Couldn't convert" in result.output


def test_missing_output_directory(tmp_path, gradient_rgb):
    png = tmp_path / "in.png"
    Image.fromarray(gradient_rgb).save(png)

    result = CliRunner().invoke(main, [str(png), str(tmp_path / "nodir" / "out.qoi")])
    assert result.exit_code == 1
    assert "Couldn't convert" in result.output
    assert "Couldn't load/decode" not in result.output


def test_unknown_output_extension(tmp_path, gradient_rgb):
    src = tmp_path / "a.qoi"
    QOI.write(src, gradient_rgb, {"width": 53, "height": 37, "channels": 3})

    result = CliRunner().invoke(main, [str(src), str(tmp_path / "out.xyz")])
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Couldn't convert" in result.output
    assert ".xyz" in result.output
