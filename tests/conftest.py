import numpy as np
import pytest

from qoicodec.constants import QOI_END_MARKER


def header(width, height, channels, colorspace=0):
    return (
        b"qoif"
        + width.to_bytes(4, "big")
        + height.to_bytes(4, "big")
        + bytes((channels, colorspace))
    )


def qoi_stream(width, height, channels, chunks, colorspace=0):
    """Hand-built QOI file: header, chunk bytes, end marker."""
    return header(width, height, channels, colorspace) + bytes(chunks) + QOI_END_MARKER


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def gradient_rgb():
    """Smooth image, mostly QOI_OP_DIFF and QOI_OP_LUMA chunks."""
    y, x = np.mgrid[0:37, 0:53]
    img = np.stack(((x * 4) % 256, (y * 3) % 256, (x + y) % 256), axis=2)
    return img.astype(np.uint8)


@pytest.fixture
def noisy_rgba(rng):
    return rng.integers(0, 256, size=(29, 31, 4), dtype=np.uint8)


@pytest.fixture
def palette_rgba(rng):
    """Few colours in long and short runs, with plenty of index hits and collisions."""
    palette = rng.integers(0, 256, size=(90, 4), dtype=np.uint8)
    palette[::3, 3] = 255
    choice = rng.integers(0, len(palette), size=48 * 40)
    choice = np.repeat(choice, rng.integers(1, 5, size=choice.size))[: 48 * 40]
    return palette[choice].reshape(48, 40, 4)
