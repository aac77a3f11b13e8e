import logging
import os

import numpy as np

from .constants import QOI_SRGB
from .decoder import QOIDecoder
from .encoder import QOIEncoder
from .errors import InvalidInputError
from .header import QOIDescriptor
from .qoi import QOI
from .utils import load_image, save_image

logger = logging.getLogger(__name__)


def is_qoi_path(path) -> bool:
    return os.fspath(path).lower().endswith(".qoi")


def set_channels(pixel_data: np.ndarray, channels: int) -> np.ndarray:
    """Drop the alpha channel or add an opaque one."""
    current = pixel_data.shape[2]
    if channels == current:
        return pixel_data
    if channels == 3:
        return pixel_data[:, :, :3]
    if channels == 4:
        alpha = np.full(pixel_data.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate((pixel_data, alpha), axis=2)
    raise InvalidInputError(f"Invalid number of channels {channels}, must be 3 or 4")


def png_to_qoi(png_path, qoi_path, colorspace: int = QOI_SRGB) -> QOIDescriptor:
    """Convert any image Pillow can open (or a RAW file) to QOI."""
    pixel_data, description = load_image(png_path, colorspace=colorspace)
    desc = QOIDescriptor.coerce(description)

    size = QOI.write(qoi_path, pixel_data, desc)
    logger.info(
        "Converted %s to %s (%dx%d, %d channels, %d -> %d bytes)",
        png_path,
        qoi_path,
        desc.width,
        desc.height,
        desc.channels,
        pixel_data.nbytes,
        size,
    )
    return desc


def qoi_to_png(qoi_path, png_path, channels: int = None) -> QOIDescriptor:
    """Convert a QOI file to any format Pillow can write, chosen by extension."""
    with open(qoi_path, "rb") as f:
        content = f.read()

    pixel_data = QOIDecoder.decode_array(content, output_channels=channels)
    desc = QOIDescriptor.frombytes(content)

    save_image(png_path, pixel_data)
    logger.info(
        "Converted %s to %s (%dx%d, %d channels)",
        qoi_path,
        png_path,
        desc.width,
        desc.height,
        pixel_data.shape[2],
    )
    return desc


def convert(src, dst, colorspace: int = None, channels: int = None) -> QOIDescriptor:
    """
    Convert between QOI and the formats Pillow handles, in any direction.

    The format on each side is picked from the file extension, so QOI to QOI
    re-encodes (optionally with a different channel count or colorspace).

    :param colorspace: Colorspace flag for a QOI output. Defaults to the
                       source's flag for QOI input and sRGB otherwise.
    :param channels: Force 3 or 4 output channels.
    :return: Description of the written image.
    """
    if is_qoi_path(src):
        with open(src, "rb") as f:
            content = f.read()
        pixel_data = QOIDecoder.decode_array(content, output_channels=channels)
        if colorspace is None:
            colorspace = QOIDescriptor.frombytes(content).colorspace
    else:
        pixel_data, _ = load_image(src)
        if channels is not None:
            pixel_data = set_channels(pixel_data, channels)

    if colorspace is None:
        colorspace = QOI_SRGB

    height, width, out_channels = pixel_data.shape
    desc = QOIDescriptor(width, height, out_channels, colorspace)

    if is_qoi_path(dst):
        encoded = QOIEncoder.encode_array(pixel_data, colorspace)
        with open(dst, "wb") as f:
            f.write(encoded)
        logger.info("Converted %s to %s (%d bytes)", src, dst, len(encoded))
    else:
        save_image(dst, pixel_data)
        logger.info("Converted %s to %s", src, dst)
    return desc
