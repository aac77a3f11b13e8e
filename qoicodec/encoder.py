import logging

import numpy as np

from .buffer import ByteWriter
from .constants import (
    QOI_OP_DIFF,
    QOI_OP_INDEX,
    QOI_OP_LUMA,
    QOI_OP_RGB,
    QOI_OP_RGBA,
    QOI_OP_RUN,
    QOI_RUN_MAX,
    QOI_SRGB,
    QOI_ZERO_INDEX_MAX,
)
from .errors import InvalidInputError
from .header import QOIDescriptor, write_end_marker
from .index import IndexCache
from .pixel import OPAQUE_BLACK, Pixel

logger = logging.getLogger(__name__)


def _signed8(v: int) -> int:
    """Wrap a channel difference to 0..255 and read it back as -128..127."""
    v &= 0xFF
    return (v - 256) if v > 127 else v


def _pixel_bytes(color_data):
    if isinstance(color_data, (bytes, bytearray)):
        return color_data

    if isinstance(color_data, np.ndarray):
        if color_data.dtype != np.uint8:
            raise InvalidInputError(
                f"QOI.encode: Pixel array must be uint8, got {color_data.dtype}"
            )
        return np.ascontiguousarray(color_data).tobytes()

    try:
        return bytes(color_data)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"QOI.encode: Unusable colorData: {e}") from e


def _write_color(writer: ByteWriter, px: Pixel, px_prev: Pixel):
    """Write px as QOI_OP_DIFF, QOI_OP_LUMA, QOI_OP_RGB or QOI_OP_RGBA."""
    if px.a != px_prev.a:
        writer.write(QOI_OP_RGBA)
        writer.write_bytes((px.r, px.g, px.b, px.a))
        return

    vr = _signed8(px.r - px_prev.r)
    vg = _signed8(px.g - px_prev.g)
    vb = _signed8(px.b - px_prev.b)

    vg_r = vr - vg
    vg_b = vb - vg

    if -2 <= vr <= 1 and -2 <= vg <= 1 and -2 <= vb <= 1:
        writer.write(QOI_OP_DIFF | ((vr + 2) << 4) | ((vg + 2) << 2) | (vb + 2))
    elif -32 <= vg <= 31 and -8 <= vg_r <= 7 and -8 <= vg_b <= 7:
        writer.write(QOI_OP_LUMA | (vg + 32))
        writer.write(((vg_r + 8) << 4) | (vg_b + 8))
    else:
        writer.write(QOI_OP_RGB)
        writer.write_bytes((px.r, px.g, px.b))


class QOIEncoder:
    @staticmethod
    def encode(color_data, description) -> bytes:
        """
        Encode a QOI file.

        :param color_data: Bytes-like object (bytes, bytearray, list of ints or a
                           uint8 numpy array) containing interleaved pixel data.
        :param description: QOIDescriptor, or a dictionary containing 'width',
                            'height', 'channels' and 'colorspace'.
        :return: bytes object containing the QOI file content. Its length is
                 the encoded byte count.
        """
        desc = QOIDescriptor.coerce(description).validate()
        data = _pixel_bytes(color_data)

        if len(data) == 0:
            raise InvalidInputError("QOI.encode: colorData is empty")

        channels = desc.channels
        pixel_length = desc.pixel_count * channels
        if len(data) != pixel_length:
            raise InvalidInputError(
                f"QOI.encode: The length of colorData is incorrect. "
                f"Expected {pixel_length}, got {len(data)}"
            )

        writer = ByteWriter(desc.max_size())
        writer.write_bytes(desc.tobytes())

        index = IndexCache()
        px_prev = OPAQUE_BLACK
        run = 0
        # consecutive QOI_OP_INDEX chunks to slot 0 written so far
        zero_index = 0
        px_end = pixel_length - channels

        for px_pos in range(0, pixel_length, channels):
            px = Pixel.from_bytes(data, px_pos, channels, px_prev.a)

            if px == px_prev:
                run += 1
                if run == QOI_RUN_MAX or px_pos == px_end:
                    writer.write(QOI_OP_RUN | (run - 1))
                    run = 0
                    zero_index = 0
            else:
                if run > 0:
                    writer.write(QOI_OP_RUN | (run - 1))
                    run = 0
                    zero_index = 0

                index_pos = px.index_position

                if index.contains(px) and not (
                    index_pos == 0 and zero_index == QOI_ZERO_INDEX_MAX
                ):
                    writer.write(QOI_OP_INDEX | index_pos)
                    zero_index = zero_index + 1 if index_pos == 0 else 0
                else:
                    index.store(px)
                    _write_color(writer, px, px_prev)
                    zero_index = 0

            px_prev = px

        write_end_marker(writer)

        logger.debug(
            "Encoded %dx%d image with %d channels to %d bytes",
            desc.width,
            desc.height,
            channels,
            writer.tell(),
        )
        return writer.output()

    @staticmethod
    def encode_array(pixel_data: np.ndarray, colorspace: int = QOI_SRGB) -> bytes:
        """Encode a (height, width, channels) uint8 array."""
        if pixel_data.ndim != 3:
            raise InvalidInputError(
                f"QOI.encode: Expected a (height, width, channels) array, got shape {pixel_data.shape}"
            )
        height, width, channels = pixel_data.shape
        desc = QOIDescriptor(int(width), int(height), int(channels), colorspace)
        return QOIEncoder.encode(pixel_data, desc)
