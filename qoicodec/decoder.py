import logging

import numpy as np

from .buffer import ByteReader
from .constants import (
    QOI_END_MARKER,
    QOI_HEADER_SIZE,
    QOI_MASK_2,
    QOI_OP_DIFF,
    QOI_OP_INDEX,
    QOI_OP_LUMA,
    QOI_OP_RGB,
    QOI_OP_RGBA,
    QOI_RUN_MAX,
)
from .errors import InvalidInputError, TruncatedStreamError
from .header import QOIDescriptor, check_end_marker
from .index import IndexCache
from .pixel import OPAQUE_BLACK, Pixel

logger = logging.getLogger(__name__)


class QOIDecoder:
    """
    A class to decode QOI (Quite OK Image) files into raw pixel data.
    """

    @staticmethod
    def decode(
        file_data,
        byte_offset: int = 0,
        byte_length: int = None,
        output_channels: int = None,
    ) -> tuple:
        """
        Decode a QOI file given as a bytes/bytearray object.

        :param file_data: Bytes containing the QOI file.
        :param byte_offset: Offset to the start of the QOI file in file_data.
        :param byte_length: Length of the QOI file in bytes.
        :param output_channels: Number of channels to include in the decoded data (3 or 4).
                                If None, uses the channels defined in the file header.
        :return: (pixel data as bytes, QOIDescriptor read from the header). The
                 descriptor keeps the header's channel count even when
                 output_channels differs from it.
        """
        pixels, desc = QOIDecoder._decode(
            file_data, byte_offset, byte_length, output_channels
        )
        return bytes(pixels), desc

    @staticmethod
    def decode_array(file_data, output_channels: int = None) -> np.ndarray:
        """Decode a QOI file into a (height, width, channels) uint8 array."""
        pixels, desc = QOIDecoder._decode(file_data, 0, None, output_channels)
        channels = output_channels or desc.channels
        return np.frombuffer(pixels, dtype=np.uint8).reshape(
            desc.height, desc.width, channels
        )

    @staticmethod
    def _decode(file_data, byte_offset, byte_length, output_channels):
        if file_data is None or len(file_data) == 0:
            raise InvalidInputError("QOI.decode: No data to decode")

        if output_channels is not None and output_channels not in (3, 4):
            raise InvalidInputError(
                "QOI.decode: The number of channels for the output is invalid"
            )

        # --- Handle Slicing ---
        if byte_length is None:
            byte_length = len(file_data) - byte_offset
        data = file_data[byte_offset : byte_offset + byte_length]

        desc = QOIDescriptor.frombytes(data)

        if output_channels is None:
            output_channels = desc.channels

        reader = ByteReader(data, QOI_HEADER_SIZE)

        # each chunk byte covers at most QOI_RUN_MAX pixels
        min_body = -(-desc.pixel_count // QOI_RUN_MAX) + len(QOI_END_MARKER)
        if reader.remaining() < min_body:
            raise TruncatedStreamError(
                f"QOI.decode: {reader.remaining()} bytes cannot hold a "
                f"{desc.width}x{desc.height} image, need at least {min_body}"
            )

        pixel_length = desc.pixel_count * output_channels
        result = bytearray(pixel_length)

        index = IndexCache()
        px = OPAQUE_BLACK
        write_pos = 0

        # --- Decoding Loop ---
        while write_pos < pixel_length:
            b1 = reader.read()
            run = 1

            # 8-bit tags take precedence over the 2-bit ones
            if b1 == QOI_OP_RGB:
                r, g, b = reader.read_bytes(3)
                px = px.with_rgb(r, g, b)

            elif b1 == QOI_OP_RGBA:
                px = Pixel(*reader.read_bytes(4))

            elif (b1 & QOI_MASK_2) == QOI_OP_INDEX:
                px = index[b1]

            elif (b1 & QOI_MASK_2) == QOI_OP_DIFF:
                # 2-bit differences with a bias of 2, wrapped to 8 bits
                px = px.with_rgb(
                    (px.r + ((b1 >> 4) & 0x03) - 2) & 0xFF,
                    (px.g + ((b1 >> 2) & 0x03) - 2) & 0xFF,
                    (px.b + (b1 & 0x03) - 2) & 0xFF,
                )

            elif (b1 & QOI_MASK_2) == QOI_OP_LUMA:
                b2 = reader.read()
                dg = (b1 & 0x3F) - 32
                dr_dg = ((b2 >> 4) & 0x0F) - 8
                db_dg = (b2 & 0x0F) - 8
                px = px.with_rgb(
                    (px.r + dg + dr_dg) & 0xFF,
                    (px.g + dg) & 0xFF,
                    (px.b + dg + db_dg) & 0xFF,
                )

            # QOI_OP_RUN (11xxxxxx), 0xFE and 0xFF were handled above
            else:
                run = (b1 & 0x3F) + 1

            # Pixels taken from the index are already in it
            if (b1 & QOI_MASK_2) != QOI_OP_INDEX:
                index.store(px)

            run = min(run, (pixel_length - write_pos) // output_channels)
            chunk = px.tobytes(output_channels) * run
            result[write_pos : write_pos + len(chunk)] = chunk
            write_pos += len(chunk)

        check_end_marker(reader)

        logger.debug(
            "Decoded %dx%d image with %d channels from %d bytes",
            desc.width,
            desc.height,
            desc.channels,
            reader.tell(),
        )
        return result, desc
