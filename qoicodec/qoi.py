import os

from .decoder import QOIDecoder
from .encoder import QOIEncoder


class QOI:
    """
    In-memory and file based entry points, in the shape of the qoi.h
    qoi_encode / qoi_decode / qoi_write / qoi_read functions.
    """

    @staticmethod
    def encode(color_data, description) -> bytes:
        return QOIEncoder.encode(color_data, description)

    @staticmethod
    def decode(qoi_data, channels: int = None) -> tuple:
        return QOIDecoder.decode(qoi_data, output_channels=channels)

    @staticmethod
    def write(filename: "str | os.PathLike", color_data, description) -> int:
        """Encode and store pixel data. Returns the number of bytes written."""
        encoded = QOIEncoder.encode(color_data, description)
        with open(filename, "wb") as f:
            f.write(encoded)
        return len(encoded)

    @staticmethod
    def read(filename: "str | os.PathLike", channels: int = None) -> tuple:
        """Read and decode a QOI file. Returns (pixel data, QOIDescriptor)."""
        with open(filename, "rb") as f:
            content = f.read()
        return QOIDecoder.decode(content, output_channels=channels)
