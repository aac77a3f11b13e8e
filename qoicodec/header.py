import operator
import struct
from dataclasses import asdict, dataclass, replace

from .buffer import ByteReader, ByteWriter
from .constants import (
    QOI_END_MARKER,
    QOI_HEADER_SIZE,
    QOI_LINEAR,
    QOI_MAGIC,
    QOI_PIXELS_MAX,
    QOI_SRGB,
)
from .errors import FormatError, InvalidInputError, TruncatedStreamError

# > : Big Endian
# 4s: 4-byte string (magic)
# I : unsigned int (4 bytes)
# B : unsigned char (1 byte)
HEADER_FORMAT = ">4sIIBB"


@dataclass
class QOIDescriptor:
    """Width, height, channel count and colorspace of an image."""

    width: int
    height: int
    channels: int
    colorspace: int = QOI_SRGB

    @classmethod
    def from_mapping(cls, description: dict) -> "QOIDescriptor":
        try:
            return cls(
                width=description["width"],
                height=description["height"],
                channels=description["channels"],
                colorspace=description.get("colorspace", QOI_SRGB),
            )
        except KeyError as e:
            raise InvalidInputError(f"QOI: description is missing {e.args[0]!r}") from e

    @classmethod
    def coerce(cls, description) -> "QOIDescriptor":
        """Accept a QOIDescriptor or the equivalent dict."""
        if description is None:
            raise InvalidInputError("QOI: No image description given")
        if isinstance(description, cls):
            return description
        return cls.from_mapping(description)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def validate(self) -> "QOIDescriptor":
        """Return a checked copy with plain int fields. self is left untouched."""
        fields = {}
        for name in ("width", "height", "channels", "colorspace"):
            try:
                # operator.index accepts numpy integers but not floats
                fields[name] = operator.index(getattr(self, name))
            except TypeError as e:
                raise InvalidInputError(
                    f"QOI: Invalid description.{name}, must be an integer"
                ) from e
        desc = replace(self, **fields)

        if not (0 < desc.width < 4294967296):
            raise InvalidInputError("QOI: Invalid description.width")

        if not (0 < desc.height < 4294967296):
            raise InvalidInputError("QOI: Invalid description.height")

        if desc.channels not in (3, 4):
            raise InvalidInputError("QOI: Invalid description.channels, must be 3 or 4")

        if desc.colorspace not in (QOI_SRGB, QOI_LINEAR):
            raise InvalidInputError("QOI: Invalid description.colorspace, must be 0 or 1")

        # checked by division so width * height is never formed
        if desc.height >= QOI_PIXELS_MAX // desc.width:
            raise InvalidInputError(
                f"QOI: Image of {desc.width}x{desc.height} exceeds {QOI_PIXELS_MAX} pixels"
            )
        return desc

    def max_size(self) -> int:
        """Worst case encoded size: every pixel as RGB/RGBA plus framing."""
        return (
            self.width * self.height * (self.channels + 1)
            + QOI_HEADER_SIZE
            + len(QOI_END_MARKER)
        )

    def tobytes(self) -> bytes:
        return struct.pack(
            HEADER_FORMAT,
            QOI_MAGIC,
            self.width,
            self.height,
            self.channels,
            self.colorspace,
        )

    @classmethod
    def frombytes(cls, buffer) -> "QOIDescriptor":
        if len(buffer) < QOI_HEADER_SIZE:
            raise TruncatedStreamError("QOI.decode: File too short for header")

        magic, width, height, channels, colorspace = struct.unpack(
            HEADER_FORMAT, bytes(buffer[:QOI_HEADER_SIZE])
        )
        if magic != QOI_MAGIC:
            raise FormatError(
                f"QOI.decode: The signature of the QOI file is invalid. "
                f"Got: {magic!r} Expected: {QOI_MAGIC!r}"
            )

        try:
            desc = cls(width, height, channels, colorspace).validate()
        except InvalidInputError as e:
            raise FormatError(f"QOI.decode: Invalid header: {e}") from e
        return desc

    def as_dict(self) -> dict:
        return asdict(self)


def write_end_marker(writer: ByteWriter):
    writer.write_bytes(QOI_END_MARKER)


def check_end_marker(reader: ByteReader):
    marker = reader.read_bytes(len(QOI_END_MARKER))
    if marker != QOI_END_MARKER:
        raise FormatError(f"QOI.decode: Invalid end marker {marker.hex()}")
