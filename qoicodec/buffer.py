from .errors import TruncatedStreamError


class ByteWriter:
    """Pre-sized output buffer with a write cursor."""

    def __init__(self, size: int):
        self.bytes = bytearray(size)
        self.write_pos = 0

    def write(self, byte: int):
        if self.write_pos >= len(self.bytes):
            raise OverflowError("ByteWriter: buffer capacity exceeded")
        self.bytes[self.write_pos] = byte
        self.write_pos += 1

    def write_bytes(self, data):
        end = self.write_pos + len(data)
        if end > len(self.bytes):
            raise OverflowError("ByteWriter: buffer capacity exceeded")
        self.bytes[self.write_pos : end] = data
        self.write_pos = end

    def tell(self) -> int:
        return self.write_pos

    def output(self) -> bytes:
        return bytes(self.bytes[0 : self.write_pos])


class ByteReader:
    """Read cursor over an encoded stream. Never reads past the end."""

    def __init__(self, data, offset: int = 0):
        self.data = data
        self.read_pos = offset

    def read(self) -> int:
        if self.read_pos >= len(self.data):
            raise TruncatedStreamError(
                f"QOI.decode: Unexpected end of stream at byte {self.read_pos}"
            )
        byte = self.data[self.read_pos]
        self.read_pos += 1
        return byte

    def read_bytes(self, n: int) -> bytes:
        end = self.read_pos + n
        if end > len(self.data):
            raise TruncatedStreamError(
                f"QOI.decode: Unexpected end of stream, wanted {n} bytes at byte "
                f"{self.read_pos}, {self.remaining()} left"
            )
        chunk = bytes(self.data[self.read_pos : end])
        self.read_pos = end
        return chunk

    def remaining(self) -> int:
        return max(len(self.data) - self.read_pos, 0)

    def tell(self) -> int:
        return self.read_pos
