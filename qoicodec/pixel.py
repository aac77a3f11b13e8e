from .constants import QOI_INDEX_SIZE


def color_hash(r: int, g: int, b: int, a: int) -> int:
    """Calculates the index position for the color array."""
    return (r * 3 + g * 5 + b * 7 + a * 11) % QOI_INDEX_SIZE


class Pixel:
    """
    One RGBA pixel.

    The four channels are kept together with their packed 32-bit form
    (r << 24 | g << 16 | b << 8 | a) so two pixels compare with a single
    integer comparison. Instances are immutable; use with_rgb() to derive
    a new pixel.
    """

    __slots__ = ("r", "g", "b", "a", "value")

    def __init__(self, r: int = 0, g: int = 0, b: int = 0, a: int = 255):
        object.__setattr__(self, "r", r)
        object.__setattr__(self, "g", g)
        object.__setattr__(self, "b", b)
        object.__setattr__(self, "a", a)
        object.__setattr__(self, "value", (r << 24) | (g << 16) | (b << 8) | a)

    def __setattr__(self, name, value):
        raise AttributeError("Pixel is immutable")

    @classmethod
    def from_bytes(cls, data, offset: int, channels: int, alpha: int = 255) -> "Pixel":
        """
        Read one pixel from interleaved channel data.

        :param data: Bytes-like object with the interleaved channels.
        :param offset: Position of the red channel.
        :param channels: 3 or 4. With 3 channels the alpha is not read from
                         data; `alpha` is used instead.
        :param alpha: Alpha carried over for 3-channel data.
        """
        if channels == 4:
            alpha = data[offset + 3]
        return cls(data[offset], data[offset + 1], data[offset + 2], alpha)

    @property
    def index_position(self) -> int:
        return color_hash(self.r, self.g, self.b, self.a)

    def with_rgb(self, r: int, g: int, b: int) -> "Pixel":
        return Pixel(r, g, b, self.a)

    def tobytes(self, channels: int = 4) -> bytes:
        if channels == 4:
            return bytes((self.r, self.g, self.b, self.a))
        return bytes((self.r, self.g, self.b))

    def __iter__(self):
        return iter((self.r, self.g, self.b, self.a))

    def __eq__(self, other):
        if not isinstance(other, Pixel):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return self.value

    def __repr__(self):
        return f"Pixel(r={self.r}, g={self.g}, b={self.b}, a={self.a})"

    def __str__(self):
        return f"R: {self.r} G: {self.g} B: {self.b} A: {self.a}"


OPAQUE_BLACK = Pixel(0, 0, 0, 255)
TRANSPARENT_BLACK = Pixel(0, 0, 0, 0)
