from .constants import QOI_LINEAR, QOI_SRGB
from .decoder import QOIDecoder
from .encoder import QOIEncoder
from .errors import FormatError, InvalidInputError, QOIError, TruncatedStreamError
from .header import QOIDescriptor
from .pixel import Pixel
from .qoi import QOI
from .utils import load_image, save_image

__all__ = [
    "QOIEncoder",
    "QOIDecoder",
    "QOI",
    "QOIDescriptor",
    "Pixel",
    "QOIError",
    "InvalidInputError",
    "FormatError",
    "TruncatedStreamError",
    "QOI_SRGB",
    "QOI_LINEAR",
    "load_image",
    "save_image",
]
