import numpy as np
from PIL import Image

from .constants import QOI_SRGB
from .errors import InvalidInputError

RAW_EXTENSIONS = ("dng", "cr2", "nef", "arw", "raw")


def load_image(filepath: str, colorspace: int = QOI_SRGB) -> tuple[np.ndarray, dict]:
    """Load an image and return pixel data as numpy array + description."""

    ext = str(filepath).lower().split(".")[-1]

    if ext in RAW_EXTENSIONS:
        # RAW formats - requires rawpy
        import rawpy

        with rawpy.imread(str(filepath)) as raw:
            rgb = raw.postprocess()
        img = Image.fromarray(rgb)
    else:
        # Standard formats (PNG, JPEG, etc.)
        img = Image.open(filepath)

    # Anything with an alpha channel or transparency becomes RGBA, the rest RGB
    if img.mode == "RGBA":
        channels = 4
    elif "A" in img.getbands() or "transparency" in img.info:
        img = img.convert("RGBA")
        channels = 4
    else:
        img = img.convert("RGB")
        channels = 3

    return np.array(img), {
        "width": img.size[0],
        "height": img.size[1],
        "channels": channels,
        "colorspace": colorspace,
    }


def save_image(filepath: str, pixel_data: np.ndarray) -> None:
    """Write a (height, width, 3|4) uint8 array with Pillow."""
    if pixel_data.ndim != 3 or pixel_data.shape[2] not in (3, 4):
        raise InvalidInputError(
            f"Expected a (height, width, 3|4) array, got shape {pixel_data.shape}"
        )
    Image.fromarray(np.ascontiguousarray(pixel_data, dtype=np.uint8)).save(filepath)
