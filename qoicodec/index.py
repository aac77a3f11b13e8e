from .constants import QOI_INDEX_SIZE
from .pixel import TRANSPARENT_BLACK, Pixel


class IndexCache:
    """
    Running array of 64 previously seen pixels, addressed by color_hash().

    Encoder and decoder each build their own instance per image and must
    update it identically, pixel by pixel.
    """

    def __init__(self):
        # Index array: 64 pixels, initialized to (0, 0, 0, 0)
        self._slots = [TRANSPARENT_BLACK] * QOI_INDEX_SIZE

    def __getitem__(self, slot: int) -> Pixel:
        return self._slots[slot]

    def __len__(self):
        return QOI_INDEX_SIZE

    def __iter__(self):
        return iter(self._slots)

    def contains(self, px: Pixel) -> bool:
        """True if the slot px hashes to currently holds px."""
        return self._slots[px.index_position] == px

    def store(self, px: Pixel) -> int:
        slot = px.index_position
        self._slots[slot] = px
        return slot
