import pytest

from qoicodec.index import IndexCache
from qoicodec.pixel import OPAQUE_BLACK, TRANSPARENT_BLACK, Pixel, color_hash


@pytest.mark.parametrize(
    "rgba,expected",
    [
        ((0, 0, 0, 0), 0),
        ((0, 0, 0, 255), 53),
        ((255, 255, 255, 255), 38),
        ((10, 10, 10, 255), 11),
        ((64, 0, 0, 0), 0),
    ],
)
def test_color_hash(rgba, expected):
    assert color_hash(*rgba) == expected
    assert Pixel(*rgba).index_position == expected


def test_packed_value():
    px = Pixel(1, 2, 3, 4)
    assert px.value == 0x01020304
    assert Pixel(255, 254, 253, 252).value == 0xFFFEFDFC


def test_equality_uses_all_channels():
    assert Pixel(1, 2, 3, 4) == Pixel(1, 2, 3, 4)
    assert Pixel(1, 2, 3, 4) != Pixel(1, 2, 3, 5)
    assert Pixel(1, 2, 3) == Pixel(1, 2, 3, 255)
    assert len({Pixel(1, 2, 3), Pixel(1, 2, 3, 255), Pixel(3, 2, 1)}) == 2


def test_immutable():
    px = Pixel(1, 2, 3, 4)
    with pytest.raises(AttributeError):
        px.r = 9
    moved = px.with_rgb(7, 8, 9)
    assert tuple(moved) == (7, 8, 9, 4)
    assert moved.value == 0x07080904
    assert tuple(px) == (1, 2, 3, 4)


def test_from_bytes():
    data = bytes([1, 2, 3, 4, 5, 6, 7, 8])
    assert tuple(Pixel.from_bytes(data, 4, 4)) == (5, 6, 7, 8)
    # 3-channel data never reads an alpha byte
    assert tuple(Pixel.from_bytes(data, 3, 3, alpha=200)) == (4, 5, 6, 200)


def test_tobytes():
    px = Pixel(9, 8, 7, 6)
    assert px.tobytes() == b"\x09\x08\x07\x06"
    assert px.tobytes(3) == b"\x09\x08\x07"


def test_index_cache_starts_transparent_black():
    index = IndexCache()
    assert len(index) == 64
    assert all(px == TRANSPARENT_BLACK for px in index)
    assert index.contains(TRANSPARENT_BLACK)
    assert not index.contains(OPAQUE_BLACK)


def test_index_cache_store_and_evict():
    index = IndexCache()
    a = Pixel(10, 10, 10)
    assert index.store(a) == 11
    assert index[11] == a
    assert index.contains(a)

    # (50, 0, 0, 255) lands in the same slot and replaces a
    b = Pixel(50, 0, 0)
    assert b.index_position == 11
    index.store(b)
    assert index[11] == b
    assert not index.contains(a)


def test_index_caches_are_independent():
    first, second = IndexCache(), IndexCache()
    first.store(Pixel(10, 10, 10))
    assert second[11] == TRANSPARENT_BLACK
