# Chunk tags
QOI_OP_INDEX = 0x00  # 00xxxxxx
QOI_OP_DIFF = 0x40  # 01xxxxxx
QOI_OP_LUMA = 0x80  # 10xxxxxx
QOI_OP_RUN = 0xC0  # 11xxxxxx
QOI_OP_RGB = 0xFE  # 11111110
QOI_OP_RGBA = 0xFF  # 11111111

QOI_MASK_2 = 0xC0  # 11000000

# Colorspace flag stored in the header
QOI_SRGB = 0  # sRGB with linear alpha
QOI_LINEAR = 1  # all channels linear

QOI_MAGIC = b"qoif"
QOI_HEADER_SIZE = 14
QOI_END_MARKER = b"\x00\x00\x00\x00\x00\x00\x00\x01"

# 400 million pixels keeps the worst case (5 bytes per pixel) under 2GB.
QOI_PIXELS_MAX = 400_000_000

QOI_INDEX_SIZE = 64
QOI_RUN_MAX = 62

# A seventh consecutive QOI_OP_INDEX to slot 0 would look like the end marker.
QOI_ZERO_INDEX_MAX = 6
