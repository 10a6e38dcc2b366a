"""
Strata - Auto-tiling
Maps an 8-bit neighbour mask to a (col, row) offset inside a tile's 22x3
texture block.

Mask bits (1 = neighbour present and non-empty):

    TL TM TR        0 1 2
    ML ** MR   ->   3 * 4
    BL BM BR        5 6 7

The offset table is a simplified marching-squares tileset layout and must
match the tileset images entry for entry.
"""

from typing import Tuple

import numpy as np

TL = 1 << 0
TM = 1 << 1
TR = 1 << 2
ML = 1 << 3
MR = 1 << 4
BL = 1 << 5
BM = 1 << 6
BR = 1 << 7

FULL_MASK = 0xFF

TEXTURE_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (6, 0), (6, 0), (4, 2), (4, 2), (6, 0), (6, 0), (4, 2), (4, 2),  # 0
    (5, 1), (5, 1), (15, 1), (2, 2), (5, 1), (5, 1), (15, 1), (2, 2),  # 8
    (3, 1), (3, 1), (14, 1), (14, 1), (3, 1), (0, 2), (0, 2), (0, 2),  # 16
    (6, 2), (6, 2), (21, 1), (19, 1), (6, 2), (6, 2), (17, 1), (1, 2),  # 24
    (6, 0), (6, 0), (4, 2), (4, 2), (6, 0), (6, 0), (4, 2), (4, 2),  # 32
    (5, 1), (5, 1), (15, 1), (2, 2), (5, 1), (5, 1), (15, 1), (2, 2),  # 40
    (3, 1), (3, 1), (14, 1), (14, 1), (3, 1), (3, 1), (14, 1), (0, 2),  # 48
    (6, 2), (6, 2), (21, 1), (19, 1), (6, 2), (6, 2), (17, 1), (1, 2),  # 56
    (4, 0), (4, 0), (6, 1), (6, 1), (4, 0), (4, 0), (6, 1), (6, 1),  # 64
    (15, 0), (15, 0), (21, 0), (17, 0), (15, 0), (15, 0), (21, 0), (17, 0),  # 72
    (14, 0), (14, 0), (20, 1), (20, 1), (14, 0), (14, 0), (18, 1), (18, 1),  # 80
    (20, 0), (20, 0), (4, 1), (10, 1), (20, 0), (20, 0), (10, 1), (11, 0),  # 88
    (4, 0), (4, 0), (6, 1), (6, 1), (4, 0), (4, 0), (6, 1), (6, 1),  # 96
    (2, 0), (2, 0), (19, 0), (2, 1), (2, 0), (2, 0), (19, 0), (2, 1),  # 104
    (14, 0), (14, 0), (20, 1), (20, 1), (14, 0), (14, 0), (18, 1), (18, 1),  # 112
    (16, 0), (16, 0), (10, 0), (13, 1), (16, 0), (16, 0), (12, 1), (7, 0),  # 120
    (6, 0), (6, 0), (4, 2), (4, 2), (6, 0), (6, 0), (4, 2), (4, 2),  # 128
    (5, 1), (5, 1), (15, 1), (2, 2), (5, 1), (5, 1), (15, 1), (2, 2),  # 136
    (3, 1), (3, 1), (14, 1), (14, 1), (3, 1), (3, 1), (0, 2), (0, 2),  # 144
    (6, 2), (6, 2), (21, 1), (19, 1), (6, 2), (6, 2), (17, 1), (1, 2),  # 152
    (6, 0), (6, 0), (4, 2), (4, 2), (6, 0), (6, 0), (4, 2), (4, 2),  # 160
    (5, 1), (5, 1), (15, 1), (2, 2), (5, 1), (5, 1), (17, 1), (2, 2),  # 168
    (3, 1), (3, 1), (14, 1), (14, 1), (3, 1), (3, 1), (0, 2), (0, 2),  # 176
    (6, 2), (6, 2), (21, 1), (19, 1), (6, 2), (6, 2), (17, 1), (1, 2),  # 184
    (4, 0), (4, 0), (6, 1), (6, 1), (4, 0), (4, 0), (6, 1), (6, 1),  # 192
    (15, 0), (15, 0), (21, 0), (17, 0), (15, 0), (15, 0), (21, 0), (2, 2),  # 200
    (0, 0), (0, 0), (16, 1), (16, 1), (0, 0), (0, 0), (0, 1), (0, 1),  # 208
    (18, 0), (17, 0), (9, 0), (12, 0), (18, 0), (17, 0), (13, 0), (8, 0),  # 216
    (4, 0), (4, 0), (6, 1), (6, 1), (4, 0), (4, 0), (6, 1), (6, 1),  # 224
    (2, 0), (2, 0), (19, 0), (2, 1), (2, 0), (2, 0), (19, 0), (2, 1),  # 232
    (0, 0), (0, 0), (16, 1), (16, 1), (0, 0), (2, 0), (0, 1), (0, 1),  # 240
    (1, 0), (1, 0), (11, 1), (7, 1), (1, 0), (1, 0), (8, 1), (1, 1),  # 248
)

# Popcount of every mask, for whole-layer neighbour counting
POPCOUNT = np.array([bin(mask).count("1") for mask in range(256)], dtype=np.uint8)

# Column/row halves of the table, for whole-layer texture resolution
OFFSET_COLS = np.array([offset[0] for offset in TEXTURE_OFFSETS], dtype=np.int16)
OFFSET_ROWS = np.array([offset[1] for offset in TEXTURE_OFFSETS], dtype=np.int16)


def _check_mask(mask: int) -> int:
    mask = int(mask)
    if not 0 <= mask <= FULL_MASK:
        raise ValueError(f"Neighbour mask must be in [0, 255], got {mask}")
    return mask


def texture_offset(mask: int) -> Tuple[int, int]:
    """Texture (col, row) offset for a neighbour mask"""
    return TEXTURE_OFFSETS[_check_mask(mask)]


def count(mask: int) -> int:
    """Number of occupied neighbours in a mask"""
    return int(POPCOUNT[_check_mask(mask)])
