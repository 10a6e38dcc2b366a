"""
Auto-tile table tests.

Run with: python -m pytest tests/test_autotile.py -v
"""

import pytest

from strata import autotile
from strata.config import ATLAS_WIDTH


class TestTextureOffsets:
    """Tests for the mask -> offset table"""

    def test_table_covers_every_mask(self):
        """Test that all 256 masks have an offset"""
        assert len(autotile.TEXTURE_OFFSETS) == 256

    def test_known_entries(self):
        """Test a few fixed entries of the table"""
        assert autotile.texture_offset(0) == (6, 0)
        assert autotile.texture_offset(autotile.TM) == (4, 2)
        assert autotile.texture_offset(autotile.ML) == (5, 1)
        assert autotile.texture_offset(autotile.MR) == (3, 1)
        assert autotile.texture_offset(autotile.BM) == (4, 0)
        assert autotile.texture_offset(autotile.FULL_MASK) == (1, 1)

    def test_offsets_fit_texture_block(self):
        """Test that offsets stay inside a 22x3 block"""
        for col, row in autotile.TEXTURE_OFFSETS:
            assert 0 <= col < ATLAS_WIDTH
            assert 0 <= row < 3

    def test_vectorized_halves_match(self):
        """Test that the column/row arrays mirror the table"""
        for mask, (col, row) in enumerate(autotile.TEXTURE_OFFSETS):
            assert autotile.OFFSET_COLS[mask] == col
            assert autotile.OFFSET_ROWS[mask] == row

    @pytest.mark.parametrize("mask", [-1, 256, 1000])
    def test_out_of_range_mask(self, mask):
        """Test that masks outside 0..255 are rejected"""
        with pytest.raises(ValueError):
            autotile.texture_offset(mask)
        with pytest.raises(ValueError):
            autotile.count(mask)


class TestCount:
    """Tests for neighbour counting"""

    def test_bit_weights(self):
        """Test the fixed bit layout"""
        bits = [autotile.TL, autotile.TM, autotile.TR, autotile.ML,
                autotile.MR, autotile.BL, autotile.BM, autotile.BR]
        assert bits == [1 << i for i in range(8)]

    def test_popcount(self):
        """Test counting set bits"""
        assert autotile.count(0) == 0
        assert autotile.count(autotile.FULL_MASK) == 8
        assert autotile.count(autotile.TL | autotile.BR) == 2

    def test_popcount_table(self):
        """Test the vectorized table against bin()"""
        for mask in range(256):
            assert autotile.POPCOUNT[mask] == bin(mask).count("1")
