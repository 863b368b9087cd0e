import numpy as np
import pytest

from floatcolors import oklab
from floatcolors.bits import float_to_int_bits, int_bits_to_float

BLACK = oklab.from_rgba8888(0x000000FF)
WHITE = oklab.from_rgba8888(0xFFFFFFFF)
GRAY = oklab.from_rgba8888(0x808080FF)


def with_offsets(l_byte, a_offset, b_offset):
    return int_bits_to_float(0xFE000000 | (127 + b_offset) << 16 | (127 + a_offset) << 8 | l_byte)


class TestConversions:
    def test_black_bits(self):
        assert float_to_int_bits(BLACK) == 0xFE7F7F00

    def test_white_bits(self):
        assert float_to_int_bits(WHITE) == 0xFE7F7FFF

    def test_transparent_bits(self):
        assert float_to_int_bits(oklab.from_rgba8888(0)) == 0x007F7F00

    def test_grays_have_no_chroma(self):
        for gray in (BLACK, GRAY, WHITE):
            assert oklab.chroma(gray) == 0.0
            assert oklab.oklab_saturation(gray) == 0.0

    def test_light_reshaping_inverts(self):
        for x in (0.0, 0.25, 0.5, 0.9, 1.0):
            assert oklab.reverse_light(oklab.forward_light(x)) == pytest.approx(x, abs=1e-3)

    def test_float_get_hsl_black(self):
        assert float_to_int_bits(oklab.float_get_hsl(0.5, 1.0, 0.0, 1.0)) == 0xFE7F7F00

    def test_red_points_along_positive_a(self):
        red = oklab.from_rgba8888(0xFF0000FF)
        assert oklab.channel_a(red) > 0.5
        assert oklab.chroma(red) > 0.1


class TestGamutTable:
    def test_shape(self):
        table = oklab.gamut_table()
        assert table.shape == (256 * 256,)
        assert table.dtype == np.uint8
        assert table.max() <= 127

    def test_mid_lightness_has_room_for_every_hue(self):
        row = oklab.gamut_table()[128 << 8:129 << 8]
        assert row.min() > 0

    def test_chroma_limit_matches_table(self):
        assert oklab.chroma_limit(0.0, 128.5 / 255.999) == pytest.approx(oklab.gamut_table()[128 << 8] / 127.999)


class TestGamut:
    def test_channels(self):
        assert oklab.in_gamut_channels(0.5, 0.5, 0.5)
        assert not oklab.in_gamut_channels(0.5, 1.0, 1.0)
        assert not oklab.in_gamut_channels(1.5, 0.5, 0.5)

    def test_limit_pulls_toward_gray(self):
        wild = oklab.clamp_pack(0.5, 1.0, 1.0, 1.0)
        assert not oklab.in_gamut(wild)
        limited = oklab.limit_to_gamut(wild)
        assert oklab.in_gamut(limited)
        assert oklab.chroma(limited) < oklab.chroma(wild)
        assert oklab.channel_l(limited) == oklab.channel_l(wild)
        assert oklab.alpha_int(limited) == 0xFE

    def test_limit_keeps_in_gamut_colors(self):
        assert oklab.limit_to_gamut(GRAY) == GRAY

    @pytest.mark.parametrize('hue', [0.0, 0.1, 0.35, 0.6, 0.85])
    def test_polar_constructors_stay_in_gamut(self, hue):
        assert oklab.in_gamut(oklab.oklab_by_hsl(hue, 1.0, 0.6, 1.0))
        assert oklab.in_gamut(oklab.oklab_by_hcl(hue, 5.0, 0.6, 1.0))
        assert oklab.in_gamut(oklab.maximize_saturation(oklab.oklab_by_hsl(hue, 0.2, 0.6, 1.0)))

    def test_zero_chroma_is_gray(self):
        gray = oklab.oklab_by_hcl(0.3, 0.0, 0.5, 1.0)
        assert oklab.channel_a(gray) == 127 / 255.0
        assert oklab.channel_b(gray) == 127 / 255.0


class TestEdits:
    def test_dullen_halves_offsets(self):
        dulled = oklab.dullen(with_offsets(128, 20, -10), 0.5)
        bits = float_to_int_bits(dulled)
        assert (bits >> 8 & 0xFF) - 127 == 10
        assert (bits >> 16 & 0xFF) - 127 == -5

    def test_enrich_leaves_gray_alone(self):
        assert oklab.enrich(GRAY, 0.5) == GRAY

    def test_enrich_stays_in_gamut(self):
        assert oklab.in_gamut(oklab.enrich(with_offsets(128, 20, -10), 3.0))

    def test_raise_and_lower_a(self):
        color = with_offsets(128, 0, 0)
        assert oklab.channel_a(oklab.raise_a(color, 0.5)) > oklab.channel_a(color)
        assert oklab.channel_a(oklab.lower_a(color, 0.5)) < oklab.channel_a(color)
        assert oklab.channel_b(oklab.raise_b(color, 0.5)) > oklab.channel_b(color)

    def test_edit_lightness(self):
        assert oklab.channel_l(oklab.edit(GRAY, add_l=0.1)) > oklab.channel_l(GRAY)
        assert oklab.alpha(oklab.edit(GRAY, mul_alpha=0.0)) == 0.0

    def test_mix_black_and_white(self):
        assert float_to_int_bits(oklab.lerp_float_colors(BLACK, WHITE, 0.5)) == 0xFE7F7F7F
