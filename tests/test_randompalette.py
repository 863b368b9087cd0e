import functools

import pytest

from floatcolors import hsluv, oklab, rgb
from floatcolors.bits import float_to_int_bits
from floatcolors.randompalette import SEED_GRAYS, RandomPaletteBuilder, gaussian_color, halton_color


class TestSamplers:
    def test_halton_color(self):
        assert halton_color(1) == oklab.pack(0.5, 1 / 3, 0.2, 1.0)

    def test_halton_color_in_other_space(self):
        assert halton_color(1, space=rgb) == rgb.pack(0.5, 1 / 3, 0.2, 1.0)

    @pytest.mark.parametrize('sat', [None, 0.2])
    def test_gaussian_color_is_opaque(self, sat):
        for index in range(1, 20):
            assert float_to_int_bits(gaussian_color(index, sat)) >> 25 == 127


class TestBuilder:
    def test_seeds(self):
        builder = RandomPaletteBuilder(limit=16)
        assert len(builder) == 1 + len(SEED_GRAYS)
        assert builder.rgba[0] == 0
        assert builder.rgba[1:] == list(SEED_GRAYS)
        assert len(builder.colors) == len(SEED_GRAYS)

    def test_limit_below_seeds(self):
        values = RandomPaletteBuilder(limit=4).build(progress=False)
        assert values == [0, 0x010101FF, 0xFEFEFEFF, 0x777777FF]

    def test_build_fills_to_limit(self):
        values = RandomPaletteBuilder(limit=16).build(progress=False)
        assert len(values) == 16
        assert len(set(values)) == 16
        assert all(v & 0xFF == 0xFF for v in values[1:])

    def test_build_with_gaussian_sampler(self):
        sampler = functools.partial(gaussian_color, sat=0.3)
        values = RandomPaletteBuilder(limit=14).build(sampler, progress=False)
        assert len(values) == 14

    def test_build_in_hsluv(self):
        sampler = functools.partial(halton_color, space=hsluv)
        values = RandomPaletteBuilder(limit=12, space=hsluv).build(sampler, progress=False)
        assert len(values) == 12

    def test_rejects_close_colors(self):
        builder = RandomPaletteBuilder(limit=16)
        assert not builder.add_color(builder.colors[2])

    def test_rejects_out_of_gamut(self):
        builder = RandomPaletteBuilder(limit=16)
        assert not builder.add_color(oklab.clamp_pack(0.5, 1.0, 1.0, 1.0))

    def test_accepts_color_in_empty_palette(self):
        builder = RandomPaletteBuilder(limit=16, seeds=())
        assert builder.add_color(oklab.from_rgba8888(0x808080FF))
        assert builder.rgba[-1] & 0xFF == 0xFF

    def test_gives_up(self):
        with pytest.raises(RuntimeError, match='placed only'):
            RandomPaletteBuilder(limit=20, max_attempts=0).build(progress=False)

    def test_limit_must_be_positive(self):
        with pytest.raises(ValueError):
            RandomPaletteBuilder(limit=0)
