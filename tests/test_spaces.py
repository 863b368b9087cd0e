"""Behavior every color-space module shares."""
import random

import pytest

from floatcolors import cielab, hsluv, oklab, rgb
from floatcolors.spaces import DEFAULT_SPACE, SPACES, get_space

GRAYS = [0x333333FF, 0x808080FF, 0xC8C8C8FF]


def channels(rgba):
    return [rgba >> 24 & 0xFF, rgba >> 16 & 0xFF, rgba >> 8 & 0xFF, rgba & 0xFF]


class TestLookup:
    def test_by_name(self):
        assert get_space('oklab') is oklab
        assert get_space('CIELAB') is cielab
        assert get_space('HSLuv') is hsluv
        assert get_space('rgb') is rgb

    def test_unknown_name(self):
        with pytest.raises(ValueError, match='unknown color space'):
            get_space('cmyk')

    def test_default_is_registered(self):
        assert DEFAULT_SPACE in SPACES

    def test_names_match_modules(self):
        for name, module in SPACES.items():
            assert module.NAME == name
            assert len(module.CHANNELS) == 3


class TestConversions:
    @pytest.mark.parametrize('rgba', [0x000000FF, 0xFFFFFFFF])
    def test_black_and_white_are_exact(self, space, rgba):
        assert space.to_rgba8888(space.from_rgba8888(rgba)) == rgba

    @pytest.mark.parametrize('rgba', GRAYS)
    def test_grays_stay_close(self, space, rgba):
        back = space.to_rgba8888(space.from_rgba8888(rgba))
        for expected, actual in zip(channels(rgba), channels(back)):
            assert abs(expected - actual) <= 3

    @pytest.mark.parametrize('rgba', [0x00000000, 0x12345680, 0xFF000002, 0xABCDEFFE])
    def test_even_alpha_is_kept(self, space, rgba):
        assert space.alpha_int(space.from_rgba8888(rgba)) == rgba & 0xFE

    def test_from_rgba_matches_from_rgba8888(self, space):
        assert space.from_rgba(1.0, 1.0, 1.0, 1.0) == space.from_rgba8888(0xFFFFFFFF)
        assert space.from_rgba(0.0, 0.0, 0.0, 1.0) == space.from_rgba8888(0x000000FF)

    def test_to_rgba_is_rgb_packed(self, space):
        white = space.from_rgba8888(0xFFFFFFFF)
        assert rgb.to_rgba8888(space.to_rgba(white)) == 0xFFFFFFFF


class TestGamutAndEdits:
    @pytest.mark.parametrize('rgba', GRAYS)
    def test_grays_in_gamut(self, space, rgba):
        gray = space.from_rgba8888(rgba)
        assert space.in_gamut(gray)
        assert space.limit_to_gamut(gray) == gray

    def test_random_color_in_gamut(self, space):
        rng = random.Random(3)
        for _ in range(20):
            assert space.in_gamut(space.random_color(rng))

    def test_lighten_and_darken(self, space):
        gray = space.from_rgba8888(0x808080FF)
        assert space.sort_lightness(space.lighten(gray, 0.5)) > space.sort_lightness(gray)
        assert space.sort_lightness(space.darken(gray, 0.5)) < space.sort_lightness(gray)

    def test_fade_and_blot(self, space):
        gray = space.from_rgba8888(0x808080FF)
        faded = space.fade(gray, 0.5)
        assert space.alpha_int(faded) == 126
        assert space.alpha_int(space.blot(faded, 1.0)) == 0xFE

    def test_coordinates_are_three_floats(self, space):
        coords = space.coordinates(space.from_rgba8888(0x8F573BFF))
        assert len(coords) == 3
        assert all(isinstance(float(c), float) for c in coords)
