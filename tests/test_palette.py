import pytest

from floatcolors import oklab, rgb
from floatcolors.bits import float_to_int_bits
from floatcolors.colordata import ColorEntry
from floatcolors.palette import COMBINED_ADJECTIVES, MODIFIERS, SIMPLE_ALIASES, Palette, simple_palette


class TestModifiers:
    def test_four_strengths(self):
        assert MODIFIERS['light'] == pytest.approx((0.15, 0.0))
        assert MODIFIERS['darker'] == pytest.approx((-0.3, 0.0))
        assert MODIFIERS['richest'] == pytest.approx((0.0, 0.45))
        assert MODIFIERS['dullmost'] == pytest.approx((0.0, -0.7))

    def test_words_ending_in_e(self):
        assert 'paler' in MODIFIERS
        assert 'palest' in MODIFIERS
        assert 'palemost' in MODIFIERS
        assert MODIFIERS['pale'] == pytest.approx((0.15, -0.1))

    def test_bright_schedule(self):
        assert MODIFIERS['brighter'] == pytest.approx((0.3, 0.2))
        assert MODIFIERS['brightmost'] == pytest.approx((0.6, 0.65))

    def test_adjective_grid(self):
        assert len(COMBINED_ADJECTIVES) == 81
        assert COMBINED_ADJECTIVES[4 * 9 + 4] == ''
        assert COMBINED_ADJECTIVES[4 * 9 + 5] == 'light'
        assert COMBINED_ADJECTIVES[5 * 9 + 4] == 'rich'
        assert COMBINED_ADJECTIVES[2 * 9 + 7] == 'lightest duller'
        assert COMBINED_ADJECTIVES[3 * 9 + 3] == 'weak'
        assert COMBINED_ADJECTIVES[3 * 9 + 5] == 'pale'
        assert COMBINED_ADJECTIVES[5 * 9 + 3] == 'deep'
        assert COMBINED_ADJECTIVES[0] == 'weakmost'
        assert COMBINED_ADJECTIVES[80] == 'brightmost'


class TestSimplePalette:
    def test_sizes(self, oklab_palette):
        assert len(oklab_palette) == 50
        assert len(oklab_palette.colors) == 50
        assert len(oklab_palette.named) == 50 + len(SIMPLE_ALIASES)

    def test_aliases(self, oklab_palette):
        assert 'grey' in oklab_palette
        assert 'grey' not in oklab_palette.names
        assert oklab_palette['grey'] == oklab_palette['gray']
        assert oklab_palette['gold'] == oklab_palette['saffron']

    def test_cached_per_space(self):
        assert simple_palette('oklab') is simple_palette('oklab')
        assert simple_palette('oklab') is not simple_palette('rgb')

    def test_get_defaults_to_transparent(self, oklab_palette):
        assert oklab_palette.get('nope') == oklab_palette.transparent
        assert oklab_palette.get('nope', 1.5) == 1.5
        assert oklab_palette.get('red') == oklab_palette['red']

    def test_hue_order_starts_with_transparent_then_grays(self, oklab_palette):
        assert oklab_palette.names_by_hue[:5] == ['transparent', 'black', 'gray', 'silver', 'white']
        assert oklab_palette.colors_by_hue[0] == oklab_palette['transparent']

    def test_lightness_order(self, oklab_palette):
        lightness = [oklab.channel_l(oklab_palette[n]) for n in oklab_palette.names_by_lightness]
        assert lightness == sorted(lightness)
        assert oklab_palette.names_by_lightness[-1] == 'white'

    def test_bad_alias(self, tiny_entries):
        with pytest.raises(ValueError, match='unknown color'):
            Palette(rgb, tiny_entries, {'crimson': 'scarlet'})


class TestParseDescription:
    def test_single_name(self, oklab_palette):
        assert oklab_palette.parse_description('gray') == oklab_palette['gray']

    def test_case_and_punctuation(self, oklab_palette):
        assert oklab_palette.parse_description('  GRAY! ') == oklab_palette['gray']

    def test_even_mix(self, oklab_palette):
        assert float_to_int_bits(oklab_palette.parse_description('black white')) == 0xFE7F7F7F

    def test_lightness_words(self, oklab_palette):
        gray = oklab_palette['gray']
        assert oklab.channel_l(oklab_palette.parse_description('lighter gray')) > oklab.channel_l(gray)
        assert oklab.channel_l(oklab_palette.parse_description('darkest gray')) < oklab.channel_l(gray)

    def test_saturation_words_stay_in_gamut(self, oklab_palette):
        for text in ('richmost red', 'deepest blue', 'brightmost lime', 'dullest rose'):
            assert oklab.in_gamut(oklab_palette.parse_description(text))

    def test_dull_reduces_chroma(self, oklab_palette):
        rich = oklab_palette.parse_description('cobalt')
        dull = oklab_palette.parse_description('dullest cobalt')
        assert oklab.chroma(dull) < oklab.chroma(rich)

    def test_unknown_word_is_transparent(self, oklab_palette):
        assert oklab_palette.parse_description('blorp') == oklab_palette.transparent
        assert oklab_palette.parse_description('') == oklab_palette.transparent


class TestBestMatch:
    def test_exact_color(self, rgb_palette):
        assert rgb_palette.best_match(rgb_palette['red']) == 'red'

    def test_gray_prefers_plain_description(self, oklab_palette):
        assert oklab_palette.best_match(oklab_palette['gray']) == 'gray'

    def test_modified_color(self, tiny_rgb_palette):
        target = tiny_rgb_palette.parse_description('darker red')
        assert tiny_rgb_palette.best_match(target) == 'darker red'

    def test_two_color_mix(self, tiny_rgb_palette):
        target = tiny_rgb_palette.parse_description('black white')
        assert sorted(tiny_rgb_palette.best_match(target, mix_count=2).split()) == ['black', 'white']

    def test_needs_opaque_colors(self):
        palette = Palette(rgb, [ColorEntry('TRANSPARENT', 0, 'transparent')])
        with pytest.raises(ValueError, match='no opaque colors'):
            palette.best_match(palette.transparent)


class TestNearest:
    def test_self_is_nearest(self, rgb_palette):
        assert rgb_palette.nearest(rgb_palette['cyan']) == ['cyan']

    def test_k_is_capped(self, tiny_rgb_palette):
        assert len(tiny_rgb_palette.nearest(tiny_rgb_palette['red'], k=50)) == len(tiny_rgb_palette)

    def test_order(self, tiny_rgb_palette):
        near = tiny_rgb_palette.nearest(rgb.from_rgba8888(0xF00000FF), k=2)
        assert near[0] == 'red'
