"""
Plain RGBA packed floats: red in the low byte, then green, blue and a 7-bit
alpha. This is the same layout libGDX uses for vertex colors.
"""
import random as _random

from .bits import float_to_int_bits, int_bits_to_float, reverse_bytes
from .mathtools import clamp
from .mixing import hsl2rgb, hsl_parts, lerp_float_colors

NAME = 'rgb'
CHANNELS = ('R', 'G', 'B')


def rgb(red, green, blue, alpha):
    return int_bits_to_float((int(alpha * 255) << 24 & 0xFE000000) | (int(blue * 255) << 16 & 0xFF0000)
                             | (int(green * 255) << 8 & 0xFF00) | (int(red * 255) & 0xFF))


pack = rgb


def clamp_pack(red, green, blue, alpha):
    return int_bits_to_float(
        min(max(int(alpha * 127.999), 0), 127) << 25
        | min(max(int(blue * 255.999), 0), 255) << 16
        | min(max(int(green * 255.999), 0), 255) << 8
        | min(max(int(red * 255.999), 0), 255))


def to_rgba8888(packed):
    bits = float_to_int_bits(packed)
    # widen 7-bit alpha so that 0xFE becomes 0xFF
    bits |= (bits >> 24) * 255 // 254 << 24
    return reverse_bytes(bits)


def from_rgba8888(rgba):
    return int_bits_to_float(reverse_bytes(rgba) & 0xFEFFFFFF)


def from_rgba(r, g, b, a):
    return clamp_pack(r, g, b, a)


def to_rgba(packed):
    return packed


def red_int(encoded):
    return float_to_int_bits(encoded) & 0xFF


def green_int(encoded):
    return float_to_int_bits(encoded) >> 8 & 0xFF


def blue_int(encoded):
    return float_to_int_bits(encoded) >> 16 & 0xFF


def alpha_int(encoded):
    return (float_to_int_bits(encoded) & 0xFE000000) >> 24


def red(encoded):
    return red_int(encoded) / 255.0


def green(encoded):
    return green_int(encoded) / 255.0


def blue(encoded):
    return blue_int(encoded) / 255.0


def alpha(encoded):
    return alpha_int(encoded) / 254.0


channel_r = red
channel_g = green
channel_b = blue


def saturation(encoded):
    return hsl_parts(red(encoded), green(encoded), blue(encoded))[1]


def lightness(encoded):
    return hsl_parts(red(encoded), green(encoded), blue(encoded))[2]


def hue(encoded):
    return hsl_parts(red(encoded), green(encoded), blue(encoded))[0]


def chroma(encoded):
    return saturation(encoded)


def chroma_limit(hue_, lightness_):
    """HSL saturation reaches 1.0 at every hue and lightness."""
    return 1.0


def float_get_hsl(hue_, saturation_, lightness_, opacity):
    if lightness_ <= 0.001:
        return int_bits_to_float(int(opacity * 255.0) << 24 & 0xFE000000)
    return hsl2rgb(hue_, saturation_, lightness_, opacity)


def lighten(start, change):
    s = float_to_int_bits(start)
    r, g, b, a = s & 0xFF, s >> 8 & 0xFF, s >> 16 & 0xFF, s & 0xFE000000
    return int_bits_to_float(
        (int(r + (0xFF - r) * change) & 0xFF)
        | (int(g + (0xFF - g) * change) & 0xFF) << 8
        | (int(b + (0xFF - b) * change) & 0xFF) << 16
        | a)


def darken(start, change):
    s = float_to_int_bits(start)
    r, g, b, a = s & 0xFF, s >> 8 & 0xFF, s >> 16 & 0xFF, s & 0xFE000000
    return int_bits_to_float(
        (int(r * (1.0 - change)) & 0xFF)
        | (int(g * (1.0 - change)) & 0xFF) << 8
        | (int(b * (1.0 - change)) & 0xFF) << 16
        | a)


def _edit_hsl(encoded, saturation_scale):
    r, g, b = red(encoded), green(encoded), blue(encoded)
    h, d, lum, x = hsl_parts(r, g, b)
    sat = (x - lum) / (min(lum, 1.0 - lum) + 1e-10)
    return hsl2rgb(h, clamp(sat * saturation_scale, 0.0, 1.0), lum, alpha(encoded))


def enrich(start, change):
    return _edit_hsl(start, 1.0 + change)


def dullen(start, change):
    return _edit_hsl(start, 1.0 - change)


def blot(start, change):
    s = float_to_int_bits(start)
    opacity = s >> 24 & 0xFE
    return int_bits_to_float((int(opacity + (0xFE - opacity) * change) & 0xFE) << 24 | s & 0x00FFFFFF)


def fade(start, change):
    s = float_to_int_bits(start)
    opacity = s >> 24 & 0xFE
    return int_bits_to_float((int(opacity * (1.0 - change)) & 0xFE) << 24 | s & 0x00FFFFFF)


def in_gamut(packed):
    return True


def in_gamut_channels(r, g, b):
    return 0.0 <= r <= 1.0 and 0.0 <= g <= 1.0 and 0.0 <= b <= 1.0


def limit_to_gamut(packed):
    return packed


def random_color(rng=_random):
    return rgb(rng.random(), rng.random(), rng.random(), 1.0)


# palette protocol

def sort_hue(packed):
    return hue(packed)


def sort_saturation(packed):
    return saturation(packed)


def sort_lightness(packed):
    return lightness(packed)


def coordinates(packed):
    return red(packed), green(packed), blue(packed)


def channel_values(packed):
    return red(packed), green(packed), blue(packed)
