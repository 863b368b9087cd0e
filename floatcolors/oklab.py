"""
Oklab packed floats.

Byte 0 holds L (perceptual lightness, stored through ``forward_light``),
byte 1 holds A (green to red), byte 2 holds B (blue to yellow), and the top
seven bits hold alpha. A and B are centered on 127, so a neutral gray has
both at 0x7F.

This uses a gamma of 2.0 instead of the full sRGB transfer curve, which keeps
the conversion cheap and makes no visible difference at 8 bits per channel.

Gamut checks go through a 256x256 table indexed by the L byte and by hue in
1/256 turns; each entry is the largest A/B radius, in byte units, that still
converts to a valid RGB color. The table is computed on first use (see
``gamut_table``), and ``generate_gamut_lut.py`` can dump it.
"""
import functools
import logging
import math
import random as _random

import numpy as np

from .bits import float_to_int_bits, int_bits_to_float
from .mathtools import atan2_turns, clamp, cos_turns, fract, sin_turns
from .mixing import hsl2rgb, hsl_parts, lerp_float_colors

logger = logging.getLogger(__name__)

NAME = 'oklab'
CHANNELS = ('L', 'A', 'B')

GAMUT_TOLERANCE = 2.0 ** -9

# Oklab -> LMS -> linear RGB (gamma 2)
_LAB_TO_LMS = np.array([
    [1.0, 0.3963377774, 0.2158037573],
    [1.0, -0.1055613458, -0.0638541728],
    [1.0, -0.0894841775, -1.2914855480],
])
_LMS_TO_RGB = np.array([
    [4.0767245293, -3.3072168827, 0.2307590544],
    [-1.2681437731, 2.6093323231, -0.3411344290],
    [-0.0041119885, -0.7034763098, 1.7068625689],
])


def forward_light(L):
    return (L - 1.0) / (1.0 - L * 0.4285714) + 1.0


def reverse_light(L):
    return (L - 1.0) / (1.0 + L * 0.75) + 1.0


def oklab(l, a, b, alpha):
    """Pack channels in [0, 1] without clamping (out-of-range values wrap)."""
    return int_bits_to_float((int(alpha * 255) << 24 & 0xFE000000) | (int(b * 255) << 16 & 0xFF0000)
                             | (int(a * 255) << 8 & 0xFF00) | (int(l * 255) & 0xFF))


pack = oklab


def clamp_pack(l, a, b, alpha):
    return int_bits_to_float(
        min(max(int(alpha * 127.999), 0), 127) << 25
        | min(max(int(b * 255.999), 0), 255) << 16
        | min(max(int(a * 255.999), 0), 255) << 8
        | min(max(int(l * 255.999), 0), 255))


def _decode(bits):
    L = reverse_light((bits & 0xFF) / 255.0)
    # each byte holds a truncated value, so decode to the middle of its range
    A = ((bits >> 8 & 0xFF) - 127.0) / 127.999
    B = ((bits >> 16 & 0xFF) - 127.0) / 127.999
    return L, A, B


def _linear_rgb(L, A, B):
    l = (L + 0.3963377774 * A + 0.2158037573 * B) ** 3
    m = (L - 0.1055613458 * A - 0.0638541728 * B) ** 3
    s = (L - 0.0894841775 * A - 1.2914855480 * B) ** 3
    return (+4.0767245293 * l - 3.3072168827 * m + 0.2307590544 * s,
            -1.2681437731 * l + 2.6093323231 * m - 0.3411344290 * s,
            -0.0041119885 * l - 0.7034763098 * m + 1.7068625689 * s)


def _rgb_floats(bits):
    r, g, b = _linear_rgb(*_decode(bits))
    return (math.sqrt(clamp(r, 0.0, 1.0)),
            math.sqrt(clamp(g, 0.0, 1.0)),
            math.sqrt(clamp(b, 0.0, 1.0)))


def _encode(r, g, b, alpha_bits):
    # r, g, b are gamma-2 encoded floats in [0, 1]
    r, g, b = r * r, g * g, b * b
    l = max(0.4121656120 * r + 0.5362752080 * g + 0.0514575653 * b, 0.0) ** (1.0 / 3.0)
    m = max(0.2118591070 * r + 0.6807189584 * g + 0.1074065790 * b, 0.0) ** (1.0 / 3.0)
    s = max(0.0883097947 * r + 0.2818474174 * g + 0.6302613616 * b, 0.0) ** (1.0 / 3.0)
    return int_bits_to_float(
        min(max(int(forward_light(0.2104542553 * l + 0.7936177850 * m - 0.0040720468 * s) * 255.999), 0), 255)
        | min(max(int((1.9779984951 * l - 2.4285922050 * m + 0.4505937099 * s) * 127.999 + 127.5), 0), 255) << 8
        | min(max(int((0.0259040371 * l + 0.7827717662 * m - 0.8086757660 * s) * 127.999 + 127.5), 0), 255) << 16
        | alpha_bits)


def from_rgba8888(rgba):
    return _encode((rgba >> 24 & 0xFF) / 255.0, (rgba >> 16 & 0xFF) / 255.0, (rgba >> 8 & 0xFF) / 255.0,
                   (rgba & 0xFE) << 24)


def from_rgba(r, g, b, a):
    return _encode(clamp(r, 0.0, 1.0), clamp(g, 0.0, 1.0), clamp(b, 0.0, 1.0), int(a * 255.0) << 24 & 0xFE000000)


def to_rgba8888(packed):
    bits = float_to_int_bits(packed)
    r, g, b = _rgb_floats(bits)
    return (int(r * 255.999) << 24 | int(g * 255.999) << 16 | int(b * 255.999) << 8
            | (bits & 0xFE000000) >> 24 | bits >> 31)


def to_rgba(packed):
    """Converts to an RGB-space packed float (see ``floatcolors.rgb``)."""
    bits = float_to_int_bits(packed)
    r, g, b = _rgb_floats(bits)
    return int_bits_to_float(int(r * 255.999) | int(g * 255.999) << 8 | int(b * 255.999) << 16
                             | bits & 0xFE000000)


def red(encoded):
    return _rgb_floats(float_to_int_bits(encoded))[0]


def green(encoded):
    return _rgb_floats(float_to_int_bits(encoded))[1]


def blue(encoded):
    return _rgb_floats(float_to_int_bits(encoded))[2]


def red_int(encoded):
    return int(red(encoded) * 255.999)


def green_int(encoded):
    return int(green(encoded) * 255.999)


def blue_int(encoded):
    return int(blue(encoded) * 255.999)


def alpha_int(encoded):
    return (float_to_int_bits(encoded) & 0xFE000000) >> 24


def alpha(encoded):
    return alpha_int(encoded) / 254.0


def channel_l(encoded):
    return (float_to_int_bits(encoded) & 0xFF) / 255.0


def channel_a(encoded):
    return (float_to_int_bits(encoded) >> 8 & 0xFF) / 255.0


def channel_b(encoded):
    return (float_to_int_bits(encoded) >> 16 & 0xFF) / 255.0


def _offsets(bits):
    return (bits >> 8 & 0xFF) - 127, (bits >> 16 & 0xFF) - 127


def chroma(encoded):
    A, B = _offsets(float_to_int_bits(encoded))
    return math.sqrt(A * A + B * B) / 127.999


# HSL, as computed from the RGB form of the color

def hue(encoded):
    return hsl_parts(*_rgb_floats(float_to_int_bits(encoded)))[0]


def saturation(encoded):
    return hsl_parts(*_rgb_floats(float_to_int_bits(encoded)))[1]


def lightness(encoded):
    return hsl_parts(*_rgb_floats(float_to_int_bits(encoded)))[2]


def float_get_hsl(hue_, saturation_, lightness_, opacity):
    if lightness_ <= 0.001:
        return int_bits_to_float((int(opacity * 255.0) << 24 & 0xFE000000) | 0x7F7F00)
    return from_rgb_packed(hsl2rgb(hue_, saturation_, lightness_, opacity))


def from_rgb_packed(packed):
    """Converts an RGB-space packed float to Oklab."""
    bits = float_to_int_bits(packed)
    return _encode((bits & 0xFF) / 255.0, (bits >> 8 & 0xFF) / 255.0, (bits >> 16 & 0xFF) / 255.0,
                   bits & 0xFE000000)


@functools.lru_cache(maxsize=None)
def gamut_table():
    """
    Largest in-gamut A/B radius (byte units) for each L byte and hue step,
    flattened as ``L << 8 | hue``. Found by binary search along each ray.
    """
    light = reverse_light(np.arange(256) / 255.0)[:, None]
    turns = np.arange(256) / 256.0
    cos = np.cos(turns * 2.0 * np.pi)[None, :]
    sin = np.sin(turns * 2.0 * np.pi)[None, :]

    def fits(radius):
        A = cos * radius / 127.999
        B = sin * radius / 127.999
        lms = np.stack([light + _LAB_TO_LMS[i, 1] * A + _LAB_TO_LMS[i, 2] * B for i in range(3)]) ** 3
        rgb = np.tensordot(_LMS_TO_RGB, lms, axes=1)
        return np.all((rgb >= -GAMUT_TOLERANCE) & (rgb <= 1.0 + GAMUT_TOLERANCE), axis=0)

    lo = np.zeros((256, 256), dtype=np.int64)
    hi = np.full((256, 256), 127, dtype=np.int64)
    while np.any(lo < hi):
        mid = (lo + hi + 1) // 2
        ok = fits(mid)
        lo = np.where(ok, mid, lo)
        hi = np.where(ok, hi, mid - 1)
    logger.debug('computed Oklab gamut table, max radius %d', lo.max())
    return lo.astype(np.uint8).ravel()


def _gamut_radius(l_byte, hue_turns):
    return int(gamut_table()[(l_byte & 0xFF) << 8 | (int(256.0 * hue_turns) & 0xFF)])


def chroma_limit(hue_, lightness_):
    """Most chroma (in ``chroma`` units) this hue can have at this lightness."""
    l_byte = int(clamp(lightness_, 0.0, 1.0) * 255.999)
    return _gamut_radius(l_byte, fract(hue_)) / 127.999


def _fits(l_byte, A, B):
    g = _gamut_radius(l_byte, atan2_turns(B, A))
    return g * g >= A * A + B * B


def in_gamut(packed):
    bits = float_to_int_bits(packed)
    A, B = _offsets(bits)
    return _fits(bits & 0xFF, A, B)


def in_gamut_channels(L, A, B):
    if not (0.0 <= L <= 1.0 and 0.0 <= A <= 1.0 and 0.0 <= B <= 1.0):
        return False
    return _fits(int(L * 255.999), int(A * 255.999) - 127, int(B * 255.999) - 127)


def _pack_polar(l_byte, hue_turns, dist, alpha_7):
    # int() truncates toward zero, so the packed offsets never exceed dist
    return int_bits_to_float(
        alpha_7 << 25
        | min(max(int(sin_turns(hue_turns) * dist) + 127, 0), 255) << 16
        | min(max(int(cos_turns(hue_turns) * dist) + 127, 0), 255) << 8
        | l_byte)


def _pack_polar_in_gamut(l_byte, hue_turns, dist, alpha_7):
    # truncation can move the color into a narrower hue step
    dist = int(dist)
    while True:
        packed = _pack_polar(l_byte, hue_turns, dist, alpha_7)
        if dist <= 0 or in_gamut(packed):
            return packed
        dist -= 1


def limit_to_gamut(packed):
    bits = float_to_int_bits(packed)
    A, B = _offsets(bits)
    h = atan2_turns(B, A)
    dist = _gamut_radius(bits & 0xFF, h)
    if dist * dist >= A * A + B * B:
        return packed
    return _pack_polar_in_gamut(bits & 0xFF, h, dist, bits >> 25)


def limit_to_gamut_channels(L, A, B, alpha=1.0):
    return limit_to_gamut(clamp_pack(L, A, B, alpha))


def maximize_saturation(packed):
    bits = float_to_int_bits(packed)
    A, B = _offsets(bits)
    h = atan2_turns(B, A)
    return _pack_polar_in_gamut(bits & 0xFF, h, _gamut_radius(bits & 0xFF, h), bits >> 25)


def oklab_hue(packed):
    A, B = _offsets(float_to_int_bits(packed))
    return atan2_turns(B, A)


def oklab_saturation(packed):
    """Distance from gray as a fraction of the most this L and hue allow."""
    bits = float_to_int_bits(packed)
    A, B = _offsets(bits)
    dist = _gamut_radius(bits & 0xFF, atan2_turns(B, A))
    if dist == 0:
        return 0.0
    return min(math.sqrt(A * A + B * B) / dist, 1.0)


def oklab_lightness(packed):
    return channel_l(packed)


def oklab_by_hsl(hue_, saturation_, lightness_, alpha_):
    lightness_ = clamp(lightness_, 0.0, 1.0)
    saturation_ = clamp(saturation_, 0.0, 1.0)
    hue_ = fract(hue_)
    alpha_ = clamp(alpha_, 0.0, 1.0)
    l_byte = int(lightness_ * 255.999)
    dist = _gamut_radius(l_byte, hue_) * saturation_
    return _pack_polar_in_gamut(l_byte, hue_, dist, int(alpha_ * 127.999))


def oklab_by_hcl(hue_, chroma_, lightness_, alpha_):
    lightness_ = clamp(lightness_, 0.0, 1.0)
    chroma_ = max(chroma_, 0.0)
    hue_ = fract(hue_)
    alpha_ = clamp(alpha_, 0.0, 1.0)
    l_byte = int(lightness_ * 255.999)
    dist = min(chroma_ * 127.999, _gamut_radius(l_byte, hue_))
    return _pack_polar_in_gamut(l_byte, hue_, dist, int(alpha_ * 127.999))


def lighten(start, change):
    s = float_to_int_bits(start)
    i = s & 0xFF
    return int_bits_to_float((int(i + (0xFF - i) * change) & 0xFF) | s & 0xFEFFFF00)


def darken(start, change):
    s = float_to_int_bits(start)
    i = s & 0xFF
    return int_bits_to_float((int(i * (1.0 - change)) & 0xFF) | s & 0xFEFFFF00)


def raise_a(start, change):
    s = float_to_int_bits(start)
    p = s >> 8 & 0xFF
    return int_bits_to_float((int(p + (0xFF - p) * change) << 8 & 0xFF00) | s & 0xFEFF00FF)


def lower_a(start, change):
    s = float_to_int_bits(start)
    p = s >> 8 & 0xFF
    return int_bits_to_float((int(p * (1.0 - change)) & 0xFF) << 8 | s & 0xFEFF00FF)


def raise_b(start, change):
    s = float_to_int_bits(start)
    t = s >> 16 & 0xFF
    return int_bits_to_float((int(t + (0xFF - t) * change) << 16 & 0xFF0000) | s & 0xFE00FFFF)


def lower_b(start, change):
    s = float_to_int_bits(start)
    t = s >> 16 & 0xFF
    return int_bits_to_float((int(t * (1.0 - change)) & 0xFF) << 16 | s & 0xFE00FFFF)


def blot(start, change):
    s = float_to_int_bits(start)
    opacity = s >> 24 & 0xFE
    return int_bits_to_float((int(opacity + (0xFE - opacity) * change) & 0xFE) << 24 | s & 0x00FFFFFF)


def fade(start, change):
    s = float_to_int_bits(start)
    opacity = s >> 24 & 0xFE
    return int_bits_to_float((int(opacity * (1.0 - change)) & 0xFE) << 24 | s & 0x00FFFFFF)


def _scale_chroma(start, factor):
    s = float_to_int_bits(start)
    A, B = _offsets(s)
    return int_bits_to_float(
        min(max(int(B * factor) + 127, 0), 255) << 16
        | min(max(int(A * factor) + 127, 0), 255) << 8
        | s & 0xFE0000FF)


def dullen(start, change):
    return _scale_chroma(start, 1.0 - change)


def enrich(start, change):
    return limit_to_gamut(_scale_chroma(start, 1.0 + change))


def edit(encoded, add_l=0.0, add_a=0.0, add_b=0.0, add_alpha=0.0,
         mul_l=1.0, mul_a=1.0, mul_b=1.0, mul_alpha=1.0):
    bits = float_to_int_bits(encoded)
    L = (bits & 0xFF) / 255.0
    A, B = _offsets(bits)
    A /= 127.999
    B /= 127.999
    alpha_ = (bits >> 25) / 127.0
    L = clamp(L * mul_l + add_l, 0.0, 1.0)
    A = clamp(A * mul_a + add_a * 2.0, -1.0, 1.0)
    B = clamp(B * mul_b + add_b * 2.0, -1.0, 1.0)
    alpha_ = clamp(alpha_ * mul_alpha + add_alpha, 0.0, 1.0)
    return limit_to_gamut(int_bits_to_float(
        int(alpha_ * 127.999) << 25
        | min(int(B * 127.999) + 127, 255) << 16
        | min(int(A * 127.999) + 127, 255) << 8
        | int(L * 255.999)))


def random_color(rng=_random):
    while True:
        L, A, B = rng.random(), rng.random(), rng.random()
        if in_gamut_channels(L, A, B):
            return clamp_pack(L, A, B, 1.0)


# palette protocol

sort_hue = oklab_hue
sort_saturation = oklab_saturation
sort_lightness = channel_l


def coordinates(packed):
    return channel_l(packed), channel_a(packed), channel_b(packed)


def channel_values(packed):
    return channel_l(packed), channel_a(packed), channel_b(packed)
