"""
CIELAB packed floats: L in byte 0, A in byte 1, B in byte 2, 7-bit alpha.

L is stored as ``1.16 * f(Y) - 0.16`` so it matches L* / 100. A stores
``(f(X) - f(Y)) * 5`` and B stores ``(f(Y) - f(Z)) * 2``, both centered on
127. XYZ is not divided by the white point, so grays sit a little off center
(white stores A = 116, B = 120).
"""
import math
import random as _random

from .bits import float_to_int_bits, int_bits_to_float
from .mathtools import atan2_turns, clamp, cos_turns, fract, sin_turns
from .mixing import hsl2rgb, hsl_parts, lerp_float_colors

NAME = 'cielab'
CHANNELS = ('L', 'A', 'B')

MAX_CHROMA = 1.26365817
SEARCH_STEPS = 20


def cielab(l, a, b, alpha):
    return int_bits_to_float((int(alpha * 255.999) << 24 & 0xFE000000) | (int(b * 255.999) << 16 & 0xFF0000)
                             | (int(a * 255.999) << 8 & 0xFF00) | (int(l * 255.999) & 0xFF))


pack = cielab


def clamp_pack(l, a, b, alpha):
    return int_bits_to_float(
        min(max(int(alpha * 127.999), 0), 127) << 25
        | min(max(int(b * 255.999), 0), 255) << 16
        | min(max(int(a * 255.999), 0), 255) << 8
        | min(max(int(l * 255.999), 0), 255))


def _forward_gamma(component):
    if component < 0.04045:
        return component / 12.92
    return ((component + 0.055) / 1.055) ** 2.4


def _reverse_gamma(component):
    if component < 0.0031308:
        return component * 12.92
    return component ** (1.0 / 2.4) * 1.055 - 0.055


def _forward_xyz(t):
    return 7.787037 * t + 0.139731 if t < 0.00885645 else t ** (1.0 / 3.0)


def _reverse_xyz(t):
    return 0.1284185 * (t - 0.139731) if t < 0.20689655 else t * t * t


def _linear_rgb(L, A, B):
    """L, A, B already scaled; returns unclamped linear RGB."""
    x = _reverse_xyz(L + A)
    y = _reverse_xyz(L)
    z = _reverse_xyz(L - B)
    return (+3.2404542 * x - 1.5371385 * y - 0.4985314 * z,
            -0.9692660 * x + 1.8760108 * y + 0.0415560 * z,
            +0.0556434 * x - 0.2040259 * y + 1.0572252 * z)


def _decode(bits):
    L = ((bits & 0xFF) / 255.0 + 0.16) / 1.16
    A = ((bits >> 8 & 0xFF) - 127.0) / (127.999 * 5.0)
    B = ((bits >> 16 & 0xFF) - 127.0) / (127.999 * 2.0)
    return L, A, B


def _rgb_floats(bits):
    return tuple(_reverse_gamma(clamp(c, 0.0, 1.0)) for c in _linear_rgb(*_decode(bits)))


def _encode(r, g, b, alpha_bits):
    r, g, b = _forward_gamma(r), _forward_gamma(g), _forward_gamma(b)
    x = _forward_xyz(0.4124564 * r + 0.3575761 * g + 0.1804375 * b)
    y = _forward_xyz(0.2126729 * r + 0.7151522 * g + 0.0721750 * b)
    z = _forward_xyz(0.0193339 * r + 0.1191920 * g + 0.9503041 * b)
    return int_bits_to_float(
        min(max(int((1.16 * y - 0.16) * 255.999), 0), 255)
        | min(max(int((x - y) * (127.999 * 5.0) + 127.5), 0), 255) << 8
        | min(max(int((y - z) * (127.999 * 2.0) + 127.5), 0), 255) << 16
        | alpha_bits)


def from_rgba8888(rgba):
    return _encode((rgba >> 24 & 0xFF) / 255.0, (rgba >> 16 & 0xFF) / 255.0, (rgba >> 8 & 0xFF) / 255.0,
                   (rgba & 0xFE) << 24)


def from_rgba(r, g, b, a):
    return _encode(clamp(r, 0.0, 1.0), clamp(g, 0.0, 1.0), clamp(b, 0.0, 1.0), int(a * 255.0) << 24 & 0xFE000000)


def from_rgb_packed(packed):
    bits = float_to_int_bits(packed)
    return _encode((bits & 0xFF) / 255.0, (bits >> 8 & 0xFF) / 255.0, (bits >> 16 & 0xFF) / 255.0,
                   bits & 0xFE000000)


def to_rgba8888(packed):
    bits = float_to_int_bits(packed)
    r, g, b = _rgb_floats(bits)
    return (int(r * 255.999) << 24 | int(g * 255.999) << 16 | int(b * 255.999) << 8
            | (bits & 0xFE000000) >> 24 | bits >> 31)


def to_rgba(packed):
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


def _offsets(bits):
    return (bits >> 8 & 0xFF) - 127, (bits >> 16 & 0xFF) - 127


def chroma(encoded):
    A, B = _offsets(float_to_int_bits(encoded))
    return math.sqrt(A * A + B * B) / 127.999


def _fits(L, A, B):
    r, g, b = _linear_rgb(L, A, B)
    tol = 2.0 ** -8
    return -tol < r < 1.0 + tol and -tol < g < 1.0 + tol and -tol < b < 1.0 + tol


def _largest_fitting_scale(L, A, B):
    """Largest t in [0, 1] with (L, t*A, t*B) still in gamut."""
    if _fits(L, A, B):
        return 1.0
    lo, hi = 0.0, 1.0
    for _ in range(SEARCH_STEPS):
        mid = (lo + hi) * 0.5
        if _fits(L, A * mid, B * mid):
            lo = mid
        else:
            hi = mid
    return lo


def chroma_limit(hue_, lightness_):
    """Most chroma (as ``chroma`` measures it) available at this hue and L."""
    h = fract(hue_)
    L = (clamp(lightness_, 0.0, 1.0) + 0.16) / 1.16
    A = cos_turns(h) * MAX_CHROMA
    B = sin_turns(h) * MAX_CHROMA
    t = _largest_fitting_scale(L, A * 0.2, B * 0.5)
    return MAX_CHROMA * t


def cielab_hue(packed):
    A, B = _offsets(float_to_int_bits(packed))
    return atan2_turns(B, A)


def cielab_saturation(packed):
    limit = chroma_limit(cielab_hue(packed), channel_l(packed))
    if limit <= 0.0:
        return 0.0
    return min(chroma(packed) / limit, 1.0)


def cielab_lightness(packed):
    return channel_l(packed)


def cielab_by_hcl(hue_, chroma_, lightness_, alpha_):
    h = fract(hue_)
    lightness_ = clamp(lightness_, 0.0, 1.0)
    c = min(max(chroma_, 0.0), chroma_limit(h, lightness_)) * 127.999
    alpha_ = clamp(alpha_, 0.0, 1.0)
    return limit_to_gamut(int_bits_to_float(
        int(alpha_ * 127.999) << 25
        | min(max(int(sin_turns(h) * c) + 127, 0), 255) << 16
        | min(max(int(cos_turns(h) * c) + 127, 0), 255) << 8
        | int(lightness_ * 255.999)))


def cielab_by_hsl(hue_, saturation_, lightness_, alpha_):
    h = fract(hue_)
    lightness_ = clamp(lightness_, 0.0, 1.0)
    return cielab_by_hcl(h, chroma_limit(h, lightness_) * clamp(saturation_, 0.0, 1.0), lightness_, alpha_)


def in_gamut(packed):
    return _fits(*_decode(float_to_int_bits(packed)))


def in_gamut_channels(L, A, B):
    if not (0.0 <= L <= 1.0 and 0.0 <= A <= 1.0 and 0.0 <= B <= 1.0):
        return False
    return in_gamut(clamp_pack(L, A, B, 1.0))


def limit_to_gamut(packed):
    bits = float_to_int_bits(packed)
    L, A, B = _decode(bits)
    t = _largest_fitting_scale(L, A, B)
    if t >= 1.0:
        return packed
    # int() truncates toward zero, so the scaled offsets never grow
    A, B = _offsets(bits)
    a_off = int(A * t)
    b_off = int(B * t)
    return int_bits_to_float((bits & 0xFE0000FF) | (127 + a_off) << 8 | (127 + b_off) << 16)


def limit_to_gamut_channels(L, A, B, alpha_=1.0):
    return limit_to_gamut(clamp_pack(L, A, B, alpha_))


def maximize_saturation(packed):
    bits = float_to_int_bits(packed)
    h = cielab_hue(packed)
    return cielab_by_hcl(h, MAX_CHROMA, channel_l(packed), (bits >> 25) / 127.0)


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
    """Adds are in channel units, so ``add_a=0.5`` moves A halfway to its maximum."""
    bits = float_to_int_bits(encoded)
    A, B = _offsets(bits)
    L = clamp((bits & 0xFF) / 255.0 * mul_l + add_l, 0.0, 1.0)
    A = clamp(A / 255.999 * mul_a + add_a, -0.5, 0.5)
    B = clamp(B / 255.999 * mul_b + add_b, -0.5, 0.5)
    alpha_ = clamp((bits >> 25) / 127.0 * mul_alpha + add_alpha, 0.0, 1.0)
    return limit_to_gamut(int_bits_to_float(
        int(alpha_ * 127.999) << 25
        | min(int(B * 255.999) + 127, 255) << 16
        | min(int(A * 255.999) + 127, 255) << 8
        | int(L * 255.999)))


def random_color(rng=_random):
    while True:
        L, A, B = rng.random(), rng.random(), rng.random()
        if in_gamut_channels(L, A, B):
            return clamp_pack(L, A, B, 1.0)


# palette protocol

sort_hue = cielab_hue
sort_saturation = cielab_saturation
sort_lightness = channel_l


def coordinates(packed):
    return channel_l(packed), channel_a(packed), channel_b(packed)


def channel_values(packed):
    return channel_l(packed), channel_a(packed), channel_b(packed)
