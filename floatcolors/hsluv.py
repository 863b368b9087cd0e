"""
HSLuv packed floats: hue in byte 0, saturation in byte 1, lightness in byte 2.

Saturation is relative to the most chroma sRGB can show at that hue and
lightness, so every combination of the three bytes is a displayable color.
The stored lightness is reshaped with ``forward_light`` to spread the dark
end over more byte values; ``reverse_light`` undoes it.
"""
import math
import random as _random

from .bits import float_to_int_bits, int_bits_to_float
from .mathtools import atan2_turns, barron_spline, clamp, cos_turns, fract, sin_turns
from .mixing import hsl2rgb, hsl_parts

NAME = 'hsluv'
CHANNELS = ('H', 'S', 'L')

_M = (
    (+3.2404542, -1.5371385, -0.4985314),
    (-0.9692660, +1.8760108, +0.0415560),
    (+0.0556434, -0.2040259, +1.0572252),
)

REF_U = 0.19783000664283
REF_V = 0.46831999493879
KAPPA = 9.032962962
EPSILON = 0.0088564516


def hsluv(h, s, l, alpha):
    return int_bits_to_float((int(alpha * 255.999) << 24 & 0xFE000000) | (int(l * 255.999) << 16 & 0xFF0000)
                             | (int(s * 255.999) << 8 & 0xFF00) | (int(h * 255.999) & 0xFF))


pack = hsluv


def clamp_pack(h, s, l, alpha):
    return int_bits_to_float(
        min(max(int(alpha * 127.999), 0), 127) << 25
        | min(max(int(l * 255.999), 0), 255) << 16
        | min(max(int(s * 255.999), 0), 255) << 8
        | min(max(int(h * 255.999), 0), 255))


def forward_light(L):
    return barron_spline(L, 0.8528, 0.1)


def reverse_light(L):
    return barron_spline(L, 1.1726, 0.1)


def _forward_gamma(component):
    if component < 0.04045:
        return component / 12.92
    return ((component + 0.055) / 1.055) ** 2.4


def _reverse_gamma(component):
    if component < 0.0031308:
        return component * 12.92
    return component ** (1.0 / 2.4) * 1.055 - 0.055


def chroma_limit(hue_, lightness_):
    """Largest chroma (in Luv units over 100) that stays in sRGB for this hue and L."""
    h = fract(hue_)
    sin = sin_turns(h)
    cos = cos_turns(h)
    sub1 = (lightness_ + 0.16) / 1.16
    sub1 *= sub1 * sub1
    sub2 = sub1 if sub1 > EPSILON else lightness_ / KAPPA
    smallest = float('inf')
    for row in _M:
        m1, m2, m3 = row[0] * sub2, row[1] * sub2, row[2] * sub2
        for t in (0, 1):
            m2 -= t
            top1 = 2845.17 * m1 - 948.39 * m3
            top2 = (8384.22 * m3 + 7698.60 * m2 + 7317.18 * m1) * lightness_
            bottom = 6322.60 * m3 - 1264.52 * m2
            if bottom == 0.0:
                continue
            denominator = sin - top1 / bottom * cos
            if denominator == 0.0:
                continue
            length = top2 / bottom / denominator
            if length >= 0.0:
                smallest = min(smallest, length)
    return 0.0 if smallest == float('inf') else smallest


def _linear_rgb(bits):
    """Unclamped linear RGB for the color in ``bits``."""
    H = (bits & 0xFF) / 255.0
    S = (bits >> 8 & 0xFF) / 255.0
    L = reverse_light((bits >> 16 & 0xFF) / 255.0)
    if L > 0.99999:
        return 1.0, 1.0, 1.0
    if L < 0.00001:
        return 0.0, 0.0, 0.0
    C = chroma_limit(H, L) * S
    U = cos_turns(H) * C
    V = sin_turns(H) * C
    if L <= 0.08:
        y = L / KAPPA
    else:
        y = (L + 0.16) / 1.16
        y *= y * y
    inverse_l = 1.0 / (13.0 * L)
    var_u = U * inverse_l + REF_U
    var_v = V * inverse_l + REF_V
    x = 9.0 * var_u * y / (4.0 * var_v)
    z = (3.0 * y / var_v) - x / 3.0 - 5.0 * y
    return tuple(row[0] * x + row[1] * y + row[2] * z for row in _M)


def _rgb_floats(bits):
    return tuple(_reverse_gamma(clamp(c, 0.0, 1.0)) for c in _linear_rgb(bits))


def _encode(r, g, b, alpha_bits):
    r, g, b = _forward_gamma(r), _forward_gamma(g), _forward_gamma(b)
    x = 0.4124564 * r + 0.3575761 * g + 0.1804375 * b
    y = 0.2126729 * r + 0.7151522 * g + 0.0721750 * b
    z = 0.0193339 * r + 0.1191920 * g + 0.9503041 * b
    L = 1.16 * y ** (1.0 / 3.0) - 0.16 if y > EPSILON else y * KAPPA
    if L < 0.00001:
        return int_bits_to_float(alpha_bits)
    if L > 0.99999:
        return int_bits_to_float(0xFF0000 | alpha_bits)
    divisor = x + 15.0 * y + 3.0 * z
    U = 13.0 * L * (4.0 * x / divisor - REF_U)
    V = 13.0 * L * (9.0 * y / divisor - REF_V)
    h = atan2_turns(V, U)
    limit = chroma_limit(h, L)
    s = min(math.sqrt(U * U + V * V) / limit, 1.0) if limit > 0.0 else 0.0
    l = forward_light(L)
    return int_bits_to_float(
        min(max(int(h * 255.999), 0), 255)
        | min(max(int(s * 255.999), 0), 255) << 8
        | min(max(int(l * 255.999), 0), 255) << 16
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


def channel_h(encoded):
    return (float_to_int_bits(encoded) & 0xFF) / 255.0


def channel_s(encoded):
    return (float_to_int_bits(encoded) >> 8 & 0xFF) / 255.0


def channel_l(encoded):
    return (float_to_int_bits(encoded) >> 16 & 0xFF) / 255.0


hsluv_hue = channel_h
hsluv_saturation = channel_s
hsluv_lightness = channel_l


def chroma(encoded):
    bits = float_to_int_bits(encoded)
    L = reverse_light((bits >> 16 & 0xFF) / 255.0)
    if L > 0.99999 or L < 0.00001:
        return 0.0
    return chroma_limit((bits & 0xFF) / 255.0, L) * ((bits >> 8 & 0xFF) / 255.0)


def hue(encoded):
    return hsl_parts(*_rgb_floats(float_to_int_bits(encoded)))[0]


def saturation(encoded):
    return hsl_parts(*_rgb_floats(float_to_int_bits(encoded)))[1]


def lightness(encoded):
    return hsl_parts(*_rgb_floats(float_to_int_bits(encoded)))[2]


def float_get_hsl(hue_, saturation_, lightness_, opacity):
    if lightness_ <= 0.001:
        return int_bits_to_float(int(opacity * 255.0) << 24 & 0xFE000000)
    if lightness_ >= 0.999:
        return int_bits_to_float((int(opacity * 255.0) << 24 & 0xFE000000) | 0xFF0000)
    return from_rgb_packed(hsl2rgb(hue_, saturation_, lightness_, opacity))


def hsluv_by_hcl(hue_, chroma_, lightness_, alpha_):
    hue_ = fract(hue_)
    alpha_ = clamp(alpha_, 0.0, 1.0)
    if lightness_ <= 0.0:
        return hsluv(hue_, 0.0, 0.0, alpha_)
    if lightness_ >= 1.0:
        return hsluv(hue_, 0.0, 1.0, alpha_)
    limit = chroma_limit(hue_, reverse_light(lightness_))
    return clamp_pack(hue_, max(chroma_, 0.0) / (limit + 0.0001), lightness_, alpha_)


def hsluv_by_hsl(hue_, saturation_, lightness_, alpha_):
    return clamp_pack(fract(hue_), saturation_, lightness_, alpha_)


def in_gamut(packed):
    return True


def in_gamut_channels(h, s, l):
    return 0.0 <= s <= 1.0 and 0.0 <= l <= 1.0


def limit_to_gamut(packed):
    return packed


def limit_to_gamut_channels(h, s, l, alpha_=1.0):
    return clamp_pack(fract(h), s, l, alpha_)


def maximize_saturation(packed):
    return int_bits_to_float(float_to_int_bits(packed) | 0x0000FF00)


def lighten(start, change):
    s = float_to_int_bits(start)
    t = s >> 16 & 0xFF
    return int_bits_to_float((int(t + (0xFF - t) * change) << 16 & 0xFF0000) | s & 0xFE00FFFF)


def darken(start, change):
    s = float_to_int_bits(start)
    t = s >> 16 & 0xFF
    return int_bits_to_float((int(t * (1.0 - change)) & 0xFF) << 16 | s & 0xFE00FFFF)


def enrich(start, change):
    s = float_to_int_bits(start)
    p = s >> 8 & 0xFF
    return int_bits_to_float((int(p + (0xFF - p) * change) << 8 & 0xFF00) | s & 0xFEFF00FF)


def dullen(start, change):
    s = float_to_int_bits(start)
    p = s >> 8 & 0xFF
    return int_bits_to_float((int(p * (1.0 - change)) & 0xFF) << 8 | s & 0xFEFF00FF)


def rotate_h(start, change):
    s = float_to_int_bits(start)
    i = s & 0xFF
    return int_bits_to_float((int(i + 256.0 * change) & 0xFF) | s & 0xFEFFFF00)


def blot(start, change):
    s = float_to_int_bits(start)
    opacity = s >> 24 & 0xFE
    return int_bits_to_float((int(opacity + (0xFE - opacity) * change) & 0xFE) << 24 | s & 0x00FFFFFF)


def fade(start, change):
    s = float_to_int_bits(start)
    opacity = s >> 24 & 0xFE
    return int_bits_to_float((int(opacity * (1.0 - change)) & 0xFE) << 24 | s & 0x00FFFFFF)


def _luv(bits):
    """(L, U, V) with L undone from its stored shape."""
    h = (bits & 0xFF) / 255.0
    l_byte = bits >> 16 & 0xFF
    if l_byte == 255:
        return 1.0, 0.0, 0.0
    if l_byte == 0:
        return 0.0, 0.0, 0.0
    L = reverse_light(l_byte / 255.0)
    c = chroma_limit(h, L) * ((bits >> 8 & 0xFF) / 255.0)
    return L, cos_turns(h) * c, sin_turns(h) * c


def lerp_float_colors(start, end, change):
    """Interpolates through Luv so the hue takes the short way around."""
    s = float_to_int_bits(start)
    e = float_to_int_bits(end)
    a_s, a_e = s >> 24 & 0xFE, e >> 24 & 0xFE
    alpha_bits = (int(a_s + change * (a_e - a_s)) & 0xFE) << 24
    Ls, Us, Vs = _luv(s)
    Le, Ue, Ve = _luv(e)
    L = Ls + change * (Le - Ls)
    U = Us + change * (Ue - Us)
    V = Vs + change * (Ve - Vs)
    if L > 0.99999:
        return int_bits_to_float(0xFF0000 | alpha_bits)
    if L < 0.00001:
        return int_bits_to_float(alpha_bits)
    h = atan2_turns(V, U)
    limit = chroma_limit(h, L)
    sat = min(math.sqrt(U * U + V * V) / limit, 1.0) if limit > 0.0 else 0.0
    return int_bits_to_float(
        min(max(int(h * 255.999), 0), 255)
        | min(max(int(sat * 255.999), 0), 255) << 8
        | min(max(int(forward_light(L) * 255.999), 0), 255) << 16
        | alpha_bits)


def edit(encoded, add_h=0.0, add_s=0.0, add_l=0.0, add_alpha=0.0,
         mul_h=1.0, mul_s=1.0, mul_l=1.0, mul_alpha=1.0):
    bits = float_to_int_bits(encoded)
    h = fract((bits & 0xFF) / 255.0 * mul_h + add_h)
    s = clamp((bits >> 8 & 0xFF) / 255.0 * mul_s + add_s, 0.0, 1.0)
    l = clamp((bits >> 16 & 0xFF) / 255.0 * mul_l + add_l, 0.0, 1.0)
    alpha_ = clamp((bits >> 25) / 127.0 * mul_alpha + add_alpha, 0.0, 1.0)
    return clamp_pack(h, s, l, alpha_)


def random_color(rng=_random):
    return hsluv(rng.random(), rng.random(), rng.random(), 1.0)


# palette protocol

sort_hue = channel_h
sort_saturation = channel_s
sort_lightness = channel_l


def coordinates(packed):
    """Cylindrical bytes unrolled to a cone so nearby hues stay close."""
    s = channel_s(packed)
    h = channel_h(packed)
    return channel_l(packed), s * cos_turns(h) * 0.5, s * sin_turns(h) * 0.5


def channel_values(packed):
    return channel_h(packed), channel_s(packed), channel_l(packed)
