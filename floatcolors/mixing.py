"""
Space-independent operations on packed float colors.

Everything here works channel-by-channel on the raw bytes, so it is only
meaningful when every color passed in uses the same color space.
"""
from .bits import float_to_int_bits, int_bits_to_float
from .mathtools import clamp


def lerp_float_colors(start, end, change):
    s = float_to_int_bits(start)
    e = float_to_int_bits(end)
    c0s, c1s, c2s, a_s = s & 0xFF, s >> 8 & 0xFF, s >> 16 & 0xFF, s >> 24 & 0xFE
    c0e, c1e, c2e, a_e = e & 0xFF, e >> 8 & 0xFF, e >> 16 & 0xFF, e >> 24 & 0xFE
    return int_bits_to_float(
        (int(c0s + change * (c0e - c0s)) & 0xFF)
        | (int(c1s + change * (c1e - c1s)) & 0xFF) << 8
        | (int(c2s + change * (c2e - c2s)) & 0xFF) << 16
        | (int(a_s + change * (a_e - a_s)) & 0xFE) << 24)


def mix(colors, lerp=lerp_float_colors):
    """Even mix of all colors; 0.0 (transparent) for an empty sequence."""
    colors = list(colors)
    if not colors:
        return 0.0
    result = colors[0]
    for i in range(1, len(colors)):
        result = lerp(result, colors[i], 1.0 / (i + 1))
    return result


def uneven_mix(pairs, lerp=lerp_float_colors):
    """Mix of (color, weight) pairs, respecting each weight."""
    pairs = list(pairs)
    if not pairs:
        return 0.0
    result, total = pairs[0]
    for color, weight in pairs[1:]:
        if weight <= 0:
            continue
        total += weight
        result = lerp(result, color, weight / total)
    return result


def hsl_parts(r, g, b):
    """(hue, chroma, lightness, value) for RGB floats in [0, 1]."""
    if g < b:
        x, y, z, w = b, g, -1.0, 2.0 / 3.0
    else:
        x, y, z, w = g, b, 0.0, -1.0 / 3.0
    if r < x:
        z, w = w, r
    else:
        w, x = x, r
    d = x - min(w, y)
    lum = x * (1.0 - 0.5 * d / (x + 1e-10))
    hue = abs(z + (w - y) / (6.0 * d + 1e-10))
    return hue, d, lum, x


def hsl2rgb(h, s, l, a):
    """HSLA floats in [0, 1] to an RGB-space packed float."""
    x = clamp(abs(h * 6.0 - 3.0) - 1.0, 0.0, 1.0)
    y = h + 2.0 / 3.0
    z = h + 1.0 / 3.0
    y -= int(y)
    z -= int(z)
    y = clamp(abs(y * 6.0 - 3.0) - 1.0, 0.0, 1.0)
    z = clamp(abs(z * 6.0 - 3.0) - 1.0, 0.0, 1.0)
    v = l + s * min(l, 1.0 - l)
    d = 2.0 * (1.0 - l / (v + 1e-10))
    v *= 255.0
    return int_bits_to_float(
        int(a * 127.0) << 25
        | int(v * (1.0 + (z - 1.0) * d)) << 16
        | int(v * (1.0 + (y - 1.0) * d)) << 8
        | int(v * (1.0 + (x - 1.0) * d)))


def rgb2hsl(r, g, b, a=1.0):
    hue, d, lum, x = hsl_parts(r, g, b)
    saturation = (x - lum) / (min(lum, 1.0 - lum) + 1e-10)
    return hue, clamp(saturation, 0.0, 1.0), lum, a
