import string

import numpy as np


def float_to_int_bits(value):
    """Raw IEEE bits of a float32 packed color, as an unsigned int."""
    return int(np.float32(value).view(np.uint32))


def int_bits_to_float(bits):
    return float(np.uint32(bits & 0xFFFFFFFF).view(np.float32))


def floats_to_int_bits(values):
    return np.asarray(values, dtype=np.float32).view(np.uint32)


def int_bits_to_floats(bits):
    return (np.asarray(bits, dtype=np.int64) & 0xFFFFFFFF).astype(np.uint32).view(np.float32)


def reverse_bytes(value):
    value &= 0xFFFFFFFF
    return ((value & 0xFF) << 24 | (value >> 8 & 0xFF) << 16
            | (value >> 16 & 0xFF) << 8 | value >> 24)


def int_from_hex(text):
    """
    Parse an RRGGBBAA-style hex string into an int.
    Accepts an optional '#' or '0x' prefix; at most 8 digits.
    """
    s = text.strip()
    if s.startswith('#'):
        s = s[1:]
    elif s[:2].lower() == '0x':
        s = s[2:]
    if not s or len(s) > 8 or any(c not in string.hexdigits for c in s):
        raise ValueError(f'not a 32-bit hex value: {text!r}')
    return int(s, 16)


def hex8(value):
    return f'{value & 0xFFFFFFFF:08X}'


def java_float_hex(value):
    """Same text as Java's Float.toHexString for a float32 value."""
    bits = float_to_int_bits(value)
    sign = '-' if bits >> 31 else ''
    exponent = bits >> 23 & 0xFF
    mantissa = bits & 0x7FFFFF
    if exponent == 0 and mantissa == 0:
        return sign + '0x0.0p0'
    # 23 mantissa bits shifted to fill 6 hex digits
    digits = f'{mantissa << 1:06x}'.rstrip('0') or '0'
    if exponent == 0:
        return f'{sign}0x0.{digits}p-126'
    return f'{sign}0x1.{digits}p{exponent - 127}'
