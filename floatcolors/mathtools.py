import math

from scipy.special import ndtri

TAU = math.pi * 2.0
FLOAT_MIN_NORMAL = 1.1754944e-38


def barron_spline(x, shape, turning):
    """
    Barron's generalized bias/gain curve (https://arxiv.org/abs/2010.09714).
    shape >= 0, turning in [0, 1]; x should be in [0, 1].
    """
    d = turning - x
    if d < 0:
        f, n = -1, -1
    else:
        f, n = 0, 1
    return ((turning * n - f) * (x + f)) / (FLOAT_MIN_NORMAL - f + (x + shape * d) * n) - f


def probit(p):
    # ndtri is infinite at the endpoints
    p = min(max(p, 1e-15), 1.0 - 1e-15)
    return float(ndtri(p))


def radical_inverse(index, base):
    denominator = float(base)
    result = 0.0
    n = index & 0x7FFFFFFF
    while n > 0:
        result += (n % base) / denominator
        n //= base
        denominator *= base
    return result


def van_der_corput(index):
    reversed_bits = int(f'{index & 0xFFFFFFFF:032b}'[::-1], 2)
    return (reversed_bits >> 1) * 2.0 ** -31


def halton3(index):
    return van_der_corput(index), radical_inverse(index, 3), radical_inverse(index, 5)


def atan2_turns(y, x):
    if x == 0.0 and y == 0.0:
        return 0.0
    t = math.atan2(y, x) / TAU
    if t < 0.0:
        t += 1.0
    return 0.0 if t >= 1.0 else t


def sin_turns(turns):
    return math.sin(turns * TAU)


def cos_turns(turns):
    return math.cos(turns * TAU)


def java_fmod(a, b):
    return math.fmod(a, b)


def clamp(value, low, high):
    return low if value < low else high if value > high else value


def fract(value):
    return value - math.floor(value)
