"""Lookup of the color-space modules by name."""
from . import cielab, hsluv, oklab, rgb

SPACES = {
    'rgb': rgb,
    'oklab': oklab,
    'cielab': cielab,
    'hsluv': hsluv,
}

DEFAULT_SPACE = 'oklab'


def get_space(name):
    try:
        return SPACES[name.lower()]
    except KeyError:
        raise ValueError(f'unknown color space {name!r}, expected one of {", ".join(SPACES)}') from None
