import matplotlib
import pytest

from floatcolors import cielab, hsluv, oklab, rgb
from floatcolors.colordata import ColorEntry
from floatcolors.palette import Palette, simple_palette

ALL_SPACES = [rgb, oklab, cielab, hsluv]

matplotlib.use('Agg')


@pytest.fixture(params=ALL_SPACES, ids=lambda space: space.NAME)
def space(request):
    return request.param


@pytest.fixture
def oklab_palette():
    return simple_palette('oklab')


@pytest.fixture
def rgb_palette():
    return simple_palette('rgb')


@pytest.fixture
def tiny_entries():
    return [
        ColorEntry('TRANSPARENT', 0x00000000, 'transparent'),
        ColorEntry('BLACK', 0x000000FF, 'black'),
        ColorEntry('WHITE', 0xFFFFFFFF, 'white'),
        ColorEntry('RED', 0xFF0000FF, 'red'),
        ColorEntry('BLUE', 0x0000FFFF, 'blue'),
    ]


@pytest.fixture
def tiny_rgb_palette(tiny_entries):
    return Palette(rgb, tiny_entries)
