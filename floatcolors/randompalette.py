"""
Random palettes built from low-discrepancy samples.

Candidates come from a 3D Halton sequence (bases 2, 3 and 5), optionally
pushed through probit so they bunch up near gray. Each candidate must be in
gamut and far enough from every color already placed; the required distance
shrinks as the palette fills so the search always finishes.
"""
import logging

from tqdm import tqdm

from . import oklab
from .bits import float_to_int_bits, int_bits_to_float
from .codegen import format_int_block
from .mathtools import halton3, java_fmod, probit

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 256
DEFAULT_MAX_ATTEMPTS = 1_000_000
SEED_GRAYS = (0x010101FF, 0xFEFEFEFF, 0x777777FF, 0x555555FF, 0xAAAAAAFF, 0x333333FF, 0xE0E0E0FF, 0xC8C8C8FF)

BASE_DISTANCE = 0.0075
DISTANCE_FALLOFF = 0.0001
LIGHTNESS_WEIGHT = 0.5

__all__ = ['halton_color', 'gaussian_color', 'RandomPaletteBuilder', 'format_int_block']


def halton_color(index, space=oklab):
    x, y, z = halton3(index)
    return space.pack(x, y, z, 1.0)


def gaussian_color(index, sat=None, space=oklab):
    """
    Like ``halton_color``, but the two chromatic channels go through probit
    and wrap into [0, 1). With ``sat``, lightness is reshaped too and the
    chromatic spread is scaled by ``sat * 2.5``.
    """
    x, y, z = halton3(index)
    if sat is None:
        return space.pack(x,
                          java_fmod(probit(y), 0.5) + 0.5,
                          java_fmod(probit(z), 0.5) + 0.5, 1.0)
    sat *= 2.5
    return space.pack((java_fmod(probit(x) * 2.0, 0.5) + 0.5) ** 0.9375,
                      java_fmod(probit(y) * sat, 0.5) + 0.5,
                      java_fmod(probit(z) * sat, 0.5) + 0.5, 1.0)


class RandomPaletteBuilder:
    def __init__(self, limit=DEFAULT_LIMIT, space=oklab, seeds=SEED_GRAYS, max_attempts=DEFAULT_MAX_ATTEMPTS):
        if limit < 1:
            raise ValueError(f'palette limit must be positive, got {limit}')
        self.limit = limit
        self.space = space
        self.max_attempts = max_attempts
        # transparent takes the first slot but does not repel candidates
        self.rgba = [0]
        self.colors = []
        for seed in seeds:
            self.add_rgba(seed)

    def __len__(self):
        return len(self.rgba)

    def add_rgba(self, value):
        self.rgba.append(value)
        self.colors.append(self.space.from_rgba8888(value))

    def _weighted(self, packed):
        c0, c1, c2 = self.space.channel_values(packed)
        return c0 * LIGHTNESS_WEIGHT, c1, c2

    def add_color(self, packed):
        """Adds ``packed`` unless it is out of gamut or too close to a placed color."""
        space = self.space
        c0, c1, c2 = space.channel_values(packed)
        if not space.in_gamut_channels(c0, c1, c2):
            return False
        packed = int_bits_to_float(float_to_int_bits(packed) | 0xFE000000)
        limit = BASE_DISTANCE - len(self.colors) * DISTANCE_FALLOFF
        x, y, z = self._weighted(packed)
        for other in self.colors:
            ox, oy, oz = self._weighted(other)
            if (x - ox) ** 2 + (y - oy) ** 2 + (z - oz) ** 2 < limit:
                return False
        self.rgba.append(space.to_rgba8888(packed))
        self.colors.append(packed)
        return True

    def build(self, sampler=halton_color, progress=True):
        """Fills the palette from ``sampler(index)``, starting at index 1; returns RGBA8888 ints."""
        index = 1
        with tqdm(total=self.limit, initial=min(len(self), self.limit), desc='Placing colors',
                  disable=not progress) as bar:
            while len(self) < self.limit:
                if index > self.max_attempts:
                    raise RuntimeError(f'placed only {len(self)} of {self.limit} colors '
                                       f'after {self.max_attempts} candidates')
                if self.add_color(sampler(index)):
                    bar.update(1)
                index += 1
        logger.info('placed %d colors after %d candidates', len(self), index - 1)
        return list(self.rgba[:self.limit])
