"""
Named palettes and descriptive color strings.

A ``Palette`` holds named packed colors for one color space. Descriptions
such as ``"lighter rich red orange"`` mix the named colors evenly and then
apply the lightness and saturation words:

    light, dark     lightness only
    rich, dull      saturation only
    bright, pale    lighter, and richer or duller
    deep, weak      darker, and richer or duller

Each word comes in four strengths: ``dark``, ``darker``, ``darkest`` and
``darkmost``. ``best_match`` goes the other way, from a color to the closest
description it can find.
"""
import functools
import logging
import re

import numpy as np
from sklearn.neighbors import NearestNeighbors

from .colordata import SIMPLE_COLOR_DATA, read_color_data
from .mixing import mix
from .spaces import get_space

logger = logging.getLogger(__name__)

LIGHTNESS_STEP = 0.15
SATURATION_STEPS = (0.1, 0.15, 0.2, 0.25)
BRIGHT_SATURATION_STEPS = (0.1, 0.1, 0.2, 0.25)
GRAY_SATURATION = 0.05

SIMPLE_ALIASES = {
    'grey': 'gray',
    'gold': 'saffron',
    'puce': 'mauve',
    'sand': 'tan',
    'skin': 'peach',
    'coral': 'salmon',
    'azure': 'sky',
    'ocean': 'teal',
    'sapphire': 'cobalt',
}


def _forms(word):
    if word.endswith('e'):
        return word, word + 'r', word + 'st', word + 'most'
    return word, word + 'er', word + 'est', word + 'most'


def _build_modifiers():
    # word: (lightness sign, saturation sign, saturation steps)
    words = {
        'light': (1, 0, SATURATION_STEPS),
        'dark': (-1, 0, SATURATION_STEPS),
        'rich': (0, 1, SATURATION_STEPS),
        'dull': (0, -1, SATURATION_STEPS),
        'bright': (1, 1, BRIGHT_SATURATION_STEPS),
        'pale': (1, -1, SATURATION_STEPS),
        'weak': (-1, -1, SATURATION_STEPS),
        'deep': (-1, 1, SATURATION_STEPS),
    }
    table = {}
    for word, (light_sign, sat_sign, steps) in words.items():
        for level, form in enumerate(_forms(word)):
            table[form] = (light_sign * LIGHTNESS_STEP * (level + 1),
                           sat_sign * sum(steps[:level + 1]))
    return table


MODIFIERS = _build_modifiers()


def _build_adjectives():
    light_words = ['darkmost', 'darkest', 'darker', 'dark', '', 'light', 'lighter', 'lightest', 'lightmost']
    sat_words = ['dullmost', 'dullest', 'duller', 'dull', '', 'rich', 'richer', 'richest', 'richmost']
    # indexed by saturation step * 9 + lightness step, each step from -4 to 4
    adjectives = []
    for sat in range(9):
        for lit in range(9):
            adjectives.append(' '.join(w for w in (light_words[lit], sat_words[sat]) if w))
    # words that move both at once replace the matching diagonal entries
    for strength in range(4):
        low, high = 3 - strength, 5 + strength
        adjectives[low * 9 + low] = _forms('weak')[strength]
        adjectives[low * 9 + high] = _forms('pale')[strength]
        adjectives[high * 9 + low] = _forms('deep')[strength]
        adjectives[high * 9 + high] = _forms('bright')[strength]
    return adjectives


COMBINED_ADJECTIVES = _build_adjectives()


class Palette:
    def __init__(self, space, entries, aliases=None):
        if isinstance(space, str):
            space = get_space(space)
        self.space = space
        self.transparent = space.from_rgba8888(0)
        self.named = {}
        self.colors = []
        for entry in entries:
            color = space.from_rgba8888(entry.rgba)
            self.named[entry.name] = color
            self.colors.append(color)
        self.names = sorted(self.named)
        self.aliases = dict(aliases or {})
        for alias, target in self.aliases.items():
            if target not in self.named:
                raise ValueError(f'alias {alias!r} points at unknown color {target!r}')
            self.named[alias] = self.named[target]

        self.names_by_hue = sorted(self.names, key=self._hue_key)
        self.colors_by_hue = [self.named[name] for name in self.names_by_hue]
        self.names_by_lightness = sorted(self.names, key=lambda name: space.sort_lightness(self.named[name]))
        self._index = None

    @classmethod
    def from_file(cls, space, path, aliases=None):
        return cls(space, read_color_data(path), aliases)

    def _hue_key(self, name):
        color = self.named[name]
        if self.space.alpha_int(color) < 128:
            return 0, 0.0, 0.0
        if self.space.sort_saturation(color) <= GRAY_SATURATION:
            return 1, self.space.sort_lightness(color), 0.0
        return 2, self.space.sort_hue(color), self.space.sort_lightness(color)

    def __len__(self):
        return len(self.names)

    def __contains__(self, name):
        return name in self.named

    def __getitem__(self, name):
        return self.named[name]

    def get(self, name, default=None):
        return self.named.get(name, self.transparent if default is None else default)

    def _adjust(self, color, lightness, saturation):
        space = self.space
        if lightness > 0:
            color = space.lighten(color, lightness)
        elif lightness < 0:
            color = space.darken(color, -lightness)
        if saturation > 0:
            color = space.limit_to_gamut(space.enrich(color, saturation))
        elif saturation < 0:
            color = space.limit_to_gamut(space.dullen(color, -saturation))
        else:
            color = space.limit_to_gamut(color)
        return color

    def parse_description(self, description):
        """Turns text like ``"darker dull cobalt teal"`` into a packed color."""
        lightness = saturation = 0.0
        mixing = []
        for term in re.split(r'[^A-Za-z]+', description):
            if not term:
                continue
            term = term.lower()
            if term in MODIFIERS:
                dl, ds = MODIFIERS[term]
                lightness += dl
                saturation += ds
            else:
                if term not in self.named:
                    logger.debug('unknown color word %r in %r', term, description)
                mixing.append(self.get(term))
        color = mix(mixing, self.space.lerp_float_colors) if mixing else self.transparent
        return self._adjust(color, lightness, saturation)

    def best_match(self, packed, mix_count=1):
        """
        The description whose color lands closest to ``packed``, trying every
        combination of ``mix_count`` opaque colors under each of the 81
        lightness/saturation adjective pairs. Keep ``mix_count`` small; the
        search grows as the palette size to that power.
        """
        mix_count = max(1, mix_count)
        space = self.space
        names = [n for n in self.names_by_hue if space.alpha_int(self.named[n]) >= 128]
        colors = [self.named[n] for n in names]
        size = len(colors)
        if size == 0:
            raise ValueError('palette has no opaque colors to match with')
        tries = size ** mix_count
        target = np.asarray(space.coordinates(packed))

        distances = np.empty((9, 9, tries))
        for code in range(tries):
            combo = [colors[code // size ** i % size] for i in range(mix_count)]
            mixed = mix(combo, space.lerp_float_colors)
            for sat in range(9):
                idx_s = sat - 4
                for lit in range(9):
                    result = self._adjust(mixed, LIGHTNESS_STEP * (lit - 4), idx_s * (abs(idx_s) + 3) * 0.025)
                    distances[sat, lit, code] = np.sum((np.asarray(space.coordinates(result)) - target) ** 2)

        # ties go to the plainest description
        plainness = np.abs(np.arange(9) - 4)
        distances += 1e-12 * (plainness[:, None, None] + plainness[None, :, None])
        best = int(np.argmin(distances))
        code = best % tries
        words = [COMBINED_ADJECTIVES[best // tries]]
        words.extend(names[code // size ** i % size] for i in range(mix_count))
        return ' '.join(w for w in words if w)

    def nearest(self, packed, k=1):
        """Names of the ``k`` colors closest to ``packed`` in space coordinates."""
        if self._index is None:
            points = np.array([self.space.coordinates(self.named[n]) for n in self.names])
            self._index = NearestNeighbors().fit(points)
        k = min(k, len(self.names))
        _, indices = self._index.kneighbors([self.space.coordinates(packed)], n_neighbors=k)
        return [self.names[i] for i in indices[0]]


@functools.lru_cache(maxsize=None)
def simple_palette(space='oklab'):
    """The 50-color palette from the bundled data, with its common aliases."""
    if isinstance(space, str):
        space = get_space(space)
    return Palette.from_file(space, SIMPLE_COLOR_DATA, SIMPLE_ALIASES)
