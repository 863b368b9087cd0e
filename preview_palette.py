import argparse
import logging
import sys

import matplotlib.pyplot as plt
import numpy as np

from floatcolors.colordata import SIMPLE_COLOR_DATA
from floatcolors.palette import Palette, simple_palette
from floatcolors.spaces import DEFAULT_SPACE, SPACES, get_space


def palette_points(palette):
    """Space coordinates and display RGBA for every opaque color, in hue order."""
    space = palette.space
    names = [n for n in palette.names_by_hue if space.alpha_int(palette.named[n]) >= 128]
    coords = np.array([space.channel_values(palette.named[n]) for n in names])
    rgba = np.array([[space.red(palette.named[n]), space.green(palette.named[n]),
                      space.blue(palette.named[n]), 1.0] for n in names])
    return names, coords, rgba


def main(argv=None):
    parser = argparse.ArgumentParser(description='Plot a palette on its two chromatic channels and by lightness')
    parser.add_argument('input', nargs='?', default=None, help='color data file (default: the simple palette)')
    parser.add_argument('--space', default=DEFAULT_SPACE, choices=sorted(SPACES))
    parser.add_argument('--labels', action='store_true', help='write each color name next to its point')
    parser.add_argument('--save', default=None, help='save the figure here instead of showing it')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        space = get_space(args.space)
        if args.input is None or args.input == SIMPLE_COLOR_DATA:
            palette = simple_palette(space)
        else:
            palette = Palette.from_file(space, args.input)
    except (OSError, ValueError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 1

    names, coords, rgba = palette_points(palette)
    first, second, third = space.CHANNELS
    print(f"{len(names)} opaque colors in {space.NAME}")

    fig, (ax_ab, ax_l) = plt.subplots(1, 2, figsize=(12, 6))
    ax_ab.scatter(coords[:, 1], coords[:, 2], c=rgba, s=60, edgecolors='k', linewidths=0.5)
    ax_ab.set_xlabel(second)
    ax_ab.set_ylabel(third)
    ax_ab.set_title(f'{space.NAME}: {second} against {third}')
    ax_ab.grid()

    order = np.arange(len(names))
    ax_l.scatter(order, coords[:, 0], c=rgba, s=60, edgecolors='k', linewidths=0.5)
    ax_l.set_xlabel('hue order')
    ax_l.set_ylabel(first)
    ax_l.set_title(f'{first} by hue order')
    ax_l.grid()

    if args.labels:
        for name, (c0, c1, c2), i in zip(names, coords, order):
            ax_ab.annotate(name, (c1, c2), fontsize=7)
            ax_l.annotate(name, (i, c0), fontsize=7)

    if args.save:
        fig.savefig(args.save)
    else:
        plt.show()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
