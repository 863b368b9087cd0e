import argparse
import logging
import sys

import matplotlib.pyplot as plt

from floatcolors.bits import float_to_int_bits, hex8, int_from_hex
from floatcolors.palette import simple_palette
from floatcolors.spaces import SPACES, get_space

DEFAULT_SPACE = 'cielab'


def show_swatch(rgba, title):
    r, g, b, a = rgba >> 24 & 0xFF, rgba >> 16 & 0xFF, rgba >> 8 & 0xFF, rgba & 0xFF
    fig, ax = plt.subplots(figsize=(4, 4))
    ax.imshow([[(r / 255.0, g / 255.0, b / 255.0, a / 255.0)]])
    ax.set_title(title)
    ax.axis('off')
    plt.show()


def main(argv=None):
    parser = argparse.ArgumentParser(description='Turn a color description like "darker rich red orange" into a '
                                                 'color, or find the description closest to a color')
    parser.add_argument('description', nargs='*', help='words naming colors and modifiers')
    parser.add_argument('--match', metavar='RRGGBBAA', help='describe this RGBA8888 color instead')
    parser.add_argument('--mix-count', type=int, default=1, help='color names to use with --match (default: 1)')
    parser.add_argument('--nearest', type=int, default=0, metavar='K', help='also list the K nearest color names')
    parser.add_argument('--space', default=DEFAULT_SPACE, choices=sorted(SPACES),
                        help=f'color space to mix in (default: {DEFAULT_SPACE})')
    parser.add_argument('--show', action='store_true', help='show the result in a matplotlib window')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        space = get_space(args.space)
        palette = simple_palette(space)
        if args.match:
            packed = space.from_rgba8888(int_from_hex(args.match))
            description = palette.best_match(packed, args.mix_count)
        elif args.description:
            description = ' '.join(args.description)
            packed = palette.parse_description(description)
        else:
            parser.error('give a description or --match')
    except ValueError as e:
        print(f'error: {e}', file=sys.stderr)
        return 1

    rgba = space.to_rgba8888(packed)
    channels = ', '.join(f'{name}={value:.4f}' for name, value in zip(space.CHANNELS, space.channel_values(packed)))
    print(f'description: {description}')
    print(f'rgba8888:    {hex8(rgba)}')
    print(f'packed bits: {hex8(float_to_int_bits(packed))} ({space.NAME}: {channels})')
    if args.nearest > 0:
        print(f'nearest:     {", ".join(palette.nearest(packed, args.nearest))}')
    if args.show:
        show_swatch(rgba, description)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
