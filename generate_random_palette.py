import argparse
import functools
import logging
import sys

from floatcolors.randompalette import (DEFAULT_LIMIT, DEFAULT_MAX_ATTEMPTS, RandomPaletteBuilder,
                                       format_int_block, gaussian_color, halton_color)
from floatcolors.spaces import DEFAULT_SPACE, SPACES, get_space


def main(argv=None):
    parser = argparse.ArgumentParser(description='Build a well-spread random palette from Halton samples '
                                                 'and print it as RGBA8888 ints')
    parser.add_argument('--limit', type=int, default=DEFAULT_LIMIT,
                        help=f'number of colors, including transparent (default: {DEFAULT_LIMIT})')
    parser.add_argument('--space', default=DEFAULT_SPACE, choices=sorted(SPACES),
                        help=f'space the samples are drawn in (default: {DEFAULT_SPACE})')
    parser.add_argument('--sampler', default='halton', choices=['halton', 'gaussian'],
                        help='plain Halton points, or Halton points bunched toward gray with probit')
    parser.add_argument('--sat', type=float, default=None,
                        help='spread for the gaussian sampler; also reshapes lightness')
    parser.add_argument('--max-attempts', type=int, default=DEFAULT_MAX_ATTEMPTS,
                        help=f'give up after this many candidates (default: {DEFAULT_MAX_ATTEMPTS})')
    parser.add_argument('--no-progress', action='store_true', help='hide the progress bar')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        space = get_space(args.space)
        if args.sampler == 'halton':
            sampler = functools.partial(halton_color, space=space)
        else:
            sampler = functools.partial(gaussian_color, sat=args.sat, space=space)
        builder = RandomPaletteBuilder(args.limit, space=space, max_attempts=args.max_attempts)
        values = builder.build(sampler, progress=not args.no_progress)
    except (RuntimeError, ValueError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 1

    print(format_int_block(values))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
