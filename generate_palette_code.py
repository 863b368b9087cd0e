import argparse
import logging
import os
import sys

from floatcolors.codegen import LANGUAGES, generate, output_names
from floatcolors.colordata import SIMPLE_COLOR_DATA, read_color_data
from floatcolors.spaces import DEFAULT_SPACE, SPACES, get_space

logger = logging.getLogger(__name__)


def write_text(path, text):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
    logger.info('wrote %s', path)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Generate palette source, HTML tables and a .hex list '
                                                 'from a tab-separated color data file')
    parser.add_argument('input', nargs='?', default=SIMPLE_COLOR_DATA,
                        help='color data file (default: the bundled simple palette)')
    parser.add_argument('--space', default=DEFAULT_SPACE, choices=sorted(SPACES),
                        help=f'color space for packed values (default: {DEFAULT_SPACE})')
    parser.add_argument('--prefix', default='', help='prefix for output file names, e.g. Aurora')
    parser.add_argument('--lang', default='python', choices=LANGUAGES, help='source template (default: python)')
    parser.add_argument('--int-pack', action='store_true', help='pack Java constants as ints instead of floats')
    parser.add_argument('--out-dir', default='.', help='directory for generated files (default: current)')
    parser.add_argument('-v', '--verbose', action='store_true', help='log every color as it is checked')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        space = get_space(args.space)
        entries = read_color_data(args.input)
        result = generate(entries, space, args.lang, args.int_pack)
    except (OSError, ValueError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 1

    os.makedirs(args.out_dir, exist_ok=True)
    names = output_names(args.prefix, space, args.lang)
    write_text(os.path.join(args.out_dir, names['source']), result.source)
    for key, html in result.tables.items():
        write_text(os.path.join(args.out_dir, names[key]), html)
    hex_name = os.path.splitext(os.path.basename(args.input))[0] + '.hex'
    write_text(os.path.join(args.out_dir, hex_name), result.hex_text)

    print(f'\n// {len(entries)} colors in hue order')
    print(result.int_block)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
