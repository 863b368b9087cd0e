import argparse
import logging

import numpy as np
from tqdm import tqdm

from floatcolors import oklab

logger = logging.getLogger(__name__)

W, H = 256, 256  # L byte x hue step


def format_rows(table, lang):
    if lang == 'c':
        yield f'constexpr uint8_t OklabGamut[{W}][{H}] = {{'
    elif lang == 'java':
        yield 'private static final byte[] GAMUT_DATA = new byte[]{'
    else:
        yield 'OKLAB_GAMUT = ['
    for l in tqdm(range(W), desc='Formatting L'):
        row = table[l * H:(l + 1) * H]
        if lang == 'java':
            line = ', '.join(f'{int(v) if v < 128 else int(v) - 256:4}' for v in row)
            yield f'    {line},'
        elif lang == 'c':
            line = ', '.join(f'{v:3}' for v in row)
            yield f'    {{{line}}},'
        else:
            line = ', '.join(f'{v:3}' for v in row)
            yield f'    [{line}],'
    yield '};' if lang in ('c', 'java') else ']'


def main(argv=None):
    parser = argparse.ArgumentParser(description='Compute the Oklab gamut table and print it as source')
    parser.add_argument('--lang', default='c', choices=['c', 'java', 'python'], help='output syntax (default: c)')
    parser.add_argument('--save', default=None, metavar='PATH', help='also save the table as a .npy file')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    logger.info('generating Oklab gamut LUT')
    table = oklab.gamut_table()
    logger.info('largest radius %d, smallest %d', table.max(), table.min())

    if args.save:
        np.save(args.save, table.reshape(W, H))
        logger.info('saved %s', args.save)

    for line in format_rows(table, args.lang):
        print(line)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
