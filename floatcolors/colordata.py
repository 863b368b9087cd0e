"""
Tab-separated color definitions.

Each line is ``CONSTANT<TAB>RRGGBBAA<TAB>display name``; anything after the
third column is ignored. Blank lines and ``#`` comments are skipped.
"""
import logging
import os
from collections import namedtuple

from .bits import int_from_hex

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')
SIMPLE_COLOR_DATA = os.path.join(DATA_DIR, 'SimpleColorData.txt')

ColorEntry = namedtuple('ColorEntry', ['constant', 'rgba', 'name'])


class ColorDataError(ValueError):
    def __init__(self, line_number, message):
        super().__init__(f'line {line_number}: {message}')
        self.line_number = line_number


def parse_line(line, line_number=0):
    """One ``ColorEntry``, or None for a blank or comment line."""
    line = line.rstrip('\r\n')
    if not line.strip() or line.lstrip().startswith('#'):
        return None
    fields = line.split('\t')
    if len(fields) < 3:
        raise ColorDataError(line_number, f'expected 3 tab-separated fields, got {len(fields)}')
    constant, code, name = fields[0].strip(), fields[1].strip(), fields[2].strip()
    if not constant or not name:
        raise ColorDataError(line_number, 'empty constant or name')
    if len(code) != 8:
        raise ColorDataError(line_number, f'color code {code!r} is not 8 hex digits')
    try:
        rgba = int_from_hex(code)
    except ValueError as e:
        raise ColorDataError(line_number, str(e)) from e
    return ColorEntry(constant, rgba, name)


def read_color_data(source):
    """Reads entries from a path or from an iterable of lines."""
    if isinstance(source, (str, os.PathLike)):
        with open(source, encoding='utf-8') as f:
            return read_color_data(f.readlines())

    entries = []
    seen = {}
    for line_number, line in enumerate(source, start=1):
        entry = parse_line(line, line_number)
        if entry is None:
            continue
        if entry.name in seen:
            logger.warning('duplicate color name %r on lines %d and %d; the later one wins',
                           entry.name, seen[entry.name], line_number)
        seen[entry.name] = line_number
        entries.append(entry)
    logger.debug('read %d color entries', len(entries))
    return entries
