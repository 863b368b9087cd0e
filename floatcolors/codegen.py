"""
Source and documentation generation for palettes.

Takes the rows of a color data file and produces a palette module (Python, or
Java in the layout libGDX projects use), three HTML tables, a ``.hex`` list
and an int block for pasting into other tools.
"""
import logging
from collections import namedtuple

import numpy as np

from .bits import float_to_int_bits, hex8, java_float_hex
from .palette import Palette
from .spaces import get_space

logger = logging.getLogger(__name__)

LANGUAGES = ('python', 'java')
INTS_PER_LINE = 8

SWATCH = [
    "<font style='background-color: #FEDCBA;'>&nbsp;&nbsp;&nbsp;</font>"
    "<font style='background-color: #000000; color: #000000'>&nbsp;&nbsp;&nbsp;</font>"
    "<font style='background-color: #888888; color: #000000'>&nbsp;&nbsp;&nbsp;</font>"
    "<font style='background-color: #ffffff; color: #000000'>&nbsp;&nbsp;&nbsp;</font>"
    "<font style='background-color: #FEDCBA; color: #000000'>&nbsp;@&nbsp;</font>",
    "<font style='background-color: #FEDCBA;'>&nbsp;&nbsp;&nbsp;</font>"
    "<font style='background-color: #000000; color: #FEDCBA'>&nbsp;@&nbsp;</font>"
    "<font style='background-color: #888888; color: #FEDCBA'>&nbsp;@&nbsp;</font>"
    "<font style='background-color: #ffffff; color: #FEDCBA'>&nbsp;@&nbsp;</font>"
    "<font style='background-color: #FEDCBA; color: #888888'>&nbsp;@&nbsp;</font>",
    "<font style='background-color: #FEDCBA;'>&nbsp;&nbsp;&nbsp;</font>"
    "<font style='background-color: #000000; color: #000000'>&nbsp;&nbsp;&nbsp;</font>"
    "<font style='background-color: #888888; color: #000000'>&nbsp;&nbsp;&nbsp;</font>"
    "<font style='background-color: #ffffff; color: #000000'>&nbsp;&nbsp;&nbsp;</font>"
    "<font style='background-color: #FEDCBA; color: #ffffff'>&nbsp;@&nbsp;</font>",
]

TABLE_COLUMNS = ['Preview Section', 'Color Name', 'Hex Code', None, None, None,
                 'Alpha', 'Hue', 'Sat', 'Chroma', 'Red', 'Green', 'Blue', 'Packed']

GeneratedPalette = namedtuple('GeneratedPalette', ['source', 'tables', 'hex_text', 'int_block'])


def num(value):
    """Shortest text that reads back as the same float32."""
    return str(np.float32(value))


def packed_int(packed):
    """libGDX-style int form of a packed color: the raw bits with alpha widened."""
    bits = float_to_int_bits(packed)
    return bits | (bits >> 24) * 255 // 254 << 24


def describe(space, packed):
    """The numbers every template shows for one color, as text."""
    channels = space.channel_values(packed)
    return {
        'channels': [num(c) for c in channels],
        'alpha': num(space.alpha(packed)),
        'red': num(space.red(packed)),
        'green': num(space.green(packed)),
        'blue': num(space.blue(packed)),
        'hue': num(space.sort_hue(packed)),
        'saturation': num(space.sort_saturation(packed)),
        'chroma': num(space.chroma(packed)),
    }


def swatch(rrggbb, prefix=''):
    return [prefix + line.replace('FEDCBA', rrggbb) for line in SWATCH]


def _channel_text(space, values):
    return ', '.join(f'{name} {value}' for name, value in zip(space.CHANNELS, values['channels']))


def python_constant(space, entry, packed):
    values = describe(space, packed)
    code = hex8(entry.rgba)
    lines = [
        '',
        f'# This color constant "{entry.name}" has RGBA8888 code {code}, {_channel_text(space, values)},',
        f'# alpha {values["alpha"]}, red {values["red"]}, green {values["green"]}, blue {values["blue"]},',
        f'# hue {values["hue"]}, saturation {values["saturation"]}, and chroma {values["chroma"]}.',
        f'# It can be represented as a packed float with the bits 0x{hex8(float_to_int_bits(packed))}.',
    ]
    lines.extend(swatch(code[:6], '# '))
    lines.append(f'{entry.constant} = {packed!r}')
    lines.append(f'ENTRIES.append(ColorEntry({entry.constant!r}, 0x{code}, {entry.name!r}))')
    return '\n'.join(lines) + '\n'


def java_constant(space, entry, packed, int_pack=False):
    values = describe(space, packed)
    code = hex8(entry.rgba)
    if int_pack:
        literal = '0x' + hex8(packed_int(packed))
        pack_type = f'It has the encoded {space.NAME} value'
        type_name = 'int'
    else:
        literal = java_float_hex(packed) + 'F'
        pack_type = 'It can be represented as a packed float with the constant'
        type_name = 'float'
    lines = [
        '',
        '/**',
        f'* This color constant "{entry.name}" has RGBA8888 code {{@code {code}}}, {_channel_text(space, values)},',
        f'* alpha {values["alpha"]}, red {values["red"]}, green {values["green"]}, blue {values["blue"]},'
        f' hue {values["hue"]}, saturation {values["saturation"]}, and chroma {values["chroma"]}.',
        f'* {pack_type} {{@code {literal}}}.',
        '* <pre>',
    ]
    lines.extend(swatch(code[:6], '* '))
    lines.extend([
        '* </pre>',
        '*/',
        f'public static final {type_name} {entry.constant} = {literal};',
        f'static {{ NAMED.put("{entry.name}", {literal}); LIST.add({literal}); }}',
    ])
    return '\n'.join(lines) + '\n'


def render_source(entries, space, lang='python', int_pack=False):
    if lang not in LANGUAGES:
        raise ValueError(f'unknown template language {lang!r}, expected one of {", ".join(LANGUAGES)}')
    parts = []
    if lang == 'python':
        parts.append('from floatcolors.colordata import ColorEntry\n'
                     'from floatcolors.palette import Palette\n\n'
                     'ENTRIES = []\n')
        for entry in entries:
            parts.append(python_constant(space, entry, space.from_rgba8888(entry.rgba)))
        parts.append(f'\nPALETTE = Palette({space.NAME!r}, ENTRIES)\n')
    else:
        for entry in entries:
            parts.append(java_constant(space, entry, space.from_rgba8888(entry.rgba), int_pack))
    return ''.join(parts)


def table_row(space, name, packed, int_pack=False):
    values = describe(space, packed)
    rgba = hex8(space.to_rgba8888(packed))
    if int_pack:
        pack = '0x' + hex8(packed_int(packed))
    else:
        pack = java_float_hex(packed) + 'F'
    cells = [name, '0x' + rgba] + values['channels'] + [
        values['alpha'], values['hue'], values['saturation'], values['chroma'],
        values['red'], values['green'], values['blue'], pack]
    return (f"<tr>\n<td style='background-color: #{rgba[:6]};'></td>\n"
            + ''.join(f'<td>{cell}</td>\n' for cell in cells)
            + '</tr>\n')


def render_table(space, palette, names, int_pack=False):
    headers = list(TABLE_COLUMNS)
    headers[3:6] = space.CHANNELS
    head = '<tr>\n' + ''.join(f'<th>{h}</th>\n' for h in headers) + '</tr>\n'
    rows = ''.join(table_row(space, name, palette.named[name], int_pack) for name in names)
    return f'<!doctype html>\n<html>\n<body>\n<table>\n{head}{rows}</table>\n</body>\n</html>'


def render_hex(space, colors):
    return '\n'.join(hex8(space.to_rgba8888(c))[:6] for c in colors)


def format_int_block(values):
    """``{`` then ``0xRRGGBBAA, `` values, eight per line, then ``}``."""
    lines = []
    for start in range(0, len(values), INTS_PER_LINE):
        lines.append(''.join(f'0x{hex8(v)}, ' for v in values[start:start + INTS_PER_LINE]))
    return '{\n' + '\n'.join(lines) + '\n}'


def verify(entries, space):
    """Logs each color's RGBA against its decoded RGBA; returns the names that differ."""
    mismatched = []
    for entry in entries:
        packed = space.from_rgba8888(entry.rgba)
        decoded = space.to_rgba8888(packed)
        logger.debug('%s : correct RGBA=%s, decoded RGBA=%s, raw=%s, channels=%s',
                     entry.name, hex8(entry.rgba), hex8(decoded), hex8(float_to_int_bits(packed)),
                     ', '.join(num(c) for c in space.channel_values(packed)))
        if decoded != entry.rgba:
            mismatched.append(entry.name)
    if mismatched:
        logger.info('%d of %d colors do not decode to their exact RGBA', len(mismatched), len(entries))
    return mismatched


def generate(entries, space='oklab', lang='python', int_pack=False):
    if isinstance(space, str):
        space = get_space(space)
    palette = Palette(space, entries)
    verify(entries, space)
    source = render_source(entries, space, lang, int_pack)
    tables = {
        '': render_table(space, palette, palette.names, int_pack),
        'Hue': render_table(space, palette, palette.names_by_hue, int_pack),
        'Value': render_table(space, palette, palette.names_by_lightness, int_pack),
    }
    hex_text = render_hex(space, palette.colors_by_hue)
    int_block = format_int_block([space.to_rgba8888(c) for c in palette.colors_by_hue])
    return GeneratedPalette(source, tables, hex_text, int_block)


def output_names(prefix, space, lang='python'):
    """File names for everything ``generate`` returns, keyed like ``tables``."""
    add = prefix + space.NAME.capitalize()
    extension = 'py' if lang == 'python' else 'java'
    return {
        'source': f'ColorOutput{add}.{extension}',
        '': f'ColorTable{add}.html',
        'Hue': f'ColorTableHue{add}.html',
        'Value': f'ColorTableValue{add}.html',
    }
