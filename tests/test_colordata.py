import logging

import pytest

from floatcolors.colordata import SIMPLE_COLOR_DATA, ColorDataError, ColorEntry, parse_line, read_color_data


class TestParseLine:
    def test_entry(self):
        assert parse_line('RED\tFF0000FF\tred') == ColorEntry('RED', 0xFF0000FF, 'red')

    def test_extra_columns_ignored(self):
        assert parse_line('RED\tFF0000FF\tred\tnotes here\n') == ColorEntry('RED', 0xFF0000FF, 'red')

    @pytest.mark.parametrize('line', ['', '   \n', '# constant\trgba8888\tname', '  # indented comment'])
    def test_skipped(self, line):
        assert parse_line(line) is None

    def test_names_may_contain_spaces(self):
        assert parse_line('DARK_RED\t800000FF\tdark red').name == 'dark red'

    @pytest.mark.parametrize('line, message', [
        ('RED FF0000FF red', 'expected 3 tab-separated fields'),
        ('RED\tFF0000\tred', 'not 8 hex digits'),
        ('RED\tGG0000FF\tred', 'not a 32-bit hex value'),
        ('\tFF0000FF\tred', 'empty constant or name'),
    ])
    def test_malformed(self, line, message):
        with pytest.raises(ColorDataError, match=message) as info:
            parse_line(line, 7)
        assert info.value.line_number == 7
        assert str(info.value).startswith('line 7: ')

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_line('RED\tFF0000\tred')


class TestReadColorData:
    def test_bundled_simple_palette(self):
        entries = read_color_data(SIMPLE_COLOR_DATA)
        assert len(entries) == 50
        assert entries[0] == ColorEntry('TRANSPARENT', 0x00000000, 'transparent')
        assert entries[1].name == 'black'
        assert len({e.name for e in entries}) == 50

    def test_from_file(self, tmp_path):
        path = tmp_path / 'colors.txt'
        path.write_text('# header\nBLACK\t000000FF\tblack\n\nWHITE\tFFFFFFFF\twhite\n', encoding='utf-8')
        assert [e.name for e in read_color_data(path)] == ['black', 'white']
        assert [e.name for e in read_color_data(str(path))] == ['black', 'white']

    def test_line_numbers_count_skipped_lines(self):
        with pytest.raises(ColorDataError) as info:
            read_color_data(['# header\n', '\n', 'BAD\tXYZ\tbad\n'])
        assert info.value.line_number == 3

    def test_duplicate_names_warn(self, caplog):
        lines = ['RED\tFF0000FF\tred', 'RED2\tEE0000FF\tred']
        with caplog.at_level(logging.WARNING, logger='floatcolors.colordata'):
            entries = read_color_data(lines)
        assert len(entries) == 2
        assert 'duplicate color name' in caplog.text
