"""Tests for termlog.decorators — braces, Markdown-lite, arrays, args, paint."""

import pytest

from termlog.decorators import (
    format_args, format_array, format_braces, format_markdown, paint, painter,
)

from helpers import cyan


class TestFormatBraces:
    """format_braces() replaces {...} spans via the decorator."""

    def test_direct_decorator(self):
        """The decorator's return value replaces the whole span."""
        assert format_braces('This is a {direct} test', lambda s: 'potato') == 'This is a potato test'

    def test_multiple_spans(self):
        """Every span is decorated, left to right."""
        assert format_braces('{a} and {b}', str.upper) == 'A and B'

    def test_no_braces_unchanged(self):
        assert format_braces('plain text', str.upper) == 'plain text'

    def test_colored_span(self):
        """Pairs with painter() to color brace content."""
        assert format_braces('[{i}] hi', painter('cyan')) == f"[{cyan('i')}] hi"


class TestFormatMarkdown:
    """format_markdown() applies bold, italic and strikethrough markers."""

    def test_bold(self):
        assert format_markdown('This is a **bold** message!') == 'This is a \x1b[1mbold\x1b[22m message!'

    def test_italic(self):
        assert format_markdown('This is an *italic* message!') == 'This is an \x1b[3mitalic\x1b[23m message!'

    def test_strikethrough(self):
        assert format_markdown('This is a ~~strikethrough~~ message!') == 'This is a \x1b[9mstrikethrough\x1b[29m message!'

    def test_all_matches_replaced(self):
        """Each pattern applies to every non-overlapping match."""
        assert format_markdown('**a** **b**') == '\x1b[1ma\x1b[22m \x1b[1mb\x1b[22m'

    def test_disabled_color_strips_markers(self):
        """With color off the markers are consumed and plain text remains."""
        assert format_markdown('**bold** and *it*', enabled=False) == 'bold and it'

    def test_lone_asterisk_untouched(self):
        assert format_markdown('2 * 3 = 6') == '2 * 3 = 6'


class TestFormatArray:
    """format_array() wraps each item in braces."""

    def test_default_separator(self):
        assert format_array(['a', 'b', 'c']) == '{a}, {b}, {c}'

    def test_single_item(self):
        assert format_array(['a']) == '{a}'

    def test_mixed_types(self):
        assert format_array(['a', 50.5, 3]) == '{a}, {50.5}, {3}'

    def test_custom_separator(self):
        assert format_array(['a', 'b', 'c'], ' or ') == '{a} or {b} or {c}'
        assert format_array(['a'], ' or ') == '{a}'


class TestFormatArgs:
    """format_args() interpolates printf-style and never raises."""

    def test_basic_specifiers(self):
        assert format_args('%s of %d', ('3', 10)) == '3 of 10'
        assert format_args('%i items', (4.7,)) == '4 items'
        assert format_args('ratio %f', (1,)) == 'ratio 1.0'

    def test_json_and_repr(self):
        assert format_args('%j', ({'a': 1},)) == '{"a": 1}'
        assert format_args('%o', ('x',)) == "'x'"

    def test_extra_args_appended(self):
        assert format_args('count', (5,)) == 'count 5'
        assert format_args('a %s', ('b', 'c', 3)) == 'a b c 3'

    def test_missing_args_left_literal(self):
        assert format_args('%s and %s', ('a',)) == 'a and %s'

    def test_stray_percent_literal(self):
        """A % not followed by a known specifier is plain text."""
        assert format_args('100% sure about %s', ('x',)) == '100% sure about x'

    def test_escaped_percent(self):
        assert format_args('%s%%', (50,)) == '50%'

    def test_no_args_untouched(self):
        assert format_args('100%% %s', ()) == '100%% %s'

    def test_bad_number(self):
        assert format_args('%d', ('abc',)) == 'NaN'


class TestPaint:
    """paint() wraps text in color or style codes."""

    def test_color(self):
        assert paint('cyan', 'x') == cyan('x')

    def test_style(self):
        assert paint('bold', 'x') == '\x1b[1mx\x1b[22m'

    def test_disabled(self):
        assert paint('red', 'x', enabled=False) == 'x'

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            paint('chartreuse', 'x')
