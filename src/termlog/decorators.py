"""
Text decorators: brace highlighting, Markdown-lite, and color painting.

All functions here are pure string transforms. A decorator is any
``Callable[[str], str]``; the Logger applies level decorators before
Markdown and before %-interpolation.
"""

import json
import re
from typing import Callable, Iterable

from .terminal import COLORS, STYLES

Decorator = Callable[[str], str]

_BRACES = re.compile(r'{(.*?)}')

# printf-style specifiers understood by format_args(); any other %x is literal
_SPECIFIER = re.compile(r'%([sdifjoOc%])')

# Applied in this order; non-greedy, non-nested
_MARKDOWN = (
    (re.compile(r'\*\*(.+?)\*\*'), 'bold'),
    (re.compile(r'\*(.+?)\*'), 'italic'),
    (re.compile(r'~~(.+?)~~'), 'strikethrough'),
)


def paint(style: str, text: str, enabled: bool = True) -> str:
    """Wrap text in the open/close codes for a color or style name.

    With ``enabled=False`` the text is returned unchanged.
    """
    if not enabled:
        return text
    codes = COLORS.get(style) or STYLES.get(style)
    if codes is None:
        raise ValueError(f"Unknown color or style: {style!r}")
    return f"{codes[0]}{text}{codes[1]}"


def painter(style: str, enabled: bool = True) -> Decorator:
    """Return a decorator that paints its input with ``style``."""
    return lambda text: paint(style, text, enabled)


def format_braces(message: str, decorator: Decorator) -> str:
    """Replace every ``{...}`` span in message with ``decorator(content)``."""
    return _BRACES.sub(lambda m: decorator(m.group(1)), message)


def format_markdown(message: str, enabled: bool = True) -> str:
    """Apply ``**bold**``, ``*italic*`` and ``~~strikethrough~~`` markers.

    Markers are always consumed; ``enabled`` controls whether the style
    codes are emitted (so disabling color yields plain text, not stars).
    """
    for pattern, style in _MARKDOWN:
        message = pattern.sub(lambda m, s=style: paint(s, m.group(1), enabled), message)
    return message


def format_array(items: Iterable, separator: str = ', ') -> str:
    """Join items as brace-wrapped strings, e.g. ``'{a}, {b}, {c}'``.

    Pairs with brace formatting so each item picks up the level color.
    """
    return separator.join(f"{{{item}}}" for item in items)


def _to_number(value, cast) -> str:
    try:
        return str(cast(value))
    except (TypeError, ValueError, OverflowError):
        return 'NaN'


def _convert(spec: str, value) -> str:
    if spec == 's':
        return str(value)
    if spec in 'di':
        return _to_number(value, int)
    if spec == 'f':
        return _to_number(value, float)
    if spec == 'j':
        return json.dumps(value, default=str)
    if spec == 'c':
        return ''
    return repr(value)


def format_args(message: str, args: tuple) -> str:
    """Interpolate printf-style specifiers without ever raising.

    Supported: ``%s %d %i %f %j %o %O %c`` and ``%%``. A specifier with no
    argument left, or an unknown one, is kept as literal text. Leftover
    arguments are appended, space-separated. With no args the message is
    returned untouched (``'100%'`` stays ``'100%'``).

        format_args('%s of %d', ('3', 10))   -> '3 of 10'
        format_args('count', (5,))           -> 'count 5'
        format_args('%s and %s', ('a',))     -> 'a and %s'
    """
    if not args:
        return message
    remaining = list(args)

    def substitute(match):
        spec = match.group(1)
        if spec == '%':
            return '%'
        if not remaining:
            return match.group(0)
        return _convert(spec, remaining.pop(0))

    result = _SPECIFIER.sub(substitute, message)
    for value in remaining:
        result += ' ' + (value if isinstance(value, str) else repr(value))
    return result
