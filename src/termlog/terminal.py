"""
Terminal primitives: color codes, line clearing, and raw keypress input.

Escape sequences come from colorama so the same codes work on Windows
consoles (``just_fix_windows_console`` enables VT processing there and
leaves POSIX streams untouched).
"""

import contextlib
import os
import sys
from typing import Dict, Tuple

from colorama import Fore, just_fix_windows_console
from colorama.ansi import clear_line, code_to_chars

just_fix_windows_console()


# Foreground colors as (open, close) pairs
COLORS: Dict[str, Tuple[str, str]] = {
    'cyan':    (Fore.CYAN, Fore.RESET),
    'yellow':  (Fore.YELLOW, Fore.RESET),
    'red':     (Fore.RED, Fore.RESET),
    'green':   (Fore.GREEN, Fore.RESET),
    'blue':    (Fore.BLUE, Fore.RESET),
    'magenta': (Fore.MAGENTA, Fore.RESET),
    'white':   (Fore.WHITE, Fore.RESET),
}

# Text styles as (open, close) pairs; close codes reset only that attribute
STYLES: Dict[str, Tuple[str, str]] = {
    'bold':          (code_to_chars(1), code_to_chars(22)),
    'italic':        (code_to_chars(3), code_to_chars(23)),
    'strikethrough': (code_to_chars(9), code_to_chars(29)),
}

# Return to column 0, then erase to end of line
CLEAR_LINE = '\r' + clear_line(0)

# Keys
KEY_INTERRUPT = '\x03'
KEY_ENTER = ('\r', '\n')
KEY_BACKSPACE = ('\x7f', '\b')


@contextlib.contextmanager
def input_mode(stream=None):
    """Hold a terminal in character mode: no echo, no line buffering.

    Only the local flags change (ECHO, ICANON and ISIG are cleared), so
    Ctrl-C arrives as ``'\\x03'`` while output processing stays on and a
    ``\\n`` written by another task still returns to column 0.

    Nesting is safe; the inner block restores the outer mode. Does nothing
    on Windows (msvcrt reads are already unbuffered and silent) or when
    ``stream`` is not a terminal.
    """
    stream = stream if stream is not None else sys.stdin
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        fd = None
    if os.name == 'nt' or fd is None or not os.isatty(fd):
        yield
        return

    import termios

    prev_mode = termios.tcgetattr(fd)
    mode = termios.tcgetattr(fd)
    mode[3] &= ~(termios.ECHO | termios.ICANON | termios.ISIG)
    mode[6][termios.VMIN] = 1
    mode[6][termios.VTIME] = 0
    termios.tcsetattr(fd, termios.TCSANOW, mode)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, prev_mode)


def read_key(stream=None) -> str:
    """Read a single keypress without waiting for Enter.

    Reads from ``stream`` (default stdin) inside input_mode(). Callers
    reading several keys should hold input_mode() themselves so typed keys
    are never echoed between reads.
    """
    if os.name == 'nt':
        import msvcrt

        key = msvcrt.getwch()
        if key in ('\0', '\xe0'):
            # Scan code prefix; swallow the second half
            msvcrt.getwch()
            return ''
        return key

    stream = stream if stream is not None else sys.stdin
    with input_mode(stream):
        return stream.read(1)
