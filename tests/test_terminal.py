"""
Tests for termlog.terminal — character-mode key input on a real pty.

The pty stands in for the user's terminal: the master end is the keyboard
and screen, the slave end is what the program reads from and writes to.
"""

import contextlib
import io
import os
import select
import sys
import threading

import pytest

from termlog import Logger
from termlog.terminal import input_mode, read_key

from helpers import Sink

posix_only = pytest.mark.skipif(sys.platform == 'win32', reason='needs a POSIX pty')


@pytest.fixture
def tty():
    """A pty pair as (master_fd, slave text stream) with output processing on."""
    import pty
    import termios

    master, slave = pty.openpty()
    attrs = termios.tcgetattr(slave)
    attrs[1] |= termios.OPOST | termios.ONLCR
    termios.tcsetattr(slave, termios.TCSANOW, attrs)
    stream = open(slave, 'r', encoding='utf-8')
    try:
        yield master, stream
    finally:
        stream.close()
        os.close(master)


def read_with_timeout(stream, timeout=5.0):
    """read_key() in a thread; None if it is still blocked after timeout."""
    result = []
    reader = threading.Thread(target=lambda: result.append(read_key(stream)), daemon=True)
    reader.start()
    reader.join(timeout)
    return result[0] if result else None


def pending_output(master):
    """Bytes the program has written to the terminal so far."""
    data = b''
    while select.select([master], [], [], 0.1)[0]:
        chunk = os.read(master, 1024)
        if not chunk:
            break
        data += chunk
    return data


# =============================================================================
# input_mode()
# =============================================================================

@posix_only
class TestInputMode:
    """Only the local flags change; output processing is untouched."""

    def test_local_flags_cleared(self, tty):
        import termios

        _, stream = tty
        fd = stream.fileno()
        before = termios.tcgetattr(fd)
        with input_mode(stream):
            during = termios.tcgetattr(fd)
        after = termios.tcgetattr(fd)

        assert not during[3] & (termios.ECHO | termios.ICANON | termios.ISIG)
        assert during[1] == before[1]
        assert after == before

    def test_newline_returns_to_column_zero(self, tty):
        """A line logged while waiting for a key still ends in \\r\\n."""
        master, stream = tty
        with input_mode(stream):
            os.write(stream.fileno(), b'line\n')
            assert pending_output(master) == b'line\r\n'

    def test_nested_restores_outer_mode(self, tty):
        import termios

        _, stream = tty
        fd = stream.fileno()
        with input_mode(stream):
            outer = termios.tcgetattr(fd)
            with input_mode(stream):
                pass
            assert termios.tcgetattr(fd) == outer

    def test_not_a_terminal(self):
        """Plain buffers pass through untouched."""
        with input_mode(io.StringIO()):
            pass


# =============================================================================
# read_key()
# =============================================================================

@posix_only
class TestReadKey:
    """Single keys arrive without Enter and without echo."""

    def test_no_enter_needed(self, tty):
        master, stream = tty
        with input_mode(stream):
            os.write(master, b'a')
            assert read_with_timeout(stream) == 'a'

    def test_interrupt_is_a_key(self, tty):
        master, stream = tty
        with input_mode(stream):
            os.write(master, b'\x03')
            assert read_with_timeout(stream) == '\x03'

    def test_not_echoed(self, tty):
        master, stream = tty
        with input_mode(stream):
            os.write(master, b'x')
            assert read_with_timeout(stream) == 'x'
            assert pending_output(master) == b''


# =============================================================================
# Logger key mode
# =============================================================================

class TestLoggerKeyMode:
    """prompt()/choice() hold input_mode() only around the built-in reader."""

    def test_custom_reader_untouched(self, out, err, keys):
        logger = Logger(stdout=out, stderr=err, key_reader=keys('y'))
        assert isinstance(logger._key_mode(), contextlib.nullcontext)

    def test_default_reader_uses_input_mode(self):
        logger = Logger(stdout=Sink(), stderr=Sink())
        assert not isinstance(logger._key_mode(), contextlib.nullcontext)
