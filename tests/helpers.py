"""Expected escape sequences and a recording sink for termlog tests."""

import io


def cyan(text):
    return f"\x1b[36m{text}\x1b[39m"


def yellow(text):
    return f"\x1b[33m{text}\x1b[39m"


def red(text):
    return f"\x1b[31m{text}\x1b[39m"


def green(text):
    return f"\x1b[32m{text}\x1b[39m"


CLEAR = "\r\x1b[0K"


class Sink(io.StringIO):
    """StringIO that also records each write() call separately."""

    def __init__(self, name=None):
        super().__init__()
        self.calls = []
        if name is not None:
            self.name = name

    def write(self, text):
        self.calls.append(text)
        return super().write(text)
