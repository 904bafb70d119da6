"""
Logging levels: the built-in level table and the per-logger registry.

A level is a name plus an optional decorator. Calling a level runs the
decorator over the message and then hands the result to the Logger's
write pipeline, tagged with the level name for routing:

    level       symbol  color    default sink
    info        i       cyan     stdout
    warn        !       yellow   stderr
    error       x       red      stderr
    success     ✓       green    stdout

Custom levels have no prefix unless their decorator adds one.
"""

import keyword
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from .decorators import Decorator, format_braces
from .errors import InvalidLevelNameError, ReservedNameError, UnknownLevelError

INFO = 'info'
WARN = 'warn'
ERROR = 'error'
SUCCESS = 'success'


@dataclass(frozen=True)
class BuiltinLevel:
    """Symbol and color for one of the four built-in levels."""
    name: str
    symbol: str
    color: str


BUILTIN_LEVELS = (
    BuiltinLevel(INFO, 'i', 'cyan'),
    BuiltinLevel(WARN, '!', 'yellow'),
    BuiltinLevel(ERROR, 'x', 'red'),
    BuiltinLevel(SUCCESS, '✓', 'green'),
)


def builtin_decorator(level: BuiltinLevel,
                      paint: Callable[[str, str], str]) -> Decorator:
    """Build the ``[symbol] message`` decorator for a built-in level.

    ``paint(color, text)`` is looked up at call time so toggling color on
    the owning logger takes effect immediately.
    """
    def decorate(message: str) -> str:
        return format_braces(f"[{{{level.symbol}}}] {message}",
                             lambda text: paint(level.color, text))
    return decorate


@dataclass
class LevelEntry:
    name: str
    decorator: Optional[Decorator] = None

    def apply(self, message: str) -> str:
        if self.decorator is None:
            return message
        return self.decorator(message)


class LevelRegistry:
    """Known level names for one Logger.

    Names listed in ``reserved`` are rejected unless they are already a
    level; this is what lets ``info`` be overwritten while ``add_level``
    cannot be.
    """

    def __init__(self, reserved: Iterable[str] = ()):
        self._reserved = frozenset(reserved)
        self._levels: Dict[str, LevelEntry] = {}

    def register(self, name: str, decorator: Optional[Decorator] = None) -> LevelEntry:
        """Register a level, or replace the decorator of an existing one."""
        # Level names double as public Logger attributes
        if (not isinstance(name, str) or not name.isidentifier()
                or keyword.iskeyword(name) or name.startswith('_')):
            raise InvalidLevelNameError(name)
        if name in self._reserved and name not in self._levels:
            raise ReservedNameError(name)
        entry = LevelEntry(name, decorator)
        self._levels[name] = entry
        return entry

    def get(self, name: str) -> LevelEntry:
        try:
            return self._levels[name]
        except KeyError:
            raise UnknownLevelError(name) from None

    def names(self) -> List[str]:
        """Level names in registration order."""
        return list(self._levels)

    def __contains__(self, name) -> bool:
        return name in self._levels

    def __iter__(self) -> Iterator[LevelEntry]:
        return iter(self._levels.values())

    def __len__(self) -> int:
        return len(self._levels)
