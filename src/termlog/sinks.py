"""
Sink routing: which output streams receive which levels.

A sink is anything with a ``write(str)`` method. Each registered sink has
either an explicit level set or no set at all (catch-all). One sink may
also be the default, which receives a leveled line only when no other
sink accepted it.

Routing rule for a leveled line:
    1. Every sink whose set contains the level (or is catch-all) gets it.
    2. If nobody took it, the default sink gets it.
    3. Otherwise the line is dropped.

Unleveled lines (``Logger.write``) skip level sets entirely: they go to
every catch-all sink plus the default sink.

Sink spec syntax (compact, positional):
    TARGET:LEVELS:DEFAULT

    Examples:
        stderr:warn,error           # stderr, two levels
        stdout::default             # stdout, catch-all, default sink
        C:\\logs\\app.log:info      # file sink (drive letter is rejoined)
"""

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable, List, Optional, Tuple


@dataclass
class SinkEntry:
    """A registered sink and the levels it accepts (None = all)."""
    sink: Any
    levels: Optional[FrozenSet[str]] = None

    @property
    def catch_all(self) -> bool:
        return self.levels is None

    def accepts(self, level: Optional[str]) -> bool:
        if self.levels is None:
            return True
        return level is not None and level in self.levels


class StreamRouter:
    """Sink table plus the default pointer, kept in one place.

    Sinks are visited in registration order. Re-adding a sink updates it in
    place, so its position never changes.
    """

    def __init__(self):
        self._entries: List[SinkEntry] = []
        self._default: Optional[Any] = None

    # -- registration -------------------------------------------------------

    def add_sink(self, sink, levels: Optional[Iterable[str]] = None,
                 set_default: bool = False):
        """Register ``sink`` or replace its level set.

        Args:
            sink: Writable object.
            levels: Accepted level names. None or empty means catch-all.
            set_default: Make this the only default sink. False strips the
                default flag from this sink if it held it.

        Returns:
            The sink, for chaining.
        """
        self._prune_closed()
        level_set = frozenset(levels) if levels else None
        entry = self._find(sink)
        if entry is None:
            self._entries.append(SinkEntry(sink, level_set))
        else:
            entry.levels = level_set

        if set_default:
            self._default = sink
        elif self._default is sink:
            self._default = None
        return sink

    def remove_sink(self, sink=None) -> None:
        """Remove one sink, or every sink when called with no argument.

        The default flag goes with the removed sink; no other sink is
        promoted in its place.
        """
        if sink is None:
            self._entries.clear()
            self._default = None
            return
        self._entries = [e for e in self._entries if e.sink is not sink]
        if self._default is sink:
            self._default = None

    def sink_closed(self, sink) -> None:
        """Report that a sink has closed; it is dropped like remove_sink()."""
        self.remove_sink(sink)

    def accept_level(self, sink, level: str) -> None:
        """Add ``level`` to a sink's set. No-op for catch-all or unknown sinks."""
        entry = self._find(sink)
        if entry is None or entry.catch_all:
            return
        entry.levels = entry.levels | {level}

    # -- queries ------------------------------------------------------------

    @property
    def default(self):
        return self._default

    def sinks(self) -> List[Any]:
        return [e.sink for e in self._entries]

    def levels_for(self, sink) -> Optional[FrozenSet[str]]:
        entry = self._find(sink)
        if entry is None:
            raise KeyError(sink)
        return entry.levels

    def __contains__(self, sink) -> bool:
        return self._find(sink) is not None

    def __len__(self) -> int:
        return len(self._entries)

    # -- routing ------------------------------------------------------------

    def route(self, level: Optional[str], line: str) -> int:
        """Write ``line`` to every sink that should receive ``level``.

        ``level=None`` is the unleveled bucket used by ``Logger.write``.

        Returns:
            Number of sinks written to.
        """
        self._prune_closed()
        written = 0
        delivered_default = False
        for entry in list(self._entries):
            if entry.accepts(level):
                entry.sink.write(line)
                written += 1
                if entry.sink is self._default:
                    delivered_default = True

        if self._default is not None and not delivered_default:
            if level is None or written == 0:
                self._default.write(line)
                written += 1
        return written

    def describe(self) -> str:
        """Format the sink table for display."""
        if not self._entries:
            return "No sinks."
        rows = []
        for entry in self._entries:
            levels = 'all' if entry.catch_all else ', '.join(sorted(entry.levels))
            default = " (default)" if entry.sink is self._default else ""
            rows.append((_sink_name(entry.sink), levels + default))
        width = max(len(name) for name, _ in rows)
        lines = ["Sinks:"]
        for name, levels in rows:
            lines.append(f"  {name:<{width}}  {levels}")
        return "\n".join(lines)

    # -- internals ----------------------------------------------------------

    def _find(self, sink) -> Optional[SinkEntry]:
        for entry in self._entries:
            if entry.sink is sink:
                return entry
        return None

    def _prune_closed(self) -> None:
        for entry in list(self._entries):
            if getattr(entry.sink, 'closed', False):
                self.sink_closed(entry.sink)


def _sink_name(sink) -> str:
    name = getattr(sink, 'name', None)
    if isinstance(name, str):
        return name
    return type(sink).__name__


# =============================================================================
# Sink specs
# =============================================================================

STANDARD_TARGETS = ('stdout', 'stderr')


@dataclass
class SinkSpec:
    """Parsed form of a ``TARGET:LEVELS:DEFAULT`` string."""
    target: str
    levels: Tuple[str, ...] = field(default_factory=tuple)
    default: bool = False

    @property
    def is_file(self) -> bool:
        return self.target not in STANDARD_TARGETS


def parse_sink_spec(spec: str) -> SinkSpec:
    """Parse a sink spec string into a SinkSpec.

    Empty slots use :: (empty between colons). A Windows drive letter in
    the TARGET slot (``C:\\path``) is detected and rejoined.

    Args:
        spec: Sink spec like "stderr:warn,error" or "out.log::default"

    Returns:
        SinkSpec with parsed values

    Raises:
        ValueError: If the target is empty or the default slot is not
            'default' / empty.
    """
    parts = spec.strip().split(':')

    # 'C' + '\\logs\\x.log' -> 'C:\\logs\\x.log'
    if (len(parts) > 1 and len(parts[0]) == 1 and parts[0].isalpha()
            and parts[1][:1] in ('\\', '/')):
        parts = [f"{parts[0]}:{parts[1]}"] + parts[2:]

    target = parts[0]
    if not target:
        raise ValueError(f"Sink spec has no target: {spec!r}")

    levels: Tuple[str, ...] = ()
    if len(parts) > 1 and parts[1]:
        levels = tuple(name.strip() for name in parts[1].split(',') if name.strip())

    default = False
    if len(parts) > 2 and parts[2]:
        if parts[2] != 'default':
            raise ValueError(f"Unknown sink flag {parts[2]!r} in {spec!r}")
        default = True

    return SinkSpec(target=target, levels=levels, default=default)
