"""
Logger — composition root for levels, sinks and overlays.

Pipeline for every call:

    info("Hi {you} %s", x)
      -> level decorator       "[{i}] Hi {you} %s" -> braces colored cyan
      -> Markdown-lite         **bold** / *italic* / ~~strike~~
      -> % interpolation       "... Hi you x"
      -> indent + terminator
      -> overlay yield / route to sinks / overlay restore

``write()`` skips the level decorator and the level filters: it goes to
every catch-all sink plus the default sink. Pausing drops everything that
goes through the pipeline (write() included) but never touches overlays.
"""

import asyncio
import contextlib
import functools
import os
import sys
from typing import Callable, Iterable, List, Optional

from .config import LoggerConfig
from .decorators import (
    Decorator, format_args, format_braces, format_markdown, paint, painter,
)
from .levels import (
    BUILTIN_LEVELS, ERROR, INFO, SUCCESS, WARN, LevelRegistry, builtin_decorator,
)
from .overlay import (
    CHOICE, PROGRESS, PROMPT, ChoiceLike, Overlay, OverlayCoordinator,
    ProgressBar, assign_keys, match_choice, render_choices,
)
from .sinks import StreamRouter
from .terminal import KEY_BACKSPACE, KEY_ENTER, KEY_INTERRUPT, input_mode, read_key

# Instance attributes; a level with one of these names would be shadowed
_INSTANCE_ATTRS = {
    'indentation', 'indent_string', 'line_terminator',
    'enable_markdown', 'enable_color', 'paused', 'key_reader',
}


class Logger:
    """Terminal logger with level routing and a shared overlay line.

    Usage::

        logger = Logger()
        logger.info("Loaded {%d} items", 42)
        logger.add_level('debug', lambda m: '[debug] ' + m)
        logger.debug("details")             # same as logger.log('debug', ...)
        logger.pipe('run.log', ['warn', 'error'])
        bar = logger.progress("Working")
        bar.update(0.5)

    Default wiring: ``stdout`` takes info/success and is the default sink;
    ``stderr`` takes warn/error.
    """

    def __init__(
        self,
        stdout=None,
        stderr=None,
        *,
        indent_string: str = '  ',
        line_terminator: str = '\n',
        enable_markdown: bool = True,
        enable_color: bool = True,
        key_reader: Optional[Callable[[], str]] = None,
    ):
        stdout = stdout if stdout is not None else sys.stdout
        stderr = stderr if stderr is not None else sys.stderr

        self.indentation = 0
        self.indent_string = indent_string
        self.line_terminator = line_terminator
        self.enable_markdown = enable_markdown
        self.enable_color = enable_color
        self.paused = False
        self.key_reader = key_reader if key_reader is not None else read_key

        self._levels = LevelRegistry(reserved=reserved_names())
        for level in BUILTIN_LEVELS:
            self._levels.register(level.name, builtin_decorator(level, self._paint))

        self._router = StreamRouter()
        # Files opened by pipe(path); closed again by unpipe()
        self._opened = set()
        self._router.add_sink(stdout, [INFO, SUCCESS], set_default=True)
        self._router.add_sink(stderr, [WARN, ERROR])

        self._overlay = OverlayCoordinator(stdout)

    @classmethod
    def from_config(cls, config: LoggerConfig, stdout=None, stderr=None,
                    key_reader: Optional[Callable[[], str]] = None) -> 'Logger':
        """Build a Logger from a LoggerConfig.

        Sink specs in the config replace the default wiring. 'stdout' and
        'stderr' targets map to the streams given here (or sys.*).
        """
        logger = cls(
            stdout, stderr,
            indent_string=config.indent_string,
            line_terminator=config.line_terminator,
            enable_markdown=config.enable_markdown,
            enable_color=config.enable_color,
            key_reader=key_reader,
        )
        if config.sinks:
            standard = {
                'stdout': stdout if stdout is not None else sys.stdout,
                'stderr': stderr if stderr is not None else sys.stderr,
            }
            logger.unpipe()
            for spec in config.sinks:
                target = standard.get(spec.target, spec.target)
                logger.pipe(target, spec.levels, spec.default)
        return logger

    # =========================================================================
    # Levels
    # =========================================================================

    def info(self, message='', *args) -> 'Logger':
        """Log at the ``info`` level: ``[i] message`` in cyan."""
        return self.log(INFO, message, *args)

    def warn(self, message='', *args) -> 'Logger':
        """Log at the ``warn`` level: ``[!] message`` in yellow."""
        return self.log(WARN, message, *args)

    def error(self, message='', *args) -> 'Logger':
        """Log at the ``error`` level: ``[x] message`` in red."""
        return self.log(ERROR, message, *args)

    def success(self, message='', *args) -> 'Logger':
        """Log at the ``success`` level: ``[✓] message`` in green."""
        return self.log(SUCCESS, message, *args)

    def log(self, level: str, message='', *args) -> 'Logger':
        """Log ``message`` at a registered level.

        Args:
            level: Level name (built-in or added with add_level()).
            message: Text with optional %-format specifiers.
            *args: Values for the format specifiers.

        Raises:
            UnknownLevelError: If the level was never registered.
        """
        entry = self._levels.get(level)
        return self._emit(level, entry.apply(str(message)), args)

    def add_level(self, name: str, decorator: Optional[Decorator] = None,
                  add_to_default: bool = False) -> 'Logger':
        """Add a custom level, or replace the decorator of an existing one.

        The level becomes callable as ``logger.<name>(message, *args)``.
        Names of Logger operations (``pipe``, ``add_level``...) are refused,
        built-in level names are not.

        Args:
            name: Level name. Must be a valid Python identifier.
            decorator: Optional ``str -> str`` applied to each message.
            add_to_default: Also add the level to the default sink's set.

        Raises:
            ReservedNameError: If name belongs to a Logger operation.
            InvalidLevelNameError: If name is not an identifier.
        """
        self._levels.register(name, decorator)
        if add_to_default and self._router.default is not None:
            self._router.accept_level(self._router.default, name)
        return self

    def level(self, name: str, decorator: Optional[Decorator] = None,
              sink=None) -> 'Logger':
        """Like add_level(), but wires the level into ``sink`` if given."""
        self._levels.register(name, decorator)
        if sink is not None:
            self._router.accept_level(sink, name)
        return self

    @property
    def levels(self) -> List[str]:
        return self._levels.names()

    def __getattr__(self, name):
        levels = self.__dict__.get('_levels')
        if levels is None or name.startswith('_') or name not in levels:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            )
        return functools.partial(self.log, name)

    # =========================================================================
    # Plain output
    # =========================================================================

    def write(self, message='', *args) -> 'Logger':
        """Write a message with no level prefix or color.

        Goes to every catch-all sink plus the default sink, ignoring level
        filters. Markdown, interpolation, indentation and the line
        terminator still apply.
        """
        return self._emit(None, str(message), args)

    def blank(self) -> 'Logger':
        """Write an empty line."""
        return self.write()

    # =========================================================================
    # Sinks
    # =========================================================================

    def pipe(self, target, levels: Optional[Iterable[str]] = None,
             set_default: bool = False):
        """Send output to ``target``.

        Args:
            target: A writable stream, or a file path (str / PathLike),
                which is opened for writing and returned.
            levels: Levels this sink accepts. None or empty = all levels.
            set_default: Make this the fallback sink for unrouted levels.

        Returns:
            The sink that was registered.
        """
        if isinstance(target, (str, os.PathLike)):
            target = open(target, 'w', encoding='utf-8')
            self._opened.add(target)
        return self._router.add_sink(target, levels, set_default)

    def unpipe(self, sink=None) -> 'Logger':
        """Stop sending output to ``sink``, or to every sink if omitted.

        Files that pipe() opened from a path are closed; streams handed in
        by the caller are left open.
        """
        removed = self._router.sinks() if sink is None else [sink]
        self._router.remove_sink(sink)
        for stream in removed:
            if stream in self._opened:
                self._opened.discard(stream)
                stream.close()
        return self

    @property
    def router(self) -> StreamRouter:
        return self._router

    def format_routes(self) -> str:
        """Describe every sink, its levels and the default flag."""
        return self._router.describe()

    # =========================================================================
    # State
    # =========================================================================

    def pause(self) -> 'Logger':
        """Drop all log output until resume(). Overlays are unaffected."""
        self.paused = True
        return self

    def resume(self) -> 'Logger':
        self.paused = False
        return self

    def indent(self, count: int = 1) -> 'Logger':
        self.indentation += count
        return self

    def outdent(self, count: int = 1) -> 'Logger':
        self.indentation = max(0, self.indentation - count)
        return self

    def clear_indentation(self) -> 'Logger':
        self.indentation = 0
        return self

    # =========================================================================
    # Overlays
    # =========================================================================

    @property
    def overlay(self) -> Optional[Overlay]:
        """The overlay currently holding the last line, if any."""
        return self._overlay.active

    def progress(self, message: str = '') -> ProgressBar:
        """Start a progress bar on the overlay line.

        Raises:
            OverlayBusyError: If another overlay is active.
        """
        overlay = self._overlay.begin(PROGRESS)
        return ProgressBar(overlay, message, paint=self._paint,
                           terminator=lambda: self.line_terminator)

    async def prompt(self, message: str, mask: Optional[str] = None) -> Optional[str]:
        """Ask for a line of input on the overlay line.

        Keys are read one at a time off the event loop, so other tasks can
        keep logging above the prompt. With ``mask`` set, each typed
        character is echoed as ``mask``.

        Returns:
            The typed text, or None if a masked prompt was interrupted.

        Raises:
            KeyboardInterrupt: If an unmasked prompt is interrupted.
            OverlayBusyError: If another overlay is active.
        """
        overlay = self._overlay.begin(PROMPT)
        header = self._question(message)
        typed = ''
        try:
            with self._key_mode():
                overlay.render(header)
                while True:
                    key = await asyncio.to_thread(self.key_reader)
                    if key in KEY_ENTER:
                        break
                    if key == KEY_INTERRUPT:
                        if mask is not None:
                            return None
                        raise KeyboardInterrupt
                    if key in KEY_BACKSPACE:
                        typed = typed[:-1]
                    elif key.isprintable():
                        typed += key
                    shown = mask * len(typed) if mask is not None else typed
                    overlay.render(header + shown)
        finally:
            overlay.finish(terminator=self.line_terminator)
        return typed

    async def choice(self, message: str, choices: Iterable[ChoiceLike],
                     margin: str = '  ', prepend_key: bool = True):
        """Show a single-key choice menu and wait for a matching key.

        Returns:
            The chosen entry's value, or its label if it has no value.

        Raises:
            NoChoicesError: If choices is empty.
            DuplicateKeyError: If two choices set the same key.
            OverlayBusyError: If another overlay is active.
            KeyboardInterrupt: On Ctrl-C.
        """
        options = assign_keys(choices)
        overlay = self._overlay.begin(CHOICE)
        header = self._question(message)
        selected = None
        try:
            with self._key_mode():
                overlay.render(header + render_choices(options, margin, prepend_key))
                while selected is None:
                    key = await asyncio.to_thread(self.key_reader)
                    if key == KEY_INTERRUPT:
                        raise KeyboardInterrupt
                    selected = match_choice(options, key)
        finally:
            final = None
            if selected is not None:
                final = header + self._paint('cyan', selected.label)
            overlay.finish(final, terminator=self.line_terminator)
        return selected.result

    # =========================================================================
    # Internals
    # =========================================================================

    def _paint(self, color: str, text: str) -> str:
        return paint(color, text, self.enable_color)

    def _key_mode(self):
        # A custom key reader owns its own input source
        if self.key_reader is read_key:
            return input_mode()
        return contextlib.nullcontext()

    def _question(self, message: str) -> str:
        return format_braces(f"[{{?}}] {message} ", painter('cyan', self.enable_color))

    def _emit(self, level: Optional[str], message: str, args: tuple) -> 'Logger':
        if self.paused:
            return self
        if self.enable_markdown:
            message = format_markdown(message, self.enable_color)
        message = format_args(message, args)
        line = self.indent_string * self.indentation + message + self.line_terminator

        self._overlay.yield_for_log()
        try:
            self._router.route(level, line)
        finally:
            self._overlay.restore_after_log()
        return self


def reserved_names() -> frozenset:
    """Names a custom level may not take (unless it is already a level)."""
    public = {name for name in dir(Logger) if not name.startswith('_')}
    builtin = {level.name for level in BUILTIN_LEVELS}
    return frozenset((public | _INSTANCE_ATTRS) - builtin)


# =============================================================================
# Module-level default instance
# =============================================================================

log = Logger()


def get_log() -> Logger:
    """Get the module-level default Logger."""
    return log
