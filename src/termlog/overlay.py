"""
Interactive overlays: progress bars, prompts and choice menus.

An overlay owns the terminal's last line until it finishes. Only one may
be active per logger. While one is active, every regular log line is
written through a yield/restore cycle:

    \\r + erase-line      (yield_for_log: overlay line disappears)
    [i] regular line\\n   (routed as usual)
    <overlay text>        (restore_after_log: overlay redrawn below)

so the overlay always looks like the newest line on screen.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

from .errors import DuplicateKeyError, NoChoicesError, OverlayBusyError
from .terminal import CLEAR_LINE

PROGRESS = 'progress'
PROMPT = 'prompt'
CHOICE = 'choice'


class Overlay:
    """Handle for the overlay currently holding the terminal line."""

    def __init__(self, coordinator: 'OverlayCoordinator', kind: str):
        self._coordinator = coordinator
        self.kind = kind
        self.text = ''
        self.finished = False

    def render(self, text: str) -> None:
        """Replace the displayed text. Identical text writes nothing."""
        if self.finished or text == self.text:
            return
        self._coordinator._replace(self.text, text)
        self.text = text

    def finish(self, text: Optional[str] = None,
               color: Optional[Callable[[str], str]] = None,
               terminator: str = '\n') -> None:
        """Write the final text plus terminator and release the line.

        A second call does nothing, so finish() after cancel() leaves no
        stray output.
        """
        if self.finished:
            return
        final = self.text if text is None else text
        if color is not None:
            final = color(final)
        self._coordinator._replace(self.text, final + terminator)
        self.text = final
        self.finished = True
        self._coordinator._release(self)


class OverlayCoordinator:
    """Tracks the single active overlay for one output stream."""

    def __init__(self, stream):
        self.stream = stream
        self._active: Optional[Overlay] = None

    @property
    def active(self) -> Optional[Overlay]:
        return self._active

    def begin(self, kind: str) -> Overlay:
        if self._active is not None:
            raise OverlayBusyError(self._active.kind, kind)
        self._active = Overlay(self, kind)
        return self._active

    def yield_for_log(self) -> None:
        if self._active is not None and self._active.text:
            self._write(CLEAR_LINE)

    def restore_after_log(self) -> None:
        if self._active is not None and self._active.text:
            self._write(self._active.text)

    def _replace(self, old: str, new: str) -> None:
        self._write((CLEAR_LINE if old else '') + new)

    def _release(self, overlay: Overlay) -> None:
        if self._active is overlay:
            self._active = None

    def _write(self, text: str) -> None:
        self.stream.write(text)
        flush = getattr(self.stream, 'flush', None)
        if flush is not None:
            flush()


# =============================================================================
# Progress bar
# =============================================================================

BAR_WIDTH = 40
BAR_FILL = '█'
BAR_EMPTY = '░'


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (round() is banker's)."""
    return int(math.floor(value + 0.5))


def clamp(value: float) -> float:
    """Limit value to [0, 1]; NaN counts as no progress."""
    value = float(value)
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


class ProgressBar:
    """A 40-cell progress bar drawn on an overlay.

    Usage::

        bar = log.progress("Downloading")
        bar.update(0.25)
        bar.update(1)       # auto-finishes (green)

    ``cancel()`` freezes the bar where it is and finishes it in red.
    """

    def __init__(self, overlay: Overlay, message: str = '',
                 paint: Callable[[str, str], str] = lambda color, text: text,
                 terminator: Callable[[], str] = lambda: '\n'):
        self._overlay = overlay
        self._paint = paint
        self._terminator = terminator
        self.message = message
        self.value = 0.0
        self.failed = False
        self._overlay.render(self._text('cyan'))

    @property
    def finished(self) -> bool:
        return self._overlay.finished

    @property
    def percent(self) -> int:
        return round_half_up(self.value * 100)

    def update(self, value: float) -> 'ProgressBar':
        if self.finished:
            return self
        self.value = clamp(value)
        if self.value >= 1.0:
            self.finish()
        else:
            self._overlay.render(self._text('cyan'))
        return self

    def finish(self) -> None:
        if self.finished:
            return
        self._overlay.finish(self._text('green'), terminator=self._terminator())

    def cancel(self) -> None:
        if self.finished:
            return
        self.failed = True
        self._overlay.finish(self._text('red'), terminator=self._terminator())

    def _text(self, color: str) -> str:
        filled = round_half_up(self.value * BAR_WIDTH)
        bar = self._paint(color, BAR_FILL * filled) + BAR_EMPTY * (BAR_WIDTH - filled)
        text = f"[{bar}] {self.percent}%"
        return f"{self.message} {text}" if self.message else text


# =============================================================================
# Choice menus
# =============================================================================

@dataclass
class Choice:
    """One entry of a choice menu.

    ``value`` is what the menu resolves to; when unset, the label is used.
    """
    label: str
    key: Optional[str] = None
    value: Any = None

    @property
    def result(self):
        return self.label if self.value is None else self.value


ChoiceLike = Union[str, dict, Choice]


def to_choice(item: ChoiceLike) -> Choice:
    if isinstance(item, Choice):
        return Choice(item.label, item.key, item.value)
    if isinstance(item, dict):
        return Choice(str(item['label']), item.get('key'), item.get('value'))
    return Choice(str(item))


def assign_keys(items: Iterable[ChoiceLike]) -> List[Choice]:
    """Normalize choices and give every one a unique key.

    Explicit keys are claimed first. Each remaining choice takes the first
    letter of its label (lowercased) if free, else its 1-based position,
    counting upward past keys already in use.

    Raises:
        NoChoicesError: If there are no choices.
        DuplicateKeyError: If two choices set the same explicit key.
    """
    choices = [to_choice(item) for item in items]
    if not choices:
        raise NoChoicesError()

    used = set()
    for choice in choices:
        if choice.key is None:
            continue
        if choice.key in used:
            raise DuplicateKeyError(choice.key)
        used.add(choice.key)

    for position, choice in enumerate(choices, start=1):
        if choice.key is not None:
            continue
        letter = next((c.lower() for c in choice.label if c.isalpha()), None)
        if letter is not None and letter not in used:
            choice.key = letter
        else:
            number = position
            while str(number) in used:
                number += 1
            choice.key = str(number)
        used.add(choice.key)
    return choices


def render_choices(choices: Sequence[Choice], margin: str = '  ',
                   prepend_key: bool = True) -> str:
    """Render as ``'  (b) Blue  (r) Red  '`` (empty segment at both ends)."""
    labels = [f"({c.key}) {c.label}" if prepend_key else c.label for c in choices]
    return margin.join([''] + labels + [''])


def match_choice(choices: Sequence[Choice], key: str) -> Optional[Choice]:
    for choice in choices:
        if choice.key == key:
            return choice
    return None
