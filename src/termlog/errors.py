"""
Exception hierarchy for termlog.

Every error here signals a programmer mistake (bad level name, clashing
choice keys, overlapping overlays). None of them are retried or caught
inside the library; they surface at the call that caused them.
"""


class TermLogError(Exception):
    """Base exception for termlog. All library errors inherit from this."""


class ReservedNameError(TermLogError):
    """Raised when a level name collides with a Logger operation.

    Attributes:
        name: The rejected level name.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Cannot create custom logging level with reserved name: {name}"
        )


class InvalidLevelNameError(TermLogError, ValueError):
    """Raised when a level name is not a public Python identifier."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Level name must be a public identifier (no leading underscore): {name!r}")


class UnknownLevelError(TermLogError, KeyError):
    """Raised when logging to a level that was never registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self):
        return f"Unknown logging level: {self.name}"


class DuplicateKeyError(TermLogError):
    """Raised when two choices explicitly claim the same key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Duplicate choice key: {key!r}")


class OverlayBusyError(TermLogError):
    """Raised when an overlay is started while another one is active.

    Attributes:
        active: Kind of the overlay currently holding the line.
        requested: Kind of the overlay that was refused.
    """

    def __init__(self, active: str, requested: str):
        self.active = active
        self.requested = requested
        super().__init__(
            f"Cannot start {requested}: a {active} is already active"
        )


class NoChoicesError(TermLogError):
    """Raised when a choice menu is opened with no choices."""

    def __init__(self):
        super().__init__("choice() requires at least one choice")
