"""
termlog — leveled, colored terminal output with routed sinks and overlays.

Public API:
    Logger           — level registry + sink router + overlay line
    log / get_log    — module-level default Logger
    LoggerConfig     — logger settings
    load_config      — resolve settings from the environment
    StreamRouter     — sink table with default fallback
    parse_sink_spec  — parse a TARGET:LEVELS:DEFAULT string
    ProgressBar      — progress overlay handle
    Choice           — choice menu entry
    format_braces    — color {...} spans with a decorator
    format_markdown  — **bold** / *italic* / ~~strike~~
    format_array     — '{a}, {b}, {c}'
    format_args      — printf-style interpolation that never raises
    trace            — function tracing decorator
"""

from ._version import __version__, __app_name__
from .config import LoggerConfig, load_config
from .decorators import (
    format_args, format_array, format_braces, format_markdown, paint,
)
from .errors import (
    TermLogError, ReservedNameError, InvalidLevelNameError, UnknownLevelError,
    DuplicateKeyError, OverlayBusyError, NoChoicesError,
)
from .manager import Logger, log, get_log
from .overlay import Choice, ProgressBar
from .sinks import SinkSpec, StreamRouter, parse_sink_spec
from .trace import trace

__all__ = [
    '__version__', '__app_name__',
    'Logger', 'log', 'get_log',
    'LoggerConfig', 'load_config',
    'StreamRouter', 'SinkSpec', 'parse_sink_spec',
    'ProgressBar', 'Choice',
    'format_braces', 'format_markdown', 'format_array', 'format_args', 'paint',
    'TermLogError', 'ReservedNameError', 'InvalidLevelNameError',
    'UnknownLevelError', 'DuplicateKeyError', 'OverlayBusyError', 'NoChoicesError',
    'trace',
]
