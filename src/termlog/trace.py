"""
Function tracing decorator.

Emits call entry, return value and exceptions through the ``trace`` level
of a Logger (the module default unless one is given). Tracing is opt-in:
nothing is logged until the logger has a ``trace`` level registered, e.g.

    log.add_level('trace', lambda m: '[trace] ' + m)
"""

import functools
import inspect
from pathlib import Path

TRACE_LEVEL = 'trace'


def _short_repr(value) -> str:
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return repr(value[:47] + '...')
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def _format_args(func, args, kwargs) -> str:
    shown = list(args)
    # Bound methods arrive with self/cls first; show the name, not the repr
    params = list(inspect.signature(func).parameters)
    if shown and params and params[0] in ('self', 'cls'):
        shown = shown[1:]
        parts = [params[0]]
    else:
        parts = []
    parts.extend(_short_repr(a) for a in shown)
    parts.extend(f"{k}={_short_repr(v)}" for k, v in kwargs.items())
    return ', '.join(parts)


def trace(func=None, *, logger=None, level: str = TRACE_LEVEL):
    """Decorator to trace function calls through a Logger level.

    Usable bare (``@trace``) or with options
    (``@trace(logger=my_logger, level='debug')``).
    """
    if func is None:
        return functools.partial(trace, logger=logger, level=level)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Lazy import to avoid circular dependency
        from .manager import get_log

        out = logger if logger is not None else get_log()
        if level not in out.levels:
            return func(*args, **kwargs)

        name = f"{func.__module__}.{func.__qualname__}"
        out.log(level, "[TRACE] >> %s(%s)", name, _format_args(func, args, kwargs))
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            out.log(level, "[TRACE] !! %s raised: %s: %s", name, type(e).__name__, e)
            raise
        if result is not None:
            out.log(level, "[TRACE] << %s returned: %s", name, _short_repr(result))
        return result

    return wrapper
