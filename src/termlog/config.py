"""Configuration for termlog loggers.

Layered resolution (highest priority wins):
  1. Explicit keyword arguments to load_config()
  2. Environment variables
  3. LoggerConfig defaults

Environment variables:
  NO_COLOR                 any non-empty value disables color
  FORCE_COLOR              any non-empty value (other than '0') re-enables it
  TERMLOG_MARKDOWN         '0' / 'false' / 'no' / 'off' disables Markdown-lite
  TERMLOG_INDENT           indent unit string (e.g. a literal tab)
  TERMLOG_LINE_TERMINATOR  'lf', 'crlf', or the literal terminator
  TERMLOG_SINKS            ';'-separated sink specs, e.g.
                           'stdout:info,success:default;stderr:warn,error'
"""

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from .sinks import SinkSpec, parse_sink_spec

_FALSE_VALUES = {'0', 'false', 'no', 'off'}
_TERMINATORS = {'lf': '\n', 'crlf': '\r\n', 'cr': '\r'}


@dataclass
class LoggerConfig:
    """Settings a Logger is built from.

    ``sinks`` replaces the stdout/stderr default wiring when non-empty.
    """
    indent_string: str = '  '
    line_terminator: str = '\n'
    enable_markdown: bool = True
    enable_color: bool = True
    sinks: List[SinkSpec] = field(default_factory=list)


def _env_flag(value: str) -> bool:
    return value.strip().lower() not in _FALSE_VALUES


def load_config(environ: Optional[Mapping[str, str]] = None,
                **overrides) -> LoggerConfig:
    """Resolve a LoggerConfig from the environment plus explicit overrides.

    Args:
        environ: Mapping to read instead of os.environ (for tests).
        **overrides: LoggerConfig fields; None values are ignored.

    Returns:
        The resolved LoggerConfig.

    Raises:
        ValueError: If TERMLOG_SINKS contains a malformed spec.
    """
    env = os.environ if environ is None else environ
    cfg = LoggerConfig()

    if env.get('NO_COLOR'):
        cfg.enable_color = False
    force = env.get('FORCE_COLOR')
    if force and force != '0':
        cfg.enable_color = True

    if 'TERMLOG_MARKDOWN' in env:
        cfg.enable_markdown = _env_flag(env['TERMLOG_MARKDOWN'])
    if env.get('TERMLOG_INDENT'):
        cfg.indent_string = env['TERMLOG_INDENT']
    if env.get('TERMLOG_LINE_TERMINATOR'):
        raw = env['TERMLOG_LINE_TERMINATOR']
        cfg.line_terminator = _TERMINATORS.get(raw.lower(), raw)
    if env.get('TERMLOG_SINKS'):
        cfg.sinks = [parse_sink_spec(spec)
                     for spec in env['TERMLOG_SINKS'].split(';') if spec.strip()]

    for key, value in overrides.items():
        if not hasattr(cfg, key):
            raise TypeError(f"Unknown config option: {key}")
        if value is not None:
            setattr(cfg, key, value)
    return cfg
