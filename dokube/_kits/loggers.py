"""
Logging setup for the command-line usage.

The library itself only logs via the standard ``logging`` module (at the debug
level, per request) and never configures the handlers: it is the application's
job. The CLI configures them here, with plain-text or JSON formats.
"""
import enum
import logging
from typing import TYPE_CHECKING, Any, TextIO

from pythonjsonlogger.core import RESERVED_ATTRS as _pjl_RESERVED_ATTRS
from pythonjsonlogger.json import JsonFormatter as _pjl_JsonFormatter


class LogFormat(enum.Enum):
    """ Log formats, as specified on CLI. """
    PLAIN = '%(message)s'
    FULL = '[%(asctime)s] %(name)-20.20s [%(levelname)-8.8s] %(message)s'
    JSON = '-json-'  # not used for formatting, only for detection


class TextFormatter(logging.Formatter):
    pass


class JsonFormatter(_pjl_JsonFormatter):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault('reserved_attrs', set(_pjl_RESERVED_ATTRS))
        kwargs.setdefault('timestamp', True)
        super().__init__(*args, **kwargs)

    def add_fields(
            self,
            log_record: dict[str, object],
            record: logging.LogRecord,
            message_dict: dict[str, object],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        if 'severity' not in log_record:
            log_record['severity'] = (
                "debug" if record.levelno <= logging.DEBUG else
                "info" if record.levelno <= logging.INFO else
                "warn" if record.levelno <= logging.WARNING else
                "error" if record.levelno <= logging.ERROR else
                "fatal")


# Used to identify and remove our own handlers on re-runs, e.g. in the CLI tests,
# where the streams of the previous runs can be already closed by Click's runner.
if TYPE_CHECKING:
    class _DokubeStreamHandler(logging.StreamHandler[TextIO]):
        pass
else:
    class _DokubeStreamHandler(logging.StreamHandler):
        pass


def configure(
        debug: bool | None = None,
        verbose: bool | None = None,
        quiet: bool | None = None,
        log_format: LogFormat = LogFormat.FULL,
) -> None:
    log_level = 'DEBUG' if debug or verbose else 'WARNING' if quiet else 'INFO'
    formatter = make_formatter(log_format=log_format)
    handler = _DokubeStreamHandler()
    handler.setFormatter(formatter)
    logger = logging.getLogger()
    logger.handlers[:] = [h for h in logger.handlers if not isinstance(h, _DokubeStreamHandler)]
    logger.addHandler(handler)
    logger.setLevel(log_level)

    # The transport-level logs are only interesting when debugging the client itself.
    for name in ['asyncio', 'aiohttp']:
        logger = logging.getLogger(name)
        logger.propagate = bool(debug)
        if not debug:
            logger.handlers[:] = [logging.NullHandler()]


def make_formatter(
        log_format: LogFormat | str = LogFormat.FULL,
) -> logging.Formatter:
    match log_format:
        case LogFormat.JSON:
            return JsonFormatter()
        case LogFormat():
            return TextFormatter(log_format.value)
        case str():
            return TextFormatter(log_format)
        case _:
            raise ValueError(f"Unsupported log format: {log_format!r}")
