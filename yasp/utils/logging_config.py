"""Centralized logging configuration for yasp.

Two concerns live here:

* ``configure_logging`` sets up console logging for the CLI the same way
  for every entry point, and quietens the decoding engine.
* ``setup_log_files`` attaches an append-mode pair of log files
  (``<base>`` for informational records, ``<base>_err`` for everything
  else) to the package logger. Records are written by a callback, which
  callers may replace to format or redirect them.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal, TextIO

from yasp.utils.constant import ERROR_LOG_SUFFIX, POCKETSPHINX_LOG_LEVEL

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

PACKAGE_LOGGER = "yasp"


@dataclass
class LogStreams:
    """Open info/error streams handed to a log callback.

    Attributes:
        info: Stream receiving DEBUG and INFO records.
        error: Stream receiving WARNING and above.

    """

    info: TextIO
    error: TextIO


LogCallback = Callable[[LogStreams, int, str, tuple], None]


def write_log_record(streams: LogStreams, level: int, fmt: str, args: tuple) -> None:
    """Default log callback: route a record to the info or error stream.

    Args:
        streams: Open log streams.
        level: ``logging`` severity of the record.
        fmt: ``%``-style format string.
        args: Arguments for ``fmt``.
    """
    message = fmt % args if args else fmt
    target = streams.info if level <= logging.INFO else streams.error
    target.write(message.rstrip("\n") + "\n")
    target.flush()


class CallbackHandler(logging.Handler):
    """Logging handler that forwards raw records to a :data:`LogCallback`."""

    def __init__(self, streams: LogStreams, callback: LogCallback) -> None:
        super().__init__()
        self.streams = streams
        self.callback = callback

    def emit(self, record: logging.LogRecord) -> None:
        if isinstance(record.args, tuple):
            args = record.args
        elif record.args:
            args = (record.args,)
        else:
            args = ()
        try:
            self.callback(self.streams, record.levelno, str(record.msg), args)
        except Exception:
            self.handleError(record)


@dataclass
class LogFiles:
    """Handle on the log files opened by :func:`setup_log_files`.

    ``enabled`` is ``False`` when either file could not be opened; in that
    case nothing is attached and :meth:`close` is a no-op.
    """

    logger: logging.Logger
    streams: LogStreams | None = None
    handler: logging.Handler | None = None
    previous_level: int | None = field(default=None, repr=False)
    _closed: bool = field(default=False, repr=False)

    @property
    def enabled(self) -> bool:
        return self.handler is not None

    def close(self) -> None:
        """Detach the handler and close both files."""
        if self._closed:
            return
        self._closed = True
        if self.handler is not None:
            self.logger.removeHandler(self.handler)
            self.handler.close()
        if self.previous_level is not None:
            self.logger.setLevel(self.previous_level)
        if self.streams is not None:
            self.streams.info.close()
            self.streams.error.close()

    def __enter__(self) -> LogFiles:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def setup_log_files(
    logfile: str | os.PathLike[str] | None,
    callback: LogCallback | None = None,
    *,
    logger: logging.Logger | None = None,
    level: int = logging.DEBUG,
) -> LogFiles:
    """Open ``<logfile>`` and ``<logfile>_err`` and route ``logger`` into them.

    Failure to open either file disables file logging for this run without
    raising.

    Args:
        logfile: Base path of the info log, or ``None`` to disable.
        callback: Replacement for :func:`write_log_record`.
        logger: Logger to attach to (defaults to the ``yasp`` package logger).
        level: Minimum level forwarded to the callback.

    Returns:
        LogFiles: Handle to close when the run finishes.

    Examples:
        >>> with setup_log_files("run_log"):
        ...     get_logger("yasp.cli").info("started")
    """
    target = logger or logging.getLogger(PACKAGE_LOGGER)
    if logfile is None:
        return LogFiles(logger=target)

    info_path = os.fspath(logfile)
    error_path = info_path + ERROR_LOG_SUFFIX
    try:
        error_stream = open(error_path, "a", encoding="utf-8")
    except OSError:
        return LogFiles(logger=target)
    try:
        info_stream = open(info_path, "a", encoding="utf-8")
    except OSError:
        error_stream.close()
        return LogFiles(logger=target)

    streams = LogStreams(info=info_stream, error=error_stream)
    handler = CallbackHandler(streams, callback or write_log_record)
    handler.setLevel(level)
    target.addHandler(handler)
    previous_level = target.level
    if previous_level == logging.NOTSET or previous_level > level:
        target.setLevel(level)
    return LogFiles(
        logger=target, streams=streams, handler=handler, previous_level=previous_level
    )


def _apply_engine_verbosity(*, level_name: str) -> None:
    """Set the level of the pocketsphinx logger.

    Args:
        level_name: Desired level name for the engine logger.
    """
    logging.getLogger("pocketsphinx").setLevel(getattr(logging, level_name.upper(), logging.ERROR))


def configure_logging(
    *,
    level: LogLevel | None = None,
    verbose: bool = False,
    quiet: bool = False,
    format_string: str | None = None,
) -> None:
    """Configure console logging for the application.

    This should be called once at application startup (CLI entry).

    Args:
        level: Explicit log level (overrides verbose/quiet).
        verbose: Enable verbose logging (DEBUG level + engine logs).
        quiet: Suppress all non-critical logs.
        format_string: Custom log format (uses default if None).

    Examples:
        >>> configure_logging(verbose=True)
        >>> configure_logging(level="WARNING")
    """
    if level is not None:
        log_level = getattr(logging, level.upper())
    elif verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.CRITICAL
    else:
        log_level = logging.INFO

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,  # Reconfigure even if already configured
    )
    # Console stays at log_level when setup_log_files lowers package loggers
    for handler in logging.getLogger().handlers:
        handler.setLevel(log_level)

    if verbose:
        _apply_engine_verbosity(level_name="INFO")
    elif quiet:
        _apply_engine_verbosity(level_name="CRITICAL")
    else:
        _apply_engine_verbosity(
            level_name=os.getenv("POCKETSPHINX_LOG_LEVEL", POCKETSPHINX_LOG_LEVEL)
        )

    if not quiet:
        logging.getLogger(__name__).debug(
            "Logging configured: level=%s", logging.getLevelName(log_level)
        )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of calling module).

    Returns:
        Configured logger instance.
    """
    return logging.getLogger(name)
