"""Logging for the dg command.

Library modules log through the root logger. The CLI installs a handler that
turns severe records into a non-zero exit status.
"""

import logging
from logging import Formatter, LogRecord, StreamHandler
import sys
from typing import Dict, NoReturn, Optional, TextIO


class ColorFormatter(Formatter):

    """Formatter that highlights the level name when writing to a terminal."""

    COLORS = {
        logging.FATAL: 31,  # red
        logging.ERROR: 31,  # red
        logging.WARNING: 33,  # yellow
        logging.INFO: 32,  # green
        logging.DEBUG: 35,  # magenta
    }

    FORMAT = "%(message)s"

    def __init__(self, use_color: bool):  # pylint: disable=super-init-not-called
        self.default = Formatter(f"%(levelname)s: {self.FORMAT}")
        self.formatters: Dict[int, Formatter] = {}
        if use_color:
            for level, code in self.COLORS.items():
                fmt = f"\x1b[{code};1m%(levelname)s:\x1b[0m {self.FORMAT}"
                self.formatters[level] = Formatter(fmt)

    def format(self, record: LogRecord) -> str:
        formatter = self.formatters.get(record.levelno, self.default)
        return formatter.format(record)


class ExitStreamHandler(StreamHandler):

    """Stream handler that stops dg once a record reaches exit_level.

    A bad dictionary or config file is logged at ERROR, so by default dg stops
    at the first one. With --keep-going the threshold is FATAL and only input that
    cannot be read at all stops the run.
    """

    def __init__(
        self, stream: Optional[TextIO] = None, exit_level: int = logging.FATAL
    ):
        super().__init__(stream)
        self.exit_level = exit_level

    def emit(self, record: LogRecord):
        super().emit(record)
        if record.levelno >= self.exit_level:
            sys.exit(1)


def setup_logging(stream: TextIO, log_level: int, exit_level: int):
    """Send log records at log_level and above to stream.

    Records at exit_level and above end the process after being written, so
    log_level <= exit_level <= FATAL must hold.
    """
    assert log_level <= exit_level
    assert exit_level <= logging.FATAL
    logger = logging.getLogger()
    logger.setLevel(log_level)
    handler = ExitStreamHandler(stream, exit_level)
    handler.setFormatter(ColorFormatter(use_color=stream.isatty()))
    logger.addHandler(handler)
    # Same level as CRITICAL; "FATAL" matches fatal() below.
    logging.addLevelName(logging.FATAL, "FATAL")


def fatal(msg: str, *args, **kwargs) -> NoReturn:
    """Log msg at FATAL and exit with status 1.

    Under the CLI the exit happens inside ExitStreamHandler. When dicograph is
    used as a library there is no such handler, so this exits itself.
    """
    logging.fatal(msg, *args, **kwargs)
    sys.exit(1)
