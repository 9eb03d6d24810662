"""Logging configuration for polyframe."""

import logging
from enum import StrEnum

from polyframe import settings


class ConsoleFormat(StrEnum):
    """ANSI escape sequences used by the colour formatter.

    <https://en.wikipedia.org/wiki/ANSI_escape_code#Select_Graphic_Rendition_parameters>
    """

    RESET = "\033[0m"

    BLACK = "\033[30m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    LIGHT_GREY = "\033[37m"

    HIGHLIGHT_RED = "\033[41m"

    BOLD = "\033[1m"


class DefaultConsoleFormatter(logging.Formatter):
    """Plain console formatter."""

    fmt = "{asctime} - {name} - {levelname} - {message}"

    def __init__(self) -> None:
        super().__init__(fmt=self.fmt, style="{", validate=True)

    def _template(self, record: logging.LogRecord) -> str:
        return self.fmt

    def format(self, record: logging.LogRecord) -> str:
        """Format the record with the template chosen for its level."""
        formatter = logging.Formatter(self._template(record), style="{", validate=True)
        return formatter.format(record)


class ColourConsoleFormatter(DefaultConsoleFormatter):
    """Console formatter that colours each record by level."""

    COLOURS = {
        logging.DEBUG: ConsoleFormat.LIGHT_GREY,
        logging.INFO: ConsoleFormat.BLUE,
        logging.WARNING: ConsoleFormat.YELLOW,
        logging.ERROR: ConsoleFormat.RED,
        logging.CRITICAL: ConsoleFormat.BOLD + ConsoleFormat.HIGHLIGHT_RED + ConsoleFormat.BLACK,
    }

    def _template(self, record: logging.LogRecord) -> str:
        colour = self.COLOURS.get(record.levelno, ConsoleFormat.RESET)
        return f"{colour}{self.fmt}{ConsoleFormat.RESET}"


def build_handler(colour: bool = settings.LOG_COLOUR_ENABLED) -> logging.Handler:
    """Build the stream handler attached to the package logger."""
    handler = logging.StreamHandler()
    handler.setLevel(settings.LOG_LEVEL)
    handler.setFormatter(ColourConsoleFormatter() if colour else DefaultConsoleFormatter())
    return handler


LOGGER = logging.getLogger(settings.LOGGER_NAME)
LOGGER.setLevel(settings.LOG_LEVEL)
if not LOGGER.handlers:  # pragma: nocover
    LOGGER.addHandler(build_handler())
