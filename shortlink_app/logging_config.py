"""
Logging setup.

Every record is prefixed with the service role in a configurable color,
so several services writing to the same terminal stay distinguishable.
"""

import logging
import sys

from shortlink_app.config import Settings

RESET = "\033[0m"
BOLD = "\033[1m"

COLORS = {
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "purple": "\033[35m",
    "cyan": "\033[36m",
    "gray": "\033[37m",
    "white": "\033[97m",
}


def parse_color(name: str) -> str:
    """Map a color name to its ANSI code; unknown names fall back to white."""
    name = (name or "").lower().replace(" ", "")
    return COLORS.get(name, COLORS["white"])


class RoleFormatter(logging.Formatter):
    """Formats records as ``[role] message`` with errors marked in bold."""

    def __init__(self, role: str, color: str):
        super().__init__()
        self.role = role
        self.color = parse_color(color)

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.ERROR:
            message = f"Error: {BOLD}{message}{RESET}"
        line = f"{self.color}{BOLD}[{self.role}]{RESET}{self.color} {message}{RESET}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(settings: Settings) -> None:
    """Install the role formatter on the ``shortlink`` logger tree."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(RoleFormatter(settings.role, settings.color))

    logger = logging.getLogger("shortlink")
    logger.handlers = [handler]
    logger.setLevel(settings.log_level.upper())
    logger.propagate = False
