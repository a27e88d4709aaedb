"""Colorful console logging for operator diagnostics."""

import logging
import re
import sys
from datetime import datetime

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "white": "\033[37m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

# Log level colors
LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "marshall.services.collector": COLORS["bright_cyan"],
    "marshall.services.dispatcher": COLORS["bright_magenta"],
    "marshall.services.executor": COLORS["bright_blue"],
    "marshall.config": COLORS["green"],
    "marshall.cli": COLORS["yellow"],
    "default": COLORS["white"],
}

NOISY_LOGGERS = ["asyncssh", "asyncio"]


class ColorfulFormatter(logging.Formatter):
    """Log formatter with level and component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        return f"{dt.strftime('%H:%M:%S')}.{int(record.msecs):03d}"

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith("marshall."):
            name = name[len("marshall.") :]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<20}", color)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a single operator-facing line."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._colorize(
            f"{record.levelname:<8}",
            LEVEL_COLORS.get(record.levelname, COLORS["white"]),
        )
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def _highlight_message(self, message: str) -> str:
        """Highlight hosts, percentages and SSH endpoints."""
        if not self.use_colors:
            return message

        # Quoted hosts and commands
        message = re.sub(
            r"('[^']*')",
            f"{COLORS['bright_cyan']}\\1{COLORS['reset']}",
            message,
        )

        # Percentages such as 75.00%
        message = re.sub(
            r"(\d+(?:\.\d+)?%)",
            f"{COLORS['bright_yellow']}\\1{COLORS['reset']}",
            message,
        )

        # user@host:port patterns
        message = re.sub(
            r"(\w+@[\w\.\-]+:\d+)",
            f"{COLORS['bright_magenta']}\\1{COLORS['reset']}",
            message,
        )

        return message


def configure_logging(level: str = "INFO", use_colors: bool = True) -> None:
    """Configure colorful logging for the marshall package.

    Args:
        level: Log level name for the marshall logger
        use_colors: Whether to use ANSI colors (ignored when stderr is not a TTY)
    """
    if not sys.stderr.isatty():
        use_colors = False

    marshall_logger = logging.getLogger("marshall")
    marshall_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Only add handler if not already configured
    if not marshall_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        marshall_logger.addHandler(handler)
        marshall_logger.propagate = False

    for noisy_logger in NOISY_LOGGERS:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)
