"""Utilities for marshall."""

from marshall.utils.console import ColorfulFormatter, configure_logging
from marshall.utils.target import parse_target, validate_host

__all__ = [
    "ColorfulFormatter",
    "configure_logging",
    "parse_target",
    "validate_host",
]
