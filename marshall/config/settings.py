"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import getpass
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


def _default_config_dir() -> Path:
    return Path.home() / ".marshall"


def _default_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return os.getenv("USER", "root")


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Host and threshold storage
    config_dir: Path = field(default_factory=_default_config_dir)

    # Fan-out
    concurrency: int = field(default=4)
    command_timeout: float = field(default=0)  # 0 disables
    connect_timeout: float = field(default=10)

    # SSH
    ssh_user: str = field(default_factory=_default_user)
    known_hosts: str | None = field(default=None)
    strict_host_key_checking: bool = field(default=True)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)

    @property
    def per_host_timeout(self) -> float | None:
        """Per-host timeout in seconds, or None when disabled."""
        return self.command_timeout if self.command_timeout > 0 else None

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from MARSHALL_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        config_dir = os.getenv("MARSHALL_CONFIG_DIR", "").strip()
        settings = cls(
            config_dir=(
                Path(os.path.expanduser(config_dir))
                if config_dir
                else _default_config_dir()
            ),
            concurrency=cls._get_positive_int("MARSHALL_CONCURRENCY", 4),
            command_timeout=cls._get_float("MARSHALL_COMMAND_TIMEOUT", 0),
            connect_timeout=cls._get_float("MARSHALL_CONNECT_TIMEOUT", 10),
            ssh_user=os.getenv("MARSHALL_SSH_USER", "").strip() or _default_user(),
            known_hosts=os.getenv("MARSHALL_KNOWN_HOSTS", "").strip() or None,
            strict_host_key_checking=cls._get_bool(
                "MARSHALL_STRICT_HOST_KEY_CHECKING", True
            ),
            log_level=os.getenv("MARSHALL_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("MARSHALL_LOG_COLORS", True),
        )
        logger.debug(
            "Settings loaded: config_dir=%s, concurrency=%d, command_timeout=%s, "
            "connect_timeout=%s, ssh_user=%s",
            settings.config_dir,
            settings.concurrency,
            settings.command_timeout,
            settings.connect_timeout,
            settings.ssh_user,
        )
        return settings

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @classmethod
    def _get_positive_int(cls, key: str, default: int) -> int:
        value = cls._get_int(key, default)
        if value <= 0:
            logger.warning(
                "%s must be > 0, got %d. Using default: %d", key, value, default
            )
            return default
        return value

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        if value is None:
            return default

        try:
            parsed = float(value)
        except ValueError:
            logger.warning("Invalid number for %s: %s, using default %s", key, value, default)
            return default
        if parsed < 0:
            logger.warning("%s must be >= 0, got %s. Using default: %s", key, value, default)
            return default
        return parsed

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")
