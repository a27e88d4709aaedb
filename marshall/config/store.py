"""File-backed host registry and threshold store.

Layout of the configuration directory (default ``~/.marshall``):

- ``hosts``: one host identifier per line
- ``threshold``: a single integer percentage between 0 and 100
"""

import logging
import re
from collections.abc import Sequence
from pathlib import Path

from marshall.errors import InvalidThresholdValue
from marshall.utils.target import validate_host

logger = logging.getLogger(__name__)

HOSTS_FILE = "hosts"
THRESHOLD_FILE = "threshold"

# Optional trailing percent sign, e.g. "80" or "80%"
THRESHOLD_PATTERN = re.compile(r"^([0-9]{1,2}|100)%?$")


def parse_threshold(value: str | int) -> int:
    """Validate a threshold supplied by the operator.

    Args:
        value: Integer or text such as "75" or "75%"

    Returns:
        Threshold percentage in [0, 100]

    Raises:
        InvalidThresholdValue: If value is not a percentage between 0 and 100
    """
    if isinstance(value, bool):
        raise InvalidThresholdValue(value)
    if isinstance(value, int):
        if not 0 <= value <= 100:
            raise InvalidThresholdValue(value)
        return value

    text = value.strip()
    match = THRESHOLD_PATTERN.match(text)
    if match is None:
        raise InvalidThresholdValue(value)
    return int(match.group(1))


class FileHostRegistry:
    """Host registry backed by a newline-separated file."""

    def __init__(self, config_dir: Path) -> None:
        self.path = Path(config_dir) / HOSTS_FILE

    def list(self) -> list[str]:
        """Return configured hosts, trimmed and de-duplicated in file order."""
        if not self.path.exists():
            return []

        hosts: list[str] = []
        for line in self.path.read_text().splitlines():
            host = line.strip()
            if host and host not in hosts:
                hosts.append(host)
        return hosts

    def add(self, host: str) -> bool:
        """Add a host if not already present.

        Args:
            host: Host identifier

        Returns:
            True if the host was added, False if it was already registered

        Raises:
            ValueError: If host identifier is invalid
        """
        host = validate_host(host)
        hosts = self.list()
        if host in hosts:
            logger.info("Host '%s' already registered", host)
            return False

        self._write(hosts + [host])
        logger.info("Added '%s' to marshalled hosts", host)
        return True

    def remove(self, host: str) -> bool:
        """Remove a host, deleting the hosts file once it is empty.

        Args:
            host: Host identifier

        Returns:
            True if the host was removed, False if it was not registered
        """
        host = host.strip()
        hosts = self.list()
        if host not in hosts:
            logger.info("Host '%s' not registered, nothing to remove", host)
            return False

        remaining = [h for h in hosts if h != host]
        if remaining:
            self._write(remaining)
        else:
            self.path.unlink()
            logger.debug("Hosts file %s removed (no hosts left)", self.path)
        logger.info("Removed '%s' from marshalled hosts", host)
        return True

    def _write(self, hosts: Sequence[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("".join(f"{h}\n" for h in hosts))


class FileThresholdStore:
    """Threshold store backed by a single-value file."""

    def __init__(self, config_dir: Path) -> None:
        self.path = Path(config_dir) / THRESHOLD_FILE

    def get(self) -> int | None:
        """Return the configured threshold, or None when not configured.

        Raises:
            InvalidThresholdValue: If the stored value is not a valid percentage
        """
        if not self.path.exists():
            return None
        return parse_threshold(self.path.read_text())

    def set(self, value: str | int) -> int:
        """Validate and persist a threshold.

        Returns:
            The stored threshold

        Raises:
            InvalidThresholdValue: If value is not a percentage between 0 and 100
        """
        threshold = parse_threshold(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(f"{threshold}\n")
        logger.info("Threshold now set to %d%%", threshold)
        return threshold

    def clear(self) -> bool:
        """Delete the threshold.

        Returns:
            True if a threshold was deleted, False if none was set
        """
        if not self.path.exists():
            logger.info("No threshold was set")
            return False
        self.path.unlink()
        logger.info("Deleted threshold")
        return True


def describe_config(registry: FileHostRegistry, threshold_store: FileThresholdStore) -> str:
    """Render the stored configuration for display."""
    if not registry.path.exists() and not threshold_store.path.exists():
        return "No configuration files detected"

    sections: list[str] = []
    if registry.path.exists():
        sections.append("\n".join(["MARSHALLED HOSTS:", *registry.list()]))
    if threshold_store.path.exists():
        sections.append(f"CURRENT THRESHOLD:\n{threshold_store.get()}")
    return "\n\n".join(sections)
