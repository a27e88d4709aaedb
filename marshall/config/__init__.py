"""Configuration module for marshall.

Provides focused classes for different configuration concerns:
- Settings: Environment variable configuration
- HostKeyVerifier: Manages SSH host key verification
- FileHostRegistry / FileThresholdStore: Persisted hosts and threshold
"""

from marshall.config.host_keys import HostKeyVerifier
from marshall.config.settings import Settings
from marshall.config.store import (
    FileHostRegistry,
    FileThresholdStore,
    describe_config,
    parse_threshold,
)

__all__ = [
    "FileHostRegistry",
    "FileThresholdStore",
    "HostKeyVerifier",
    "Settings",
    "describe_config",
    "parse_threshold",
]
