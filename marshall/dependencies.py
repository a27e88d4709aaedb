"""Dependency injection container for marshall.

Wires settings to the file-backed collaborators and the SSH executor.
"""

from dataclasses import dataclass

from marshall.config import FileHostRegistry, FileThresholdStore, HostKeyVerifier, Settings
from marshall.protocols import RemoteExecutor
from marshall.services.dispatcher import Dispatcher
from marshall.services.executor import SSHExecutor


@dataclass
class Dependencies:
    """Container for marshall dependencies.

    Example:
        deps = Dependencies.create()
        report = await deps.dispatcher().dispatch("uptime")
    """

    settings: Settings
    registry: FileHostRegistry
    threshold_store: FileThresholdStore

    @classmethod
    def create(cls) -> "Dependencies":
        """Create dependencies from environment settings."""
        return cls.from_settings(Settings.from_env())

    @classmethod
    def from_settings(cls, settings: Settings) -> "Dependencies":
        """Create dependencies with custom settings."""
        return cls(
            settings=settings,
            registry=FileHostRegistry(settings.config_dir),
            threshold_store=FileThresholdStore(settings.config_dir),
        )

    def executor(self) -> RemoteExecutor:
        """Build the SSH executor.

        Raises:
            FileNotFoundError: If strict host key checking is on and
                known_hosts is missing
        """
        verifier = HostKeyVerifier(
            known_hosts_path=self.settings.known_hosts,
            strict_checking=self.settings.strict_host_key_checking,
        )
        return SSHExecutor(
            username=self.settings.ssh_user,
            known_hosts=verifier.get_known_hosts_path(),
            strict_host_key_checking=self.settings.strict_host_key_checking,
            connect_timeout=self.settings.connect_timeout or None,
        )

    def dispatcher(
        self,
        executor: RemoteExecutor | None = None,
        concurrency: int | None = None,
        timeout: float | None = None,
    ) -> Dispatcher:
        """Build a dispatcher; explicit arguments override settings.

        A timeout of 0 disables the per-host timeout.
        """
        if timeout is None:
            timeout = self.settings.per_host_timeout
        elif timeout <= 0:
            timeout = None

        return Dispatcher(
            self.registry,
            self.threshold_store,
            executor if executor is not None else self.executor(),
            concurrency=concurrency or self.settings.concurrency,
            timeout=timeout,
        )
