"""Protocol interfaces for the collaborators injected into the dispatcher.

The dispatch core never touches the file system or the network directly.
Hosts, the threshold and remote execution all come in through these
interfaces, so tests can pass plain in-memory implementations.

Usage Example:

    from marshall.protocols import RemoteExecutor

    class EchoExecutor:
        async def execute(self, host: str, command: str) -> ExecutionResult:
            return ExecutionResult(succeeded=True, output=f"{host}: {command}")

    assert isinstance(EchoExecutor(), RemoteExecutor)
"""

from typing import Protocol, runtime_checkable

from marshall.models import ExecutionResult


@runtime_checkable
class RemoteExecutor(Protocol):
    """Capability that runs a command on one host.

    A failed remote command is a normal outcome: implementations report it
    through ``ExecutionResult.succeeded`` instead of raising. The acting
    principal (the invoking operator) is the executor's concern.
    """

    async def execute(self, host: str, command: str) -> ExecutionResult:
        """Run command on host.

        Args:
            host: Host identifier from the registry
            command: Trimmed command string, passed verbatim

        Returns:
            ExecutionResult describing success or failure
        """
        ...


@runtime_checkable
class HostRegistry(Protocol):
    """Source of the ordered, de-duplicated set of configured hosts."""

    def list(self) -> list[str]:
        """Return configured host identifiers in stable order."""
        ...


@runtime_checkable
class ThresholdStore(Protocol):
    """Source of the optional success threshold."""

    def get(self) -> int | None:
        """Return the threshold percentage, or None when not configured."""
        ...
