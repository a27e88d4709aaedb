"""SSH remote executor built on asyncssh."""

import logging

import asyncssh

from marshall.models import ExecutionResult, SSHTarget
from marshall.utils.target import parse_target

logger = logging.getLogger(__name__)

# Characters of remote stderr kept in a failure detail
MAX_DETAIL_STDERR = 500


def _decode(stream: str | bytes | None) -> str:
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        return stream.decode("utf-8", errors="replace")
    return stream


class SSHExecutor:
    """Runs one command on one host over a fresh SSH connection.

    The session is opened as the invoking operator unless the host identifier
    names a user explicitly (``user@host``).
    """

    def __init__(
        self,
        username: str,
        known_hosts: str | None = None,
        strict_host_key_checking: bool = True,
        connect_timeout: float | None = 10,
    ) -> None:
        """Initialize executor.

        Args:
            username: Acting principal for SSH sessions
            known_hosts: Path to known_hosts file, or None to disable verification
            strict_host_key_checking: Whether to reject unknown host keys
            connect_timeout: Seconds allowed for connection setup, None for no limit
        """
        self.username = username
        self.connect_timeout = connect_timeout
        self._known_hosts = known_hosts
        self._strict_host_key = strict_host_key_checking

        if self._known_hosts is None:
            logger.warning(
                "SSH host key verification DISABLED - vulnerable to MITM attacks. "
                "Set MARSHALL_KNOWN_HOSTS to a valid known_hosts file path."
            )
        else:
            logger.debug(
                "SSH host key verification enabled (known_hosts=%s, strict=%s)",
                self._known_hosts,
                self._strict_host_key,
            )

    async def _connect(self, host: str, target: SSHTarget) -> asyncssh.SSHClientConnection:
        """Open a connection, relaxing host key checks only in non-strict mode."""
        username = target.user or self.username
        logger.debug(
            "Opening SSH connection to %s (%s@%s:%d)",
            host,
            username,
            target.hostname,
            target.port,
        )
        try:
            return await asyncssh.connect(
                target.hostname,
                port=target.port,
                username=username,
                known_hosts=self._known_hosts,
                connect_timeout=self.connect_timeout,
            )
        except asyncssh.HostKeyNotVerifiable as e:
            if self._strict_host_key:
                logger.error(
                    "Host key verification failed for %s: %s. "
                    "Add the host key to %s or set "
                    "MARSHALL_STRICT_HOST_KEY_CHECKING=false",
                    host,
                    e,
                    self._known_hosts,
                )
                raise
            logger.warning(
                "Host key not verified for %s (strict mode disabled): %s",
                host,
                e,
            )
            return await asyncssh.connect(
                target.hostname,
                port=target.port,
                username=username,
                known_hosts=None,
                connect_timeout=self.connect_timeout,
            )

    async def execute(self, host: str, command: str) -> ExecutionResult:
        """Run command on host.

        Connection failures and non-zero exit statuses are reported as failed
        results, never raised.

        Args:
            host: Host identifier (``[user@]host[:port]``)
            command: Command to run verbatim

        Returns:
            ExecutionResult with output, exit status and failure detail
        """
        try:
            target = parse_target(host)
        except ValueError as e:
            return ExecutionResult(succeeded=False, detail=str(e))

        try:
            async with await self._connect(host, target) as conn:
                result = await conn.run(command, check=False)
        except (OSError, asyncssh.Error) as e:
            detail = str(e) or type(e).__name__
            return ExecutionResult(
                succeeded=False,
                detail=f"Error ssh'ing command to '{target.user or self.username}@{host}': {detail}",
            )

        output = _decode(result.stdout)
        error = _decode(result.stderr).strip()
        exit_status = result.returncode

        if exit_status == 0:
            return ExecutionResult(succeeded=True, output=output, exit_status=0)

        if exit_status is None:
            detail = "Command terminated without an exit status"
        else:
            detail = f"Command exited with code {exit_status}"
        if error:
            detail = f"{detail}: {error[-MAX_DETAIL_STDERR:]}"
        return ExecutionResult(
            succeeded=False,
            detail=detail,
            output=output,
            exit_status=exit_status,
        )
