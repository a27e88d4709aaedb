"""Error taxonomy for marshall."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from marshall.models import Verdict


class MarshallError(Exception):
    """Base class for marshall errors."""

    exit_code: int = 1


class NoHostsConfigured(MarshallError):
    """Host sequence was empty; no executor calls were made."""

    exit_code = 2

    def __init__(self, message: str = "No hosts configured") -> None:
        super().__init__(message)


class RemoteExecutionFailure(MarshallError):
    """Command failed on a single host.

    Executors may raise this; the collector records it as a failed outcome
    instead of letting it stop the run.
    """

    def __init__(self, host: str, detail: str) -> None:
        """Initialize remote execution failure.

        Args:
            host: Host identifier the command was sent to
            detail: Diagnostic text describing the failure
        """
        self.host = host
        self.detail = detail
        super().__init__(f"Command failed on {host}: {detail}")


class ThresholdNotMet(MarshallError):
    """Success rate fell below the configured threshold."""

    exit_code = 3

    def __init__(self, verdict: "Verdict") -> None:
        self.verdict = verdict
        super().__init__(
            f"Threshold unmet: {float(verdict.success_rate):.2f}% succeeded, "
            f"{verdict.threshold}% required"
        )


class InvalidThresholdValue(MarshallError, ValueError):
    """Threshold is not an integer percentage between 0 and 100."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Invalid threshold {value!r}: expected a percentage between 0 and 100"
        )
