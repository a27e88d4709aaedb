"""Per-host execution data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionResult:
    """Result reported by a remote executor for one host."""

    succeeded: bool
    detail: str | None = None
    output: str = ""
    exit_status: int | None = None


@dataclass(frozen=True)
class Outcome:
    """Recorded result of sending the command to one host."""

    host: str
    succeeded: bool
    detail: str | None = None
    output: str = ""
