"""Verdict and run report models."""

from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction

from marshall.models.outcome import Outcome

STATUS_INVALID_ARGUMENTS = 1


class VerdictStatus(Enum):
    """Final classification of a run. Values are process exit codes."""

    PASS = 0
    NO_HOSTS = 2
    THRESHOLD_NOT_MET = 3


@dataclass(frozen=True)
class Verdict:
    """Aggregate of all outcomes of one run against an optional threshold."""

    total: int
    failed: int
    success_rate: Fraction
    threshold: int | None
    status: VerdictStatus

    def __post_init__(self) -> None:
        if self.total < 1:
            raise ValueError(f"Verdict requires at least one host, got {self.total}")
        if not 0 <= self.failed <= self.total:
            raise ValueError(
                f"failed must be within [0, {self.total}], got {self.failed}"
            )

    @property
    def succeeded(self) -> int:
        return self.total - self.failed

    @property
    def passed(self) -> bool:
        return self.status is VerdictStatus.PASS


@dataclass(frozen=True)
class DispatchReport:
    """Everything the caller needs after a dispatch: status, outcomes, verdict."""

    status: VerdictStatus
    outcomes: tuple[Outcome, ...] = field(default_factory=tuple)
    verdict: Verdict | None = None

    @property
    def exit_code(self) -> int:
        return self.status.value

    @property
    def failed_outcomes(self) -> list[Outcome]:
        """Failed outcomes in host order."""
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    def raise_for_status(self) -> None:
        """Raise the run-level error matching this report's status, if any.

        Raises:
            NoHostsConfigured: If no hosts were configured
            ThresholdNotMet: If the configured threshold was not reached
        """
        from marshall.errors import NoHostsConfigured, ThresholdNotMet

        if self.status is VerdictStatus.NO_HOSTS:
            raise NoHostsConfigured()
        if self.status is VerdictStatus.THRESHOLD_NOT_MET and self.verdict:
            raise ThresholdNotMet(self.verdict)
