"""Data models for marshall."""

from marshall.models.outcome import ExecutionResult, Outcome
from marshall.models.target import SSHTarget
from marshall.models.verdict import (
    STATUS_INVALID_ARGUMENTS,
    DispatchReport,
    Verdict,
    VerdictStatus,
)

__all__ = [
    "DispatchReport",
    "ExecutionResult",
    "Outcome",
    "SSHTarget",
    "STATUS_INVALID_ARGUMENTS",
    "Verdict",
    "VerdictStatus",
]
