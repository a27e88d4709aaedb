"""Threshold evaluation over collected outcomes."""

import logging
from collections.abc import Sequence
from fractions import Fraction

from marshall.errors import InvalidThresholdValue
from marshall.models import Outcome, Verdict, VerdictStatus

logger = logging.getLogger(__name__)


def success_rate(total: int, failed: int) -> Fraction:
    """Percentage of hosts that succeeded, as an exact fraction.

    The ratio is scaled after the division, never truncated first.

    Args:
        total: Number of hosts attempted (must be >= 1)
        failed: Number of hosts that failed

    Returns:
        Success rate in [0, 100]

    Raises:
        ValueError: If total < 1 or failed is out of range
    """
    if total < 1:
        raise ValueError(f"success rate needs at least one host, got {total}")
    if not 0 <= failed <= total:
        raise ValueError(f"failed must be within [0, {total}], got {failed}")
    return Fraction(total - failed, total) * 100


def check_threshold(threshold: int | None) -> int | None:
    """Return threshold unchanged if it is None or a percentage in [0, 100].

    Raises:
        InvalidThresholdValue: If threshold is outside [0, 100] or not an int
    """
    if threshold is not None and (
        isinstance(threshold, bool)
        or not isinstance(threshold, int)
        or not 0 <= threshold <= 100
    ):
        raise InvalidThresholdValue(threshold)
    return threshold


def evaluate(outcomes: Sequence[Outcome], threshold: int | None) -> Verdict:
    """Turn outcomes and an optional threshold into a verdict.

    Without a threshold every run with at least one host passes. With one,
    the run passes when the success rate is at least the threshold.

    Args:
        outcomes: One outcome per host (must not be empty)
        threshold: Minimum success percentage, or None when not configured

    Returns:
        Verdict for the run

    Raises:
        ValueError: If outcomes is empty
        InvalidThresholdValue: If threshold is outside [0, 100]
    """
    check_threshold(threshold)

    total = len(outcomes)
    failed = sum(1 for outcome in outcomes if not outcome.succeeded)
    rate = success_rate(total, failed)

    if threshold is None or rate >= threshold:
        status = VerdictStatus.PASS
    else:
        status = VerdictStatus.THRESHOLD_NOT_MET

    logger.debug(
        "Evaluated %d outcome(s): failed=%d rate=%.2f%% threshold=%s status=%s",
        total,
        failed,
        float(rate),
        threshold,
        status.name,
    )
    return Verdict(
        total=total,
        failed=failed,
        success_rate=rate,
        threshold=threshold,
        status=status,
    )
