"""Tests for threshold evaluation."""

import itertools
from fractions import Fraction

import pytest

from marshall.errors import InvalidThresholdValue
from marshall.models import Outcome, VerdictStatus
from marshall.services.evaluator import check_threshold, evaluate, success_rate


def make_outcomes(total: int, failed: int) -> list[Outcome]:
    """Build outcomes where the first `failed` hosts failed."""
    return [
        Outcome(host=f"h{i}", succeeded=i >= failed, detail=None if i >= failed else "boom")
        for i in range(total)
    ]


ALL_COUNTS = [(n, f) for n in range(1, 13) for f in range(n + 1)]


@pytest.mark.parametrize(("total", "failed"), ALL_COUNTS)
def test_success_rate_is_exact(total: int, failed: int) -> None:
    """Rate is (N-F)/N*100 with no truncation before scaling."""
    rate = success_rate(total, failed)

    assert rate == Fraction(total - failed, total) * 100
    assert float(rate) == pytest.approx((total - failed) / total * 100)


def test_partial_failure_is_not_rounded_down_to_zero() -> None:
    """One failure out of three leaves two thirds, not zero."""
    verdict = evaluate(make_outcomes(3, 1), threshold=66)

    assert verdict.success_rate == Fraction(200, 3)
    assert verdict.status is VerdictStatus.PASS


def test_rate_just_below_threshold_fails() -> None:
    verdict = evaluate(make_outcomes(3, 1), threshold=67)

    assert verdict.status is VerdictStatus.THRESHOLD_NOT_MET


@pytest.mark.parametrize(("total", "failed"), ALL_COUNTS)
def test_no_threshold_always_passes(total: int, failed: int) -> None:
    """Without a threshold failures are reported but never fail the run."""
    verdict = evaluate(make_outcomes(total, failed), threshold=None)

    assert verdict.status is VerdictStatus.PASS
    assert verdict.failed == failed
    assert verdict.threshold is None


@pytest.mark.parametrize("threshold", [0, 1, 25, 33, 34, 50, 66, 67, 75, 80, 99, 100])
@pytest.mark.parametrize(("total", "failed"), [(1, 0), (1, 1), (3, 1), (4, 1), (5, 2), (7, 3)])
def test_threshold_passes_iff_rate_meets_it(total: int, failed: int, threshold: int) -> None:
    verdict = evaluate(make_outcomes(total, failed), threshold=threshold)

    expected_pass = Fraction(total - failed, total) * 100 >= threshold
    assert verdict.passed is expected_pass


def test_exact_threshold_passes() -> None:
    """Meeting the threshold exactly counts as success."""
    verdict = evaluate(make_outcomes(4, 1), threshold=75)

    assert verdict.success_rate == 75
    assert verdict.status is VerdictStatus.PASS


def test_zero_threshold_passes_when_all_fail() -> None:
    verdict = evaluate(make_outcomes(5, 5), threshold=0)

    assert verdict.success_rate == 0
    assert verdict.status is VerdictStatus.PASS


def test_full_threshold_fails_on_single_failure() -> None:
    verdict = evaluate(make_outcomes(100, 1), threshold=100)

    assert verdict.status is VerdictStatus.THRESHOLD_NOT_MET


def test_verdict_counts() -> None:
    verdict = evaluate(make_outcomes(4, 1), threshold=80)

    assert verdict.total == 4
    assert verdict.failed == 1
    assert verdict.succeeded == 3
    assert verdict.threshold == 80


def test_order_does_not_change_verdict() -> None:
    outcomes = make_outcomes(4, 2)
    expected = evaluate(outcomes, threshold=50)

    for permutation in itertools.permutations(outcomes):
        assert evaluate(list(permutation), threshold=50) == expected


def test_empty_outcomes_rejected() -> None:
    with pytest.raises(ValueError, match="at least one host"):
        evaluate([], threshold=50)


@pytest.mark.parametrize("threshold", [-1, 101, 1000])
def test_out_of_range_threshold_rejected(threshold: int) -> None:
    with pytest.raises(InvalidThresholdValue):
        evaluate(make_outcomes(2, 0), threshold=threshold)


def test_success_rate_rejects_bad_counts() -> None:
    with pytest.raises(ValueError):
        success_rate(0, 0)
    with pytest.raises(ValueError):
        success_rate(2, 3)


@pytest.mark.parametrize("threshold", [None, 0, 50, 100])
def test_check_threshold_accepts_percentages(threshold) -> None:
    assert check_threshold(threshold) == threshold


@pytest.mark.parametrize("threshold", [-1, 101, True, 50.5, "50"])
def test_check_threshold_rejects_non_percentages(threshold) -> None:
    with pytest.raises(InvalidThresholdValue):
        check_threshold(threshold)
