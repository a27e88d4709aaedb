"""Dispatcher: the single entry point that runs a command and renders a verdict."""

import asyncio
import logging

from marshall.models import DispatchReport, VerdictStatus
from marshall.protocols import HostRegistry, RemoteExecutor, ThresholdStore
from marshall.services.collector import collect_outcomes
from marshall.services.evaluator import check_threshold, evaluate

logger = logging.getLogger(__name__)


class Dispatcher:
    """Orchestrates outcome collection and threshold evaluation for one run."""

    def __init__(
        self,
        registry: HostRegistry,
        threshold_store: ThresholdStore,
        executor: RemoteExecutor,
        *,
        concurrency: int = 1,
        timeout: float | None = None,
    ) -> None:
        """Initialize dispatcher with its collaborators.

        Args:
            registry: Supplies the ordered host list
            threshold_store: Supplies the optional success threshold
            executor: Runs the command on a single host
            concurrency: Maximum number of hosts worked on at once (must be > 0)
            timeout: Per-host timeout in seconds, or None for no timeout

        Raises:
            ValueError: If concurrency is not positive
        """
        if concurrency <= 0:
            raise ValueError(f"concurrency must be > 0, got {concurrency}")

        self.registry = registry
        self.threshold_store = threshold_store
        self.executor = executor
        self.concurrency = concurrency
        self.timeout = timeout

    async def dispatch(
        self,
        command: str,
        cancel_event: asyncio.Event | None = None,
    ) -> DispatchReport:
        """Run command on every configured host and evaluate the result.

        Args:
            command: Command to send; surrounding whitespace is stripped
            cancel_event: When set, stops new hosts from being started

        Returns:
            DispatchReport with status, outcomes and verdict

        Raises:
            InvalidThresholdValue: If hosts exist and the stored threshold is
                not a percentage; raised before any host is contacted
        """
        hosts = list(self.registry.list())
        if not hosts:
            logger.error("No hosts configured; nothing to dispatch")
            return DispatchReport(status=VerdictStatus.NO_HOSTS)

        threshold = check_threshold(self.threshold_store.get())

        outcomes = await collect_outcomes(
            hosts,
            command,
            self.executor,
            concurrency=self.concurrency,
            timeout=self.timeout,
            cancel_event=cancel_event,
        )

        verdict = evaluate(outcomes, threshold)
        report = DispatchReport(
            status=verdict.status,
            outcomes=tuple(outcomes),
            verdict=verdict,
        )

        if verdict.status is VerdictStatus.THRESHOLD_NOT_MET:
            logger.error(
                "Threshold unmet: %d/%d host(s) succeeded (%.2f%% < %d%%)",
                verdict.succeeded,
                verdict.total,
                float(verdict.success_rate),
                threshold,
            )
        elif verdict.failed:
            logger.warning(
                "Run passed with %d failed host(s): %s",
                verdict.failed,
                ", ".join(outcome.host for outcome in report.failed_outcomes),
            )
        else:
            logger.info("All %d host(s) succeeded", verdict.total)

        return report
