"""Concurrent fan-out of one command over many hosts.

Concurrency Strategy:
- A semaphore bounds the number of hosts being worked on at once
- Each host owns exactly one result slot (by index), written once
- Results are returned in host order regardless of completion order

Interruption:
- Once the cancel event is set no new host is started
- Calls already in flight run to a terminal outcome
- Hosts that never started are recorded as failures so the success-rate
  denominator always equals the number of hosts
"""

import asyncio
import logging
from collections.abc import Sequence

from marshall.errors import NoHostsConfigured, RemoteExecutionFailure
from marshall.models import Outcome
from marshall.protocols import RemoteExecutor

logger = logging.getLogger(__name__)

NOT_ATTEMPTED_DETAIL = "not attempted: run interrupted"


async def _execute_single(
    executor: RemoteExecutor,
    host: str,
    command: str,
    timeout: float | None,
) -> Outcome:
    """Execute command on a single host and capture any failure as data."""
    logger.info("Sending '%s' to '%s'", command, host)
    try:
        if timeout is None:
            result = await executor.execute(host, command)
        else:
            result = await asyncio.wait_for(
                executor.execute(host, command), timeout=timeout
            )
    except asyncio.TimeoutError as e:
        detail = f"timed out after {timeout:g}s" if timeout is not None else str(e)
        outcome = Outcome(host=host, succeeded=False, detail=detail or "timed out")
    except RemoteExecutionFailure as e:
        outcome = Outcome(host=host, succeeded=False, detail=e.detail)
    except Exception as e:
        outcome = Outcome(host=host, succeeded=False, detail=str(e) or type(e).__name__)
    else:
        outcome = Outcome(
            host=host,
            succeeded=result.succeeded,
            detail=result.detail,
            output=result.output,
        )

    if not outcome.succeeded:
        logger.error("Host '%s' failed: %s", host, outcome.detail or "unknown error")
    return outcome


async def collect_outcomes(
    hosts: Sequence[str],
    command: str,
    executor: RemoteExecutor,
    *,
    concurrency: int = 1,
    timeout: float | None = None,
    cancel_event: asyncio.Event | None = None,
) -> list[Outcome]:
    """Execute command on every host and return one outcome per host.

    A failure on one host never stops the others.

    Args:
        hosts: Host identifiers, in reporting order
        command: Command to run; surrounding whitespace is stripped
        executor: Remote executor used for every host
        concurrency: Maximum number of hosts worked on at once
        timeout: Per-host timeout in seconds, or None for no timeout
        cancel_event: When set, stops new hosts from being started

    Returns:
        Outcomes in the same order and of the same length as hosts

    Raises:
        NoHostsConfigured: If hosts is empty (no executor calls are made)
        ValueError: If concurrency is not positive
    """
    if not hosts:
        raise NoHostsConfigured()
    if concurrency <= 0:
        raise ValueError(f"concurrency must be > 0, got {concurrency}")

    command = command.strip()
    slots: list[Outcome | None] = [None] * len(hosts)
    skipped: list[int] = []
    semaphore = asyncio.Semaphore(concurrency)

    async def run_slot(index: int, host: str) -> None:
        async with semaphore:
            if cancel_event is not None and cancel_event.is_set():
                slots[index] = Outcome(
                    host=host, succeeded=False, detail=NOT_ATTEMPTED_DETAIL
                )
                skipped.append(index)
                return
            slots[index] = await _execute_single(executor, host, command, timeout)

    logger.debug(
        "Dispatching to %d host(s) (concurrency=%d, timeout=%s)",
        len(hosts),
        concurrency,
        timeout,
    )
    await asyncio.gather(*(run_slot(i, host) for i, host in enumerate(hosts)))

    if skipped:
        logger.warning("Run interrupted: %d host(s) not attempted", len(skipped))

    return [outcome for outcome in slots if outcome is not None]
