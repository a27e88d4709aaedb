"""Shared test doubles for the injected collaborators."""

import asyncio

import pytest

from marshall.models import ExecutionResult


class FakeExecutor:
    """In-memory executor with scripted failures, errors and delays."""

    def __init__(
        self,
        failures: tuple[str, ...] = (),
        errors: dict[str, Exception] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.failures = set(failures)
        self.errors = errors or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def execute(self, host: str, command: str) -> ExecutionResult:
        self.calls.append((host, command))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(host, 0))
            if host in self.errors:
                raise self.errors[host]
            if host in self.failures:
                return ExecutionResult(
                    succeeded=False,
                    detail="Command exited with code 1",
                    exit_status=1,
                )
            return ExecutionResult(succeeded=True, output=f"{host} ok\n", exit_status=0)
        finally:
            self.in_flight -= 1


class StaticHosts:
    """Host registry over a fixed list."""

    def __init__(self, hosts: list[str]) -> None:
        self.hosts = hosts

    def list(self) -> list[str]:
        return list(self.hosts)


class StaticThreshold:
    """Threshold store over a fixed value."""

    def __init__(self, threshold: int | None) -> None:
        self.threshold = threshold

    def get(self) -> int | None:
        return self.threshold


@pytest.fixture
def fake_executor_factory():
    """Build FakeExecutor instances."""
    return FakeExecutor


@pytest.fixture
def hosts_factory():
    return StaticHosts


@pytest.fixture
def threshold_factory():
    return StaticThreshold
