from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Tuple

import pytest

from conftest import RecordingNotifier
from kubecheck.application.services.healthcheck_runner import HealthcheckRunner
from kubecheck.domain.checks.base import Healthcheck
from kubecheck.domain.entities.lifecycle import LifecycleEvent
from kubecheck.shared.consts import EnumCheckStatus


@dataclass(frozen=True, kw_only=True)
class _SleepingCheck(Healthcheck):
    """Passes after ``delay`` seconds, or raises ``error`` if set."""

    kind: ClassVar[str] = "sleeping"
    accepted_expectations: ClassVar[Tuple[type, ...]] = ()

    delay: float = 0.0
    error: Any = None

    def build_input(self) -> Any:
        return {"delay": self.delay}

    async def observe(self) -> Any:
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return None


class _FailingNotifier:
    async def notify(self, event: LifecycleEvent) -> None:
        raise RuntimeError("webhook down")


def _mapper(description, result):
    return (description.description, result)


@pytest.mark.asyncio
async def test_returns_one_entry_per_check_in_order() -> None:
    checks = [_SleepingCheck(name=f"check-{index}", delay=0.01 * (5 - index)) for index in range(5)]

    results = await HealthcheckRunner(max_parallel=2).run(checks, _mapper)

    assert list(results) == [f"check-{index}" for index in range(5)]
    assert all(result.status is EnumCheckStatus.PASSED for _, result in results.values())


@pytest.mark.asyncio
async def test_later_duplicate_overwrites_earlier() -> None:
    checks = [
        _SleepingCheck(name="same", description="first"),
        _SleepingCheck(name="same", description="second"),
    ]

    results = await HealthcheckRunner().run(checks, _mapper)

    assert len(results) == 1
    assert results["same"][0] == "second"


@pytest.mark.asyncio
async def test_check_timeout_becomes_failed_result() -> None:
    check = _SleepingCheck(name="slow", delay=1.0, timeout_seconds=0.05)

    results = await HealthcheckRunner().run([check], _mapper)

    _, result = results["slow"]
    assert result.status is EnumCheckStatus.FAILED
    assert result.reason == "healthcheck timed out after 0.05s"
    assert result.input == {"delay": 1.0}


@pytest.mark.asyncio
async def test_unexpected_exception_becomes_failed_result() -> None:
    checks = [
        _SleepingCheck(name="broken", error=ValueError("boom")),
        _SleepingCheck(name="fine"),
    ]

    results = await HealthcheckRunner().run(checks, _mapper)

    assert results["broken"][1].reason == "boom"
    assert results["fine"][1].status is EnumCheckStatus.PASSED


@pytest.mark.asyncio
async def test_overall_timeout_omits_pending_checks() -> None:
    checks = [
        _SleepingCheck(name="fast"),
        _SleepingCheck(name="stuck", delay=5.0, timeout_seconds=10.0),
    ]

    results = await HealthcheckRunner(overall_timeout=0.1).run(checks, _mapper)

    assert list(results) == ["fast"]


@pytest.mark.asyncio
async def test_lifecycle_events_are_emitted(recording_notifier: RecordingNotifier) -> None:
    runner = HealthcheckRunner(recording_notifier)

    await runner.run([_SleepingCheck(name="a")], _mapper)
    await runner.drain_notifications()

    assert recording_notifier.events == [
        LifecycleEvent.ON_HEALTHCHECK_STARTED,
        LifecycleEvent.ON_HEALTHCHECK_COMPLETED,
    ]


@pytest.mark.asyncio
async def test_notifier_failure_does_not_affect_results(caplog) -> None:
    runner = HealthcheckRunner(_FailingNotifier())

    with caplog.at_level(logging.ERROR):
        results = await runner.run([_SleepingCheck(name="a")], _mapper)
        await runner.drain_notifications()

    assert results["a"][1].status is EnumCheckStatus.PASSED


@pytest.mark.asyncio
async def test_cancelling_run_cancels_checks() -> None:
    runner = HealthcheckRunner()
    task = asyncio.create_task(runner.run([_SleepingCheck(name="slow", delay=5.0)], _mapper))
    await asyncio.sleep(0.05)

    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_empty_catalog() -> None:
    assert await HealthcheckRunner().run([], _mapper) == {}
