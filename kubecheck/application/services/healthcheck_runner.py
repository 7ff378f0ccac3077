"""
Healthcheck runner.

Drives a batch of healthchecks to one result per check. Checks run as
concurrent tasks bounded by ``max_parallel``, each limited by its own
``timeout_seconds``. Whatever happens inside a check ends up as a
``Result``; the batch is never aborted because one check misbehaved.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple, TypeVar

from kubecheck.application.serialization import to_jsonable
from kubecheck.domain.checks.base import Healthcheck
from kubecheck.domain.entities.health import Description, Result
from kubecheck.domain.entities.lifecycle import LifecycleEvent
from kubecheck.domain.ports.lifecycle_notifier import ILifecycleNotifier
from kubecheck.shared.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

ReportMapper = Callable[[Description, Result], T]

DEFAULT_MAX_PARALLEL = 10


class HealthcheckRunner:
    """Executes healthchecks and collects their results keyed by name."""

    def __init__(
        self,
        notifier: Optional[ILifecycleNotifier] = None,
        *,
        max_parallel: int = DEFAULT_MAX_PARALLEL,
        overall_timeout: Optional[float] = None,
    ) -> None:
        """
        Initialize the runner.

        Args:
            notifier: Receives the started/completed lifecycle events
            max_parallel: Maximum number of checks executing at once
            overall_timeout: Seconds after which still running checks are
                cancelled and left out of the results; None waits for all
        """
        self._notifier = notifier
        self._max_parallel = max(1, max_parallel)
        self._overall_timeout = overall_timeout
        self._notifications: Set[asyncio.Task] = set()

    async def run(
        self, checks: Sequence[Healthcheck], mapper: ReportMapper
    ) -> Dict[str, T]:
        """
        Execute ``checks`` and map each finished one through ``mapper``.

        Entries are inserted in the order of ``checks`` and keyed by check
        name; a later check silently replaces an earlier one of the same name.
        Cancelling the call cancels every in-flight check.
        """
        self._fire(LifecycleEvent.ON_HEALTHCHECK_STARTED)

        semaphore = asyncio.Semaphore(self._max_parallel)
        tasks: List[asyncio.Task] = [
            asyncio.create_task(self._execute(check, semaphore), name=f"healthcheck:{check.name}")
            for check in checks
        ]

        try:
            pending: Set[asyncio.Task] = set()
            if tasks:
                _, pending = await asyncio.wait(tasks, timeout=self._overall_timeout)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise

        if pending:
            logger.warning(
                "healthcheck.run.timeout",
                timeout=self._overall_timeout,
                omitted=[check.name for check, task in zip(checks, tasks) if task in pending],
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        results: Dict[str, T] = {}
        for task in tasks:
            if task in pending:
                continue
            description, result = task.result()
            results[description.name] = mapper(description, result)

        self._fire(LifecycleEvent.ON_HEALTHCHECK_COMPLETED)

        return results

    async def drain_notifications(self) -> None:
        """Wait for lifecycle notifications that are still being delivered."""
        if self._notifications:
            await asyncio.gather(*self._notifications, return_exceptions=True)

    async def _execute(
        self, check: Healthcheck, semaphore: asyncio.Semaphore
    ) -> Tuple[Description, Result]:
        async with semaphore:
            description = check.describe()
            start_time = time.monotonic()

            try:
                result = await asyncio.wait_for(check.execute(), timeout=check.timeout_seconds)
            except asyncio.TimeoutError:
                result = Result.failed(
                    f"healthcheck timed out after {check.timeout_seconds:g}s",
                    input=check.build_input(),
                )
            except Exception as exc:
                logger.error(
                    "healthcheck.execute.error",
                    kind=check.kind,
                    name=description.name,
                    error=str(exc),
                    exc_info=exc,
                )
                result = Result.failed(str(exc) or type(exc).__name__, input=check.build_input())

            duration_ms = (time.monotonic() - start_time) * 1000
            self._log_result(check, description, result, duration_ms)

            return description, result

    def _log_result(
        self,
        check: Healthcheck,
        description: Description,
        result: Result,
        duration_ms: float,
    ) -> None:
        log = logger.bind(
            kind=check.kind,
            name=description.name,
            description=description.description,
            status=result.status.value,
            reason=result.reason,
            input=to_jsonable(result.input),
            output=to_jsonable(result.output),
            duration_ms=round(duration_ms, 2),
        )

        if result.is_failed:
            log.warning("healthcheck.finished")
        else:
            log.debug("healthcheck.finished")

    def _fire(self, event: LifecycleEvent) -> None:
        if self._notifier is None:
            return

        task = asyncio.create_task(self._notify(event))
        self._notifications.add(task)
        task.add_done_callback(self._notifications.discard)

    async def _notify(self, event: LifecycleEvent) -> None:
        try:
            await self._notifier.notify(event)
        except Exception as exc:
            logger.error("lifecycle.notify.failed", event=event.value, error=str(exc), exc_info=exc)
