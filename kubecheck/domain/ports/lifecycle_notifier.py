"""Domain port for lifecycle notifications."""

from __future__ import annotations

from typing import Protocol

from kubecheck.domain.entities.lifecycle import LifecycleEvent


class ILifecycleNotifier(Protocol):
    """Informs external subscribers that a healthcheck run started or completed.

    Implementations must never raise: failures are theirs to log.
    """

    async def notify(self, event: LifecycleEvent) -> None:
        ...
