"""Lifecycle events emitted around a healthcheck run and their subscribers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class LifecycleEvent(str, Enum):
    """Events a run emits before its first and after its last healthcheck."""

    ON_HEALTHCHECK_STARTED = "OnHealthcheckStarted"
    ON_HEALTHCHECK_COMPLETED = "OnHealthcheckCompleted"


@dataclass(frozen=True, slots=True)
class Webhook:
    """An outbound HTTP notification subscribed to some lifecycle events."""

    name: str
    url: str
    data: str = ""
    events: Tuple[LifecycleEvent, ...] = ()

    def subscribes_to(self, event: LifecycleEvent) -> bool:
        return event in self.events
