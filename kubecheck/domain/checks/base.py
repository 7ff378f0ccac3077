"""
Healthcheck and Expectation base classes.

A healthcheck performs exactly one external observation, wraps it into a
context object of its own shape and lets the evaluation engine run every
configured expectation against that context. Variants only decide *what*
to observe and *which* expectations they accept; the flow and the pass/fail
rule live here and in :mod:`kubecheck.domain.services.evaluation`.

Adding a variant means subclassing :class:`Healthcheck` with a new ``kind``,
an expectation base class listed in ``accepted_expectations`` and an
``observe`` coroutine. Nothing else has to change.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, ClassVar, List, Tuple, TypeVar

from kubecheck.domain.entities.assertion import AssertionGroup
from kubecheck.domain.entities.errors import ExpectationTypeError, ObservationError
from kubecheck.domain.entities.health import Description, Result
from kubecheck.domain.services.evaluation import evaluate_expectations

H = TypeVar("H", bound="Healthcheck")

DEFAULT_TIMEOUT_SECONDS = 10.0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_duration(value: timedelta) -> str:
    """Render a duration for diagnostics, e.g. ``"250ms"`` or ``"1.5s"``."""
    seconds = value.total_seconds()
    if abs(seconds) < 1:
        return f"{seconds * 1000:g}ms"
    return f"{seconds:g}s"


def is_past_grace_period(created_at: datetime, grace_period: timedelta, now: datetime) -> bool:
    """True once ``grace_period`` has fully elapsed since ``created_at``."""
    return now - (created_at + grace_period) > timedelta(0)


class Expectation(ABC):
    """A configured rule turning an observation context into assertion groups.

    Implementations are frozen dataclasses; ``verify`` must be a pure
    function of the context it is given.
    """

    @abstractmethod
    def verify(self, context: Any) -> List[AssertionGroup]:
        pass


@dataclass(frozen=True, kw_only=True)
class Healthcheck(ABC):
    """A named, independently executable probe plus its expectations.

    Instances are immutable: :meth:`with_expectations` returns a copy.
    """

    kind: ClassVar[str] = "healthcheck"
    accepted_expectations: ClassVar[Tuple[type, ...]] = ()

    name: str
    description: str = ""
    expectations: Tuple[Expectation, ...] = ()
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    clock: Callable[[], datetime] = field(default=utc_now, repr=False, compare=False)

    def __post_init__(self) -> None:
        expectations = tuple(self.expectations)
        for expectation in expectations:
            if not isinstance(expectation, self.accepted_expectations):
                raise ExpectationTypeError(self.kind, expectation)
        object.__setattr__(self, "expectations", expectations)

    def describe(self) -> Description:
        return Description(name=self.name, description=self.description)

    def with_expectations(self: H, *expectations: Expectation) -> H:
        """Return a copy with ``expectations`` appended."""
        return replace(self, expectations=self.expectations + tuple(expectations))

    def build_input(self) -> Any:
        """Diagnostic snapshot of what this check is about to look at."""
        return None

    @abstractmethod
    async def observe(self) -> Any:
        """Perform the external observation.

        Raises:
            ObservationError: If the probe could not observe anything.
        """
        pass

    def build_context(self, observation: Any, now: datetime) -> Any:
        """Wrap an observation into the context the expectations verify."""
        return observation

    async def execute(self) -> Result:
        input = self.build_input()
        try:
            observation = await self.observe()
        except ObservationError as exc:
            return Result.failed(str(exc), input=input)

        context = self.build_context(observation, self.clock())
        return evaluate_expectations(
            input, self.expectations, lambda expectation: expectation.verify(context)
        )
