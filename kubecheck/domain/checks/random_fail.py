"""Synthetic healthcheck failing at a configurable rate.

Used to exercise the reporting and alerting path; its failures may be
ignored.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Tuple

from kubecheck.domain.checks.base import Expectation, Healthcheck
from kubecheck.domain.entities.assertion import AssertionGroup
from kubecheck.domain.ports.random_source import IRandomSource

NEVER_FAILING = "Never failing"
ALWAYS_FAILING = "Always failing"
RANDOMLY_FAILING = "Randomly failing"


@dataclass(frozen=True, slots=True)
class RandomFailContext:
    fail_rate: int
    number: int
    mode: str


class RandomFailExpectation(Expectation):
    """Expectation verified against a :class:`RandomFailContext`."""


@dataclass(frozen=True)
class DrawNotFailRateExpectation(RandomFailExpectation):
    """The draw must not hit the fail rate."""

    def verify(self, context: RandomFailContext) -> List[AssertionGroup]:
        group = AssertionGroup("RandomFail", {"number": context.number, "mode": context.mode})
        hit = context.number > 0 and context.number == context.fail_rate
        group.record("NotEquals", not hit, f"!={context.fail_rate}", context.number)
        return [group]


@dataclass(frozen=True, kw_only=True)
class RandomFailHealthcheck(Healthcheck):
    """Fails never (rate 0), always (rate 1) or once every ``fail_rate`` runs."""

    kind: ClassVar[str] = "random-fail"
    accepted_expectations: ClassVar[Tuple[type, ...]] = (RandomFailExpectation,)

    fail_rate: int = 0
    random_source: IRandomSource = field(default_factory=random.Random, compare=False)
    expectations: Tuple[Expectation, ...] = (DrawNotFailRateExpectation(),)

    def build_input(self) -> Dict[str, Any]:
        return {"fail_rate": self.fail_rate}

    async def observe(self) -> RandomFailContext:
        if self.fail_rate <= 0:
            return RandomFailContext(fail_rate=self.fail_rate, number=0, mode=NEVER_FAILING)
        if self.fail_rate == 1:
            return RandomFailContext(fail_rate=1, number=1, mode=ALWAYS_FAILING)

        number = self.random_source.randint(1, self.fail_rate)
        return RandomFailContext(fail_rate=self.fail_rate, number=number, mode=RANDOMLY_FAILING)
