"""
Expectation evaluation engine.

The single place where the pass/fail rule of a healthcheck lives: every
expectation is verified against the same observation, the produced
assertion groups are concatenated in expectation order and the result fails
as soon as one assertion in one group failed.
"""

from __future__ import annotations

from typing import Any, Callable, List, Sequence, TypeVar

from kubecheck.domain.entities.assertion import AssertionGroup
from kubecheck.domain.entities.health import EXPECTATIONS_NOT_MET, Result

E = TypeVar("E")

Verifier = Callable[[E], Sequence[AssertionGroup]]


def collect_assertion_groups(
    expectations: Sequence[E], verifier: Verifier
) -> List[AssertionGroup]:
    """Verify each expectation in order and concatenate what they produce.

    An expectation producing no group (e.g. every subject still within its
    grace period) contributes nothing and so cannot fail the check.
    """
    groups: List[AssertionGroup] = []
    for expectation in expectations:
        groups.extend(verifier(expectation) or ())
    return groups


def evaluate_expectations(
    input: Any, expectations: Sequence[E], verifier: Verifier
) -> Result:
    """Evaluate ``expectations`` through ``verifier`` and derive the Result."""
    groups = collect_assertion_groups(expectations, verifier)

    if any(group.failed for group in groups):
        return Result.failed(EXPECTATIONS_NOT_MET, input=input, output=groups)

    return Result.passed(input=input, output=groups)
