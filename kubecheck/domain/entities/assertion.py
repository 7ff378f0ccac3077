"""
Assertion domain entities.

An :class:`Assertion` is one named comparison between an expected and an
actual value. An :class:`AssertionGroup` collects the assertions made about
one subject (a node, a pod, a certificate...) and derives a single outcome
from them: the group has failed as soon as one of its assertions failed.

Assertion kinds are free-form labels ("Equals", "InRange", "Min", ...), so
new expectations never need to touch this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from kubecheck.shared.consts import EnumCheckStatus


@dataclass(frozen=True, slots=True)
class Assertion:
    """The outcome of a single comparison."""

    kind: str
    outcome: EnumCheckStatus
    expected: Any
    actual: Any

    @property
    def failed(self) -> bool:
        return self.outcome is EnumCheckStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            "result": self.outcome.value,
            "expected": self.expected,
            "actual": self.actual,
        }


class AssertionGroup:
    """A named collection of assertions about one subject."""

    __slots__ = ("name", "subject", "_assertions")

    def __init__(self, name: str, subject: Any = None) -> None:
        self.name = name
        self.subject = subject
        self._assertions: List[Assertion] = []

    @classmethod
    def new(cls, name: str, subject: Any = None) -> "AssertionGroup":
        return cls(name, subject)

    @property
    def assertions(self) -> Tuple[Assertion, ...]:
        return tuple(self._assertions)

    @property
    def outcome(self) -> EnumCheckStatus:
        """Failed iff any recorded assertion failed; empty groups pass."""
        for assertion in self._assertions:
            if assertion.failed:
                return EnumCheckStatus.FAILED
        return EnumCheckStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.outcome is EnumCheckStatus.FAILED

    def record(self, kind: str, condition: bool, expected: Any, actual: Any) -> Assertion:
        """Append an assertion that passed iff ``condition`` holds."""
        assertion = Assertion(
            kind=kind,
            outcome=EnumCheckStatus.PASSED if condition else EnumCheckStatus.FAILED,
            expected=expected,
            actual=actual,
        )
        self._assertions.append(assertion)
        return assertion

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name}
        if self.subject is not None:
            payload["entity"] = self.subject
        payload["result"] = self.outcome.value
        payload["assertions"] = [assertion.to_dict() for assertion in self._assertions]
        return payload

    def __repr__(self) -> str:
        return (
            f"AssertionGroup(name={self.name!r}, outcome={self.outcome.value!r}, "
            f"assertions={len(self._assertions)})"
        )
