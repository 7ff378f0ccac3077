"""
Health domain entities.

Value objects describing a healthcheck and the verdict of one execution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from kubecheck.shared.consts import EnumCheckStatus

EXPECTATIONS_NOT_MET = "one or more expectations were not met"


@dataclass(frozen=True, slots=True)
class Description:
    """Static, I/O free description of a healthcheck."""

    name: str
    description: str


@dataclass(frozen=True, slots=True)
class Result:
    """Uniform verdict of a single healthcheck execution.

    ``reason`` is only set on failure. ``input`` is a snapshot of what was
    checked and ``output`` of what was observed or asserted; both are kept
    for passed results too, hiding them is a reporting decision.
    """

    status: EnumCheckStatus
    reason: Optional[str] = None
    input: Any = None
    output: Any = None

    @classmethod
    def passed(cls, input: Any = None, output: Any = None) -> "Result":
        return cls(status=EnumCheckStatus.PASSED, input=input, output=output)

    @classmethod
    def failed(cls, reason: str, input: Any = None, output: Any = None) -> "Result":
        return cls(status=EnumCheckStatus.FAILED, reason=reason, input=input, output=output)

    @property
    def is_failed(self) -> bool:
        return self.status is EnumCheckStatus.FAILED
