"""Conversion of verdict trees into JSON compatible values."""

from __future__ import annotations

from typing import Any

from pydantic_core import to_jsonable_python

from kubecheck.domain.entities.assertion import Assertion, AssertionGroup


def to_jsonable(value: Any) -> Any:
    """Turn assertion groups, snapshots and records into plain JSON values.

    Dataclasses, datetimes, durations and enums are handled by pydantic;
    anything it does not know is rendered with ``str``.
    """
    if isinstance(value, (AssertionGroup, Assertion)):
        value = value.to_dict()

    if isinstance(value, dict):
        return {str(key): to_jsonable(item) for key, item in value.items()}

    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]

    return to_jsonable_python(value, fallback=str)
