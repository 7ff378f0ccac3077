from __future__ import annotations

import pytest

from kubecheck.domain.entities.health import Description, Result
from kubecheck.shared.consts import EnumCheckStatus


def test_passed_result_has_no_reason() -> None:
    result = Result.passed(input={"url": "https://example.com"}, output=[])
    assert result.status is EnumCheckStatus.PASSED
    assert result.reason is None
    assert not result.is_failed
    assert result.input == {"url": "https://example.com"}


def test_failed_result_keeps_reason_and_diagnostics() -> None:
    result = Result.failed("boom", input={"host": "x"}, output={"err": 1})
    assert result.is_failed
    assert result.reason == "boom"
    assert result.output == {"err": 1}


def test_description_is_immutable() -> None:
    description = Description(name="dns", description="Resolves a host")
    with pytest.raises(AttributeError):
        description.name = "other"  # type: ignore[misc]
