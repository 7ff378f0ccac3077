from __future__ import annotations

from kubecheck.domain.entities.assertion import AssertionGroup
from kubecheck.shared.consts import EnumCheckStatus


def test_empty_group_passes() -> None:
    group = AssertionGroup.new("NodeStatus", "node-1")

    assert group.outcome is EnumCheckStatus.PASSED
    assert group.assertions == ()


def test_group_fails_once_any_assertion_fails() -> None:
    group = AssertionGroup("NodeCount")
    group.record("Min", True, ">=2", 3)
    assert group.failed is False

    group.record("Max", False, "<=2", 3)
    group.record("Equals", True, 3, 3)

    assert group.failed is True
    assert [assertion.outcome for assertion in group.assertions] == [
        EnumCheckStatus.PASSED,
        EnumCheckStatus.FAILED,
        EnumCheckStatus.PASSED,
    ]


def test_to_dict_uses_report_keys() -> None:
    group = AssertionGroup("HTTPStatusCode")
    group.record("Equals", True, 200, 200)

    assert group.to_dict() == {
        "name": "HTTPStatusCode",
        "result": "passed",
        "assertions": [
            {"type": "Equals", "result": "passed", "expected": 200, "actual": 200}
        ],
    }


def test_to_dict_includes_subject_as_entity() -> None:
    group = AssertionGroup("HTTPResponseHeader", "content-type")
    group.record("Equals", False, "text/html", "application/json")

    payload = group.to_dict()

    assert payload["entity"] == "content-type"
    assert payload["result"] == "failed"
