from __future__ import annotations

import pytest

from conftest import FixedRandom
from kubecheck.domain.checks import RandomFailHealthcheck
from kubecheck.shared.consts import EnumCheckStatus


@pytest.mark.asyncio
async def test_zero_rate_never_fails() -> None:
    source = FixedRandom(1)
    result = await RandomFailHealthcheck(name="random", fail_rate=0, random_source=source).execute()

    assert result.status is EnumCheckStatus.PASSED
    assert result.output[0].subject == {"number": 0, "mode": "Never failing"}
    assert source.calls == []


@pytest.mark.asyncio
async def test_rate_one_always_fails() -> None:
    result = await RandomFailHealthcheck(name="random", fail_rate=1).execute()

    assertion = result.output[0].assertions[0]
    assert result.status is EnumCheckStatus.FAILED
    assert (assertion.kind, assertion.expected, assertion.actual) == ("NotEquals", "!=1", 1)
    assert result.output[0].subject["mode"] == "Always failing"


@pytest.mark.asyncio
@pytest.mark.parametrize("draw, status", [(10, EnumCheckStatus.FAILED), (3, EnumCheckStatus.PASSED)])
async def test_draw_matching_rate_fails(draw: int, status: EnumCheckStatus) -> None:
    source = FixedRandom(draw)
    check = RandomFailHealthcheck(name="random", fail_rate=10, random_source=source)

    result = await check.execute()

    assert result.status is status
    assert result.input == {"fail_rate": 10}
    assert source.calls == [(1, 10)]
    assert result.output[0].subject == {"number": draw, "mode": "Randomly failing"}
