from __future__ import annotations

import json

import pytest
from fastapi import HTTPException, Request

from kubecheck.application.services.healthcheck_runner import HealthcheckRunner
from kubecheck.application.use_cases.healthcheck_use_cases import (
    ListHealthchecksUseCase,
    RunHealthchecksUseCase,
)
from kubecheck.domain.checks import RandomFailHealthcheck
from kubecheck.presentation.controllers.checks_controller import index, run_all, run_one

NEVER = RandomFailHealthcheck(name="never", description="Never fails", fail_rate=0)
ALWAYS = RandomFailHealthcheck(name="always", description="Always fails", fail_rate=1)


def _request(headers: dict) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(key.encode(), value.encode()) for key, value in headers.items()],
        "query_string": b"",
        "server": ("kubecheck", 8113),
        "scheme": "http",
    }
    return Request(scope)


def _run_use_case(*checks, debug: bool = False) -> RunHealthchecksUseCase:
    return RunHealthchecksUseCase(HealthcheckRunner(), list(checks), debug=debug)


@pytest.mark.asyncio
async def test_index_honours_forwarded_proto() -> None:
    request = _request({"host": "kubecheck.example.com", "x-forwarded-proto": "https"})

    response = await index(request, list_healthchecks_use_case=ListHealthchecksUseCase([NEVER]))

    assert response.checks[0].url == "https://kubecheck.example.com/checks/never"


@pytest.mark.asyncio
async def test_run_all_passing_is_200() -> None:
    response = await run_all(run_healthchecks_use_case=_run_use_case(NEVER))

    assert response.status_code == 200
    assert json.loads(response.body) == {"never": {"description": "Never fails", "status": "passed"}}


@pytest.mark.asyncio
async def test_any_failure_is_424() -> None:
    response = await run_all(run_healthchecks_use_case=_run_use_case(NEVER, ALWAYS))

    body = json.loads(response.body)
    assert response.status_code == 424
    assert body["always"]["reason"] == "one or more expectations were not met"
    assert body["always"]["output"][0]["assertions"][0]["type"] == "NotEquals"
    assert "input" not in body["never"]


@pytest.mark.asyncio
async def test_run_one_unknown_is_404() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await run_one("missing", run_healthchecks_use_case=_run_use_case(NEVER))

    assert exc_info.value.status_code == 404

