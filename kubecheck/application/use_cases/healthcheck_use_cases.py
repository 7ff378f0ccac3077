"""Use cases for listing and running the configured healthchecks."""

from functools import partial
from typing import Dict, Sequence
from urllib.parse import quote

from kubecheck.application.dtos.healthcheck_dto import (
    CheckDescriptionDTO,
    CheckIndexDTO,
    CheckReportDTO,
    CheckRunReportDTO,
)
from kubecheck.application.services.healthcheck_runner import HealthcheckRunner
from kubecheck.domain.checks.base import Healthcheck
from kubecheck.domain.entities.errors import HealthcheckNotFoundError


class ListHealthchecksUseCase:
    """Use case responsible for describing every configured healthcheck."""

    def __init__(self, healthchecks: Sequence[Healthcheck]) -> None:
        self._healthchecks = healthchecks

    def execute(self, base_url: str) -> CheckIndexDTO:
        base_url = base_url.rstrip("/")
        entries = []
        for check in self._healthchecks:
            description = check.describe()
            entries.append(
                CheckDescriptionDTO(
                    name=description.name,
                    description=description.description,
                    url=f"{base_url}/checks/{quote(description.name, safe='')}",
                )
            )
        return CheckIndexDTO(checks=entries)


class RunHealthchecksUseCase:
    """Use case responsible for executing healthchecks and reporting on them."""

    def __init__(
        self,
        runner: HealthcheckRunner,
        healthchecks: Sequence[Healthcheck],
        debug: bool = False,
    ) -> None:
        self._runner = runner
        self._healthchecks = healthchecks
        self._debug = debug

    async def execute(self) -> CheckRunReportDTO:
        return await self._run(self._healthchecks)

    async def execute_one(self, name: str) -> CheckRunReportDTO:
        matching = [check for check in self._healthchecks if check.name == name]
        if not matching:
            raise HealthcheckNotFoundError(name)
        return await self._run(matching)

    async def _run(self, checks: Sequence[Healthcheck]) -> CheckRunReportDTO:
        mapper = partial(CheckReportDTO.from_domain, debug=self._debug)
        reports: Dict[str, CheckReportDTO] = await self._runner.run(checks, mapper)
        return CheckRunReportDTO(reports)
