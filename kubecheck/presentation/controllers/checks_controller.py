"""Healthcheck endpoints: the index and the run-all / run-one reports."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from kubecheck.application.dtos.healthcheck_dto import CheckIndexDTO, CheckRunReportDTO
from kubecheck.application.use_cases.healthcheck_use_cases import (
    ListHealthchecksUseCase,
    RunHealthchecksUseCase,
)
from kubecheck.domain.entities.errors import HealthcheckNotFoundError
from kubecheck.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Healthchecks"])


def base_url(request: Request) -> str:
    """Scheme and host the client used to reach us, honouring proxies."""
    scheme = request.headers.get("x-forwarded-proto") or "http"
    host = request.headers.get("host") or request.url.netloc
    return f"{scheme}://{host}"


def report_response(report: CheckRunReportDTO) -> JSONResponse:
    status_code = status.HTTP_424_FAILED_DEPENDENCY if report.failed else status.HTTP_200_OK
    return JSONResponse(
        status_code=status_code,
        content=report.model_dump(mode="json", exclude_none=True),
    )


@router.get("/", response_model=CheckIndexDTO)
@inject
async def index(
    request: Request,
    list_healthchecks_use_case: ListHealthchecksUseCase = Depends(
        Provide["list_healthchecks_use_case"]
    ),
) -> CheckIndexDTO:
    """List every configured healthcheck with the URL running it."""
    return list_healthchecks_use_case.execute(base_url(request))


@router.get(
    "/checks/",
    response_model=CheckRunReportDTO,
    responses={424: {"model": CheckRunReportDTO}},
)
@inject
async def run_all(
    run_healthchecks_use_case: RunHealthchecksUseCase = Depends(
        Provide["run_healthchecks_use_case"]
    ),
) -> JSONResponse:
    """Run every healthcheck; 424 when at least one failed."""
    report = await run_healthchecks_use_case.execute()
    logger.debug("checks.run_all.completed", count=len(report.root), failed=report.failed)
    return report_response(report)


@router.get(
    "/checks/{name}",
    response_model=CheckRunReportDTO,
    responses={404: {"description": "Unknown healthcheck"}, 424: {"model": CheckRunReportDTO}},
)
@inject
async def run_one(
    name: str,
    run_healthchecks_use_case: RunHealthchecksUseCase = Depends(
        Provide["run_healthchecks_use_case"]
    ),
) -> JSONResponse:
    """Run a single healthcheck by name."""
    try:
        report = await run_healthchecks_use_case.execute_one(name)
    except HealthcheckNotFoundError as exc:
        logger.info("checks.run_one.not_found", name=name)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=exc.message
        ) from exc

    logger.debug("checks.run_one.completed", name=name, failed=report.failed)
    return report_response(report)
