"""DTOs for healthcheck index and run report responses."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, RootModel

from kubecheck.application.serialization import to_jsonable
from kubecheck.domain.entities.health import Description, Result
from kubecheck.shared.consts import EnumCheckStatus


class CheckReportDTO(BaseModel):
    """Serializable outcome of one healthcheck execution."""

    description: str = Field(description="Human readable check description")
    status: EnumCheckStatus = Field(description="Outcome of the execution")
    reason: Optional[str] = Field(default=None, description="Why the check failed")
    input: Optional[Any] = Field(
        default=None, description="Snapshot of what was checked"
    )
    output: Optional[Any] = Field(
        default=None, description="Observed data or assertion tree"
    )

    @classmethod
    def from_domain(
        cls, description: Description, result: Result, debug: bool = False
    ) -> "CheckReportDTO":
        """Build the report, hiding diagnostics of passed checks unless ``debug``."""
        show_details = result.is_failed or debug
        return cls(
            description=description.description,
            status=result.status,
            reason=result.reason,
            input=to_jsonable(result.input) if show_details else None,
            output=to_jsonable(result.output) if show_details else None,
        )

    @property
    def failed(self) -> bool:
        return self.status is EnumCheckStatus.FAILED

    model_config = {
        "json_schema_extra": {
            "example": {
                "description": "Checks that google.com responds",
                "status": "failed",
                "reason": "one or more expectations were not met",
                "input": {"url": "https://www.google.com"},
                "output": [
                    {
                        "name": "HTTPStatusCode",
                        "result": "failed",
                        "assertions": [
                            {
                                "type": "InRange",
                                "result": "failed",
                                "expected": "min=200 max=299",
                                "actual": 404,
                            }
                        ],
                    }
                ],
            }
        }
    }


class CheckRunReportDTO(RootModel[Dict[str, CheckReportDTO]]):
    """Reports of one run keyed by healthcheck name."""

    @property
    def failed(self) -> bool:
        return any(report.failed for report in self.root.values())


class CheckDescriptionDTO(BaseModel):
    """Entry of the healthcheck index."""

    name: str = Field(description="Unique healthcheck name")
    description: str = Field(description="Human readable check description")
    url: str = Field(description="Absolute URL running only this check")

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "google",
                "description": "Checks that google.com responds",
                "url": "http://kubecheck.example.com/checks/google",
            }
        }
    }


class CheckIndexDTO(BaseModel):
    """DTO representing the / response payload."""

    checks: List[CheckDescriptionDTO] = Field(
        default_factory=list, description="Every configured healthcheck"
    )
