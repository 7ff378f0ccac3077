"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .healthcheck_dto import (
    CheckDescriptionDTO,
    CheckIndexDTO,
    CheckReportDTO,
    CheckRunReportDTO,
)

__all__ = [
    "CheckDescriptionDTO",
    "CheckIndexDTO",
    "CheckReportDTO",
    "CheckRunReportDTO",
]
