"""Application use cases."""

from .generate_report import (
    GenerateReportRequest,
    GenerateReportResult,
    GenerateReportUseCase,
)
from .preview_availability import PreviewAvailabilityResult, PreviewAvailabilityUseCase

__all__ = [
    "GenerateReportRequest",
    "GenerateReportResult",
    "GenerateReportUseCase",
    "PreviewAvailabilityResult",
    "PreviewAvailabilityUseCase",
]
