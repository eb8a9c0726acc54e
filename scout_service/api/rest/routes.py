"""REST API routes for scouting reports."""

from typing import Dict

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from gridscout.config import DEFAULT_SERIES_COUNT
from gridscout.models import Game

from ..transformers.report_transformer import (
    transform_availability,
    transform_history,
    transform_report_to_frontend,
)
from ...application.ports.scouting_service import ScoutingDataPort
from ...application.use_cases.generate_report import (
    GenerateReportRequest,
    GenerateReportUseCase,
)
from ...application.use_cases.preview_availability import PreviewAvailabilityUseCase

router = APIRouter(prefix="/api", tags=["scouting"])

ERROR_STATUS: Dict[str, int] = {
    "INVALID_REQUEST": 400,
    "LIVE_FORBIDDEN": 403,
    "UPSTREAM_ERROR": 502,
}


class ReportRequest(BaseModel):
    """Request body for a scouting report."""

    model_config = ConfigDict(populate_by_name=True)

    game: Game = Field(default=Game.VAL, description="Game title (VAL or LOL)")
    opponent: str = Field(default="", description="Opponent team name")
    region: str = Field(default="", description="Region focus, blank for global")
    series_count: int = Field(
        default=DEFAULT_SERIES_COUNT,
        alias="seriesCount",
        description="Recent series to pull; clamped to 1-50",
    )


def _scouting(request: Request) -> ScoutingDataPort:
    return request.app.state.scouting


def _raise_for(code: str | None, message: str | None, details: dict) -> None:
    code = code or "INTERNAL_ERROR"
    raise HTTPException(
        status_code=ERROR_STATUS.get(code, 500),
        detail={
            "error": {
                "code": code,
                "message": message or "Unable to load GRID data.",
                "details": details,
            }
        },
    )


@router.post("/reports")
async def generate_report(body: ReportRequest, request: Request):
    """Generate a scouting report with its chart datasets.

    Returns:
        Report, query, chart datasets, recent query history and upstream status
    """
    scouting = _scouting(request)
    use_case = GenerateReportUseCase(scouting)
    result = await use_case.execute(
        GenerateReportRequest(
            game=body.game,
            opponent=body.opponent,
            region=body.region,
            series_count=body.series_count,
        )
    )

    if not result.success or result.bundle is None:
        _raise_for(
            result.error_code,
            result.error,
            {"opponent": body.opponent, "status": scouting.status()},
        )

    return transform_report_to_frontend(result.bundle, scouting.history(), scouting.status())


@router.get("/availability")
async def get_availability(
    request: Request,
    game: Game = Query(Game.VAL),
    region: str = Query(""),
    series_count: int = Query(DEFAULT_SERIES_COUNT, alias="seriesCount"),
):
    """List recent series, opponents and regions for a game."""
    scouting = _scouting(request)
    result = await PreviewAvailabilityUseCase(scouting).execute(game, region, series_count)
    if not result.success or result.summary is None:
        _raise_for(result.error_code, result.error, {"status": scouting.status()})
    return transform_availability(result.summary)


@router.get("/history")
async def get_history(request: Request):
    """Recent report queries, most recent first."""
    return {"history": transform_history(_scouting(request).history())}


@router.get("/status")
async def get_status(request: Request):
    """Upstream connection status (awaiting-credential, mock, live, live-forbidden)."""
    return _scouting(request).status()
