"""Main FastAPI application with hexagonal architecture."""

from __future__ import annotations

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from . import __version__
from .api.rest.routes import router as scouting_router
from .api.websocket.handlers import handle_report_websocket
from .application.ports.scouting_service import ScoutingDataPort
from .infrastructure.adapters.grid_scouting_adapter import GridScoutingAdapter


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    api_key_configured: bool
    api_status: str
    api_message: str


def create_app(scouting: ScoutingDataPort | None = None) -> FastAPI:
    """Build the API. ``scouting`` overrides the env-configured GRID adapter."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        if getattr(app.state, "scouting", None) is None:
            load_dotenv()
            app.state.scouting = GridScoutingAdapter.from_config()
        yield

    app = FastAPI(
        title="GRID Scout API",
        description="Automated esports scouting reports from GRID match data",
        version=__version__,
        lifespan=lifespan,
    )
    if scouting is not None:
        app.state.scouting = scouting

    # CORS configuration for frontend integration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",  # Vite dev server
            "http://localhost:3000",  # Alternative dev port
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", tags=["meta"])
    async def root():
        """API root with information and available endpoints."""
        return {
            "name": "GRID Scout API",
            "version": __version__,
            "docs": "/docs",
            "endpoints": {
                "health": "GET /health",
                "report": "POST /api/reports",
                "availability": "GET /api/availability",
                "history": "GET /api/history",
                "status": "GET /api/status",
                "websocket": "WS /ws/report",
            },
        }

    @app.get("/health", response_model=HealthResponse, tags=["meta"])
    async def health_check():
        """Check API health and upstream status."""
        status = app.state.scouting.status()
        return HealthResponse(
            status="healthy",
            version=__version__,
            api_key_configured=status["state"] != "awaiting-credential",
            api_status=status["state"],
            api_message=status["message"],
        )

    app.include_router(scouting_router)

    @app.websocket("/ws/report")
    async def websocket_report(websocket: WebSocket):
        """WebSocket endpoint for report generation with progress updates."""
        await handle_report_websocket(websocket, app.state.scouting)

    return app


app = create_app()
