"""WebSocket handler streaming report generation progress."""

import json
import logging
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from gridscout.config import DEFAULT_SERIES_COUNT

from ..transformers.report_transformer import transform_report_to_frontend
from ...application.ports.scouting_service import ProgressCallbackPort, ScoutingDataPort
from ...application.use_cases.generate_report import (
    GenerateReportRequest,
    GenerateReportUseCase,
)

logger = logging.getLogger(__name__)


async def _send(websocket: WebSocket, status: str, progress: int, message: str, **extra: Any) -> None:
    await websocket.send_json({"status": status, "progress": progress, "message": message, **extra})


class WebSocketProgressCallback(ProgressCallbackPort):
    """Forwards use-case progress to the connected client."""

    def __init__(self, websocket: WebSocket):
        self._websocket = websocket

    async def report_progress(
        self, progress: int, message: str, status: str = "processing"
    ) -> None:
        await _send(self._websocket, status, progress, message)


async def handle_report_websocket(websocket: WebSocket, scouting: ScoutingDataPort) -> None:
    """Run one report generation over a WebSocket.

    The client sends a single message::

        {"action": "generate", "game": "VAL", "opponent": "Nightfall Esports",
         "region": "EMEA", "seriesCount": 5}

    Every server message carries ``status`` (connecting, processing,
    completed or error), ``progress`` (0-100) and ``message``. The completed
    message adds ``report`` in the same shape as ``POST /api/reports``.
    The socket is closed after the single exchange.
    """
    await websocket.accept()

    try:
        payload = await websocket.receive_json()
        if isinstance(payload, dict):
            await _run_generate(websocket, scouting, payload)
        else:
            await _send(websocket, "error", 0, "Expected a JSON object message")
    except WebSocketDisconnect:
        logger.info("Report websocket closed by client")
        return
    except json.JSONDecodeError:
        await _send(websocket, "error", 0, "Invalid JSON message")

    await websocket.close()


async def _run_generate(websocket: WebSocket, scouting: ScoutingDataPort, payload: dict) -> None:
    action = payload.get("action")
    if action != "generate":
        await _send(websocket, "error", 0, f"Unknown action: {action}")
        return

    await _send(websocket, "connecting", 0, f"Starting report ({scouting.status()['state']})")

    request = GenerateReportRequest(
        game=payload.get("game", "VAL"),
        opponent=payload.get("opponent", ""),
        region=payload.get("region", ""),
        series_count=payload.get("seriesCount", DEFAULT_SERIES_COUNT),
    )
    result = await GenerateReportUseCase(scouting).execute(
        request, WebSocketProgressCallback(websocket)
    )
    # failures were already pushed through the progress callback
    if not result.success or result.bundle is None:
        return

    report = transform_report_to_frontend(result.bundle, scouting.history(), scouting.status())
    await _send(websocket, "completed", 100, "Report ready", report=report)
