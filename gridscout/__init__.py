"""GRID scouting report generator package."""

__all__ = [
    "config",
    "errors",
    "status",
    "models",
    "grid_client",
    "grid_queries",
    "mock_data",
    "normalize",
    "report",
    "randomness",
    "analytics",
    "availability",
    "history",
    "pipeline",
    "render",
    "report_pdf",
]
