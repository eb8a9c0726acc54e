"""GRID Scout service - esports scouting report API.

This package provides a hexagonal architecture implementation around the
gridscout core library.

Layers:
- application: Use cases and port interfaces
- infrastructure: Adapters for external services
- api: REST and WebSocket endpoints
"""

__version__ = "1.0.0"
