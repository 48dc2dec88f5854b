"""ASGI entry point: ``uvicorn vehicle_lookup.main:app``."""

from vehicle_lookup.core.app_factory import create_app

app = create_app()
