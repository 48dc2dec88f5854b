"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build isolated instances.
"""

from __future__ import annotations

from fastapi import FastAPI

from vehicle_lookup import __version__
from vehicle_lookup.api.routes import health_router, lookup_router
from vehicle_lookup.core.config import settings
from vehicle_lookup.core.exception_handlers import setup_exception_handlers
from vehicle_lookup.core.logging import configure_logging
from vehicle_lookup.core.middleware import cors_middleware, request_id_middleware
from vehicle_lookup.core.openapi import apply_openapi_customizations


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Vehicle Lookup API",
        description=(
            "Look up vehicle details by VIN or license plate. VINs are decoded "
            "through the NHTSA vPIC API; plate registration and vehicle history "
            "come from pluggable providers. Responses are JSON; errors are "
            '{"error": "<message>"} with status 400, 429 or 500.'
        ),
        version=__version__,
    )

    # Middleware; the last registered runs first
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(cors_middleware)

    setup_exception_handlers(app)

    app.include_router(lookup_router, prefix="/v1")
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
