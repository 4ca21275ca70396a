"""
Main entrypoint for the User Records API.

This module assembles the FastAPI application, sets up logging,
registers the error handler for service failures and includes the
versioned router.  The ``create_app`` function builds and configures
the app, which is then instantiated at module import time as ``app``::

    uvicorn user_store_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.errors import UserServiceError
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def service_error_handler(request: Request, exc: UserServiceError) -> JSONResponse:
    """Report a service failure as HTTP 500 with ``{"error": message}``."""
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
    )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.add_exception_handler(UserServiceError, service_error_handler)
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
