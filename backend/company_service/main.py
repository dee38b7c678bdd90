"""FastAPI application - REST surface plus the embedded gRPC server."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.company_service.api.routes.companies import router as companies_router
from backend.company_service.api.routes.health import router as health_router
from backend.company_service.api.routes.metrics import router as metrics_router
from backend.company_service.api.routes.products import router as products_router
from backend.company_service.config import Settings, get_settings
from backend.company_service.db.engine import Database
from backend.company_service.errors import CompanyServiceError
from backend.company_service.grpc_app.server import start_grpc_server
from backend.company_service.utils.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the shared Database, then start the gRPC server next to HTTP."""
    settings: Settings = app.state.settings
    configure_logging(settings)

    database = Database.from_settings(settings)
    app.state.database = database
    if settings.should_create_tables:
        await database.create_all()

    grpc_server = None
    if settings.grpc_enabled:
        grpc_server, _ = await start_grpc_server(database.session_factory, settings.grpc_port)

    try:
        yield
    finally:
        if grpc_server is not None:
            await grpc_server.stop(grace=5)
        await database.dispose()
        logger.info("Company service stopped")


async def handle_service_error(request: Request, exc: CompanyServiceError) -> JSONResponse:
    """Convert CompanyServiceError into {"message": ...} with its status code."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request shape (e.g. a non-object JSON body) is a 400."""
    errors = [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"message": "Invalid request", "errors": errors})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"[{request.method} {request.url.path}] unhandled error: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(title="Company Service API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CompanyServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Register routes
    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(companies_router)
    app.include_router(products_router)

    return app


app = create_app()
