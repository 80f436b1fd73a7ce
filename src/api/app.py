from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_storage_error(request: Request, exc: SQLAlchemyError):
    logger.error(f"Storage error on {request.method} {request.url.path}", exc_info=exc)
    error_dict = {"code": "STORAGE_UNAVAILABLE", "message": "Internal server error"}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        scheduler = None
        if ApplicationConfig.ENABLE_MAINTENANCE_SWEEPS:
            from src.adapter.services.maintenance_scheduler import MaintenanceScheduler
            from src.depends import AsyncSessionLocal

            scheduler = MaintenanceScheduler(
                AsyncSessionLocal, ApplicationConfig.MAINTENANCE_INTERVAL_SECONDS
            )
            scheduler.start()

        yield

        if scheduler is not None:
            await scheduler.stop()

    app = FastAPI(title="Access Control Core", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, auth, content_units, health_check, principals, tenants, user

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(auth.secured, tags=["Authentication"])
    app.include_router(user.router, tags=["User"])
    app.include_router(content_units.publisher_router, tags=["Content Units"])
    app.include_router(content_units.viewer_router, tags=["Content Units"])
    app.include_router(tenants.router, tags=["Tenants"])
    app.include_router(principals.router, tags=["Principals"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(SQLAlchemyError, handle_storage_error)

    return app
