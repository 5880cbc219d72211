"""
Album Microservice

Album management service: search, create, rename and favorite albums.
Every mutation is broadcast to connected clients through the event notifier.

Port: 8219
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from core.auth_dependencies import (
    AuthorizationGate,
    NotAuthorizedError,
    VerifiedCaller,
    require_verified_caller,
)
from core.config import get_settings
from core.http_errors import error_response, validation_message
from core.logger import setup_service_logger
from core.nats_client import create_event_bus

from .album_service import (
    AlbumConflictError,
    AlbumNotFoundError,
    AlbumService,
    AlbumServiceError,
    AlbumUnauthorizedError,
    AlbumValidationError,
)
from .events import EventNotifier
from .factory import create_album_repository, create_album_service
from .models import Album, AlbumServiceStatus
from .protocols import AuthorizationGateProtocol
from .routes_registry import SERVICE_METADATA, get_route_summary

logger = logging.getLogger("album_service")

# Status code per service error, most specific first
ERROR_STATUS = [
    (AlbumValidationError, 400),
    (AlbumConflictError, 400),
    (AlbumUnauthorizedError, 401),
    (AlbumNotFoundError, 404),
]


def status_for_error(error: AlbumServiceError) -> int:
    for error_class, status_code in ERROR_STATUS:
        if isinstance(error, error_class):
            return status_code
    return 500


# ==================== Application Factory ====================


def create_app(
    album_service: Optional[AlbumService] = None,
    authorization_gate: Optional[AuthorizationGateProtocol] = None,
    notifier: Optional[EventNotifier] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Injected components are used as-is and are not closed on shutdown.
    Missing ones are created from settings when the lifespan starts.

    Args:
        album_service: Service instance (tests inject one over a fake repository)
        authorization_gate: Gate resolving VerifiedCaller for mutating routes
        notifier: Event notifier the service publishes to

    Returns:
        FastAPI: Configured application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifecycle management"""
        settings = get_settings()
        setup_service_logger(settings.service.service_name, config=settings.logging)

        logger.info("Starting Album Service...")

        repository = None
        event_bus = None

        if app.state.notifier is None:
            app.state.notifier = EventNotifier()

        if app.state.album_service is None:
            repository = create_album_repository(settings)
            await repository.connect()
            await repository.ensure_schema()
            app.state.album_service = create_album_service(
                settings, event_bus=app.state.notifier, repository=repository
            )
            logger.info("✅ Album repository connected")

        if app.state.authorization_gate is None:
            app.state.authorization_gate = AuthorizationGate.from_config(settings.service)
            if settings.service.public_mode:
                logger.warning("⚠️  Public mode enabled: all callers are authorized")

        # Forward every notifier event to NATS
        if settings.infrastructure.nats_enabled:
            try:
                event_bus = await create_event_bus(
                    settings.service.service_name, settings.infrastructure.nats_url
                )
                app.state.notifier.subscribe(event_bus.publish_event, name="nats")
                logger.info("✅ Event bus initialized successfully")
            except Exception as e:
                logger.warning(
                    f"⚠️  Failed to initialize event bus: {e}. Continuing without NATS forwarding."
                )
                event_bus = None

        logger.info(f"Album Service started on port {settings.service.service_port}")

        yield

        # Cleanup
        await app.state.notifier.drain()

        if event_bus:
            try:
                await event_bus.close()
                logger.info("Event bus closed")
            except Exception as e:
                logger.error(f"Error closing event bus: {e}")

        if repository:
            await repository.close()
            logger.info("Album repository closed")

        logger.info("Album Service stopped")

    app = FastAPI(
        title="Album Service",
        description="Album management with client config sync",
        version=SERVICE_METADATA["version"],
        lifespan=lifespan,
    )

    app.state.album_service = album_service
    app.state.authorization_gate = authorization_gate
    app.state.notifier = notifier

    register_exception_handlers(app)
    register_routes(app)
    return app


# ==================== Error Handling ====================


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotAuthorizedError)
    async def not_authorized_handler(request: Request, exc: NotAuthorizedError):
        return error_response(401, "Unauthorized")

    # Routing errors (404/405) and HTTPException raised by dependencies
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(400, validation_message(exc))

    @app.exception_handler(AlbumServiceError)
    async def album_service_error_handler(request: Request, exc: AlbumServiceError):
        status_code = status_for_error(exc)
        if status_code == 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return error_response(status_code, str(exc))


# ==================== Dependency Injection ====================


def get_album_service(request: Request) -> AlbumService:
    """Get album service instance"""
    service = getattr(request.app.state, "album_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return service


# ==================== Routes ====================


def register_routes(app: FastAPI) -> None:

    # ==================== Health Check ====================

    @app.get("/", response_model=AlbumServiceStatus)
    async def root(service: AlbumService = Depends(get_album_service)):
        """Root endpoint - service status"""
        settings = get_settings()
        db_connected = await service.check_connection()
        return AlbumServiceStatus(
            service=SERVICE_METADATA["service_name"],
            status="operational" if db_connected else "degraded",
            port=settings.service.service_port,
            version=SERVICE_METADATA["version"],
            database_connected=db_connected,
            route_count=get_route_summary()["route_count"],
            timestamp=datetime.now(),
        )

    @app.get("/health")
    async def health_check(service: AlbumService = Depends(get_album_service)):
        """Health check endpoint"""
        db_connected = await service.check_connection()
        health = {
            "status": "healthy" if db_connected else "unhealthy",
            "service": SERVICE_METADATA["service_name"],
            "database": "connected" if db_connected else "disconnected",
            "timestamp": datetime.now().isoformat(),
        }
        status_code = 200 if db_connected else 503
        return JSONResponse(content=health, status_code=status_code)

    # ==================== Album Management ====================

    @app.get("/api/v1/albums")
    async def list_albums(
        request: Request,
        service: AlbumService = Depends(get_album_service),
    ):
        """
        Search albums

        Query: q, name, favorites, count, offset, order

        Returns:
            JSON array of albums; X-Result-Count / X-Result-Offset hold the
            page actually applied
        """
        form = service.parse_search_form(dict(request.query_params))
        result = await service.list_albums(form)
        return JSONResponse(
            content=jsonable_encoder(result.albums),
            headers={
                "X-Result-Count": str(result.count),
                "X-Result-Offset": str(result.offset),
            },
        )

    @app.post("/api/v1/albums", response_model=Album)
    async def create_album(
        request: Request,
        caller: VerifiedCaller = Depends(require_verified_caller),
        service: AlbumService = Depends(get_album_service),
    ):
        """
        Create a new album

        Body: {"AlbumName": "<name>"}, bound only after the caller is authorized
        """
        params = service.parse_album_params(await request.body())
        return await service.create_album(params, caller)

    @app.put("/api/v1/albums/{album_id}", response_model=Album)
    async def rename_album(
        album_id: str,
        request: Request,
        caller: VerifiedCaller = Depends(require_verified_caller),
        service: AlbumService = Depends(get_album_service),
    ):
        """Rename an album"""
        params = service.parse_album_params(await request.body())
        return await service.rename_album(album_id, params, caller)

    # ==================== Favorites ====================

    @app.post("/api/v1/albums/{album_id}/like")
    async def like_album(
        album_id: str,
        caller: VerifiedCaller = Depends(require_verified_caller),
        service: AlbumService = Depends(get_album_service),
    ):
        """Mark album as favorite"""
        await service.like_album(album_id, caller)
        return Response(status_code=200)

    @app.delete("/api/v1/albums/{album_id}/like")
    async def dislike_album(
        album_id: str,
        caller: VerifiedCaller = Depends(require_verified_caller),
        service: AlbumService = Depends(get_album_service),
    ):
        """Clear album favorite flag"""
        await service.dislike_album(album_id, caller)
        return Response(status_code=200)


# Initialize FastAPI app
app = create_app()


if __name__ == "__main__":
    import uvicorn

    service_settings = get_settings()
    uvicorn.run(
        app,
        host=service_settings.service.service_host,
        port=service_settings.service.service_port,
        log_level=service_settings.logging.log_level.lower(),
    )
