"""
FastAPI server for the Warehouse Read API.

Provides read-only REST endpoints (list and get-by-id) over warehouse stock,
orders and order lines, wrapped in the standard response envelope.
"""

from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import APIRouter, FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel

from . import __version__
from .db_client import WarehouseDB
from .envelope import envelope_response
from .lookups import RESOURCES, Resource, service_for, render
from warehouse_ops.config import Settings, get_settings


# Pydantic models for API responses
class HealthCheck(BaseModel):
    """Health check response model."""
    status: str
    database_connected: bool
    erp_database_connected: bool
    record_counts: Optional[Dict[str, int]] = None
    timestamp: str
    error: Optional[str] = None


# Dependency to get database client
def get_db(request: Request) -> WarehouseDB:
    """Dependency to provide the database client opened by the app's lifespan."""
    return request.app.state.db


def build_resource_router(resource: Resource, settings: Settings) -> APIRouter:
    """
    Build the list and get-by-id routes for a resource.

    Args:
        resource: Resource descriptor
        settings: Settings the owning app was built with

    Returns:
        APIRouter: Router with ``GET /<name>`` and ``GET /<name>/{record_id}``
    """
    router = APIRouter(prefix=resource.path, tags=[resource.plural.title()])

    def respond(result, many: bool):
        status_code, body = render(resource, result, many=many,
                                   expose_error_details=settings.expose_error_details,
                                   failure_status=settings.failure_status_code)
        return envelope_response(body, status_code)

    @router.get("", summary=f"List {resource.plural}")
    def list_records(db: WarehouseDB = Depends(get_db)):
        return respond(service_for(db, resource.name).list_all(), many=True)

    @router.get("/{record_id}", summary=f"Get a {resource.singular} by id")
    def get_record(record_id: str, db: WarehouseDB = Depends(get_db)):
        return respond(service_for(db, resource.name).get_by_id(record_id), many=False)

    return router


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Every setting the app uses is read once from ``settings`` here, so a later
    ``reload_settings()`` does not change an app that is already built.

    Args:
        settings: Settings to build the app with. If None, uses settings from config.

    Returns:
        FastAPI: Configured application
    """
    if settings is None:
        settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.db = WarehouseDB(settings.database_url, settings.erp_database_url,
                                   echo=settings.database_echo)
        logger.info("Opened warehouse database client")
        yield
        app.state.db.dispose()
        logger.info("Closed warehouse database client")

    app = FastAPI(
        title="Warehouse Read API",
        description="Read-only REST API over warehouse stock and orders",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "message": "Warehouse Read API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "resources": [f"{settings.api_prefix}{r.path}" for r in RESOURCES.values()]
        }

    @app.get("/health", response_model=HealthCheck, tags=["Health"])
    def health_check(db: WarehouseDB = Depends(get_db)):
        """Database and API health check."""
        return db.health_check()

    for resource in RESOURCES.values():
        app.include_router(build_resource_router(resource, settings), prefix=settings.api_prefix)

    return app


app = create_app()


# Development server runner
if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "warehouse_api.fastapi_server:app",
        host=settings.api_host,
        port=settings.api_port,
        workers=settings.api_workers,
        reload=True
    )
