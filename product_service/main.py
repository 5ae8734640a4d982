# product_service/main.py

"""
FastAPI Product Service API.
Builds the application: logging, CORS for the frontend origin, request logging,
error handlers, the /api/products router, the database bootstrap and the
OpenAPI docs served at /docs.
"""
import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, load_settings
from .db import Database, connect_db
from .exceptions import (
    ProductNotFoundError,
    RequestValidationFailed,
    product_not_found_handler,
    validation_failed_handler,
)
from .router import router

logger = logging.getLogger(__name__)

CORS_ERROR = "Error de CORS"


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Request lines come from our own middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Connects to the database and ensures tables exist on startup; a failure is
    logged and the API starts anyway. Disposes the engine on shutdown.
    """
    settings: Settings = app.state.settings
    connect_db(
        app.state.database,
        max_retries=settings.db_connect_retries,
        retry_delay_seconds=settings.db_connect_retry_delay,
    )
    yield
    logger.info("Shutting down Product Service")
    app.state.database.dispose()


def create_app(
    settings: Optional[Settings] = None, database: Optional[Database] = None
) -> FastAPI:
    settings = settings or load_settings()
    database = database or Database(settings.database_url)

    app = FastAPI(
        title="Products REST API",
        description="CRUD API for products: name, price and availability.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        openapi_tags=[{"name": "Products", "description": "Manage the product catalog"}],
    )
    app.state.settings = settings
    app.state.database = database

    # Only the configured frontend may call the API from a browser
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def reject_foreign_origins(request: Request, call_next):
        # Browser requests from any other origin never reach the router;
        # requests without an Origin header (curl, server-to-server) pass
        origin = request.headers.get("origin")
        if origin is not None and origin != settings.frontend_url:
            logger.warning(f"Rejected {request.method} {request.url.path} from origin {origin}")
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": CORS_ERROR},
            )
        return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {duration_ms:.3f} ms"
        )
        return response

    app.add_exception_handler(ProductNotFoundError, product_not_found_handler)
    app.add_exception_handler(RequestValidationFailed, validation_failed_handler)

    app.include_router(router, prefix="/api/products")

    logger.info(f"Product Service configured; CORS origin: {settings.frontend_url}")
    return app


configure_logging(load_settings().log_level)
app = create_app()
