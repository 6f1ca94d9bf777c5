"""FastAPI application factory"""

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from src.api.error import ClientError, client_error_handler
from src.api.routes import health, invoices, lessons, revenue

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    """
    Build the API application

    Args:
        config: ApplicationConfig-like object

    Returns:
        Configured FastAPI app
    """
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.DB_AUTO_CREATE:
            from src.depends import init_db

            await init_db()
        yield

    app = FastAPI(
        title="Lesson Billing Service",
        description="Lesson lifecycle, revenue ledger and invoicing for tutoring workspaces",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
            )
            return response

    app.add_exception_handler(ClientError, client_error_handler)

    app.include_router(health.router)
    app.include_router(lessons.router, prefix=config.API_PREFIX)
    app.include_router(invoices.router, prefix=config.API_PREFIX)
    app.include_router(revenue.router, prefix=config.API_PREFIX)

    return app
