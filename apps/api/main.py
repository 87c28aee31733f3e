"""FastAPI application main entry point."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from apps.api.errors import register_exception_handlers
from apps.api.v1.endpoints import carts, deliveries, orders, sales
from core.infrastructure.database.config import close_database, init_database
from core.infrastructure.event_bus import get_event_bus, log_event
from core.infrastructure.logging import configure_logging
from core.settings import get_app_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_app_settings()
    configure_logging(settings.logging.level)

    get_event_bus().subscribe(log_event)
    await init_database()
    logger.info("E-commerce API started")

    yield

    await close_database()
    get_event_bus().unsubscribe(log_event)
    logger.info("E-commerce API stopped")


app = FastAPI(
    title="E-commerce API",
    description="Order placement and delivery tracking API",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
    return response


register_exception_handlers(app)

# Include routers
app.include_router(orders.router, prefix="/api/v1")
app.include_router(sales.router, prefix="/api/v1")
app.include_router(deliveries.router, prefix="/api/v1")
app.include_router(carts.router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
