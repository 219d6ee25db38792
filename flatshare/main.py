"""Flatshare API - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flatshare.config import settings
from flatshare.database import init_db

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup."""
    init_db()
    logger.info("Application startup")
    yield
    logger.info("Application shutdown")


app = FastAPI(
    title=settings.app_name,
    description="Shared-housing groups, calendar and expenses",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

from flatshare.api.error_handlers import register_error_handlers  # noqa: E402

register_error_handlers(app)

# --- Register API routers ---
from flatshare.api.auth import router as auth_router  # noqa: E402
from flatshare.api.groups import router as groups_router  # noqa: E402
from flatshare.api.events import router as events_router  # noqa: E402
from flatshare.api.expenses import router as expenses_router  # noqa: E402

app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(groups_router, prefix=settings.api_prefix)
app.include_router(events_router, prefix=settings.api_prefix)
app.include_router(expenses_router, prefix=settings.api_prefix)


@app.get("/")
def root():
    """Service info."""
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/health")
def health():
    return {"status": "ok"}
