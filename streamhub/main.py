"""
StreamHub — Main FastAPI Application

Video-sharing platform backend: videos, comments, likes, playlists,
subscriptions and tweets.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from streamhub.core.config import get_settings
from streamhub.core.database import engine, init_db
from streamhub.core.errors import register_exception_handlers

settings = get_settings()

# ── Logging ──────────────────────────────────────────────────────────────

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(settings.log_level)
    ),
)
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

logger = structlog.get_logger()


# ── Lifespan ─────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown hooks."""
    logger.info("Starting StreamHub", version=settings.app_version, api_prefix=settings.api_prefix)
    await init_db()
    logger.info("StreamHub ready")

    yield

    await engine.dispose()
    logger.info("Shutting down StreamHub")


# ── App ──────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Video-sharing platform backend",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Prometheus metrics
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

# ── Routes ───────────────────────────────────────────────────────────────

from streamhub.api.routes import comments, dashboard, likes, playlists, subscriptions, tweets, users, videos

app.include_router(users.router, prefix=settings.api_prefix)
app.include_router(videos.router, prefix=settings.api_prefix)
app.include_router(comments.router, prefix=settings.api_prefix)
app.include_router(likes.router, prefix=settings.api_prefix)
app.include_router(tweets.router, prefix=settings.api_prefix)
app.include_router(subscriptions.router, prefix=settings.api_prefix)
app.include_router(playlists.router, prefix=settings.api_prefix)
app.include_router(dashboard.router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "resources": [
            "users", "videos", "comments", "likes",
            "tweets", "subscriptions", "playlists", "dashboard",
        ],
        "docs": "/docs",
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "version": settings.app_version}
