"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ideahub.app.api import auth, collaboration, engagement, ideas, profiles, websocket
from ideahub.app.core.config import settings
from ideahub.app.core.exception_handlers import register_exception_handlers
from ideahub.app.db.base import engine, Base
# Import all models to register them with SQLAlchemy
from ideahub.app import models  # noqa: F401

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: Create database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("[STARTUP] Database tables ready")

    yield

    # Shutdown: Close database connections
    await engine.dispose()
    logger.info("[SHUTDOWN] Cleaned up resources")


app = FastAPI(
    title="IdeaHub API",
    description="Share ideas, gather likes and comments, and find collaborators",
    version="1.0.0",
    lifespan=lifespan,
)

# Register custom exception handlers
register_exception_handlers(app)

# CORS middleware for frontend
logger.debug(f"[CORS] Allowed origins: {settings.cors_origins_list}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth.router, prefix="/api")
app.include_router(ideas.router, prefix="/api")
app.include_router(engagement.router, prefix="/api")
app.include_router(collaboration.router, prefix="/api")
app.include_router(profiles.router, prefix="/api")
app.include_router(websocket.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "IdeaHub API",
        "version": "1.0.0",
        "description": "Share ideas, gather likes and comments, and find collaborators",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
