"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_service.app.api import users
from user_service.app.core.config import settings
from user_service.app.core.exception_handlers import register_exception_handlers
from user_service.app.repositories.user_repository import InMemoryUserRepository

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        f"[STARTUP] {settings.app_name} serving {settings.api_prefix}/users "
        f"with {app.state.user_repository.count()} stored user(s)"
    )

    yield

    logger.info("[SHUTDOWN] Cleaned up resources")


app = FastAPI(
    title=settings.app_name,
    description="CRUD API over an in-memory user repository",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

# The repository lives as long as the application and is injected per request
app.state.user_repository = InMemoryUserRepository()

# Register custom exception handlers
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location", "X-Pagination", "Allow"],
)

# Register routers
app.include_router(users.router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "description": "CRUD API over an in-memory user repository",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
