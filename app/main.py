"""FastAPI application — main entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from app.config import get_settings
from app.core.exceptions import register_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.infrastructure.database import MongoStore
from app.infrastructure.gemini_client import GeminiClient

from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.ai import router as ai_router
from app.interfaces.api.gemini import router as gemini_router
from app.interfaces.api.deps import get_store

settings = get_settings()

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store and build the Gemini client; tear both down on shutdown."""
    logger.info("Starting agro backend", env=settings.ENVIRONMENT)

    store = getattr(app.state, "store", None) or MongoStore()
    store.connect()
    try:
        store.ensure_indexes()
    except PyMongoError:
        logger.exception("MongoDB index setup failed. Check MONGO_URI.")
    app.state.store = store

    if getattr(app.state, "gemini", None) is None:
        app.state.gemini = GeminiClient.from_settings(settings)
    if not app.state.gemini.configured:
        logger.warning("GEMINI_API_KEY is not set; assistant endpoints will degrade")

    yield

    store.close()
    logger.info("Agro backend stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Agro Marketplace API",
        description="Signup, login and roles for farmers, vendors and communities, plus the Gemini assistant",
        version="1.0.0",
        lifespan=lifespan,
    )

    setup_middleware(app)
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(ai_router)
    app.include_router(gemini_router)

    @app.get("/")
    def root():
        return {
            "name": "Agro Marketplace API",
            "version": "1.0.0",
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health")
    def health(store: MongoStore = Depends(get_store)):
        try:
            store.ping()
        except PyMongoError as e:
            logger.warning("Health check failed", error=str(e))
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "database": "down"},
            )
        return {"status": "healthy", "database": "up"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
