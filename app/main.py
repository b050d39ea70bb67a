from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from fastapi import FastAPI, APIRouter
from app.core.config import settings
from app.core.middleware_correlation import CorrelationIdMiddleware
from app.core.logging import get_logger, setup_logging
from app.core.errors import register_exception_handlers
from app.db.session import engine
from app.models.base import Base

# Routers
from app.api.routes.authors import router as authors_router
from app.api.routes.health import router as health_router


setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    if settings.CREATE_TABLES:
        get_logger(__name__).info("Creating tables")
        Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Authors API - CRUD over author records.",
    version="1.0.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

# Middlewares
app.add_middleware(CorrelationIdMiddleware)

# Root endpoint
@app.get("/")
async def root():
    """API root endpoint with basic information."""
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": "1.0.0",
        "docs_url": "/docs",
        "endpoints": {
            "authors": f"{settings.API_PREFIX}/authors",
            "health": "/health",
        },
        "authentication": {
            "type": "X-API-Key header" if settings.API_KEY else "None",
        },
    }

register_exception_handlers(app)

# Mount routers
api = APIRouter(prefix=settings.API_PREFIX)
api.include_router(authors_router)
app.include_router(api)
app.include_router(health_router)
