"""FastAPI application entry point.

Icebreaker Question API - random team-building questions with ratings.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from icebreaker.dependencies import get_question_service
from icebreaker.errors import IcebreakerError, StorageUnavailable, ValidationError
from icebreaker.routes import api_router
from icebreaker.schemas import ErrorResponse, FieldError
from icebreaker.services.questions import QuestionService
from icebreaker.settings import Settings, get_settings
from icebreaker.stores.base import RecordStore
from icebreaker.stores.memory import MemoryStore
from icebreaker.stores.postgres import PostgresStore
from icebreaker.stores.redis import RedisCache

logger = logging.getLogger("uvicorn.error")


def build_store(settings: Settings) -> RecordStore:
    """Pick the record store adapter named by STORAGE_BACKEND."""
    if settings.storage_backend == "postgres":
        return PostgresStore.from_settings(settings)
    return MemoryStore(seed=settings.seed_on_startup)


def _error_response(status_code: int, message: str, errors: list[dict] | None = None) -> JSONResponse:
    body = ErrorResponse(
        message=message,
        errors=[FieldError(**e) for e in errors] if errors else None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the store and cache from settings unless create_app() was given
    them, and closes whatever it built on shutdown.
    """
    # Startup
    settings: Settings = app.state.settings
    owned_store: RecordStore | None = None
    owned_cache: RedisCache | None = None

    if getattr(app.state, "question_service", None) is None:
        owned_store = build_store(settings)
        try:
            await owned_store.ping()
            logger.info(f"Storage ready backend={owned_store.backend}")
        except StorageUnavailable:
            logger.exception(f"Storage ping failed backend={owned_store.backend}")

        if settings.redis_url:
            try:
                owned_cache = await RedisCache.connect(settings)
            except Exception:
                logger.exception("Redis init failed, stats cache disabled")

        app.state.question_service = QuestionService(owned_store, cache=owned_cache)

    yield

    # Shutdown
    if owned_cache is not None:
        await owned_cache.close()
    if owned_store is not None:
        await owned_store.close()
        app.state.question_service = None


def create_app(
    settings: Settings | None = None,
    store: RecordStore | None = None,
    cache: RedisCache | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Overrides the environment-derived settings.
        store: Record store to use instead of building one at startup.
        cache: Stats cache to pair with ``store``.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Random icebreaker questions with ratings and admin stats",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings
    app.state.question_service = QuestionService(store, cache=cache) if store is not None else None

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(IcebreakerError)
    async def domain_exception_handler(request: Request, exc: IcebreakerError) -> JSONResponse:
        """Map domain errors to {message, errors?}."""
        if isinstance(exc, ValidationError):
            return _error_response(exc.status_code, exc.message, exc.errors)
        if isinstance(exc, StorageUnavailable):
            logger.error(f"Storage unavailable on {request.method} {request.url.path}: {exc.message}")
            return _error_response(exc.status_code, "Storage unavailable")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed bodies, wrong types and non-integer path ids are 400, not 422."""
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())[1:]) or "body",
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        return _error_response(400, "Invalid request data", errors)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning the standard error format."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(500, str(exc) if settings.debug else "Internal server error")

    # Health check endpoints
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    @app.get("/health/storage", tags=["health"])
    async def storage_health_check(
        service: QuestionService = Depends(get_question_service),
    ) -> dict[str, object]:
        """Verify the record store is reachable."""
        await service.store.ping()
        return {"ok": True, "backend": service.store.backend}

    # Include API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "icebreaker.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
