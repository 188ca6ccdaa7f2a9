"""FastAPI application with lifespan events."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette_context.middleware import RawContextMiddleware

from pokexplorer.core.config import settings
from pokexplorer.core.logging import setup_logging, request_id_middleware
from pokexplorer.core.exceptions import register_exception_handlers
from pokexplorer.db.base import init_db, check_db_connection
from pokexplorer.db.session import SessionLocal
from pokexplorer.services.pokemon_service import build_pokeapi_client
from loguru import logger

# Import API routers
from pokexplorer.api.auth import router as auth_router
from pokexplorer.api.pokemon import router as pokemon_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    setup_logging()
    logger.info("Starting Poké-Explorer API...")

    try:
        init_db()
        logger.info("Database initialized successfully")

        with SessionLocal() as db:
            if check_db_connection(db):
                logger.info("Database connection healthy")
            else:
                logger.warning("Database connection check failed")

    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    app.state.pokeapi_client = build_pokeapi_client(
        settings.pokeapi_base_url, settings.pokeapi_timeout
    )
    logger.info(f"PokéAPI client ready ({settings.pokeapi_base_url}, timeout {settings.pokeapi_timeout}s)")

    yield

    logger.info("Shutting down Poké-Explorer API...")
    await app.state.pokeapi_client.aclose()
    logger.info("Poké-Explorer API shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Request ID middleware must sit inside the context middleware
    app.middleware("http")(request_id_middleware)
    app.add_middleware(RawContextMiddleware)

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(pokemon_router, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Welcome to the Poké-Explorer API",
            "version": settings.api_version,
            "docs": "/docs"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        db_status = "healthy"
        try:
            with SessionLocal() as db:
                if not check_db_connection(db):
                    db_status = "unhealthy"
        except Exception as e:
            db_status = f"error: {str(e)}"

        return {
            "status": "healthy" if db_status == "healthy" else "unhealthy",
            "database": db_status,
            "version": settings.api_version
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "pokexplorer.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
