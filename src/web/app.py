"""
Application FastAPI de MovieInfo.

Initialise l'application web avec le Container DI, branche les
gestionnaires d'erreurs, le journal des requetes et monte les routes
sous le chemin de base configure.
"""

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from loguru import logger

from ..container import Container
from ..logging_config import request_log_level
from .errors import register_exception_handlers
from .routes.external import router as external_router
from .routes.movies import router as movies_router
from .schemas import envelope

APP_NAME = "Movie Info API"


def api_index(base_path: str, version: str) -> dict:
    """Description des points d'entree, servie sur /."""
    return {
        "success": True,
        "message": f"Welcome to {APP_NAME}",
        "version": version,
        "documentation": f"{base_path}/movies",
        "endpoints": {
            "movies": {
                f"GET {base_path}/movies": "Get all movies with pagination, search, and filters",
                f"GET {base_path}/movies/:id": "Get a specific movie by ID",
                f"POST {base_path}/movies": "Create a new movie",
                f"PUT {base_path}/movies/:id": "Update a movie by ID",
                f"DELETE {base_path}/movies/:id": "Delete a movie by ID",
                f"GET {base_path}/movies/stats": "Get movie statistics",
            },
            "external": {
                f"GET {base_path}/external/search": "Search movies from external APIs (TMDB, OMDB, RapidAPI)",
                f"GET {base_path}/external/details/:source/:id": "Get movie details from external API",
                f"POST {base_path}/external/import": "Import movie from external API to database",
                f"POST {base_path}/external/bulk-import": "Bulk import movies from external API",
                f"PUT {base_path}/external/sync/:id": "Sync existing movie with external API data",
            },
        },
    }


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container DI a utiliser (un nouveau par defaut) ;
            les tests y injectent une configuration surchargee
    """
    container = container or Container()
    settings = container.config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialise la base au demarrage, libere clients et cache a l'arret."""
        container.database.init()
        app.state.container = container
        logger.info(f"{APP_NAME} demarre ({settings.environment}), base: {settings.api_base_path}")
        yield
        for client in container.movie_providers().values():
            await client.close()
        container.api_cache().close()
        container.database.shutdown()
        logger.info(f"{APP_NAME} arrete")

    app = FastAPI(title=APP_NAME, version=settings.api_version, lifespan=lifespan)
    app.state.container = container

    log_level = request_log_level(settings)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.log(
            log_level,
            f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms",
        )
        return response

    register_exception_handlers(app)

    @app.get("/health")
    def health():
        return envelope(
            message=f"{APP_NAME} is running",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=settings.api_version,
        )

    @app.get("/")
    def index():
        return api_index(settings.api_base_path, settings.api_version)

    # Routes
    app.include_router(movies_router, prefix=settings.api_base_path)
    app.include_router(external_router, prefix=settings.api_base_path)

    return app


app = create_app()
