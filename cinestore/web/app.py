"""
Application FastAPI de CineStore.

Initialise l'application web avec le Container DI, installe les
gestionnaires d'erreurs et monte les routes v1.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from loguru import logger

from cinestore import __version__

from ..container import Container
from ..infrastructure.persistence.database import dispose_engine
from .errors import register_error_handlers
from .routes import healthcheck_router, movies_router, tokens_router, users_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise la base au demarrage ; a l'arret, attend les taches de fond puis ferme le pool."""
    container = app.state.container
    await container.database.init()
    logger.info("Serveur demarre", env=container.config().env)
    yield
    await container.background().wait()
    await dispose_engine(container.engine())
    logger.info("Serveur arrete")


def create_app(container: Optional[Container] = None) -> FastAPI:
    application = FastAPI(title="CineStore", version=__version__, lifespan=lifespan)
    application.state.container = container or Container()
    register_error_handlers(application)

    application.include_router(healthcheck_router)
    application.include_router(movies_router)
    application.include_router(users_router)
    application.include_router(tokens_router)
    return application


app = create_app()
