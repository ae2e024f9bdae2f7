"""
Configuration de la base de donnees pour CineStore.

Ce module fournit :
- Engine asynchrone avec pool de connexions borne (taille, debordement,
  delai d'acquisition, recyclage des connexions inactives)
- Session factory (async_sessionmaker) partagee par les repositories
- Fonction d'initialisation des tables et des permissions connues
- Context manager deadline() bornant la duree d'une operation

La base de donnees est configuree via CINESTORE_DATABASE_URL
(defaut: sqlite+aiosqlite:///cinestore.db).
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from loguru import logger
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from cinestore.config import Settings
from cinestore.core.entities.permission import KNOWN_PERMISSIONS
from cinestore.core.errors import OperationTimeoutError


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Cree un engine asynchrone a partir de la configuration.

    Pour une base fichier ou serveur, le pool est borne : au plus
    db_max_open_conns + db_max_overflow connexions, acquisition bloquante
    pendant db_pool_timeout secondes, recyclage apres db_max_idle_time.
    Une base SQLite en memoire utilise une connexion unique.
    """
    url = make_url(settings.database_url)
    is_sqlite = url.get_backend_name() == "sqlite"
    in_memory = is_sqlite and url.database in (None, "", ":memory:")

    kwargs: dict = {"echo": False, "pool_pre_ping": True}
    if not in_memory:
        kwargs.update(
            poolclass=AsyncAdaptedQueuePool,
            pool_size=settings.db_max_open_conns,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_max_idle_time,
        )

    if is_sqlite and not in_memory:
        # Creer le repertoire parent du fichier SQLite
        Path(url.database).parent.mkdir(exist_ok=True, parents=True)

    engine = create_async_engine(settings.database_url, **kwargs)
    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Factory de sessions asynchrones.

    Chaque operation de repository ouvre sa propre session : une session
    n'est jamais partagee entre deux taches concurrentes.
    """
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialise la base de donnees : tables puis permissions connues.

    Doit etre appelee une fois au demarrage de l'application.
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from cinestore.infrastructure.persistence import models

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with create_session_factory(engine)() as session:
        existing = set((await session.exec(select(models.PermissionModel.code))).all())
        for code in KNOWN_PERMISSIONS:
            if code not in existing:
                session.add(models.PermissionModel(code=code))
        await session.commit()

    logger.debug("Base de donnees initialisee", url=engine.url.render_as_string(hide_password=True))


async def dispose_engine(engine: AsyncEngine) -> None:
    """Ferme toutes les connexions du pool."""
    await engine.dispose()


@asynccontextmanager
async def deadline(operation: str, seconds: float) -> AsyncIterator[None]:
    """
    Borne la duree d'une operation de stockage.

    A l'expiration, la tache est annulee (l'appel au driver est interrompu,
    la transaction non validee est annulee a la fermeture de la session)
    puis OperationTimeoutError est levee.

    Raises:
        OperationTimeoutError: Si l'operation depasse seconds
    """
    try:
        async with asyncio.timeout(seconds):
            yield
    except TimeoutError as e:
        logger.warning("Delai depasse", operation=operation, timeout=seconds)
        raise OperationTimeoutError(operation, seconds) from e
