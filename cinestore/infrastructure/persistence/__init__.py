"""
Module de persistance pour CineStore.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy asyncio).
Il contient :

- database.py : Engine asynchrone, pool borne, session factory, deadline, initialisation
- models.py : Modeles SQLModel representant les tables de la base de donnees
- dialects.py : Capacites propres a chaque moteur (traduction des erreurs, filtres)
- repositories/ : Implementations des ports repository

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.

Usage:
    from cinestore.config import Settings
    from cinestore.infrastructure.persistence import create_engine, create_session_factory, init_db

    engine = create_engine(Settings())
    await init_db(engine)
    movies = SQLModelMovieRepository(create_session_factory(engine))
"""

from cinestore.infrastructure.persistence.database import (
    create_engine,
    create_session_factory,
    deadline,
    dispose_engine,
    init_db,
)
from cinestore.infrastructure.persistence.models import (
    MovieModel,
    PermissionModel,
    TokenModel,
    UserModel,
    UserPermissionModel,
)

__all__ = [
    "create_engine",
    "create_session_factory",
    "deadline",
    "dispose_engine",
    "init_db",
    "MovieModel",
    "PermissionModel",
    "TokenModel",
    "UserModel",
    "UserPermissionModel",
]
