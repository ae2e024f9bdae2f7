"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans cinestore/core/ports/repositories.py.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit la factory de sessions partagee via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from cinestore.infrastructure.persistence.repositories.movie_repository import (
    SQLModelMovieRepository,
)
from cinestore.infrastructure.persistence.repositories.permission_repository import (
    SQLModelPermissionRepository,
)
from cinestore.infrastructure.persistence.repositories.token_repository import (
    SQLModelTokenRepository,
)
from cinestore.infrastructure.persistence.repositories.user_repository import (
    SQLModelUserRepository,
)

__all__ = [
    "SQLModelMovieRepository",
    "SQLModelPermissionRepository",
    "SQLModelTokenRepository",
    "SQLModelUserRepository",
]
