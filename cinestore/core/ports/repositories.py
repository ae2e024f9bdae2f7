"""
Interfaces ports pour les repositories.

Contrats de persistance des entites. Toutes les operations sont
asynchrones et bornees dans le temps par l'implementation ; elles
ne levent que des exceptions de cinestore.core.errors.
"""

from abc import ABC, abstractmethod
from datetime import timedelta

from cinestore.core.entities.movie import Movie
from cinestore.core.entities.permission import Permissions
from cinestore.core.entities.token import Token
from cinestore.core.entities.user import User
from cinestore.core.value_objects.filters import Filters, Metadata


class IMovieRepository(ABC):
    """Stockage des films avec concurrence optimiste."""

    @abstractmethod
    async def insert(self, movie: Movie) -> None:
        """Insere le film et lui assigne id, created_at et version."""
        ...

    @abstractmethod
    async def get(self, movie_id: int) -> Movie:
        """Recupere un film. Leve RecordNotFoundError si absent."""
        ...

    @abstractmethod
    async def update(self, movie: Movie) -> None:
        """
        Met a jour le film si sa version n'a pas change depuis la lecture.

        Leve EditConflictError si la version stockee differe.
        """
        ...

    @abstractmethod
    async def delete(self, movie_id: int) -> None:
        """Supprime un film. Leve RecordNotFoundError si absent."""
        ...

    @abstractmethod
    async def get_all(
        self, title: str, genres: list[str], filters: Filters
    ) -> tuple[list[Movie], Metadata]:
        """Liste filtree, triee et paginee, avec ses metadonnees."""
        ...


class IUserRepository(ABC):
    """Stockage des utilisateurs avec unicite de l'email."""

    @abstractmethod
    async def insert(self, user: User) -> None:
        """Insere l'utilisateur. Leve DuplicateEmailError si l'email existe."""
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User:
        ...

    @abstractmethod
    async def update(self, user: User) -> None:
        """Mise a jour conditionnelle sur la version (EditConflictError)."""
        ...

    @abstractmethod
    async def get_for_token(self, scope: str, token_plaintext: str) -> User:
        """Utilisateur porteur d'un jeton valide, non expire, du scope donne."""
        ...


class ITokenRepository(ABC):
    """Stockage des condensats de jetons."""

    @abstractmethod
    async def new(self, user_id: int, ttl: timedelta, scope: str) -> Token:
        """Genere, persiste et retourne un jeton (texte clair inclus)."""
        ...

    @abstractmethod
    async def insert(self, token: Token) -> None:
        ...

    @abstractmethod
    async def delete_all_for_user(self, scope: str, user_id: int) -> None:
        ...


class IPermissionRepository(ABC):
    """Attribution de permissions aux utilisateurs."""

    @abstractmethod
    async def get_all_for_user(self, user_id: int) -> Permissions:
        ...

    @abstractmethod
    async def add_for_user(self, user_id: int, *codes: str) -> None:
        ...
