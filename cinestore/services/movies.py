"""
Service de gestion du catalogue de films.

Orchestre validation et persistance. Le service ne relance jamais une
mise a jour en conflit : rejouer l'intention de l'appelant sur une
version plus recente est de son ressort.

Responsabilites:
- Creation d'un film valide
- Mise a jour partielle avec controle de version optionnel
- Suppression
- Liste filtree, triee et paginee depuis une query string
"""

from collections.abc import Mapping
from typing import Optional

from loguru import logger

from cinestore.core.entities.movie import MOVIE_SORT_SAFELIST, Movie, validate_movie
from cinestore.core.errors import EditConflictError
from cinestore.core.ports.repositories import IMovieRepository
from cinestore.core.validator import Validator
from cinestore.core.value_objects.filters import (
    Filters,
    Metadata,
    read_csv,
    read_int,
    read_string,
    validate_filters,
)

DEFAULT_PAGE_SIZE = 20


class MovieService:
    """
    Cas d'utilisation du catalogue.

    Example:
        service = MovieService(movie_repo)
        movie = await service.create("Inception", 2010, 148, ["sci-fi", "thriller"])
        movies, metadata = await service.list_movies({"genres": "sci-fi", "sort": "-year"})
    """

    def __init__(self, movie_repo: IMovieRepository) -> None:
        self._movie_repo = movie_repo

    async def create(self, title: str, year: int, runtime: int, genres: list[str]) -> Movie:
        """
        Valide puis insere un film.

        Raises:
            ValidationFailure: Au moins une regle de validation echoue
        """
        movie = Movie(title=title, year=year, runtime=runtime, genres=list(genres))
        v = Validator()
        validate_movie(v, movie)
        v.raise_if_invalid()

        await self._movie_repo.insert(movie)
        logger.info("Film cree", movie_id=movie.id, title=movie.title)
        return movie

    async def show(self, movie_id: int) -> Movie:
        return await self._movie_repo.get(movie_id)

    async def update(
        self,
        movie_id: int,
        title: Optional[str] = None,
        year: Optional[int] = None,
        runtime: Optional[int] = None,
        genres: Optional[list[str]] = None,
        expected_version: Optional[int] = None,
    ) -> Movie:
        """
        Mise a jour partielle : seuls les champs fournis sont modifies.

        Args:
            expected_version: Version que l'appelant a lue ; si elle differe
                deja de la version stockee, le conflit est signale sans ecrire.

        Raises:
            RecordNotFoundError: Film inexistant
            ValidationFailure: Le film modifie n'est pas valide
            EditConflictError: Un autre ecrivain a modifie le film
        """
        movie = await self._movie_repo.get(movie_id)
        if expected_version is not None and expected_version != movie.version:
            raise EditConflictError()

        if title is not None:
            movie.title = title
        if year is not None:
            movie.year = year
        if runtime is not None:
            movie.runtime = runtime
        if genres is not None:
            movie.genres = list(genres)

        v = Validator()
        validate_movie(v, movie)
        v.raise_if_invalid()

        await self._movie_repo.update(movie)
        logger.info("Film mis a jour", movie_id=movie.id, version=movie.version)
        return movie

    async def delete(self, movie_id: int) -> None:
        await self._movie_repo.delete(movie_id)
        logger.info("Film supprime", movie_id=movie_id)

    def parse_list_query(self, qs: Mapping[str, str]) -> tuple[str, list[str], Filters]:
        """
        Convertit la query string en (titre, genres, filtres) valides.

        Raises:
            ValidationFailure: Entier invalide, pagination hors bornes ou tri non autorise
        """
        v = Validator()
        title = read_string(qs, "title", "")
        genres = read_csv(qs, "genres", [])
        filters = Filters(
            page=read_int(qs, "page", 1, v),
            page_size=read_int(qs, "page_size", DEFAULT_PAGE_SIZE, v),
            sort=read_string(qs, "sort", "id"),
            sort_safelist=MOVIE_SORT_SAFELIST,
        )
        validate_filters(v, filters)
        v.raise_if_invalid()
        return title, genres, filters

    async def list_movies(self, qs: Mapping[str, str]) -> tuple[list[Movie], Metadata]:
        """Liste les films ; la query est rejetee avant toute requete si invalide."""
        title, genres, filters = self.parse_list_query(qs)
        return await self._movie_repo.get_all(title, genres, filters)
