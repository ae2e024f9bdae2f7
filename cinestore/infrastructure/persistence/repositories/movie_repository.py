"""
Implementation SQLModel du repository Movie.

Implemente l'interface IMovieRepository avec concurrence optimiste :
la mise a jour est une unique requete UPDATE conditionnee par la version
lue par l'appelant. Aucune ligne affectee signifie qu'un autre ecrivain
est passe entre-temps.
"""

import json

from sqlalchemy import delete, func, update
from sqlmodel import select

from cinestore.core.entities.movie import Movie
from cinestore.core.errors import EditConflictError, RecordNotFoundError
from cinestore.core.ports.repositories import IMovieRepository
from cinestore.core.value_objects.filters import Filters, Metadata, calculate_metadata
from cinestore.infrastructure.persistence.models import MovieModel, from_storage_datetime
from cinestore.infrastructure.persistence.repositories.base import SQLModelRepository

# Colonnes exposees au tri, indexees par cle de la liste blanche
_SORT_COLUMNS = {
    "id": MovieModel.id,
    "title": MovieModel.title,
    "year": MovieModel.year,
    "runtime": MovieModel.runtime,
}


class SQLModelMovieRepository(SQLModelRepository, IMovieRepository):
    """
    Repository SQLModel pour les films.

    Implemente IMovieRepository avec conversion bidirectionnelle
    entre l'entite Movie (domaine) et MovieModel (persistance).
    """

    timeout = 10.0

    def _to_entity(self, model: MovieModel) -> Movie:
        """
        Convertit un modele DB en entite domaine.

        Args :
            model : Le modele MovieModel depuis la DB

        Retourne :
            L'entite Movie correspondante
        """
        return Movie(
            id=model.id,
            title=model.title,
            year=model.year,
            runtime=model.runtime,
            genres=model.genres,
            version=model.version,
            created_at=from_storage_datetime(model.created_at),
        )

    def _to_model(self, entity: Movie) -> MovieModel:
        """Convertit une entite domaine en modele DB (sans id ni version)."""
        return MovieModel(
            title=entity.title,
            year=entity.year,
            runtime=entity.runtime,
            genres_json=json.dumps(list(entity.genres)),
        )

    async def insert(self, movie: Movie) -> None:
        """Insere le film ; id, created_at et version (1) sont assignes par la base."""
        async with self._operation("movies.insert") as session:
            model = self._to_model(movie)
            session.add(model)
            await session.commit()
            await session.refresh(model)
        movie.id = model.id
        movie.created_at = from_storage_datetime(model.created_at)
        movie.version = model.version

    async def get(self, movie_id: int) -> Movie:
        """Recupere un film par son ID."""
        if movie_id < 1:
            raise RecordNotFoundError()
        async with self._operation("movies.get") as session:
            statement = select(MovieModel).where(MovieModel.id == movie_id)
            model = (await session.exec(statement)).one()
            return self._to_entity(model)

    async def update(self, movie: Movie) -> None:
        """
        Met a jour le film si la version stockee est celle de movie.version.

        En cas de succes, movie.version recoit la nouvelle version.

        Raises :
            EditConflictError : Version stockee differente, ou film supprime
        """
        statement = (
            update(MovieModel)
            .where(MovieModel.id == movie.id)
            .where(MovieModel.version == movie.version)
            .values(
                title=movie.title,
                year=movie.year,
                runtime=movie.runtime,
                genres_json=json.dumps(list(movie.genres)),
                version=MovieModel.version + 1,
            )
            .returning(MovieModel.version)
        )
        async with self._operation("movies.update") as session:
            new_version = (await session.exec(statement)).scalar_one_or_none()
            if new_version is None:
                await session.rollback()
                raise EditConflictError()
            await session.commit()
        movie.version = new_version

    async def delete(self, movie_id: int) -> None:
        """Supprime un film. Une deuxieme suppression leve RecordNotFoundError."""
        if movie_id < 1:
            raise RecordNotFoundError()
        async with self._operation("movies.delete") as session:
            result = await session.exec(delete(MovieModel).where(MovieModel.id == movie_id))
            if result.rowcount == 0:
                await session.rollback()
                raise RecordNotFoundError()
            await session.commit()

    async def get_all(
        self, title: str, genres: list[str], filters: Filters
    ) -> tuple[list[Movie], Metadata]:
        """
        Liste filtree et paginee, en une seule requete.

        Le total des lignes correspondantes est calcule par une fonction
        fenetre (count(*) OVER ()) renvoyee avec chaque ligne de la page.
        Ordre : colonne demandee, puis id croissant pour departager.
        """
        column = _SORT_COLUMNS[filters.sort_column()]
        order = column.desc() if filters.sort_direction() == "DESC" else column.asc()

        statement = (
            select(func.count().over().label("total"), MovieModel)
            .where(self._dialect.title_contains(MovieModel.title, title))
            .where(self._dialect.genres_superset(MovieModel.genres_json, genres))
            .order_by(order, MovieModel.id.asc())
            .limit(filters.limit())
            .offset(filters.offset())
        )

        async with self._operation("movies.get_all") as session:
            rows = (await session.exec(statement)).all()

        total_records = 0
        movies = []
        for total, model in rows:
            total_records = total
            movies.append(self._to_entity(model))

        return movies, calculate_metadata(total_records, filters.page, filters.page_size)
