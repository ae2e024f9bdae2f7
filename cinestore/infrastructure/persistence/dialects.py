"""
Capacites propres a chaque moteur de stockage.

Tout ce qui depend du moteur SQL est isole ici, une implementation par
technologie :
- traduction des signaux du stockage (aucune ligne, violation d'unicite,
  autre erreur) vers les erreurs du domaine ;
- recherche de sous-chaine insensible a la casse ;
- inclusion d'un ensemble de genres dans la colonne JSON des genres.

Changer de moteur ne demande que d'ajouter une sous-classe de StorageDialect.
"""

import json
from abc import ABC, abstractmethod

from loguru import logger
from sqlalchemy import ColumnElement, cast, exists, func, true
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from cinestore.core.errors import CineStoreError, PersistenceError, RecordNotFoundError


class StorageDialect(ABC):
    """Interface des capacites dependantes du moteur."""

    name: str = ""

    def is_no_rows(self, exc: BaseException) -> bool:
        """Vrai si exc signale l'absence de ligne."""
        return isinstance(exc, NoResultFound)

    @abstractmethod
    def is_unique_violation(self, exc: BaseException, column: str) -> bool:
        """Vrai si exc est une violation d'unicite portant sur column."""
        ...

    @abstractmethod
    def title_contains(self, column: ColumnElement, text: str) -> ColumnElement[bool]:
        """Sous-chaine insensible a la casse. Une chaine vide accepte tout."""
        ...

    @abstractmethod
    def genres_superset(self, column: ColumnElement, genres: list[str]) -> ColumnElement[bool]:
        """Vrai si la liste JSON de column contient tous les genres demandes."""
        ...

    def translate(self, operation: str, exc: SQLAlchemyError) -> CineStoreError:
        """
        Traduit une erreur SQLAlchemy en erreur du domaine.

        Les erreurs non reconnues deviennent PersistenceError, journalisees
        avec leur detail complet, qui n'est jamais expose a l'appelant.
        """
        if self.is_no_rows(exc):
            return RecordNotFoundError()
        logger.opt(exception=exc).error(
            "Erreur de persistance", operation=operation, dialect=self.name
        )
        return PersistenceError(operation, exc)


class SQLiteDialect(StorageDialect):
    """SQLite (module json1 et fonction instr)."""

    name = "sqlite"

    def is_unique_violation(self, exc: BaseException, column: str) -> bool:
        if not isinstance(exc, IntegrityError):
            return False
        message = str(exc.orig)
        return "UNIQUE constraint failed" in message and f".{column}" in message

    def title_contains(self, column: ColumnElement, text: str) -> ColumnElement[bool]:
        if not text:
            return true()
        return func.instr(func.lower(column), func.lower(text)) > 0

    def genres_superset(self, column: ColumnElement, genres: list[str]) -> ColumnElement[bool]:
        condition: ColumnElement[bool] = true()
        for genre in genres:
            elements = func.json_each(column).table_valued("value")
            condition = condition & exists().select_from(elements).where(elements.c.value == genre)
        return condition


class PostgresDialect(StorageDialect):
    """PostgreSQL (codes SQLSTATE, strpos et operateur @> sur JSONB)."""

    name = "postgresql"

    UNIQUE_VIOLATION = "23505"

    def is_unique_violation(self, exc: BaseException, column: str) -> bool:
        if not isinstance(exc, IntegrityError):
            return False
        sqlstate = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
        return sqlstate == self.UNIQUE_VIOLATION and column in str(exc.orig)

    def title_contains(self, column: ColumnElement, text: str) -> ColumnElement[bool]:
        if not text:
            return true()
        return func.strpos(func.lower(column), func.lower(text)) > 0

    def genres_superset(self, column: ColumnElement, genres: list[str]) -> ColumnElement[bool]:
        if not genres:
            return true()
        return cast(column, JSONB).op("@>")(cast(json.dumps(genres), JSONB))


_DIALECTS: dict[str, type[StorageDialect]] = {
    SQLiteDialect.name: SQLiteDialect,
    PostgresDialect.name: PostgresDialect,
}


def dialect_for(engine: AsyncEngine | Engine) -> StorageDialect:
    """
    Retourne les capacites correspondant au moteur de l'engine.

    Raises:
        ValueError: Si le moteur n'est pas supporte
    """
    try:
        return _DIALECTS[engine.dialect.name]()
    except KeyError:
        raise ValueError(f"Moteur de stockage non supporte : {engine.dialect.name}") from None
