"""
Socle commun des repositories SQLModel.

Chaque operation :
- ouvre sa propre session depuis la factory partagee ;
- s'execute sous un delai fixe (deadline) ;
- ferme la session sur tous les chemins de sortie (succes, erreur du
  domaine, delai depasse, annulation) ;
- traduit toute erreur SQLAlchemy en erreur du domaine a la sortie.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from cinestore.infrastructure.persistence.database import deadline
from cinestore.infrastructure.persistence.dialects import StorageDialect, dialect_for


class SQLModelRepository:
    """
    Classe de base des repositories.

    Attributes:
        timeout: Delai maximal d'une operation, en secondes
    """

    timeout: float = 3.0

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        dialect: Optional[StorageDialect] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Initialise le repository avec la factory de sessions partagee.

        Args :
            session_factory : Factory liee a l'engine (et donc au pool)
            dialect : Capacites du moteur (deduites de l'engine si absent)
            timeout : Surcharge du delai par defaut de la classe
        """
        self._session_factory = session_factory
        self._dialect = dialect or dialect_for(session_factory.kw["bind"])
        if timeout is not None:
            self.timeout = timeout

    @asynccontextmanager
    async def _operation(self, name: str) -> AsyncIterator[AsyncSession]:
        """Session bornee dans le temps, avec traduction des erreurs du stockage."""
        async with deadline(name, self.timeout):
            async with self._session_factory() as session:
                try:
                    yield session
                except SQLAlchemyError as e:
                    raise self._dialect.translate(name, e) from e
