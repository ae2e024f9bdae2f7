"""
Implementation SQLModel du repository Token.

Seul le condensat du jeton est persiste. Les jetons expires ne sont pas
purges : ils restent en base mais ne sont plus trouves par la recherche.
"""

from datetime import timedelta

from loguru import logger
from sqlalchemy import delete

from cinestore.core.entities.token import Token, generate_token
from cinestore.core.ports.repositories import ITokenRepository
from cinestore.infrastructure.persistence.models import TokenModel, to_storage_datetime
from cinestore.infrastructure.persistence.repositories.base import SQLModelRepository


class SQLModelTokenRepository(SQLModelRepository, ITokenRepository):
    """Repository SQLModel pour les jetons porteurs."""

    timeout = 5.0

    async def new(self, user_id: int, ttl: timedelta, scope: str) -> Token:
        """
        Genere un jeton, persiste son condensat et le retourne.

        Le texte clair n'est disponible que dans la valeur retournee.
        """
        token = generate_token(user_id, ttl, scope)
        await self.insert(token)
        logger.debug("Jeton emis", user_id=user_id, scope=scope, expiry=token.expiry.isoformat())
        return token

    async def insert(self, token: Token) -> None:
        model = TokenModel(
            hash=token.hash,
            user_id=token.user_id,
            expiry=to_storage_datetime(token.expiry),
            scope=token.scope,
        )
        async with self._operation("tokens.insert") as session:
            session.add(model)
            await session.commit()

    async def delete_all_for_user(self, scope: str, user_id: int) -> None:
        """Invalide tous les jetons d'un scope pour un utilisateur."""
        statement = (
            delete(TokenModel)
            .where(TokenModel.scope == scope)
            .where(TokenModel.user_id == user_id)
        )
        async with self._operation("tokens.delete_all_for_user") as session:
            await session.exec(statement)
            await session.commit()
