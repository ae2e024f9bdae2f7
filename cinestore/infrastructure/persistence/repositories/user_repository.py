"""
Implementation SQLModel du repository User.

L'unicite de l'email est garantie par la contrainte UNIQUE de la table,
pas par une verification prealable : la violation remontee par la base
est traduite en DuplicateEmailError.
"""

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from cinestore.core.entities.token import hash_token
from cinestore.core.entities.user import Password, User
from cinestore.core.errors import DuplicateEmailError, EditConflictError
from cinestore.core.ports.repositories import IUserRepository
from cinestore.infrastructure.persistence.models import (
    TokenModel,
    UserModel,
    from_storage_datetime,
    utcnow,
)
from cinestore.infrastructure.persistence.repositories.base import SQLModelRepository


class SQLModelUserRepository(SQLModelRepository, IUserRepository):
    """Repository SQLModel pour les utilisateurs."""

    timeout = 3.0

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=Password(hash=model.password_hash),
            activated=model.activated,
            version=model.version,
            created_at=from_storage_datetime(model.created_at),
        )

    @staticmethod
    def _require_hash(user: User) -> bytes:
        # Le texte clair n'atteint jamais la base
        if user.password.hash is None:
            raise ValueError("missing password hash for user")
        return user.password.hash

    async def insert(self, user: User) -> None:
        """
        Insere l'utilisateur ; id, created_at et version sont assignes par la base.

        Raises :
            DuplicateEmailError : L'email est deja utilise
        """
        model = UserModel(
            name=user.name,
            email=user.email,
            password_hash=self._require_hash(user),
            activated=user.activated,
        )
        async with self._operation("users.insert") as session:
            session.add(model)
            try:
                await session.commit()
            except IntegrityError as e:
                if self._dialect.is_unique_violation(e, "email"):
                    raise DuplicateEmailError() from e
                raise
            await session.refresh(model)
        user.id = model.id
        user.created_at = from_storage_datetime(model.created_at)
        user.version = model.version

    async def get_by_email(self, email: str) -> User:
        async with self._operation("users.get_by_email") as session:
            statement = select(UserModel).where(UserModel.email == email)
            model = (await session.exec(statement)).one()
            return self._to_entity(model)

    async def update(self, user: User) -> None:
        """
        Mise a jour conditionnee par la version.

        Raises :
            EditConflictError : Version stockee differente
            DuplicateEmailError : Le nouvel email appartient a un autre utilisateur
        """
        statement = (
            update(UserModel)
            .where(UserModel.id == user.id)
            .where(UserModel.version == user.version)
            .values(
                name=user.name,
                email=user.email,
                password_hash=self._require_hash(user),
                activated=user.activated,
                version=UserModel.version + 1,
            )
            .returning(UserModel.version)
        )
        async with self._operation("users.update") as session:
            try:
                new_version = (await session.exec(statement)).scalar_one_or_none()
            except IntegrityError as e:
                if self._dialect.is_unique_violation(e, "email"):
                    raise DuplicateEmailError() from e
                raise
            if new_version is None:
                await session.rollback()
                raise EditConflictError()
            await session.commit()
        user.version = new_version

    async def get_for_token(self, scope: str, token_plaintext: str) -> User:
        """
        Retrouve l'utilisateur porteur d'un jeton.

        La recherche se fait sur le condensat du jeton, jamais sur le texte
        clair. Mauvais condensat, mauvais scope ou jeton expire donnent
        la meme RecordNotFoundError.
        """
        statement = (
            select(UserModel)
            .join(TokenModel, TokenModel.user_id == UserModel.id)
            .where(TokenModel.hash == hash_token(token_plaintext))
            .where(TokenModel.scope == scope)
            .where(TokenModel.expiry > utcnow())
        )
        async with self._operation("users.get_for_token") as session:
            model = (await session.exec(statement)).one()
            return self._to_entity(model)
