"""
Modeles SQLModel pour la base de donnees CineStore.

Ces modeles representent les tables de la base de donnees.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- movies: Films du catalogue
- users: Utilisateurs (email unique)
- tokens: Condensats des jetons porteurs
- permissions: Codes de permission connus
- users_permissions: Attribution des permissions (paire unique)

Les dates sont stockees en UTC avec fuseau (DateTime(timezone=True)).
SQLite ne conserve pas le fuseau : les valeurs relues sont ramenees en UTC
par from_storage_datetime.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Date courante en UTC, format de stockage des dates."""
    return datetime.now(timezone.utc)


def to_storage_datetime(value: datetime) -> datetime:
    """Convertit une date (aware, ou naive supposee UTC) vers l'UTC aware."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def from_storage_datetime(value: datetime | None) -> datetime | None:
    """Date relue depuis la base, toujours aware UTC."""
    if value is None:
        return None
    return to_storage_datetime(value)


class MovieModel(SQLModel, table=True):
    """
    Modele representant un film dans la base de donnees.

    genres_json stocke la liste des genres serialisee en JSON.
    """

    __tablename__ = "movies"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    year: int
    runtime: int
    genres_json: str = Field(default="[]")  # JSON: ["Drama", "Sci-Fi"]
    version: int = Field(default=1)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    @property
    def genres(self) -> list[str]:
        """Retourne les genres deserialises."""
        return json.loads(self.genres_json) if self.genres_json else []

    @genres.setter
    def genres(self, value: list[str]) -> None:
        """Serialise les genres en JSON."""
        self.genres_json = json.dumps(value)


class UserModel(SQLModel, table=True):
    """Modele representant un utilisateur. L'unicite de l'email est garantie par la base."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    password_hash: bytes
    activated: bool = Field(default=False)
    version: int = Field(default=1)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class TokenModel(SQLModel, table=True):
    """Condensat d'un jeton porteur. Le texte clair n'est jamais stocke."""

    __tablename__ = "tokens"

    hash: bytes = Field(primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    expiry: datetime = Field(sa_type=DateTime(timezone=True))
    scope: str = Field(index=True)


class PermissionModel(SQLModel, table=True):
    """Code de permission (ex: movies:read)."""

    __tablename__ = "permissions"

    id: int | None = Field(default=None, primary_key=True)
    code: str = Field(unique=True)


class UserPermissionModel(SQLModel, table=True):
    """Attribution d'une permission a un utilisateur (cle composite)."""

    __tablename__ = "users_permissions"

    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", primary_key=True)
    permission_id: int = Field(foreign_key="permissions.id", ondelete="CASCADE", primary_key=True)
