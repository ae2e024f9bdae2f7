"""
Schemas des requetes et serialisation des reponses JSON.

Les champs inconnus sont refuses. Les champs absents prennent une valeur
vide : c'est le moteur de validation du domaine qui signale ce qui manque,
pour remonter toutes les erreurs en une fois.
"""

from dataclasses import asdict
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from cinestore.core.entities.movie import Movie, format_runtime, parse_runtime
from cinestore.core.entities.token import Token
from cinestore.core.entities.user import User
from cinestore.core.value_objects.filters import Metadata


class _StrictRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")


class CreateMovieRequest(_StrictRequest):
    title: str = ""
    year: int = 0
    runtime: int = 0
    genres: list[str] = []

    @field_validator("runtime", mode="before")
    @classmethod
    def coerce_runtime(cls, v: Union[int, str]) -> int:
        """Accepte 148 ou "148 mins"."""
        return parse_runtime(v)


class UpdateMovieRequest(_StrictRequest):
    title: Optional[str] = None
    year: Optional[int] = None
    runtime: Optional[int] = None
    genres: Optional[list[str]] = None

    @field_validator("runtime", mode="before")
    @classmethod
    def coerce_runtime(cls, v: Union[int, str, None]) -> Optional[int]:
        return None if v is None else parse_runtime(v)


class RegisterUserRequest(_StrictRequest):
    name: str = ""
    email: str = ""
    password: str = ""


class ActivateUserRequest(_StrictRequest):
    token: str = ""


class ResendActivationRequest(_StrictRequest):
    email: str = ""


class CreateAuthenticationTokenRequest(_StrictRequest):
    email: str = ""
    password: str = ""


def movie_to_dict(movie: Movie) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": movie.id,
        "title": movie.title,
        "year": movie.year,
        "runtime": format_runtime(movie.runtime),
        "genres": movie.genres,
        "version": movie.version,
    }
    # Champs vides omis de la reponse
    return {key: value for key, value in data.items() if value not in (None, 0, [])}


def user_to_dict(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "activated": user.activated,
        "version": user.version,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def metadata_to_dict(metadata: Metadata) -> dict[str, int]:
    return asdict(metadata)


def token_to_dict(token: Token) -> dict[str, Any]:
    return {"token": token.plaintext, "expiry": token.expiry.isoformat()}
