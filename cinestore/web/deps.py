"""
Dependances partagees des routes : services, utilisateur courant, permissions.
"""

from collections.abc import Awaitable, Callable

from fastapi import Depends, Header, Request

from cinestore.core.entities.user import User
from cinestore.core.errors import AuthenticationRequiredError, RecordNotFoundError
from cinestore.services.movies import MovieService
from cinestore.services.users import UserService


def get_movie_service(request: Request) -> MovieService:
    return request.app.state.container.movie_service()


def get_user_service(request: Request) -> UserService:
    return request.app.state.container.user_service()


def read_id_param(raw: str) -> int:
    """ID de chemin ; une valeur non entiere ou < 1 donne RecordNotFoundError."""
    try:
        value = int(raw)
    except ValueError:
        raise RecordNotFoundError() from None
    if value < 1:
        raise RecordNotFoundError()
    return value


async def current_user(
    authorization: str | None = Header(default=None),
    service: UserService = Depends(get_user_service),
) -> User:
    """Utilisateur du jeton "Authorization: Bearer <token>"."""
    if not authorization:
        raise AuthenticationRequiredError()
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token:
        raise AuthenticationRequiredError("invalid or missing authentication token")
    return await service.authenticate(token.strip())


def require_permission(code: str) -> Callable[..., Awaitable[User]]:
    """Dependance exigeant un compte active detenant la permission code."""

    async def dependency(
        user: User = Depends(current_user),
        service: UserService = Depends(get_user_service),
    ) -> User:
        await service.require_permission(user, code)
        return user

    return dependency
