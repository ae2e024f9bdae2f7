"""Routes de l'API v1."""

from .healthcheck import router as healthcheck_router
from .movies import router as movies_router
from .tokens import router as tokens_router
from .users import router as users_router

__all__ = ["healthcheck_router", "movies_router", "tokens_router", "users_router"]
