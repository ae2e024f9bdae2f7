"""
Entites metier.

Exports:
- Movie: Film du catalogue
- User, Password: Utilisateur et hash de son mot de passe
- Token: Jeton porteur a usage unique
- Permissions: Ensemble de codes de permission
"""

from cinestore.core.entities.movie import Movie
from cinestore.core.entities.permission import Permissions
from cinestore.core.entities.token import Token
from cinestore.core.entities.user import Password, User

__all__ = [
    "Movie",
    "Password",
    "Permissions",
    "Token",
    "User",
]
