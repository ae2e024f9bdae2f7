"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports repository :
- IMovieRepository : Films
- IUserRepository : Utilisateurs
- ITokenRepository : Jetons
- IPermissionRepository : Permissions

Port mail :
- IMailer : Envoi d'emails transactionnels
"""

from cinestore.core.ports.mailer import IMailer
from cinestore.core.ports.repositories import (
    IMovieRepository,
    IPermissionRepository,
    ITokenRepository,
    IUserRepository,
)

__all__ = [
    "IMailer",
    "IMovieRepository",
    "IPermissionRepository",
    "ITokenRepository",
    "IUserRepository",
]
