"""
Couche application : cas d'utilisation.

- MovieService : Catalogue de films
- UserService : Inscription, activation, authentification, permissions
- BackgroundTasks : Taches de fond detachees (envoi d'emails)
"""

from cinestore.services.background import BackgroundTasks
from cinestore.services.movies import MovieService
from cinestore.services.users import UserService

__all__ = ["BackgroundTasks", "MovieService", "UserService"]
