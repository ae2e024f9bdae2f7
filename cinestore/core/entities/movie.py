"""
Entite Movie et ses regles de validation.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

from cinestore.core.validator import Validator, unique

MOVIE_SORT_SAFELIST = ("id", "title", "year", "runtime", "-id", "-title", "-year", "-runtime")

_RUNTIME_RX = re.compile(r"^(\d+) mins$")


@dataclass
class Movie:
    """
    Film du catalogue.

    Attributes:
        id: Identifiant genere par la base (None avant insertion)
        title: Titre du film
        year: Annee de sortie
        runtime: Duree en minutes
        genres: Genres (1 a 5, uniques)
        version: Compteur de concurrence optimiste, 1 a l'insertion
        created_at: Date de creation, assignee par la base
    """

    id: Optional[int] = None
    title: str = ""
    year: int = 0
    runtime: int = 0
    genres: list[str] = field(default_factory=list)
    version: int = 0
    created_at: Optional[datetime] = None


def format_runtime(runtime: int) -> Optional[str]:
    """Rend la duree sous la forme "<n> mins" (None si nulle)."""
    if not runtime:
        return None
    return f"{runtime} mins"


def parse_runtime(value: Union[int, str]) -> int:
    """
    Accepte un entier ou la forme "<n> mins".

    Raises:
        ValueError: Si la valeur n'a pas un format reconnu
    """
    if isinstance(value, bool):
        raise ValueError("invalid runtime format")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise ValueError("invalid runtime format")
    match = _RUNTIME_RX.match(value.strip())
    if match is None:
        raise ValueError("invalid runtime format")
    return int(match.group(1))


def validate_movie(v: Validator, movie: Movie) -> None:
    # Toutes les regles sont evaluees, meme apres un premier echec
    v.check(movie.title != "", "title", "must be provided")
    v.check(len(movie.title) < 500, "title", "must be less than 500 characters")
    v.check(movie.year != 0, "year", "must be provided")
    v.check(movie.year >= 1880, "year", "must be greater than 1879")
    v.check(movie.year <= datetime.now().year, "year", "must not be in the future")
    v.check(movie.runtime != 0, "runtime", "must be provided")
    v.check(movie.runtime > 0, "runtime", "must be a positive integer")
    v.check(movie.genres is not None, "genres", "must be provided")
    genres = movie.genres or []
    v.check(len(genres) >= 1, "genres", "must contain at least 1 genre")
    v.check(len(genres) <= 5, "genres", "must not contain more than 5 genres")
    v.check(unique(genres), "genres", "must not contain duplicate values")
