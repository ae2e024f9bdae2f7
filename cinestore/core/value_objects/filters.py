"""
Resolution des filtres de liste : tri, pagination et metadonnees.

Le tri est controle par une liste blanche : seule une valeur de
sort_safelist peut atteindre la clause ORDER BY.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field

from cinestore.core.validator import Validator, permitted_value

MAX_PAGE = 10_000_000
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Filters:
    """
    Parametres de pagination et de tri d'une requete de liste.

    Attributes:
        page: Numero de page (1-indexe)
        page_size: Nombre d'elements par page
        sort: Cle de tri, prefixee de "-" pour un tri descendant
        sort_safelist: Cles de tri autorisees pour la ressource
    """

    page: int = 1
    page_size: int = 20
    sort: str = "id"
    sort_safelist: tuple[str, ...] = field(default_factory=tuple)

    def sort_column(self) -> str:
        """
        Retourne la colonne de tri, sans le prefixe de direction.

        Raises:
            ValueError: Si la cle n'est pas dans la liste blanche. Ne doit
                pas arriver si validate_filters() a ete appele avant.
        """
        if self.sort not in self.sort_safelist:
            raise ValueError(f"unsafe sort parameter: {self.sort}")
        return self.sort.lstrip("-")

    def sort_direction(self) -> str:
        return "DESC" if self.sort.startswith("-") else "ASC"

    def limit(self) -> int:
        return self.page_size

    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class Metadata:
    """Metadonnees de pagination d'un resultat de liste. Tout a zero si vide."""

    current_page: int = 0
    page_size: int = 0
    first_page: int = 0
    last_page: int = 0
    total_records: int = 0


def validate_filters(v: Validator, f: Filters) -> None:
    v.check(f.page > 0, "page", "must be greater than zero")
    v.check(f.page <= MAX_PAGE, "page", "must be a maximum of 10 million")
    v.check(f.page_size > 0, "page_size", "must be greater than zero")
    v.check(f.page_size <= MAX_PAGE_SIZE, "page_size", "must be a maximum of 100")
    v.check(permitted_value(f.sort, *f.sort_safelist), "sort", "invalid sort value")


def read_string(qs: Mapping[str, str], key: str, default: str) -> str:
    """Valeur brute de la query string, ou default si absente ou vide."""
    return qs.get(key) or default


def read_csv(qs: Mapping[str, str], key: str, default: list[str]) -> list[str]:
    """Liste separee par des virgules (elements vides ignores)."""
    raw = qs.get(key)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


def read_int(qs: Mapping[str, str], key: str, default: int, v: Validator) -> int:
    """Entier de la query string ; une valeur invalide ajoute une erreur et retourne default."""
    raw = qs.get(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        v.add_error(key, "must be an integer value")
        return default


def calculate_metadata(total_records: int, page: int, page_size: int) -> Metadata:
    """
    Calcule les metadonnees de pagination a partir du total de lignes.

    last_page utilise la division entiere par exces (20 lignes / 10 = 2 pages).
    """
    if total_records == 0:
        return Metadata()
    return Metadata(
        current_page=page,
        page_size=page_size,
        first_page=1,
        last_page=math.ceil(total_records / page_size),
        total_records=total_records,
    )
