"""
Moteur de validation par accumulation.

Chaque regle est evaluee sans court-circuit : une requete remonte
toutes ses violations en une seule fois.
"""

import re
from collections.abc import Iterable

from cinestore.core.errors import ValidationFailure

EMAIL_RX = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


class Validator:
    """
    Accumulateur de paires (champ, message).

    Example:
        v = Validator()
        v.check(movie.runtime > 0, "runtime", "must be a positive integer")
        if not v.valid():
            raise v.failure()
    """

    def __init__(self) -> None:
        self.errors: list[tuple[str, str]] = []

    def valid(self) -> bool:
        return not self.errors

    def add_error(self, field: str, message: str) -> None:
        self.errors.append((field, message))

    def check(self, ok: bool, field: str, message: str) -> None:
        if not ok:
            self.add_error(field, message)

    def failure(self) -> ValidationFailure:
        """Construit l'exception correspondant aux erreurs accumulees."""
        return ValidationFailure(self.errors)

    def raise_if_invalid(self) -> None:
        if not self.valid():
            raise self.failure()


def permitted_value(value: str, *permitted: str) -> bool:
    """Vrai si value fait partie des valeurs autorisees."""
    return value in permitted


def matches(value: str, rx: re.Pattern[str]) -> bool:
    return rx.match(value) is not None


def unique(values: Iterable[str]) -> bool:
    """Vrai si aucune valeur n'apparait deux fois."""
    values = list(values)
    return len(values) == len(set(values))
