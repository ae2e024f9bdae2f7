"""
Entite User, hachage du mot de passe et regles de validation.

Le mot de passe n'est jamais persiste en clair : Password ne conserve
le texte clair que le temps de la requete, pour la validation.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import bcrypt

from cinestore.core.errors import PasswordHashError
from cinestore.core.validator import EMAIL_RX, Validator, matches

# Facteur de cout bcrypt (2^12 iterations)
BCRYPT_COST = 12


class Password:
    """
    Mot de passe d'un utilisateur : hash bcrypt et texte clair transitoire.

    Example:
        password = Password()
        password.set("pa55word")
        password.matches("pa55word")  # True
    """

    def __init__(self, hash: Optional[bytes] = None) -> None:
        self.plaintext: Optional[str] = None
        self.hash = hash

    def set(self, plaintext: str, cost: int = BCRYPT_COST) -> None:
        """
        Hache le mot de passe avec un sel aleatoire.

        Raises:
            PasswordHashError: Si bcrypt refuse l'entree (ex: > 72 octets)
        """
        try:
            hashed = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=cost))
        except ValueError as e:
            raise PasswordHashError(str(e)) from e
        self.plaintext = plaintext
        self.hash = hashed

    def matches(self, plaintext: str) -> bool:
        """
        Compare en temps constant le texte clair au hash stocke.

        Retourne False en cas de non-correspondance, sans lever d'erreur.

        Raises:
            PasswordHashError: Si le hash stocke est absent ou corrompu
        """
        if self.hash is None:
            raise PasswordHashError("missing password hash")
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), self.hash)
        except ValueError as e:
            raise PasswordHashError(str(e)) from e

    def forget_plaintext(self) -> None:
        self.plaintext = None


@dataclass
class User:
    """
    Utilisateur (credential).

    Attributes:
        id: Identifiant genere par la base
        name: Nom affiche
        email: Adresse email, unique
        password: Hash et texte clair transitoire
        activated: Compte active via le jeton d'activation
        version: Compteur de concurrence optimiste
        created_at: Date de creation
    """

    id: Optional[int] = None
    name: str = ""
    email: str = ""
    password: Password = field(default_factory=Password, repr=False, compare=False)
    activated: bool = False
    version: int = 0
    created_at: Optional[datetime] = None

    @property
    def is_anonymous(self) -> bool:
        return self.id is None


def validate_email(v: Validator, email: str) -> None:
    v.check(email != "", "email", "must be provided")
    v.check(matches(email, EMAIL_RX), "email", "must be a valid email address")


def validate_password_plaintext(v: Validator, password: str) -> None:
    v.check(password != "", "password", "must be provided")
    size = len(password.encode("utf-8"))
    v.check(size >= 6, "password", "must be at least 6 characters long")
    v.check(size <= 20, "password", "must not be more than 20 characters long")


def validate_user(v: Validator, user: User) -> None:
    v.check(user.name != "", "name", "must be provided")
    v.check(len(user.name) <= 100, "name", "must not be more than 100 characters long")
    validate_email(v, user.email)
    if user.password.plaintext is not None:
        validate_password_plaintext(v, user.password.plaintext)
