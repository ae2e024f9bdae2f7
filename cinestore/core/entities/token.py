"""
Jetons porteurs a usage unique (activation, authentification).

Seul le condensat SHA-256 du jeton est persiste. Le texte clair est
remis une seule fois a l'appelant.
"""

import base64
import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from cinestore.core.validator import Validator

SCOPE_ACTIVATION = "activation"
SCOPE_AUTHENTICATION = "authentication"

# 16 octets aleatoires -> 26 caracteres en base32 sans padding
TOKEN_ENTROPY_BYTES = 16
TOKEN_PLAINTEXT_LENGTH = 26


@dataclass
class Token:
    """
    Jeton porteur.

    Attributes:
        plaintext: Valeur a transmettre a l'utilisateur (jamais stockee)
        hash: Condensat SHA-256 du texte clair
        user_id: Utilisateur proprietaire
        expiry: Date d'expiration (UTC)
        scope: Action autorisee par le jeton
    """

    plaintext: Optional[str]
    hash: bytes
    user_id: int
    expiry: datetime
    scope: str


def hash_token(plaintext: str) -> bytes:
    """Condensat deterministe du texte clair, utilise pour la recherche."""
    return hashlib.sha256(plaintext.encode("utf-8")).digest()


def generate_token(user_id: int, ttl: timedelta, scope: str) -> Token:
    random_bytes = secrets.token_bytes(TOKEN_ENTROPY_BYTES)
    plaintext = base64.b32encode(random_bytes).decode("ascii").rstrip("=")
    return Token(
        plaintext=plaintext,
        hash=hash_token(plaintext),
        user_id=user_id,
        expiry=datetime.now(timezone.utc) + ttl,
        scope=scope,
    )


def validate_token_plaintext(v: Validator, plaintext: str) -> None:
    v.check(plaintext != "", "token", "must be provided")
    v.check(len(plaintext) == TOKEN_PLAINTEXT_LENGTH, "token", "must be 26 bytes long")
