"""
Tests pour la generation et la validation des jetons.
"""

import hashlib
from datetime import datetime, timedelta, timezone

from cinestore.core.entities.token import (
    SCOPE_ACTIVATION,
    generate_token,
    hash_token,
    validate_token_plaintext,
)
from cinestore.core.validator import Validator


class TestGenerateToken:
    """Tests pour generate_token."""

    def test_texte_clair_26_caracteres_base32(self):
        token = generate_token(1, timedelta(minutes=3), SCOPE_ACTIVATION)
        assert len(token.plaintext) == 26
        assert "=" not in token.plaintext
        assert set(token.plaintext) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZ234567")

    def test_hash_sha256_du_texte_clair(self):
        token = generate_token(1, timedelta(minutes=3), SCOPE_ACTIVATION)
        assert token.hash == hashlib.sha256(token.plaintext.encode()).digest()
        assert token.hash == hash_token(token.plaintext)

    def test_jetons_distincts(self):
        plaintexts = {generate_token(1, timedelta(minutes=3), SCOPE_ACTIVATION).plaintext for _ in range(50)}
        assert len(plaintexts) == 50

    def test_expiration_et_portee(self):
        before = datetime.now(timezone.utc)
        token = generate_token(7, timedelta(hours=24), "authentication")
        assert token.user_id == 7
        assert token.scope == "authentication"
        assert before + timedelta(hours=24) <= token.expiry <= datetime.now(timezone.utc) + timedelta(hours=24)


class TestValidateTokenPlaintext:
    """Tests pour validate_token_plaintext."""

    def test_jeton_valide(self):
        v = Validator()
        validate_token_plaintext(v, "A" * 26)
        assert v.valid()

    def test_jeton_vide(self):
        v = Validator()
        validate_token_plaintext(v, "")
        assert v.failure().as_dict() == {"token": "must be provided"}

    def test_mauvaise_longueur(self):
        v = Validator()
        validate_token_plaintext(v, "A" * 25)
        assert v.failure().as_dict() == {"token": "must be 26 bytes long"}
