"""Tests pour Settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cinestore.config import Settings


def test_valeurs_par_defaut():
    settings = Settings(_env_file=None)

    assert settings.env == "development"
    assert settings.port == 4000
    assert settings.database_url == "sqlite+aiosqlite:///cinestore.db"
    assert settings.db_max_open_conns == 25
    assert settings.activation_token_ttl_minutes == 3
    assert settings.authentication_token_ttl_hours == 24
    assert settings.bcrypt_cost == 12
    assert not settings.smtp_enabled


def test_variables_d_environnement(monkeypatch):
    monkeypatch.setenv("CINESTORE_ENV", "production")
    monkeypatch.setenv("CINESTORE_SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("CINESTORE_DB_MAX_OPEN_CONNS", "10")

    settings = Settings(_env_file=None)

    assert settings.env == "production"
    assert settings.smtp_enabled
    assert settings.db_max_open_conns == 10


def test_environnement_inconnu():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, env="qa")


def test_cout_bcrypt_borne():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, bcrypt_cost=3)


def test_expansion_du_home():
    settings = Settings(_env_file=None, log_file="~/logs/cinestore.log")
    assert settings.log_file == Path.home() / "logs" / "cinestore.log"
