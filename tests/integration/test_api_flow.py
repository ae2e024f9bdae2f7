"""
Tests d'integration du parcours complet sur une vraie base SQLite.

Container reel (repositories, services, taches de fond), seul le mailer
est remplace pour capturer le jeton d'activation.
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from cinestore.config import Settings
from cinestore.container import Container
from cinestore.core.ports.mailer import IMailer
from cinestore.web.app import create_app


@pytest.fixture
def integration_settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path}/integration.db",
        log_file=tmp_path / "logs" / "cinestore.log",
        bcrypt_cost=4,
    )


@pytest.fixture
def mailer() -> AsyncMock:
    return AsyncMock(spec=IMailer)


@pytest.fixture
def client(integration_settings, mailer):
    container = Container()
    container.config.override(providers.Object(integration_settings))
    container.mailer.override(providers.Object(mailer))
    with TestClient(create_app(container)) as client:
        yield client


def _register(client, email="alice@example.com"):
    return client.post(
        "/v1/users", json={"name": "Alice", "email": email, "password": "pa55word"}
    )


def test_inscription_activation_authentification(client, mailer):
    resp = _register(client)
    assert resp.status_code == 202
    user_id = resp.json()["user"]["id"]

    # Le mail d'activation part en tache de fond
    client.get("/v1/healthcheck")
    recipient, template, data = mailer.send.await_args.args
    assert recipient == "alice@example.com"
    assert template == "user_welcome.html"
    assert data["userID"] == user_id

    resp = client.put("/v1/users/activated", json={"token": data["activationToken"]})
    assert resp.status_code == 200
    assert resp.json()["user"]["activated"] is True

    # Le jeton d'activation est a usage unique
    resp = client.put("/v1/users/activated", json={"token": data["activationToken"]})
    assert resp.status_code == 422
    assert resp.json() == {"error": {"token": "invalid or expired activation token"}}

    resp = client.post(
        "/v1/tokens/authentication", json={"email": "alice@example.com", "password": "pa55word"}
    )
    assert resp.status_code == 201
    token = resp.json()["authentication_token"]["token"]
    headers = {"Authorization": f"Bearer {token}"}

    # movies:read est attribue a l'inscription, pas movies:write
    resp = client.get("/v1/movies", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {
        "movies": [],
        "metadata": {
            "current_page": 0,
            "page_size": 0,
            "first_page": 0,
            "last_page": 0,
            "total_records": 0,
        },
    }

    resp = client.post(
        "/v1/movies",
        json={"title": "Heat", "year": 1995, "runtime": 170, "genres": ["crime"]},
        headers=headers,
    )
    assert resp.status_code == 403


def test_compte_non_active_refuse(client, mailer):
    _register(client)
    resp = client.post(
        "/v1/tokens/authentication", json={"email": "alice@example.com", "password": "pa55word"}
    )
    token = resp.json()["authentication_token"]["token"]

    resp = client.get("/v1/movies", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 403


def test_email_en_double(client):
    assert _register(client).status_code == 202

    resp = _register(client)

    assert resp.status_code == 422
    assert resp.json() == {"error": {"email": "a user with this email address already exists"}}


def test_mauvais_mot_de_passe(client):
    _register(client)
    resp = client.post(
        "/v1/tokens/authentication", json={"email": "alice@example.com", "password": "wrong-pass"}
    )
    assert resp.status_code == 401
