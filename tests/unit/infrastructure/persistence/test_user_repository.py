"""
Tests pour SQLModelUserRepository, SQLModelTokenRepository et
SQLModelPermissionRepository sur une base SQLite temporaire.
"""

from datetime import datetime, timedelta, timezone

import pytest

from cinestore.core.entities.permission import PERMISSION_MOVIES_READ, PERMISSION_MOVIES_WRITE
from cinestore.core.entities.token import SCOPE_ACTIVATION, SCOPE_AUTHENTICATION, generate_token
from cinestore.core.entities.user import User
from cinestore.core.errors import DuplicateEmailError, EditConflictError, RecordNotFoundError
from cinestore.infrastructure.persistence.repositories import (
    SQLModelPermissionRepository,
    SQLModelTokenRepository,
    SQLModelUserRepository,
)


def _user(email="alice@example.com", name="Alice") -> User:
    user = User(name=name, email=email)
    user.password.set("pa55word", cost=4)
    user.password.forget_plaintext()
    return user


@pytest.fixture
def users(session_factory):
    return SQLModelUserRepository(session_factory)


@pytest.fixture
def tokens(session_factory):
    return SQLModelTokenRepository(session_factory)


@pytest.fixture
def permissions(session_factory):
    return SQLModelPermissionRepository(session_factory)


class TestUserRepository:
    """Tests pour SQLModelUserRepository."""

    @pytest.mark.asyncio
    async def test_insert_puis_get_by_email(self, users):
        user = _user()
        await users.insert(user)

        assert user.id is not None
        assert user.version == 1

        found = await users.get_by_email("alice@example.com")
        assert found.id == user.id
        assert not found.activated
        assert found.password.matches("pa55word")

    @pytest.mark.asyncio
    async def test_email_en_double(self, users):
        await users.insert(_user())
        with pytest.raises(DuplicateEmailError):
            await users.insert(_user(name="Other Alice"))

    @pytest.mark.asyncio
    async def test_get_by_email_inconnu(self, users):
        with pytest.raises(RecordNotFoundError):
            await users.get_by_email("nobody@example.com")

    @pytest.mark.asyncio
    async def test_insert_sans_hash_refuse(self, users):
        with pytest.raises(ValueError):
            await users.insert(User(name="Alice", email="alice@example.com"))

    @pytest.mark.asyncio
    async def test_update_vers_email_existant(self, users):
        await users.insert(_user("alice@example.com"))
        bob = _user("bob@example.com", name="Bob")
        await users.insert(bob)

        bob.email = "alice@example.com"
        with pytest.raises(DuplicateEmailError):
            await users.update(bob)

    @pytest.mark.asyncio
    async def test_update_version_perimee(self, users):
        user = _user()
        await users.insert(user)
        stale = await users.get_by_email(user.email)

        user.activated = True
        await users.update(user)
        assert user.version == 2

        stale.name = "Alicia"
        with pytest.raises(EditConflictError):
            await users.update(stale)


class TestTokenLookup:
    """Tests de la recherche d'un utilisateur par jeton."""

    @pytest.mark.asyncio
    async def test_aller_retour(self, users, tokens):
        user = _user()
        await users.insert(user)
        token = await tokens.new(user.id, timedelta(minutes=3), SCOPE_ACTIVATION)

        found = await users.get_for_token(SCOPE_ACTIVATION, token.plaintext)

        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_caractere_modifie(self, users, tokens):
        user = _user()
        await users.insert(user)
        token = await tokens.new(user.id, timedelta(minutes=3), SCOPE_ACTIVATION)
        altered = ("B" if token.plaintext[0] == "A" else "A") + token.plaintext[1:]

        with pytest.raises(RecordNotFoundError):
            await users.get_for_token(SCOPE_ACTIVATION, altered)

    @pytest.mark.asyncio
    async def test_mauvais_scope(self, users, tokens):
        user = _user()
        await users.insert(user)
        token = await tokens.new(user.id, timedelta(minutes=3), SCOPE_ACTIVATION)

        with pytest.raises(RecordNotFoundError):
            await users.get_for_token(SCOPE_AUTHENTICATION, token.plaintext)

    @pytest.mark.asyncio
    async def test_jeton_expire(self, users, tokens):
        user = _user()
        await users.insert(user)
        token = generate_token(user.id, timedelta(minutes=-1), SCOPE_ACTIVATION)
        await tokens.insert(token)

        with pytest.raises(RecordNotFoundError):
            await users.get_for_token(SCOPE_ACTIVATION, token.plaintext)

    @pytest.mark.asyncio
    async def test_delete_all_for_user(self, users, tokens):
        user = _user()
        await users.insert(user)
        activation = await tokens.new(user.id, timedelta(minutes=3), SCOPE_ACTIVATION)
        authentication = await tokens.new(user.id, timedelta(hours=1), SCOPE_AUTHENTICATION)

        await tokens.delete_all_for_user(SCOPE_ACTIVATION, user.id)

        with pytest.raises(RecordNotFoundError):
            await users.get_for_token(SCOPE_ACTIVATION, activation.plaintext)
        # Les jetons d'un autre scope sont conserves
        found = await users.get_for_token(SCOPE_AUTHENTICATION, authentication.plaintext)
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_expiration_stockee_en_utc(self, users, tokens):
        user = _user()
        await users.insert(user)
        token = await tokens.new(user.id, timedelta(hours=2), SCOPE_AUTHENTICATION)
        assert token.expiry > datetime.now(timezone.utc) + timedelta(minutes=119)
        assert (await users.get_for_token(SCOPE_AUTHENTICATION, token.plaintext)).id == user.id


class TestPermissionRepository:
    """Tests pour SQLModelPermissionRepository."""

    @pytest.mark.asyncio
    async def test_aucune_permission(self, users, permissions):
        user = _user()
        await users.insert(user)
        assert await permissions.get_all_for_user(user.id) == []

    @pytest.mark.asyncio
    async def test_attribution(self, users, permissions):
        user = _user()
        await users.insert(user)

        await permissions.add_for_user(user.id, PERMISSION_MOVIES_READ, PERMISSION_MOVIES_WRITE)

        granted = await permissions.get_all_for_user(user.id)
        assert granted == ["movies:read", "movies:write"]
        assert granted.include(PERMISSION_MOVIES_WRITE)

    @pytest.mark.asyncio
    async def test_attribution_idempotente(self, users, permissions):
        user = _user()
        await users.insert(user)

        await permissions.add_for_user(user.id, PERMISSION_MOVIES_READ)
        await permissions.add_for_user(user.id, PERMISSION_MOVIES_READ, PERMISSION_MOVIES_WRITE)

        assert await permissions.get_all_for_user(user.id) == ["movies:read", "movies:write"]

    @pytest.mark.asyncio
    async def test_codes_inconnus_ignores(self, users, permissions):
        user = _user()
        await users.insert(user)

        await permissions.add_for_user(user.id, "movies:delete")
        await permissions.add_for_user(user.id)

        assert await permissions.get_all_for_user(user.id) == []
