"""
Fixtures pytest partagees pour les tests CineStore.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec base SQLite temporaire
- Engine et session factory asynchrones sur cette base, tables creees
- Mocks des ports (repositories, mailer)
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from cinestore.config import Settings
from cinestore.core.ports.mailer import IMailer
from cinestore.core.ports.repositories import (
    IMovieRepository,
    IPermissionRepository,
    ITokenRepository,
    IUserRepository,
)
from cinestore.infrastructure.persistence.database import (
    create_engine,
    create_session_factory,
    dispose_engine,
    init_db,
)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings isoles : base et logs dans le repertoire temporaire du test."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path}/test.db",
        log_file=tmp_path / "logs" / "cinestore.log",
        smtp_host=None,
    )


@pytest_asyncio.fixture
async def engine(test_settings: Settings):
    """Engine sur une base SQLite fichier, tables et permissions creees."""
    engine = create_engine(test_settings)
    await init_db(engine)
    yield engine
    await dispose_engine(engine)


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def mock_movie_repo() -> AsyncMock:
    return AsyncMock(spec=IMovieRepository)


@pytest.fixture
def mock_user_repo() -> AsyncMock:
    return AsyncMock(spec=IUserRepository)


@pytest.fixture
def mock_token_repo() -> AsyncMock:
    return AsyncMock(spec=ITokenRepository)


@pytest.fixture
def mock_permission_repo() -> AsyncMock:
    return AsyncMock(spec=IPermissionRepository)


@pytest.fixture
def mock_mailer() -> AsyncMock:
    return AsyncMock(spec=IMailer)


@pytest.fixture
def mock_background() -> MagicMock:
    """BackgroundTasks factice : les jobs sont collectes, pas executes."""
    background = MagicMock()
    background.jobs = []

    def run(job, name="background"):
        background.jobs.append((name, job))

    background.run.side_effect = run
    return background
