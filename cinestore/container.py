"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web.
Les repositories ne detiennent que la factory de sessions partagee : ils sont
sans etat et utilisables depuis autant de taches concurrentes que necessaire.
"""

from datetime import timedelta

from dependency_injector import containers, providers

from .adapters.mail.mailer import SMTPMailer
from .config import Settings
from .infrastructure.persistence.database import create_engine, create_session_factory, init_db
from .infrastructure.persistence.repositories import (
    SQLModelMovieRepository,
    SQLModelPermissionRepository,
    SQLModelTokenRepository,
    SQLModelUserRepository,
)
from .services.background import BackgroundTasks
from .services.movies import MovieService
from .services.users import UserService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        await container.database.init()  # Cree les tables une fois
        service = container.movie_service()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Engine et pool de connexions partages
    engine = providers.Singleton(create_engine, settings=config)
    session_factory = providers.Singleton(create_session_factory, engine=engine)

    # Database - Resource pour initialisation unique (asynchrone)
    database = providers.Resource(init_db, engine=engine)

    # Repositories - sans etat, une instance par appel
    movie_repository = providers.Factory(SQLModelMovieRepository, session_factory=session_factory)
    user_repository = providers.Factory(SQLModelUserRepository, session_factory=session_factory)
    token_repository = providers.Factory(SQLModelTokenRepository, session_factory=session_factory)
    permission_repository = providers.Factory(
        SQLModelPermissionRepository, session_factory=session_factory
    )

    # Envoi d'emails et taches de fond - Singletons partages
    mailer = providers.Singleton(
        SMTPMailer,
        host=config.provided.smtp_host,
        port=config.provided.smtp_port,
        sender=config.provided.smtp_sender,
        username=config.provided.smtp_username,
        password=config.provided.smtp_password,
        timeout=config.provided.smtp_timeout,
    )
    background = providers.Singleton(BackgroundTasks)

    # Services
    movie_service = providers.Factory(MovieService, movie_repo=movie_repository)
    user_service = providers.Factory(
        UserService,
        user_repo=user_repository,
        token_repo=token_repository,
        permission_repo=permission_repository,
        mailer=mailer,
        background=background,
        activation_ttl=providers.Factory(
            timedelta, minutes=config.provided.activation_token_ttl_minutes
        ),
        authentication_ttl=providers.Factory(
            timedelta, hours=config.provided.authentication_token_ttl_hours
        ),
        bcrypt_cost=config.provided.bcrypt_cost,
    )
